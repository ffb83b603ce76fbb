"""
Entry points for decoding documents into declared types.
"""

import json
from typing import Any, Optional, TextIO, Union

from ..reporting.reporter import (
    ERROR_REPORTER_USER_INFO_KEY,
    ErrorReporter,
    enable_resilient_decoding_error_reporting,
)
from ..security.exceptions import SecurityError
from ..utils.config import DecodingConfig
from .decoder import Decoder, DecodingContext
from .errors import DocumentSyntaxError


class DocumentDecoder:
    """
    Decodes JSON documents into declared types.

    One decoder owns one ``DecodingContext``. Reporters registered through
    ``enable_error_reporting()`` live in its ``user_info`` and collect every
    error recovered by resilient fields until flushed, so a decoder must not
    be shared between simultaneous decode calls.
    """

    def __init__(
        self,
        config: Optional[DecodingConfig] = None,
        user_info: Optional[dict[Any, Any]] = None,
    ):
        self.config = config or DecodingConfig()
        self.user_info: dict[Any, Any] = user_info if user_info is not None else {}

    def __repr__(self) -> str:
        return f"DocumentDecoder(config={self.config!r})"

    @property
    def error_reporter(self) -> Optional[ErrorReporter]:
        reporter = self.user_info.get(ERROR_REPORTER_USER_INFO_KEY)
        return reporter if isinstance(reporter, ErrorReporter) else None

    def enable_error_reporting(
        self, include_unknown_novel_value_errors: Optional[bool] = None
    ) -> ErrorReporter:
        """
        Register a reporter on this decoder and return it.

        Call ``flush()`` on the reporter right after each decode to retrieve
        the errors of that pass.
        """
        if include_unknown_novel_value_errors is None:
            include_unknown_novel_value_errors = self.config.include_unknown_novel_value_errors
        return enable_resilient_decoding_error_reporting(
            self.user_info, include_unknown_novel_value_errors
        )

    def decode(self, type_: Any, data: Union[str, bytes, bytearray]) -> Any:
        """
        Parse ``data`` and decode it as ``type_``.

        Bytes may be UTF-8, UTF-16 or UTF-32; the encoding is detected by the
        parser.

        Raises:
            DocumentSyntaxError: If the document is not valid JSON or not
                validly encoded
            SecurityError: If a decoding limit is exceeded, including nesting
                too deep for the parser itself
            DecodeError: If a failure happens outside any resilient field
        """
        context = self._new_context()
        context.validator.validate_input_size(data)

        try:
            document = json.loads(data)
        except json.JSONDecodeError as e:
            raise DocumentSyntaxError.from_json_error(e) from e
        except UnicodeDecodeError as e:
            raise DocumentSyntaxError(f"Invalid {e.encoding} document: {e.reason}") from e
        except RecursionError as e:
            raise SecurityError("Document nesting exceeds what the parser can handle") from e

        return Decoder(document, context).decode(type_)

    def decode_object(self, type_: Any, obj: Any) -> Any:
        """Decode an already parsed document tree as ``type_``."""
        return Decoder(obj, self._new_context()).decode(type_)

    def load(self, type_: Any, fp: TextIO) -> Any:
        """Same as ``decode()`` but reads from a file-like object."""
        return self.decode(type_, fp.read())

    def _new_context(self) -> DecodingContext:
        return DecodingContext(self.config, self.user_info)


def decode(
    type_: Any,
    data: Union[str, bytes, bytearray],
    *,
    config: Optional[DecodingConfig] = None,
) -> Any:
    """
    Decode a JSON document as ``type_`` without error reporting.

    Resilient fields still recover; use a ``DocumentDecoder`` with reporting
    enabled to find out what they recovered from.
    """
    return DocumentDecoder(config).decode(type_, data)


def load(type_: Any, fp: TextIO, *, config: Optional[DecodingConfig] = None) -> Any:
    """Same as ``decode()`` but reads from a file-like object."""
    return DocumentDecoder(config).load(type_, fp)
