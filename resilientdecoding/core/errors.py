"""
Error taxonomy for resilient decoding.

Decode errors describe a shape or type problem at a specific position in an
otherwise well-formed document. They are the only errors a resilient field
recovers from. Document syntax errors are fatal and live alongside them so
callers can tell the two apart.
"""

import json
import typing
from typing import Any, Optional, Sequence, Union

PathSegment = Union[str, int]
CodingPath = tuple[PathSegment, ...]


def format_path(path: Sequence[PathSegment]) -> str:
    """Render a coding path as a JSONPath-like string, e.g. ``$.users[0].name``."""
    parts = ["$"]
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        else:
            parts.append(f".{segment}")
    return "".join(parts)


def describe_type(type_: Any) -> str:
    """Human readable name for a declared type."""
    if isinstance(type_, type) and typing.get_origin(type_) is None:
        return type_.__name__
    return repr(type_).replace("typing.", "")


def describe_value(value: Any) -> str:
    """Describe the JSON kind of a decoded document value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "a boolean"
    if isinstance(value, (int, float)):
        return "a number"
    if isinstance(value, str):
        return "a string"
    if isinstance(value, list):
        return "an array"
    if isinstance(value, dict):
        return "a dictionary"
    return f"a {type(value).__name__}"


class ResilientDecodingError(Exception):
    """Base exception for all resilientdecoding errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DecodeError(ResilientDecodingError):
    """A failure to decode a value at a position in the document."""

    def __init__(self, message: str, coding_path: Sequence[PathSegment] = ()):
        self.coding_path: CodingPath = tuple(coding_path)
        super().__init__(message)

    def __str__(self) -> str:
        if self.coding_path:
            return f"{self.message} at {format_path(self.coding_path)}"
        return self.message

    def abridged_description(self) -> str:
        """Description of the error which does not include the coding path."""
        return self.message


class TypeMismatchError(DecodeError):
    """The value at the coding path has the wrong shape."""

    def __init__(
        self,
        expected_type: Any,
        coding_path: Sequence[PathSegment] = (),
        found: Optional[str] = None,
    ):
        self.expected_type = expected_type
        self.found = found
        message = f"Expected to decode {describe_type(expected_type)}"
        if found:
            message += f" but found {found} instead"
        super().__init__(message, coding_path)

    def abridged_description(self) -> str:
        return f"Could not decode as `{describe_type(self.expected_type)}`"


class MissingValueError(DecodeError):
    """A null (or exhausted) value was found where a value was required."""

    def __init__(
        self,
        expected_type: Any,
        coding_path: Sequence[PathSegment] = (),
        detail: Optional[str] = None,
    ):
        self.expected_type = expected_type
        message = detail or (
            f"Expected {describe_type(expected_type)} value but found null instead"
        )
        super().__init__(message, coding_path)

    def abridged_description(self) -> str:
        return f"Expected `{describe_type(self.expected_type)}` but found null instead"


class KeyNotFoundError(DecodeError):
    """A required key is absent from a keyed container."""

    def __init__(self, key: str, coding_path: Sequence[PathSegment] = ()):
        self.key = key
        super().__init__(f'No value associated with key "{key}"', coding_path)

    def abridged_description(self) -> str:
        return f'Key "{self.key}" not found'


class DataCorruptedError(DecodeError):
    """The value is well shaped but cannot be interpreted."""

    def __init__(self, detail: str, coding_path: Sequence[PathSegment] = ()):
        self.detail = detail
        super().__init__(detail, coding_path)

    def abridged_description(self) -> str:
        return "Data corrupted"


class UnknownNovelValueError(DecodeError):
    """
    A value believed to be valid that this code does not know how to handle.

    Surfaced at the property level but left out of reporter digests by default,
    since it usually signals a newer producer rather than a bug. Custom decoders
    which inspect a discriminator before decoding can raise it directly to get
    the same treatment.
    """

    def __init__(self, novel_value: Any, coding_path: Sequence[PathSegment] = ()):
        self.novel_value = novel_value
        super().__init__(f"Unknown novel value {novel_value!r}", coding_path)

    def abridged_description(self) -> str:
        return (
            f'Unknown novel value "{self.novel_value}" '
            "(this error is not reported by default)"
        )


class CustomDecodeError(DecodeError):
    """Wraps an exception raised by user decoding code."""

    def __init__(self, inner: Exception, coding_path: Sequence[PathSegment] = ()):
        self.inner = inner
        super().__init__(str(inner) or type(inner).__name__, coding_path)


class MayBeMissingReportedErrors(DecodeError):
    """
    Placed at the head of a digest whose reporter was superseded.

    Registering a second reporter on the same decoder means the first one no
    longer receives errors.
    """

    def __init__(self) -> None:
        super().__init__(
            "Error reporting was enabled more than once; "
            "this reporter may be missing errors"
        )


class DocumentSyntaxError(ResilientDecodingError):
    """The document could not be parsed at all."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        self.line = line
        self.column = column
        if line is not None and column is not None:
            message = f"{message} at line {line}, column {column}"
        super().__init__(message)

    @classmethod
    def from_json_error(cls, error: json.JSONDecodeError) -> "DocumentSyntaxError":
        """Build from the standard library's decode error."""
        return cls(error.msg, error.lineno, error.colno)


class IntrospectionUnavailableError(ResilientDecodingError):
    """Element-level results were not retained for this value."""


class ResilientMisuseWarning(UserWarning):
    """A resilient declaration or registration that is almost certainly a mistake."""
