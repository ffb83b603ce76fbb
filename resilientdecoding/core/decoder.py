"""
Cursor-based decoding over a parsed document tree.

A ``Decoder`` points at one value of the document and knows the coding path
from the root to it. Keyed and unkeyed containers hand out child decoders, so
the coding path of every error describes exactly where it happened. The
``DecodingContext`` is shared by every decoder of one pass and carries the
configuration, the key transform and the user info side channel.
"""

import logging
import typing
import warnings
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from ..reporting.reporter import ERROR_REPORTER_USER_INFO_KEY, ErrorReporter
from ..security.limits import LimitValidator
from ..utils.config import DecodingConfig
from ..utils.keys import resolve_key_transform
from .errors import (
    CodingPath,
    CustomDecodeError,
    DataCorruptedError,
    DecodeError,
    KeyNotFoundError,
    MissingValueError,
    PathSegment,
    ResilientMisuseWarning,
    TypeMismatchError,
    describe_type,
    describe_value,
)

logger = logging.getLogger(__name__)


class _Absent:
    """Value held by a decoder created for a key the container does not have."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<absent>"


ABSENT = _Absent()


class DecodingContext:
    """State shared by every decoder of one decode pass."""

    def __init__(
        self,
        config: Optional[DecodingConfig] = None,
        user_info: Optional[dict[Any, Any]] = None,
    ):
        self.config = config or DecodingConfig()
        self.user_info = user_info if user_info is not None else {}
        self.key_transform = resolve_key_transform(self.config.key_strategy)
        self.validator = LimitValidator(self.config.limits)
        self.logger = self.config.logger or logger

    @property
    def error_reporter(self) -> Optional[ErrorReporter]:
        """The reporter registered in user info, if any."""
        reporter = self.user_info.get(ERROR_REPORTER_USER_INFO_KEY)
        if reporter is None:
            return None
        if not isinstance(reporter, ErrorReporter):
            # Someone overrode the reserved key with an unexpected object
            warnings.warn(
                f"User info key {ERROR_REPORTER_USER_INFO_KEY!r} does not hold an "
                f"ErrorReporter (found {type(reporter).__name__})",
                ResilientMisuseWarning,
                stacklevel=2,
            )
            return None
        return reporter


class Decoder:
    """A cursor positioned at one value of the document."""

    def __init__(
        self,
        value: Any,
        context: DecodingContext,
        coding_path: Sequence[PathSegment] = (),
    ):
        self.value = value
        self.context = context
        self.coding_path: CodingPath = tuple(coding_path)

    def __repr__(self) -> str:
        return f"Decoder(path={list(self.coding_path)!r}, value={self.value!r})"

    def child(self, segment: PathSegment, value: Any) -> "Decoder":
        """Create a decoder for a value nested below this one."""
        path = self.coding_path + (segment,)
        self.context.validator.validate_nesting_depth(path)
        return Decoder(value, self.context, path)

    def decode_nil(self) -> bool:
        """Whether the value here is an explicit null."""
        return self.value is None

    def container(self) -> "KeyedContainer":
        """Open the value here as a keyed container."""
        self._require_present(dict)
        if not isinstance(self.value, dict):
            self._raise_mismatch(dict)
        return KeyedContainer(self)

    def unkeyed_container(self) -> "UnkeyedContainer":
        """Open the value here as an unkeyed (positional) container."""
        self._require_present(list)
        if not isinstance(self.value, list):
            self._raise_mismatch(list)
        return UnkeyedContainer(self)

    def raw_entries(self) -> list[tuple[str, "Decoder"]]:
        """
        Entries of a dictionary value, keyed exactly as in the document.

        Unlike ``container()`` this bypasses the key decoding strategy, which is
        meant for declared field keys and must not rewrite dictionary keys.
        """
        self._require_present(dict)
        if not isinstance(self.value, dict):
            self._raise_mismatch(dict)
        return [(key, self.child(key, value)) for key, value in self.value.items()]

    def decode(self, type_: Any) -> Any:
        """Decode a value of the declared type at this position."""
        return decode_value(self, type_)

    def report_error(self, error: Exception) -> None:
        """
        Forward an error handled by the resilient machinery to the reporter.

        Must be called on the most relevant decoder, since its coding path
        decides where the error is placed in the reporter's tree.
        """
        reporter = self.context.error_reporter
        if reporter is not None:
            reporter.resilient_decoding_handled(error, self.coding_path)

    def _require_present(self, type_: Any) -> None:
        if self.value is ABSENT:
            raise KeyNotFoundError(self.coding_path[-1], self.coding_path[:-1])
        if self.value is None:
            raise MissingValueError(type_, self.coding_path)

    def _raise_mismatch(self, type_: Any) -> typing.NoReturn:
        raise TypeMismatchError(type_, self.coding_path, found=describe_value(self.value))


class KeyedContainer:
    """A dictionary value whose keys are matched through the key strategy."""

    def __init__(self, decoder: Decoder):
        self.decoder = decoder
        transform = decoder.context.key_transform
        self._document_keys: dict[str, str] = {}
        for document_key in decoder.value:
            self._document_keys.setdefault(transform(document_key), document_key)

    @property
    def coding_path(self) -> CodingPath:
        return self.decoder.coding_path

    @property
    def all_keys(self) -> list[str]:
        return list(self._document_keys)

    def contains(self, key: str) -> bool:
        return key in self._document_keys

    def super_decoder(self, key: str) -> Decoder:
        """
        Decoder for the value at ``key``.

        Succeeds for absent keys too; decoding from the returned decoder then
        raises ``KeyNotFoundError`` with a path that names the key.
        """
        document_key = self._document_keys.get(key)
        if document_key is None:
            return self.decoder.child(key, ABSENT)
        return self.decoder.child(document_key, self.decoder.value[document_key])

    def decode_nil(self, key: str) -> bool:
        if not self.contains(key):
            raise KeyNotFoundError(key, self.coding_path)
        return self.super_decoder(key).decode_nil()

    def decode(self, type_: Any, key: str) -> Any:
        if not self.contains(key):
            raise KeyNotFoundError(key, self.coding_path)
        return self.super_decoder(key).decode(type_)

    def decode_if_present(self, type_: Any, key: str) -> Any:
        """Decode ``key`` as ``type_``, returning None when absent or null."""
        if not self.contains(key):
            return None
        decoder = self.super_decoder(key)
        if decoder.decode_nil():
            return None
        return decoder.decode(type_)


class UnkeyedContainer:
    """An array value consumed one element at a time."""

    def __init__(self, decoder: Decoder):
        self.decoder = decoder
        self._elements: list[Any] = decoder.value
        self.current_index = 0

    @property
    def coding_path(self) -> CodingPath:
        return self.decoder.coding_path

    @property
    def count(self) -> int:
        return len(self._elements)

    @property
    def is_at_end(self) -> bool:
        return self.current_index >= len(self._elements)

    def super_decoder(self) -> Decoder:
        """Decoder for the current element; always advances the cursor."""
        if self.is_at_end:
            raise MissingValueError(
                Decoder,
                self.coding_path + (self.current_index,),
                detail="Unkeyed container is at end",
            )
        index = self.current_index
        self.current_index += 1
        return self.decoder.child(index, self._elements[index])

    def decode(self, type_: Any) -> Any:
        return self.super_decoder().decode(type_)


# Value decoding

_NONE_TYPE = type(None)


def optional_inner_type(type_: Any) -> Optional[Any]:
    """Return ``T`` for ``Optional[T]``, otherwise None."""
    if typing.get_origin(type_) is typing.Union:
        args = [arg for arg in typing.get_args(type_) if arg is not _NONE_TYPE]
        if len(args) == 1 and len(typing.get_args(type_)) == 2:
            return args[0]
    return None


def _decode_bool(decoder: Decoder) -> bool:
    if isinstance(decoder.value, bool):
        return decoder.value
    decoder._raise_mismatch(bool)


def _decode_int(decoder: Decoder) -> int:
    value = decoder.value
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    decoder._raise_mismatch(int)


def _decode_float(decoder: Decoder) -> float:
    value = decoder.value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    decoder._raise_mismatch(float)


def _decode_str(decoder: Decoder) -> str:
    if isinstance(decoder.value, str):
        return decoder.value
    decoder._raise_mismatch(str)


_SCALAR_DECODERS: dict[type, Callable[[Decoder], Any]] = {
    bool: _decode_bool,
    int: _decode_int,
    float: _decode_float,
    str: _decode_str,
}


def enum_raw_value_type(enum_type: type[Enum]) -> type:
    """The type of the raw values backing an enum."""
    raw_value_type = getattr(enum_type, "raw_value_type", None)
    if callable(raw_value_type):
        return raw_value_type()
    for member in enum_type:
        return type(member.value)
    raise TypeError(f"{enum_type.__name__} has no members to decode into")


def _decode_enum(decoder: Decoder, enum_type: type[Enum]) -> Enum:
    raw_type = enum_raw_value_type(enum_type)
    raw_value = decoder.decode(raw_type)
    try:
        return enum_type(raw_value)
    except ValueError:
        raise DataCorruptedError(
            f"Cannot initialize {enum_type.__name__} from invalid "
            f"{describe_type(raw_type)} value {raw_value!r}",
            decoder.coding_path,
        ) from None


def _decode_list(decoder: Decoder, element_type: Any) -> list[Any]:
    container = decoder.unkeyed_container()
    elements = []
    while not container.is_at_end:
        elements.append(container.decode(element_type))
    return elements


def _decode_dict(decoder: Decoder, value_type: Any) -> dict[str, Any]:
    return {key: entry.decode(value_type) for key, entry in decoder.raw_entries()}


def _decode_with_hook(decoder: Decoder, type_: type) -> Any:
    try:
        return type_.from_decoder(decoder)  # type: ignore[attr-defined]
    except DecodeError:
        raise
    except (ValueError, LookupError) as exc:
        raise CustomDecodeError(exc, decoder.coding_path) from exc


def decode_value(decoder: Decoder, type_: Any) -> Any:
    """
    Decode the value under ``decoder`` as ``type_``.

    Supported declarations: ``bool``, ``int``, ``float``, ``str``, ``Any`` /
    ``object`` (the raw value), ``Optional[T]``, ``list[T]``, ``dict[str, T]``,
    ``Enum`` subclasses and any class exposing ``from_decoder(decoder)``.
    """
    if decoder.value is ABSENT:
        raise KeyNotFoundError(decoder.coding_path[-1], decoder.coding_path[:-1])

    if type_ is Any or type_ is object:
        return decoder.value

    inner = optional_inner_type(type_)
    if inner is not None:
        return None if decoder.decode_nil() else decoder.decode(inner)

    origin = typing.get_origin(type_)
    if origin is list or type_ is list:
        args = typing.get_args(type_)
        return _decode_list(decoder, args[0] if args else Any)
    if origin is dict or type_ is dict:
        args = typing.get_args(type_)
        if args and args[0] is not str:
            raise TypeError(f"Only str dictionary keys can be decoded, not {describe_type(args[0])}")
        return _decode_dict(decoder, args[1] if args else Any)

    if isinstance(type_, type):
        if callable(getattr(type_, "from_decoder", None)):
            return _decode_with_hook(decoder, type_)
        if issubclass(type_, Enum):
            return _decode_enum(decoder, type_)
        scalar_decoder = _SCALAR_DECODERS.get(type_)
        if scalar_decoder is not None:
            if decoder.decode_nil():
                raise MissingValueError(type_, decoder.coding_path)
            return scalar_decoder(decoder)

    raise TypeError(f"Cannot decode values of type {describe_type(type_)}")
