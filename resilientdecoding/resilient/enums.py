"""
Enums which tolerate raw values they do not know about.
"""

from enum import Enum
from typing import Any, Optional, TypeVar

from ..core.decoder import Decoder, enum_raw_value_type
from ..core.errors import DataCorruptedError, UnknownNovelValueError, describe_type

E = TypeVar("E", bound="ResilientEnum")


class ResilientEnum(Enum):
    """
    Base for enums decoded with novel-value tolerance.

    An unknown raw value raises ``UnknownNovelValueError``, which digests leave
    out by default, unless the enum is frozen (its set of values will never
    grow), in which case it is a plain ``DataCorruptedError``. Override
    ``decoding_fallback()`` to give non-optional fields a value to fall back on.

    Example:
        >>> class Color(ResilientEnum):
        ...     RED = "red"
        ...     UNKNOWN = "unknown"
        ...
        ...     @classmethod
        ...     def decoding_fallback(cls):
        ...         return cls.UNKNOWN
    """

    @classmethod
    def decoding_fallback(cls: type[E]) -> Optional[E]:
        return None

    @classmethod
    def is_frozen(cls) -> bool:
        return False

    @classmethod
    def raw_value_type(cls) -> type:
        for member in cls:
            return type(member.value)
        raise TypeError(f"{cls.__name__} has no members to decode into")

    @classmethod
    def from_decoder(cls: type[E], decoder: Decoder) -> E:
        return decode_resilient_enum(decoder, cls)


def decode_resilient_enum(decoder: Decoder, enum_type: type[E]) -> E:
    """
    Decode the raw value under ``decoder`` and map it to a member.

    A raw value of the wrong type is always a hard error; only well-typed
    unknown values are novel.
    """
    raw_type = enum_raw_value_type(enum_type)
    raw_value: Any = decoder.decode(raw_type)
    try:
        return enum_type(raw_value)
    except ValueError:
        if enum_type.is_frozen():
            raise DataCorruptedError(
                f"Cannot initialize {enum_type.__name__} from invalid "
                f"{describe_type(raw_type)} value {raw_value!r}",
                decoder.coding_path,
            ) from None
        raise UnknownNovelValueError(raw_value, decoder.coding_path) from None
