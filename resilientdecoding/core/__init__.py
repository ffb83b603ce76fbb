"""
Core decoding machinery for resilientdecoding.
"""

from .errors import (
    CustomDecodeError,
    DataCorruptedError,
    DecodeError,
    DocumentSyntaxError,
    IntrospectionUnavailableError,
    KeyNotFoundError,
    MayBeMissingReportedErrors,
    MissingValueError,
    ResilientDecodingError,
    ResilientMisuseWarning,
    TypeMismatchError,
    UnknownNovelValueError,
    format_path,
)
from .result import Failure, Result, Success
from .decoder import Decoder, DecodingContext, KeyedContainer, UnkeyedContainer
from .engine import DocumentDecoder, decode, load

__all__ = [
    "CustomDecodeError",
    "DataCorruptedError",
    "DecodeError",
    "Decoder",
    "DecodingContext",
    "DocumentDecoder",
    "DocumentSyntaxError",
    "Failure",
    "IntrospectionUnavailableError",
    "KeyNotFoundError",
    "KeyedContainer",
    "MayBeMissingReportedErrors",
    "MissingValueError",
    "ResilientDecodingError",
    "ResilientMisuseWarning",
    "Result",
    "Success",
    "TypeMismatchError",
    "UnkeyedContainer",
    "UnknownNovelValueError",
    "decode",
    "format_path",
    "load",
]
