"""
Resilient fields, collections and enums.
"""

from . import fields
from .enums import ResilientEnum, decode_resilient_enum
from .field import resiliently_decode
from .model import Model, resilient_value
from .outcome import DECODED_SUCCESSFULLY, KEY_NOT_FOUND, VALUE_WAS_NIL, Outcome, OutcomeKind
from .value import (
    ArrayDecodingError,
    CollectionDecodingError,
    DictionaryDecodingError,
    ResilientValue,
)

__all__ = [
    "ArrayDecodingError",
    "CollectionDecodingError",
    "DECODED_SUCCESSFULLY",
    "DictionaryDecodingError",
    "KEY_NOT_FOUND",
    "Model",
    "Outcome",
    "OutcomeKind",
    "ResilientEnum",
    "ResilientValue",
    "VALUE_WAS_NIL",
    "decode_resilient_enum",
    "fields",
    "resilient_value",
    "resiliently_decode",
]
