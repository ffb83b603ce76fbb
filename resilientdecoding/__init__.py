"""
resilientdecoding - Decode JSON documents field by field, surviving bad values.

A model declares which of its fields are resilient. When one of them has the
wrong shape, decoding carries on with a fallback value (or without the bad
array and dictionary elements) instead of failing the whole document, and the
error is recorded where it can be inspected later.

Key Features:
- Optional, array, dictionary and enum fields that recover from decode errors
- Per-field outcomes with element-level errors and results
- Enums that tolerate novel raw values from newer producers
- Error reporters that collect every recovered error, grouped by document path
- Key decoding strategies for snake_case and camelCase documents
- Limits on input size and nesting depth

Quick Start:
    from resilientdecoding import DocumentDecoder, Model, fields

    class Listing(Model):
        title = fields.plain(str)
        tags = fields.array(str)

    decoder = DocumentDecoder()
    reporter = decoder.enable_error_reporting()
    listing = decoder.decode(Listing, '{"title": "Loft", "tags": ["a", 1, "b"]}')
    listing.tags  # ["a", "b"]
    print(reporter.flush().pretty_print())
"""

from .core import (
    CustomDecodeError,
    DataCorruptedError,
    DecodeError,
    Decoder,
    DecodingContext,
    DocumentDecoder,
    DocumentSyntaxError,
    Failure,
    IntrospectionUnavailableError,
    KeyNotFoundError,
    MayBeMissingReportedErrors,
    MissingValueError,
    ResilientDecodingError,
    ResilientMisuseWarning,
    Success,
    TypeMismatchError,
    UnknownNovelValueError,
    decode,
    load,
)
from .reporting import (
    ERROR_REPORTER_USER_INFO_KEY,
    ErrorDigest,
    ErrorReporter,
    enable_resilient_decoding_error_reporting,
)
from .resilient import (
    ArrayDecodingError,
    DictionaryDecodingError,
    Model,
    Outcome,
    OutcomeKind,
    ResilientEnum,
    ResilientValue,
    fields,
    resilient_value,
)
from .security import SecurityError
from .utils import DecodingConfig, DecodingLimits, KeyDecodingStrategy

__version__ = "0.1.0"
__author__ = "resilientdecoding contributors"

__all__ = [
    # Entry points
    "DocumentDecoder", "Decoder", "DecodingContext", "decode", "load",
    # Models and fields
    "Model", "fields", "resilient_value", "ResilientEnum",
    "ResilientValue", "Outcome", "OutcomeKind", "Success", "Failure",
    # Error reporting
    "ErrorReporter", "ErrorDigest", "ERROR_REPORTER_USER_INFO_KEY",
    "enable_resilient_decoding_error_reporting",
    # Configuration classes
    "DecodingConfig", "DecodingLimits", "KeyDecodingStrategy",
    # Exception classes
    "ResilientDecodingError", "DecodeError", "TypeMismatchError", "MissingValueError",
    "KeyNotFoundError", "DataCorruptedError", "UnknownNovelValueError", "CustomDecodeError",
    "MayBeMissingReportedErrors", "ArrayDecodingError", "DictionaryDecodingError",
    "DocumentSyntaxError", "SecurityError", "IntrospectionUnavailableError",
    "ResilientMisuseWarning",
]
