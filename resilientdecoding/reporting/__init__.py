"""
Error aggregation for resilient decoding passes.
"""

from .reporter import (
    ERROR_REPORTER_USER_INFO_KEY,
    ErrorDigest,
    ErrorReporter,
    enable_resilient_decoding_error_reporting,
)
from .tree import ErrorTree, PathNode

__all__ = [
    "ERROR_REPORTER_USER_INFO_KEY",
    "ErrorDigest",
    "ErrorReporter",
    "ErrorTree",
    "PathNode",
    "enable_resilient_decoding_error_reporting",
]
