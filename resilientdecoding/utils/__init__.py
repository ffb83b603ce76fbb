"""
Configuration and key strategy helpers.
"""

from .config import DecodingConfig, DecodingLimits, ErrorReporting, Introspection, KeyDecoding
from .keys import KeyDecodingStrategy

__all__ = [
    "DecodingConfig",
    "DecodingLimits",
    "ErrorReporting",
    "Introspection",
    "KeyDecoding",
    "KeyDecodingStrategy",
]
