"""
Configuration for resilientdecoding.

Options are grouped into small dataclasses. ``DecodingConfig`` composes them
and also accepts the individual options as flat keyword arguments.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .keys import KeyDecodingStrategy, KeyStrategy


@dataclass
class KeyDecoding:
    """How document keys are matched to declared field keys."""
    strategy: KeyStrategy = KeyDecodingStrategy.USE_DEFAULT_KEYS


@dataclass
class ErrorReporting:
    """Defaults for reporters registered through a decoder."""
    include_unknown_novel_value_errors: bool = False


@dataclass
class Introspection:
    """Property-level error detail kept on decoded values."""
    # Follows the interpreter's debug flag, so ``python -O`` drops the detail.
    keep_element_results: bool = __debug__


@dataclass
class DecodingLimits:
    """Resource limits for a single decode pass."""
    max_input_size: int = 10 * 1024 * 1024
    max_nesting_depth: int = 100

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")


_FLAT_OPTIONS = {
    "key_strategy": ("key_decoding", "strategy"),
    "include_unknown_novel_value_errors": (
        "error_reporting",
        "include_unknown_novel_value_errors",
    ),
    "keep_element_results": ("introspection", "keep_element_results"),
    "max_input_size": ("limits", "max_input_size"),
    "max_nesting_depth": ("limits", "max_nesting_depth"),
}


class DecodingConfig:
    """Configuration options for a decode session."""

    def __init__(
        self,
        *,
        key_decoding: Optional[KeyDecoding] = None,
        error_reporting: Optional[ErrorReporting] = None,
        introspection: Optional[Introspection] = None,
        limits: Optional[DecodingLimits] = None,
        logger: Optional[logging.Logger] = None,
        **flat_options: Any,
    ):
        unknown = set(flat_options) - set(_FLAT_OPTIONS)
        if unknown:
            raise TypeError(f"Unknown configuration options: {', '.join(sorted(unknown))}")

        self.key_decoding = key_decoding or KeyDecoding()
        self.error_reporting = error_reporting or ErrorReporting()
        self.introspection = introspection or Introspection()
        self.limits = limits or DecodingLimits()
        self.logger = logger

        for option, value in flat_options.items():
            setattr(self, option, value)

        # Re-run limit validation for values supplied as flat options
        self.limits.__post_init__()

    def __repr__(self) -> str:
        return (
            f"DecodingConfig(key_decoding={self.key_decoding!r}, "
            f"error_reporting={self.error_reporting!r}, "
            f"introspection={self.introspection!r}, limits={self.limits!r})"
        )

    @classmethod
    def development(cls) -> "DecodingConfig":
        """Keep every element-level detail and surface novel values in digests."""
        return cls(
            error_reporting=ErrorReporting(include_unknown_novel_value_errors=True),
            introspection=Introspection(keep_element_results=True),
        )

    @classmethod
    def production(cls) -> "DecodingConfig":
        """Drop element-level detail; reporters still receive every error."""
        return cls(introspection=Introspection(keep_element_results=False))

    @property
    def key_strategy(self) -> KeyStrategy:
        """Strategy used to match document keys to field keys."""
        return self.key_decoding.strategy

    @key_strategy.setter
    def key_strategy(self, value: KeyStrategy) -> None:
        self.key_decoding.strategy = value

    @property
    def include_unknown_novel_value_errors(self) -> bool:
        """Whether digests include novel-value errors by default."""
        return self.error_reporting.include_unknown_novel_value_errors

    @include_unknown_novel_value_errors.setter
    def include_unknown_novel_value_errors(self, value: bool) -> None:
        self.error_reporting.include_unknown_novel_value_errors = value

    @property
    def keep_element_results(self) -> bool:
        """Whether collection values keep per-element results."""
        return self.introspection.keep_element_results

    @keep_element_results.setter
    def keep_element_results(self, value: bool) -> None:
        self.introspection.keep_element_results = value

    @property
    def max_input_size(self) -> int:
        """Maximum document size in characters."""
        return self.limits.max_input_size

    @max_input_size.setter
    def max_input_size(self, value: int) -> None:
        self.limits.max_input_size = value

    @property
    def max_nesting_depth(self) -> int:
        """Maximum coding path length."""
        return self.limits.max_nesting_depth

    @max_nesting_depth.setter
    def max_nesting_depth(self, value: int) -> None:
        self.limits.max_nesting_depth = value
