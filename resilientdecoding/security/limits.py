"""
Resource limits for resilient decoding.

Documents are parsed before any field is decoded, so the limits guard the raw
input size and the depth of the recursive descent over the parsed tree.
"""

from typing import Sequence, Union

from ..core.errors import PathSegment
from ..utils.config import DecodingLimits
from .exceptions import SecurityError


class LimitValidator:
    """Validates decoding limits to prevent resource exhaustion."""

    def __init__(self, limits: DecodingLimits):
        self.limits = limits

    def validate_input_size(self, text: Union[str, bytes, bytearray]) -> None:
        """Validate that input text size is within limits."""
        if len(text) > self.limits.max_input_size:
            raise SecurityError(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}"
            )

    def validate_nesting_depth(self, coding_path: Sequence[PathSegment]) -> None:
        """Validate that a child cursor does not descend past the depth limit."""
        if len(coding_path) > self.limits.max_nesting_depth:
            raise SecurityError(
                f"Nesting depth {len(coding_path)} exceeds limit "
                f"{self.limits.max_nesting_depth}",
                coding_path,
            )
