"""
Exceptions raised when a decode pass exceeds its resource limits.
"""

from typing import Optional, Sequence

from ..core.errors import PathSegment, ResilientDecodingError, format_path


class SecurityError(ResilientDecodingError):
    """A resource limit was exceeded. Never recovered by resilient fields."""

    def __init__(self, message: str, coding_path: Optional[Sequence[PathSegment]] = None):
        self.coding_path = tuple(coding_path) if coding_path is not None else None
        if self.coding_path:
            message = f"{message} at {format_path(self.coding_path)}"
        super().__init__(message)
