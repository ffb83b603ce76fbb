"""
Success/failure pairs used when introspecting resilient collections.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """An element which decoded successfully."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def get(self) -> T:
        """Return the decoded value."""
        return self.value

    def value_or(self, default: Any) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """An element which failed to decode and was omitted."""

    error: Exception

    @property
    def ok(self) -> bool:
        return False

    def get(self) -> Any:
        """Raise the error which caused the element to be omitted."""
        raise self.error

    def value_or(self, default: Any) -> Any:
        return default


Result = Union[Success[T], Failure]
