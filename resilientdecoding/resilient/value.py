"""
The wrapper holding a resilient field's value together with its outcome.
"""

from typing import Any, Callable, Generic, Optional, TypeVar, Union

from ..core.errors import DecodeError, IntrospectionUnavailableError
from ..core.result import Failure, Result, Success
from .outcome import DECODED_SUCCESSFULLY, Outcome

T = TypeVar("T")


class CollectionDecodingError(DecodeError):
    """
    Some elements of a collection failed to decode and were omitted.

    Never reported itself since every element error already was. When element
    results are not kept (see ``Introspection.keep_element_results``) only the
    number of failures survives.
    """

    def __init__(self, failure_count: int, element_count: int, keep_results: bool):
        self.failure_count = failure_count
        self.element_count = element_count
        self.keep_results = keep_results
        super().__init__(f"{failure_count} of {element_count} elements failed to decode")

    def _require_results(self) -> None:
        if not self.keep_results:
            raise IntrospectionUnavailableError(
                "Element results were not kept for this value; "
                "enable Introspection.keep_element_results to inspect them"
            )


class ArrayDecodingError(CollectionDecodingError):
    """Errors encountered while decoding the elements of an array."""

    class Builder:
        """Tracks where failures happened relative to the decoded elements."""

        def __init__(self, keep_results: bool = True):
            self.keep_results = keep_results
            self.decoded_count = 0
            self.errors_at_offset: list[tuple[int, Exception]] = []
            self.failure_count = 0

        def decoded_element(self) -> None:
            self.decoded_count += 1

        def failed_to_decode_element(self, error: Exception) -> None:
            # The offset is where a successfully decoded element would have gone
            self.failure_count += 1
            if self.keep_results:
                self.errors_at_offset.append((self.decoded_count, error))

        def build(self) -> Optional["ArrayDecodingError"]:
            """The collected error, or None when every element decoded."""
            if not self.failure_count:
                return None
            return ArrayDecodingError(
                self.errors_at_offset,
                self.failure_count,
                self.decoded_count + self.failure_count,
                self.keep_results,
            )

    def __init__(
        self,
        errors_at_offset: list[tuple[int, Exception]],
        failure_count: int,
        element_count: int,
        keep_results: bool = True,
    ):
        self._errors_at_offset = list(errors_at_offset)
        super().__init__(failure_count, element_count, keep_results)

    @property
    def errors(self) -> list[Exception]:
        self._require_results()
        return [error for _, error in self._errors_at_offset]

    def interleave(self, elements: list[Any]) -> list[Result]:
        """
        Put the failures back among ``elements`` at their original positions.

        Consecutive failures share the offset of the next decoded element, so a
        stable sort by offset with failures listed first restores the order.
        """
        self._require_results()
        entries: list[tuple[int, Result]] = [
            (offset, Failure(error)) for offset, error in self._errors_at_offset
        ]
        entries.extend((offset, Success(element)) for offset, element in enumerate(elements))
        ordered = sorted(enumerate(entries), key=lambda item: (item[1][0], item[0]))
        return [result for _, (_, result) in ordered]


class DictionaryDecodingError(CollectionDecodingError):
    """Errors encountered while decoding the entries of a dictionary."""

    def __init__(
        self,
        results: dict[str, Result],
        failure_count: int,
        element_count: int,
        keep_results: bool = True,
    ):
        self._results = dict(results)
        super().__init__(failure_count, element_count, keep_results)

    @property
    def results(self) -> dict[str, Result]:
        """Every entry of the document, in document order."""
        self._require_results()
        return dict(self._results)

    @property
    def errors(self) -> list[Exception]:
        self._require_results()
        return [result.error for result in self._results.values() if isinstance(result, Failure)]


class ResilientValue(Generic[T]):
    """
    A decoded value and how it was obtained.

    ``value`` is always present: on failure it holds the fallback. Two wrappers
    compare and hash by ``value`` only, so the outcome never affects equality
    of the models holding them.

    A list value hashes as a tuple and a dict value as a frozenset of its
    items. Their elements must be hashable themselves: hashing a
    ``dict[str, list[int]]`` value raises ``TypeError``.
    """

    __slots__ = ("value", "outcome", "collection")

    def __init__(
        self,
        value: T,
        outcome: Outcome = DECODED_SUCCESSFULLY,
        collection: Optional[type] = None,
    ):
        self.value = value
        self.outcome = outcome
        # list or dict for collection fields, drives the shape of ``results``
        self.collection = collection

    def __repr__(self) -> str:
        return f"ResilientValue({self.value!r}, {self.outcome!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ResilientValue):
            return bool(self.value == other.value)
        return NotImplemented

    def __hash__(self) -> int:
        value: Any = self.value
        if isinstance(value, list):
            return hash(tuple(value))
        if isinstance(value, dict):
            return hash(frozenset(value.items()))
        return hash(value)

    def map(self, transform: Callable[[T], Any]) -> "ResilientValue[Any]":
        """New wrapper around ``transform(value)`` with the same outcome."""
        return ResilientValue(transform(self.value), self.outcome, self.collection)

    @property
    def error(self) -> Optional[Exception]:
        """The error recovered from, if any."""
        return self.outcome.error

    @property
    def errors(self) -> list[Exception]:
        """All errors encountered, top-level error first."""
        error = self.outcome.error
        if error is None:
            return []
        if isinstance(error, (ArrayDecodingError, DictionaryDecodingError)):
            return error.errors
        return [error]

    @property
    def results(self) -> Union[list[Result], dict[str, Result]]:
        """
        Failures interleaved with successes at their original position.

        A failure of the whole collection yields a single ``Failure``.
        """
        error = self.outcome.error
        if isinstance(error, ArrayDecodingError):
            return error.interleave(self.value or [])  # type: ignore[arg-type]
        if isinstance(error, DictionaryDecodingError):
            return error.results
        if error is not None:
            return [Failure(error)]

        value: Any = self.value
        if isinstance(value, list):
            return [Success(element) for element in value]
        if isinstance(value, dict):
            return {key: Success(element) for key, element in value.items()}
        if value is None and self.collection is not None:
            return self.collection()
        raise TypeError(f"results are only available for collection values, not {value!r}")
