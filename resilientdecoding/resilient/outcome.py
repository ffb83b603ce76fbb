"""
How the value of a resilient field was obtained.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeKind(Enum):
    DECODED_SUCCESSFULLY = "decoded_successfully"
    KEY_NOT_FOUND = "key_not_found"
    VALUE_WAS_NIL = "value_was_nil"
    RECOVERED_FROM_ERROR = "recovered_from_error"


@dataclass(frozen=True)
class Outcome:
    """
    Tagged outcome of a resilient decode.

    Only ``RECOVERED_FROM_ERROR`` carries an error. ``was_reported`` tells
    whether that error itself went to the error reporter; collection errors
    are not, because their elements were reported one by one.
    """

    kind: OutcomeKind
    error: Optional[Exception] = None
    was_reported: bool = False

    def __post_init__(self) -> None:
        recovered = self.kind is OutcomeKind.RECOVERED_FROM_ERROR
        if recovered != (self.error is not None):
            raise ValueError(f"{self.kind.name} outcome must {'' if recovered else 'not '}carry an error")

    def __repr__(self) -> str:
        if self.is_recovered:
            return f"Outcome.recovered_from({self.error!r}, was_reported={self.was_reported})"
        return f"Outcome.{self.kind.name}"

    @classmethod
    def recovered_from(cls, error: Exception, was_reported: bool) -> "Outcome":
        return cls(OutcomeKind.RECOVERED_FROM_ERROR, error, was_reported)

    @property
    def is_decoded_successfully(self) -> bool:
        return self.kind is OutcomeKind.DECODED_SUCCESSFULLY

    @property
    def is_key_not_found(self) -> bool:
        return self.kind is OutcomeKind.KEY_NOT_FOUND

    @property
    def is_value_was_nil(self) -> bool:
        return self.kind is OutcomeKind.VALUE_WAS_NIL

    @property
    def is_recovered(self) -> bool:
        return self.kind is OutcomeKind.RECOVERED_FROM_ERROR


DECODED_SUCCESSFULLY = Outcome(OutcomeKind.DECODED_SUCCESSFULLY)
KEY_NOT_FOUND = Outcome(OutcomeKind.KEY_NOT_FOUND)
VALUE_WAS_NIL = Outcome(OutcomeKind.VALUE_WAS_NIL)
