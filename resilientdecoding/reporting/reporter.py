"""
Session-scoped error reporting.

A reporter is registered in a decoder's user info under a reserved key. Every
error recovered by a resilient field or collection element during a decode
pass is forwarded to it together with the coding path where it happened.
Calling ``flush()`` right after decoding hands back an immutable digest and
resets the reporter so the decoder can be reused.
"""

import logging
import warnings
from typing import Any, MutableMapping, Optional, Sequence

from ..core.errors import (
    MayBeMissingReportedErrors,
    PathSegment,
    ResilientMisuseWarning,
    UnknownNovelValueError,
)
from .tree import ErrorTree

logger = logging.getLogger(__name__)

ERROR_REPORTER_USER_INFO_KEY = "resilientdecoding.error_reporter"


class ErrorDigest:
    """Snapshot of the errors collected by one reporter between two flushes."""

    def __init__(
        self,
        tree: ErrorTree,
        may_be_missing_reported_errors: bool = False,
        include_unknown_novel_value_errors: bool = False,
    ):
        self._tree = tree
        self._errors = tuple(tree.errors())
        self.may_be_missing_reported_errors = may_be_missing_reported_errors
        self._include_novel_by_default = include_unknown_novel_value_errors

    def __len__(self) -> int:
        return len(self.errors)

    def __repr__(self) -> str:
        return f"ErrorDigest(errors={len(self.errors)})"

    def __str__(self) -> str:
        return self.pretty_print()

    @property
    def errors(self) -> list[Exception]:
        """Collected errors, with novel-value errors excluded unless configured otherwise."""
        return self.get_errors(self._include_novel_by_default)

    def get_errors(self, include_unknown_novel_value_errors: bool = False) -> list[Exception]:
        errors: list[Exception] = list(self._errors)
        if self.may_be_missing_reported_errors:
            errors.insert(0, MayBeMissingReportedErrors())
        if include_unknown_novel_value_errors:
            return errors
        return [error for error in errors if not isinstance(error, UnknownNovelValueError)]

    def pretty_print(self) -> str:
        """
        Indented, path-grouped description of every collected error.

        Novel-value errors are always listed (their description says they
        are not reported by default). Output is sorted, so it is stable
        across runs for the same document.
        """
        lines = self._tree.description_lines()
        if self.may_be_missing_reported_errors:
            lines.insert(0, "- " + MayBeMissingReportedErrors().abridged_description())
        return "\n".join(lines)


class ErrorReporter:
    """Collects errors reported during decode passes until flushed."""

    def __init__(self, include_unknown_novel_value_errors: bool = False):
        self.include_unknown_novel_value_errors = include_unknown_novel_value_errors
        self.may_be_missing_reported_errors = False
        self._tree = ErrorTree()

    def __repr__(self) -> str:
        return f"ErrorReporter(pending={len(self._tree)})"

    @property
    def has_errors(self) -> bool:
        return bool(self._tree)

    def flush(self) -> Optional[ErrorDigest]:
        """
        Meant to be called immediately after decoding.

        Returns:
            A digest of every error reported since the previous flush, or
            None if nothing was reported.
        """
        tree, self._tree = self._tree, ErrorTree()
        may_be_missing = self.may_be_missing_reported_errors
        self.may_be_missing_reported_errors = False
        if not tree and not may_be_missing:
            return None
        return ErrorDigest(tree, may_be_missing, self.include_unknown_novel_value_errors)

    def resilient_decoding_handled(self, error: Exception, path: Sequence[PathSegment]) -> None:
        """Record an error handled by the resilient machinery at ``path``."""
        self._tree.insert(error, path)


def enable_resilient_decoding_error_reporting(
    user_info: MutableMapping[Any, Any],
    include_unknown_novel_value_errors: bool = False,
) -> ErrorReporter:
    """
    Create a reporter and register it in ``user_info``.

    Should be called once per user info mapping. A repeated call still
    succeeds, but the earlier reporter is marked as possibly missing errors.
    """
    existing = user_info.get(ERROR_REPORTER_USER_INFO_KEY)
    if existing is not None:
        warnings.warn(
            "Resilient decoding error reporting was enabled more than once on the "
            "same decoder; the earlier reporter will stop receiving errors",
            ResilientMisuseWarning,
            stacklevel=2,
        )
        logger.warning("Replacing an already registered error reporter")
        if isinstance(existing, ErrorReporter):
            existing.may_be_missing_reported_errors = True

    reporter = ErrorReporter(include_unknown_novel_value_errors)
    user_info[ERROR_REPORTER_USER_INFO_KEY] = reporter
    return reporter
