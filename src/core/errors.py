"""Pipeline error taxonomy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from schemas.internal.validation import ValidationEntry


class AuditPipelineError(Exception):
    """Base class for errors that abort an audit run."""


class _ValidationAbort(AuditPipelineError, ValueError):
    def __init__(self, message: str, entries: Sequence["ValidationEntry"] = ()) -> None:
        super().__init__(message)
        self.entries = list(entries)


class IncompleteDataError(_ValidationAbort):
    """A structural invariant was violated under the fail-fast policy."""


class MissingAnalysisError(_ValidationAbort):
    """A required category is absent on one or more pages under fail-fast."""


class EmissionFailure(AuditPipelineError, OSError):
    """A report destination could not be written."""

    def __init__(self, message: str, *, path: str | None = None, fmt: str | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.fmt = fmt


__all__ = [
    "AuditPipelineError",
    "EmissionFailure",
    "IncompleteDataError",
    "MissingAnalysisError",
]
