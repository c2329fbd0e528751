"""Issue contracts for individual analyzer findings."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["error", "warning", "notice"]
Impact = Literal["minor", "moderate", "serious", "critical"]

SEVERITY_ORDER: tuple[Severity, ...] = ("error", "warning", "notice")
IMPACT_LEVELS: frozenset[str] = frozenset({"minor", "moderate", "serious", "critical"})

DEFAULT_ISSUE_CODE = "unknown-rule"
LEGACY_STRING_CODE = "legacy-string-issue"


class Issue(BaseModel):
    """A single error, warning or notice reported for a page."""

    severity: Severity
    code: str = DEFAULT_ISSUE_CODE
    message: str = Field(min_length=1)
    selector: Optional[str] = None
    remediation: Optional[str] = None
    context: Optional[str] = None
    impact: Optional[Impact] = None
    help_url: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = [
    "DEFAULT_ISSUE_CODE",
    "IMPACT_LEVELS",
    "Impact",
    "Issue",
    "LEGACY_STRING_CODE",
    "SEVERITY_ORDER",
    "Severity",
]
