"""Run-level audit records and summary."""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from schemas.internal.grades import CertificateTier, Grade, grade_for, strip_derived, tier_for
from schemas.internal.pages import PageRecord


class RunMetadata(BaseModel):
    timestamp: Optional[datetime] = None
    source_url: Optional[str] = None
    duration_ms: Optional[float] = None
    tool_version: str = "unknown"
    standard: Optional[str] = None
    features: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)


class Summary(BaseModel):
    """Aggregate counts and scores derived from a run's pages.

    Grade and certificate tier are derived from ``overall_score`` on access,
    so the two views can never drift apart.
    """

    total_pages: int = Field(ge=0)
    tested_pages: int = Field(ge=0)
    passed_pages: int = Field(ge=0)
    failed_pages: int = Field(ge=0)
    crashed_pages: int = Field(ge=0)
    skipped_pages: int = Field(default=0, ge=0)
    scored_pages: int = Field(default=0, ge=0)
    total_errors: int = Field(default=0, ge=0)
    total_warnings: int = Field(default=0, ge=0)
    total_notices: int = Field(default=0, ge=0)
    overall_score: Optional[float] = Field(default=None, ge=0, le=100)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_derived(cls, data: Any) -> Any:
        return strip_derived(data, "overall_grade", "certificate_tier")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def overall_grade(self) -> Optional[Grade]:
        return grade_for(self.overall_score)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def certificate_tier(self) -> Optional[CertificateTier]:
        return tier_for(self.overall_score)


class AuditRunRecord(BaseModel):
    """One full audit run.

    ``pages`` is the source of truth. ``summary`` stays None on a draft record
    and is filled in by ``scoring.finalize_run``, which returns a new record.
    """

    metadata: RunMetadata = Field(default_factory=RunMetadata)
    summary: Optional[Summary] = None
    pages: List[PageRecord] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_finalized(self) -> bool:
        return self.summary is not None

    @property
    def is_partial(self) -> bool:
        return bool(self.warnings)


__all__ = ["AuditRunRecord", "RunMetadata", "Summary"]
