"""External response schemas for audit runs."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from schemas.internal.runs import AuditRunRecord
from schemas.internal.validation import CompletenessReport, ValidationReport


class AuditRunResult(BaseModel):
    record: AuditRunRecord
    validation: ValidationReport
    completeness: CompletenessReport | None = None
    artifacts: dict[str, str] = Field(default_factory=dict)
    runtime_ms: int | None = None
    warnings: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


__all__ = ["AuditRunResult"]
