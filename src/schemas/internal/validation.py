"""Normalization warnings, validation verdicts and completeness reports."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ValidationPolicy = Literal["fail_fast", "tolerant"]
EntryKind = Literal["incomplete_data", "missing_analysis"]


class NormalizationWarning(BaseModel):
    """A raw value the normalizer could not interpret."""

    page_url: Optional[str] = None
    category: Optional[str] = None
    field: str
    message: str

    model_config = ConfigDict(extra="forbid", frozen=True)

    def __str__(self) -> str:
        scope = self.page_url or "<run>"
        if self.category:
            scope = f"{scope} [{self.category}]"
        return f"{scope} {self.field}: {self.message}"


class ValidationEntry(BaseModel):
    kind: EntryKind
    message: str
    page_url: Optional[str] = None
    category: Optional[str] = None
    field: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    def __str__(self) -> str:
        prefix = f"{self.page_url}: " if self.page_url else ""
        return f"{prefix}{self.message}"


class ValidationReport(BaseModel):
    policy: ValidationPolicy
    valid: bool
    errors: List[ValidationEntry] = Field(default_factory=list)
    warnings: List[ValidationEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class PageCompleteness(BaseModel):
    page_url: str
    score: float = Field(ge=0, le=100)
    missing_critical: List[str] = Field(default_factory=list)
    missing_recommended: List[str] = Field(default_factory=list)
    missing_optional: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def is_complete(self) -> bool:
        return not self.missing_critical

    @property
    def missing_fields(self) -> List[str]:
        return [*self.missing_critical, *self.missing_recommended, *self.missing_optional]


class CompletenessReport(BaseModel):
    overall_score: float = Field(ge=0, le=100)
    total_pages: int = Field(ge=0)
    complete_pages: int = Field(ge=0)
    incomplete_pages: int = Field(ge=0)
    common_missing: Dict[str, int] = Field(default_factory=dict)
    pages: List[PageCompleteness] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


__all__ = [
    "CompletenessReport",
    "EntryKind",
    "NormalizationWarning",
    "PageCompleteness",
    "ValidationEntry",
    "ValidationPolicy",
    "ValidationReport",
]
