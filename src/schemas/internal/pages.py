"""Page-level audit records."""

from __future__ import annotations

from typing import Dict, Iterator, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from schemas.internal.categories import CATEGORY_ORDER, Category, CategoryResult
from schemas.internal.findings import Issue

PageStatus = Literal["passed", "failed", "crashed", "skipped"]

PAGE_STATUSES: tuple[PageStatus, ...] = ("passed", "failed", "crashed", "skipped")


class PageRecord(BaseModel):
    url: str
    title: Optional[str] = None
    status: PageStatus
    duration_ms: Optional[float] = None
    categories: Dict[Category, CategoryResult] = Field(default_factory=dict)
    reason: Optional[str] = None
    tested_at: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def is_skipped(self) -> bool:
        return self.status == "skipped"

    def get(self, category: Category) -> Optional[CategoryResult]:
        return self.categories.get(category)

    def has_category(self, category: Category) -> bool:
        """True when the category is present and carries a score."""
        result = self.categories.get(category)
        return result is not None and result.is_scored

    def scored_categories(self) -> list[CategoryResult]:
        return [
            self.categories[category]
            for category in CATEGORY_ORDER
            if self.has_category(category)
        ]

    def iter_issues(self) -> Iterator[tuple[Category, Issue]]:
        for category in CATEGORY_ORDER:
            result = self.categories.get(category)
            if result is None:
                continue
            for issue in result.issues:
                yield category, issue


__all__ = ["PAGE_STATUSES", "PageRecord", "PageStatus"]
