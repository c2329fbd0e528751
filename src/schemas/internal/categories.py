"""Per-category analysis results."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from schemas.internal.findings import Issue, Severity
from schemas.internal.grades import Grade, grade_for, strip_derived

Category = Literal[
    "accessibility",
    "performance",
    "seo",
    "contentWeight",
    "mobileFriendliness",
]

CATEGORY_ORDER: tuple[Category, ...] = (
    "accessibility",
    "performance",
    "seo",
    "contentWeight",
    "mobileFriendliness",
)

CATEGORY_LABELS: dict[str, str] = {
    "accessibility": "Accessibility",
    "performance": "Performance",
    "seo": "SEO",
    "contentWeight": "Content Weight",
    "mobileFriendliness": "Mobile Friendliness",
}


class CategoryResult(BaseModel):
    """One analysis dimension for one page.

    ``score`` is None when the analyzer produced no usable score; the grade
    follows the score and the category is then left out of weighting.
    """

    category: Category
    score: Optional[float] = Field(default=None, ge=0, le=100)
    issues: List[Issue] = Field(default_factory=list)
    metrics: Dict[str, float] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_grade(cls, data: Any) -> Any:
        return strip_derived(data, "grade")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def grade(self) -> Optional[Grade]:
        return grade_for(self.score)

    @property
    def is_scored(self) -> bool:
        return self.score is not None

    def count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)


__all__ = ["CATEGORY_LABELS", "CATEGORY_ORDER", "Category", "CategoryResult"]
