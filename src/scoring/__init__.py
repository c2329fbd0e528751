"""Scoring engine exports."""

from __future__ import annotations

from schemas.internal.grades import grade_for, tier_for
from scoring.engine import (
    CATEGORY_WEIGHTS,
    category_average,
    ensure_summary,
    finalize_run,
    overall_score,
    page_composite,
    score,
)

__all__ = [
    "CATEGORY_WEIGHTS",
    "category_average",
    "ensure_summary",
    "finalize_run",
    "grade_for",
    "overall_score",
    "page_composite",
    "score",
    "tier_for",
]
