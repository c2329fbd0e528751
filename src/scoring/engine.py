"""Composite scoring, grades and certificate tiers for audit runs."""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from schemas.internal.categories import CATEGORY_ORDER, Category
from schemas.internal.pages import PageRecord
from schemas.internal.runs import AuditRunRecord, Summary

CATEGORY_WEIGHTS: Mapping[Category, float] = {
    "accessibility": 0.35,
    "performance": 0.25,
    "seo": 0.20,
    "contentWeight": 0.10,
    "mobileFriendliness": 0.10,
}

SCORE_PRECISION = 2


def page_composite(
    page: PageRecord,
    *,
    weights: Mapping[Category, float] = CATEGORY_WEIGHTS,
) -> Optional[float]:
    """Weighted mean over the categories actually scored on ``page``.

    Absent categories add to neither numerator nor denominator. Returns None
    when the page has no scored category.
    """
    numerator = 0.0
    denominator = 0.0
    for category in CATEGORY_ORDER:
        result = page.categories.get(category)
        if result is None or result.score is None:
            continue
        weight = weights.get(category, 0.0)
        numerator += result.score * weight
        denominator += weight
    if denominator <= 0:
        return None
    return numerator / denominator


def overall_score(
    pages: Sequence[PageRecord],
    *,
    weights: Mapping[Category, float] = CATEGORY_WEIGHTS,
) -> Optional[float]:
    """Mean page composite over tested pages; skipped pages never count."""
    composites = [
        composite
        for composite in (
            page_composite(page, weights=weights) for page in pages if not page.is_skipped
        )
        if composite is not None
    ]
    if not composites:
        return None
    return round(sum(composites) / len(composites), SCORE_PRECISION)


def score(pages: Sequence[PageRecord]) -> Summary:
    """Compute the run summary as a pure function of ``pages``."""
    passed = failed = crashed = skipped = 0
    errors = warnings = notices = 0
    scored = 0

    for page in pages:
        if page.status == "passed":
            passed += 1
        elif page.status == "failed":
            failed += 1
        elif page.status == "crashed":
            crashed += 1
        else:
            skipped += 1

        if not page.is_skipped and page.scored_categories():
            scored += 1

        for _, issue in page.iter_issues():
            if issue.severity == "error":
                errors += 1
            elif issue.severity == "warning":
                warnings += 1
            else:
                notices += 1

    return Summary(
        total_pages=len(pages),
        tested_pages=len(pages) - skipped,
        passed_pages=passed,
        failed_pages=failed,
        crashed_pages=crashed,
        skipped_pages=skipped,
        scored_pages=scored,
        total_errors=errors,
        total_warnings=warnings,
        total_notices=notices,
        overall_score=overall_score(pages),
    )


def finalize_run(record: AuditRunRecord) -> AuditRunRecord:
    """Return a copy of ``record`` carrying a freshly computed summary."""
    return record.model_copy(update={"summary": score(record.pages)})


def ensure_summary(record: AuditRunRecord) -> Summary:
    """Summary of a finalized record, or one computed on the fly for a draft."""
    if record.summary is not None:
        return record.summary
    return score(record.pages)


def category_average(
    pages: Sequence[PageRecord],
    category: Category,
) -> Optional[float]:
    """Mean category score over non-skipped pages that carry a score for it."""
    values = [
        page.categories[category].score
        for page in pages
        if not page.is_skipped and page.has_category(category)
    ]
    if not values:
        return None
    return round(sum(v for v in values if v is not None) / len(values), SCORE_PRECISION)


__all__ = [
    "CATEGORY_WEIGHTS",
    "SCORE_PRECISION",
    "category_average",
    "ensure_summary",
    "finalize_run",
    "overall_score",
    "page_composite",
    "score",
]
