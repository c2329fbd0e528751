"""Advisory completeness scoring for audit pages."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence

from schemas.internal.categories import Category
from schemas.internal.pages import PageRecord
from schemas.internal.validation import CompletenessReport, PageCompleteness

CRITICAL_FIELDS: tuple[str, ...] = ("url", "status", "duration")
RECOMMENDED_CATEGORIES: tuple[Category, ...] = ("accessibility", "performance")
OPTIONAL_CATEGORIES: tuple[Category, ...] = ("mobileFriendliness", "contentWeight")


@dataclass(frozen=True)
class CompletenessConfig:
    recommended_penalty: float = 15.0
    optional_penalty: float = 5.0


def check_page_completeness(
    page: PageRecord,
    *,
    config: CompletenessConfig | None = None,
) -> PageCompleteness:
    cfg = config or CompletenessConfig()

    missing_critical: List[str] = []
    if not page.url:
        missing_critical.append("url")
    if not page.status:
        missing_critical.append("status")
    if page.duration_ms is None:
        missing_critical.append("duration")

    missing_recommended = [
        category for category in RECOMMENDED_CATEGORIES if not page.has_category(category)
    ]
    missing_optional = [
        category for category in OPTIONAL_CATEGORIES if not page.has_category(category)
    ]

    score = 100.0
    score -= cfg.recommended_penalty * len(missing_recommended)
    score -= cfg.optional_penalty * len(missing_optional)

    return PageCompleteness(
        page_url=page.url,
        score=max(score, 0.0),
        missing_critical=missing_critical,
        missing_recommended=missing_recommended,
        missing_optional=missing_optional,
    )


def compute_completeness(
    pages: Sequence[PageRecord],
    *,
    config: CompletenessConfig | None = None,
) -> CompletenessReport:
    """Per-page and run-level completeness. Informational only."""
    items = [check_page_completeness(page, config=config) for page in pages]
    complete = sum(1 for item in items if item.is_complete)

    missing_counter: Counter[str] = Counter()
    for item in items:
        missing_counter.update(item.missing_fields)

    overall = sum(item.score for item in items) / len(items) if items else 0.0

    return CompletenessReport(
        overall_score=round(overall, 2),
        total_pages=len(items),
        complete_pages=complete,
        incomplete_pages=len(items) - complete,
        common_missing=dict(sorted(missing_counter.items(), key=lambda kv: (-kv[1], kv[0]))),
        pages=items,
    )


__all__ = [
    "CRITICAL_FIELDS",
    "CompletenessConfig",
    "OPTIONAL_CATEGORIES",
    "RECOMMENDED_CATEGORIES",
    "check_page_completeness",
    "compute_completeness",
]
