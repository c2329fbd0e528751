"""Structural and required-category checks on audit run records."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, List

from schemas.internal.runs import AuditRunRecord, Summary
from schemas.internal.validation import ValidationEntry
from scoring.engine import score

_SUMMARY_FIELDS = (
    "total_pages",
    "tested_pages",
    "passed_pages",
    "failed_pages",
    "crashed_pages",
    "skipped_pages",
    "scored_pages",
    "total_errors",
    "total_warnings",
    "total_notices",
    "overall_score",
)


def check_structure(record: AuditRunRecord) -> List[ValidationEntry]:
    """Invariant violations on pages, metadata and (if present) the summary."""
    entries: List[ValidationEntry] = []

    duration = record.metadata.duration_ms
    if duration is not None and duration < 0:
        entries.append(
            _incomplete("run duration must be non-negative", field="metadata.duration")
        )

    for index, page in enumerate(record.pages):
        page_url = page.url or None
        if not page.url:
            entries.append(
                _incomplete(f"page #{index} has no URL", field="url")
            )
        if page.duration_ms is None:
            entries.append(_incomplete("page duration is missing", page_url=page_url, field="duration"))
        elif page.duration_ms < 0:
            entries.append(
                _incomplete(
                    f"page duration {page.duration_ms:g} is negative",
                    page_url=page_url,
                    field="duration",
                )
            )
        if page.is_skipped and page.categories:
            entries.append(
                _incomplete(
                    "skipped page carries category results",
                    page_url=page_url,
                    field="categories",
                )
            )
        for key, result in page.categories.items():
            if result.category != key:
                entries.append(
                    _incomplete(
                        f"category '{key}' holds a '{result.category}' result",
                        page_url=page_url,
                        category=key,
                    )
                )

    if record.summary is not None:
        entries.extend(_check_summary(record.summary, record))
    return entries


def check_required(
    record: AuditRunRecord,
    required_categories: Iterable[str],
) -> List[ValidationEntry]:
    """Non-skipped pages lacking a scored result for a required category."""
    required = list(dict.fromkeys(required_categories))
    entries: List[ValidationEntry] = []
    for page in record.pages:
        if page.is_skipped:
            continue
        for category in required:
            if not page.has_category(category):  # type: ignore[arg-type]
                entries.append(
                    ValidationEntry(
                        kind="missing_analysis",
                        message=f"required category '{category}' is missing",
                        page_url=page.url or None,
                        category=category,
                    )
                )
    return entries


def check_duplicates(record: AuditRunRecord) -> List[ValidationEntry]:
    counts = Counter(page.url for page in record.pages if page.url)
    return [
        _incomplete(f"URL appears {count} times", page_url=url, field="url")
        for url, count in counts.items()
        if count > 1
    ]


def _check_summary(summary: Summary, record: AuditRunRecord) -> List[ValidationEntry]:
    entries: List[ValidationEntry] = []
    if summary.tested_pages > summary.total_pages:
        entries.append(_incomplete("summary tested_pages exceeds total_pages", field="summary"))
    outcome_total = summary.passed_pages + summary.failed_pages + summary.crashed_pages
    if outcome_total > summary.tested_pages:
        entries.append(
            _incomplete(
                "summary passed+failed+crashed exceeds tested_pages", field="summary"
            )
        )

    expected = score(record.pages)
    mismatched = [
        name for name in _SUMMARY_FIELDS if getattr(summary, name) != getattr(expected, name)
    ]
    if mismatched:
        entries.append(
            _incomplete(
                "summary does not match pages: " + ", ".join(mismatched),
                field="summary",
            )
        )
    return entries


def _incomplete(
    message: str,
    *,
    page_url: str | None = None,
    category: str | None = None,
    field: str | None = None,
) -> ValidationEntry:
    return ValidationEntry(
        kind="incomplete_data",
        message=message,
        page_url=page_url,
        category=category,
        field=field,
    )


__all__ = ["check_duplicates", "check_required", "check_structure"]
