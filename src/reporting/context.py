"""Shared template context for narrative and hypertext reports."""

from __future__ import annotations

from typing import Any

from schemas.internal.categories import CATEGORY_LABELS, CATEGORY_ORDER
from schemas.internal.findings import SEVERITY_ORDER
from schemas.internal.grades import grade_for
from schemas.internal.pages import PageRecord
from schemas.internal.runs import AuditRunRecord
from scoring.engine import category_average, ensure_summary, page_composite

SEVERITY_HEADINGS = {
    "error": "Errors",
    "warning": "Warnings",
    "notice": "Notices",
}

STATUS_LABELS = {
    "passed": "Passed",
    "failed": "Failed",
    "crashed": "Crashed",
    "skipped": "Skipped",
}


def build_report_context(
    record: AuditRunRecord,
    *,
    include_page_detail: bool = True,
) -> dict[str, Any]:
    pages = [_page_context(page) for page in record.pages]
    return {
        "metadata": record.metadata,
        "summary": ensure_summary(record),
        "warnings": list(record.warnings),
        "partial": bool(record.warnings),
        "categories": [_category_context(record, category) for category in CATEGORY_ORDER],
        "pages": pages,
        "tested_pages": [page for page in pages if page["status"] != "skipped"],
        "skipped_pages": [page for page in pages if page["status"] == "skipped"],
        "include_page_detail": include_page_detail,
        "status_labels": STATUS_LABELS,
    }


def _category_context(record: AuditRunRecord, category: str) -> dict[str, Any]:
    average = category_average(record.pages, category)  # type: ignore[arg-type]
    rows = []
    for page in record.pages:
        if page.is_skipped:
            continue
        result = page.categories.get(category)  # type: ignore[call-overload]
        if result is None:
            continue
        rows.append(
            {
                "url": page.url,
                "score": result.score,
                "grade": result.grade,
                "issue_count": len(result.issues),
            }
        )
    return {
        "key": category,
        "label": CATEGORY_LABELS[category],
        "anchor": f"category-{category}",
        "average": average,
        "grade": grade_for(average),
        "pages": rows,
    }


def _page_context(page: PageRecord) -> dict[str, Any]:
    composite = page_composite(page)
    categories = []
    for category in CATEGORY_ORDER:
        result = page.categories.get(category)
        categories.append(
            {
                "key": category,
                "label": CATEGORY_LABELS[category],
                "present": result is not None,
                "score": result.score if result is not None else None,
                "grade": result.grade if result is not None else None,
            }
        )

    grouped: dict[str, list] = {severity: [] for severity in SEVERITY_ORDER}
    for _, issue in page.iter_issues():
        grouped[issue.severity].append(issue)
    sections = [
        {"severity": severity, "heading": SEVERITY_HEADINGS[severity], "issues": grouped[severity]}
        for severity in SEVERITY_ORDER
        if grouped[severity]
    ]

    return {
        "url": page.url,
        "title": page.title,
        "status": page.status,
        "duration": page.duration_ms,
        "reason": page.reason,
        "composite": round(composite, 2) if composite is not None else None,
        "grade": grade_for(composite),
        "categories": categories,
        "sections": sections,
        "issue_count": sum(len(section["issues"]) for section in sections),
    }


__all__ = ["SEVERITY_HEADINGS", "STATUS_LABELS", "build_report_context"]
