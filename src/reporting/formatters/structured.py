"""Structured JSON formatter."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from schemas.internal.categories import CATEGORY_ORDER, CategoryResult
from schemas.internal.findings import Issue
from schemas.internal.pages import PageRecord
from schemas.internal.runs import AuditRunRecord, RunMetadata, Summary
from reporting.formatters.base import BaseFormatter
from scoring.engine import ensure_summary

PROJECTION_KEY = "projection"

# model field -> payload key
METADATA_KEYS = {
    "timestamp": "timestamp",
    "source_url": "sourceUrl",
    "duration_ms": "durationMs",
    "tool_version": "toolVersion",
    "standard": "standard",
    "features": "features",
}
SUMMARY_KEYS = {
    "total_pages": "totalPages",
    "tested_pages": "testedPages",
    "passed_pages": "passedPages",
    "failed_pages": "failedPages",
    "crashed_pages": "crashedPages",
    "skipped_pages": "skippedPages",
    "scored_pages": "scoredPages",
    "total_errors": "totalErrors",
    "total_warnings": "totalWarnings",
    "total_notices": "totalNotices",
    "overall_score": "overallScore",
    "overall_grade": "overallGrade",
    "certificate_tier": "certificateTier",
}
PAGE_KEYS = {
    "url": "url",
    "title": "title",
    "status": "status",
    "duration_ms": "duration",
    "reason": "reason",
    "tested_at": "testedAt",
}
ISSUE_KEYS = {
    "severity": "severity",
    "code": "code",
    "message": "message",
    "selector": "selector",
    "remediation": "remediation",
    "context": "context",
    "impact": "impact",
    "help_url": "helpUrl",
}


def _rename(data: Mapping[str, Any], keys: Mapping[str, str]) -> dict[str, Any]:
    return {target: data.get(source) for source, target in keys.items()}


def _restore(data: Mapping[str, Any], keys: Mapping[str, str]) -> dict[str, Any]:
    return {source: data[target] for source, target in keys.items() if target in data}


class JSONFormatter(BaseFormatter):
    """Lossless machine-readable output.

    With ``metrics_only`` the payload is a projection: issues and unselected
    categories are dropped. Projections cannot be loaded back.
    """

    name = "json"
    extension = "json"
    media_type = "application/json"

    def __init__(
        self,
        template_dir: Path | None = None,
        *,
        metrics_only: Iterable[str] | None = None,
        indent: int | None = 2,
    ):
        super().__init__(template_dir)
        self.indent = indent
        self.metrics_only: Optional[list[str]] = None
        if metrics_only is not None:
            selected = set(metrics_only)
            unknown = sorted(selected - set(CATEGORY_ORDER))
            if unknown:
                raise ValueError(f"unknown categories for metrics projection: {', '.join(unknown)}")
            self.metrics_only = [category for category in CATEGORY_ORDER if category in selected]

    def format(self, record: AuditRunRecord) -> str:
        payload = self.build_payload(record)
        return json.dumps(payload, ensure_ascii=False, indent=self.indent) + "\n"

    def build_payload(self, record: AuditRunRecord) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "metadata": _rename(record.metadata.model_dump(mode="json"), METADATA_KEYS),
            "summary": _rename(ensure_summary(record).model_dump(mode="json"), SUMMARY_KEYS),
            "partial": record.is_partial,
            "warnings": list(record.warnings),
        }
        if self.metrics_only is None:
            payload["pages"] = [self._page_payload(page, CATEGORY_ORDER) for page in record.pages]
        else:
            payload[PROJECTION_KEY] = {"kind": "metrics_only", "categories": list(self.metrics_only)}
            payload["pages"] = [
                self._page_payload(page, self.metrics_only, with_issues=False)
                for page in record.pages
            ]
        return payload

    def _page_payload(
        self,
        page: PageRecord,
        categories: Iterable[str],
        *,
        with_issues: bool = True,
    ) -> dict[str, Any]:
        if with_issues:
            entry = _rename(page.model_dump(mode="json"), PAGE_KEYS)
        else:
            entry = {
                "url": page.url,
                "title": page.title,
                "status": page.status,
                "duration": page.duration_ms,
            }
        for category in categories:
            result = page.categories.get(category)  # type: ignore[call-overload]
            entry[category] = None if result is None else _category_payload(result, with_issues)
        return entry


def _category_payload(result: CategoryResult, with_issues: bool) -> dict[str, Any]:
    payload: dict[str, Any] = {"score": result.score, "grade": result.grade}
    if with_issues:
        payload["issues"] = [
            _rename(issue.model_dump(mode="json"), ISSUE_KEYS) for issue in result.issues
        ]
    payload["metrics"] = dict(result.metrics)
    return payload


def load_record(payload: Mapping[str, Any] | str) -> AuditRunRecord:
    """Rebuild an ``AuditRunRecord`` from full JSON output.

    Grades, tier and the partial flag are derived again on load; a stored
    summary is kept as is so validation can compare it against the pages.
    """
    data = json.loads(payload) if isinstance(payload, str) else dict(payload)
    if PROJECTION_KEY in data:
        raise ValueError("metrics-only projections cannot be loaded as audit records")

    pages = []
    for entry in data.get("pages") or []:
        page = _restore(entry, PAGE_KEYS)
        categories = {}
        for category in CATEGORY_ORDER:
            bag = entry.get(category)
            if bag is None:
                continue
            categories[category] = CategoryResult(
                category=category,
                score=bag.get("score"),
                issues=[Issue(**_restore(item, ISSUE_KEYS)) for item in bag.get("issues") or []],
                metrics=bag.get("metrics") or {},
            )
        pages.append(PageRecord(**page, categories=categories))

    summary = data.get("summary")
    return AuditRunRecord(
        metadata=RunMetadata(**_restore(data.get("metadata") or {}, METADATA_KEYS)),
        summary=Summary.model_validate(_restore(summary, SUMMARY_KEYS)) if summary else None,
        pages=pages,
        warnings=list(data.get("warnings") or []),
    )


__all__ = ["JSONFormatter", "PROJECTION_KEY", "load_record"]
