"""CSV formatter for spreadsheet and BI tooling."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterator, Literal

from schemas.internal.categories import CATEGORY_LABELS, CATEGORY_ORDER
from schemas.internal.pages import PageRecord
from schemas.internal.runs import AuditRunRecord, Summary
from reporting.formatters.base import BaseFormatter
from reporting.utils import NOT_AVAILABLE, escape_line, format_number
from scoring.engine import ensure_summary

CsvLayout = Literal["wide", "long"]

PAGE_COLUMNS = ["URL", "Title", "Status", "Duration"]
COUNT_COLUMNS = ["Errors", "Warnings", "Notices"]

# column -> (category, metric key)
METRIC_COLUMNS: dict[str, tuple[str, str]] = {
    "PerformanceLCP": ("performance", "largestContentfulPaint"),
    "PerformanceFCP": ("performance", "firstContentfulPaint"),
    "PerformanceCLS": ("performance", "cumulativeLayoutShift"),
    "PerformanceTTFB": ("performance", "timeToFirstByte"),
    "PerformanceLoadTime": ("performance", "loadTime"),
    "ContentWeightTotalSize": ("contentWeight", "totalSize"),
}

SUMMARY_COLUMNS = [
    "TotalPages",
    "TestedPages",
    "PassedPages",
    "FailedPages",
    "CrashedPages",
    "SkippedPages",
    "TotalErrors",
    "TotalWarnings",
    "TotalNotices",
    "OverallScore",
    "OverallGrade",
    "CertificateTier",
]


def _column_prefix(category: str) -> str:
    return category[0].upper() + category[1:]


WIDE_COLUMNS = (
    PAGE_COLUMNS
    + [
        column
        for category in CATEGORY_ORDER
        for column in (f"{_column_prefix(category)}Score", f"{_column_prefix(category)}Grade")
    ]
    + COUNT_COLUMNS
    + list(METRIC_COLUMNS)
)

LONG_COLUMNS = PAGE_COLUMNS + ["Category", "Score", "Grade"] + COUNT_COLUMNS


class CSVFormatter(BaseFormatter):
    """Tabular output, one row per page (wide) or per page and category (long).

    Run warnings are written first as ``#`` comment lines. Absent values are
    rendered as ``N/A``.
    """

    name = "csv"
    extension = "csv"
    media_type = "text/csv"

    def __init__(
        self,
        template_dir: Path | None = None,
        *,
        layout: CsvLayout = "wide",
        include_page_detail: bool = True,
    ):
        super().__init__(template_dir)
        if layout not in ("wide", "long"):
            raise ValueError(f"unknown CSV layout: {layout!r}")
        self.layout = layout
        self.include_page_detail = include_page_detail

    def format(self, record: AuditRunRecord) -> str:
        summary = ensure_summary(record)
        buffer = io.StringIO()
        for warning in record.warnings:
            buffer.write(f"# {escape_line(warning)}\n")

        if not self.include_page_detail:
            columns, rows = SUMMARY_COLUMNS, iter([_summary_row(summary)])
        elif self.layout == "long":
            columns, rows = LONG_COLUMNS, self._long_rows(record.pages)
        else:
            columns, rows = WIDE_COLUMNS, self._wide_rows(record.pages)

        writer = csv.DictWriter(buffer, fieldnames=columns, lineterminator="\n")
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
        return buffer.getvalue()

    def _wide_rows(self, pages: list[PageRecord]) -> Iterator[dict[str, str]]:
        for page in pages:
            row = _page_columns(page)
            for category in CATEGORY_ORDER:
                result = page.categories.get(category)
                prefix = _column_prefix(category)
                row[f"{prefix}Score"] = format_number(result.score if result else None)
                row[f"{prefix}Grade"] = (result.grade if result else None) or NOT_AVAILABLE
            row.update(_issue_counts(page, CATEGORY_ORDER))
            for column, (category, key) in METRIC_COLUMNS.items():
                result = page.categories.get(category)  # type: ignore[call-overload]
                row[column] = format_number(result.metrics.get(key) if result else None)
            yield row

    def _long_rows(self, pages: list[PageRecord]) -> Iterator[dict[str, str]]:
        for page in pages:
            present = [category for category in CATEGORY_ORDER if category in page.categories]
            if not present:
                row = _page_columns(page)
                row.update(
                    {
                        "Category": NOT_AVAILABLE,
                        "Score": NOT_AVAILABLE,
                        "Grade": NOT_AVAILABLE,
                        "Errors": "0",
                        "Warnings": "0",
                        "Notices": "0",
                    }
                )
                yield row
                continue
            for category in present:
                result = page.categories[category]
                row = _page_columns(page)
                row["Category"] = CATEGORY_LABELS[category]
                row["Score"] = format_number(result.score)
                row["Grade"] = result.grade or NOT_AVAILABLE
                row.update(_issue_counts(page, (category,)))
                yield row


def _page_columns(page: PageRecord) -> dict[str, str]:
    return {
        "URL": page.url,
        "Title": page.title or NOT_AVAILABLE,
        "Status": page.status,
        "Duration": format_number(page.duration_ms),
    }


def _issue_counts(page: PageRecord, categories) -> dict[str, str]:
    counts = {"error": 0, "warning": 0, "notice": 0}
    for category in categories:
        result = page.categories.get(category)
        if result is None:
            continue
        for severity in counts:
            counts[severity] += result.count(severity)  # type: ignore[arg-type]
    return {
        "Errors": str(counts["error"]),
        "Warnings": str(counts["warning"]),
        "Notices": str(counts["notice"]),
    }


def _summary_row(summary: Summary) -> dict[str, str]:
    return {
        "TotalPages": str(summary.total_pages),
        "TestedPages": str(summary.tested_pages),
        "PassedPages": str(summary.passed_pages),
        "FailedPages": str(summary.failed_pages),
        "CrashedPages": str(summary.crashed_pages),
        "SkippedPages": str(summary.skipped_pages),
        "TotalErrors": str(summary.total_errors),
        "TotalWarnings": str(summary.total_warnings),
        "TotalNotices": str(summary.total_notices),
        "OverallScore": format_number(summary.overall_score),
        "OverallGrade": summary.overall_grade or NOT_AVAILABLE,
        "CertificateTier": summary.certificate_tier or NOT_AVAILABLE,
    }


__all__ = ["CSVFormatter", "CsvLayout", "LONG_COLUMNS", "METRIC_COLUMNS", "SUMMARY_COLUMNS", "WIDE_COLUMNS"]
