"""Reporting module exports."""

from __future__ import annotations

from reporting.assets import BadgeAssets
from reporting.context import build_report_context
from reporting.formatters import (
    FORMATTERS,
    BaseFormatter,
    CSVFormatter,
    HTMLFormatter,
    JSONFormatter,
    MarkdownFormatter,
    get_formatter,
    load_record,
    parse_markdown_issues,
)
from reporting.generator import ReportGenerator, open_destination, write_artifact
from reporting.schemas import ReportBundle, ReportMetadata, ReportOptions

__all__ = [
    "BadgeAssets",
    "BaseFormatter",
    "CSVFormatter",
    "FORMATTERS",
    "HTMLFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "ReportBundle",
    "ReportGenerator",
    "ReportMetadata",
    "ReportOptions",
    "build_report_context",
    "get_formatter",
    "load_record",
    "open_destination",
    "parse_markdown_issues",
    "write_artifact",
]
