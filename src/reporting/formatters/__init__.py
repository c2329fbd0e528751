"""Report formatters for different output formats."""

from __future__ import annotations

from typing import Any

from reporting.formatters.base import BaseFormatter
from reporting.formatters.html import HTMLFormatter
from reporting.formatters.markdown import MarkdownFormatter, parse_markdown_issues
from reporting.formatters.structured import JSONFormatter, load_record
from reporting.formatters.tabular import CSVFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    JSONFormatter.name: JSONFormatter,
    CSVFormatter.name: CSVFormatter,
    MarkdownFormatter.name: MarkdownFormatter,
    HTMLFormatter.name: HTMLFormatter,
}

FORMAT_ALIASES = {"md": "markdown", "htm": "html"}


def resolve_format(name: str) -> str:
    key = name.strip().lower()
    key = FORMAT_ALIASES.get(key, key)
    if key not in FORMATTERS:
        raise ValueError(f"unknown output format: {name!r} (choose from {', '.join(FORMATTERS)})")
    return key


def get_formatter(name: str, **kwargs: Any) -> BaseFormatter:
    """Instantiate the formatter registered under ``name``."""
    return FORMATTERS[resolve_format(name)](**kwargs)


__all__ = [
    "BaseFormatter",
    "CSVFormatter",
    "FORMATTERS",
    "HTMLFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "get_formatter",
    "load_record",
    "parse_markdown_issues",
    "resolve_format",
]
