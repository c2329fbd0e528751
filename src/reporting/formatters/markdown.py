"""Markdown formatter for human-readable narrative reports."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader

from schemas.internal.findings import Issue
from schemas.internal.runs import AuditRunRecord
from reporting.context import SEVERITY_HEADINGS, build_report_context
from reporting.formatters.base import BaseFormatter
from reporting.utils import (
    escape_line,
    format_number,
    format_timestamp,
    get_tier_label,
    or_placeholder,
    unescape_line,
)

PAGE_HEADING = "## Page: "
NO_URL = "(no URL)"

_HEADING_SEVERITY = {heading: severity for severity, heading in SEVERITY_HEADINGS.items()}
# Escaped pairs are consumed whole, so a delimiter can only match where its
# "(" or "," is unescaped.
_FIELD = r"(?:\\.|[^\\])*"
_ISSUE_LINE = re.compile(
    rf"^- (?P<message>{_FIELD}?) \(code=(?P<code>{_FIELD}?)"
    rf"(?:, selector=(?P<selector>{_FIELD}))?\)$"
)
_FIELD_ESCAPES = {"(": "\\(", ",": "\\,"}
_FIELD_UNESCAPE = re.compile(r"\\(.)")
_FIELD_UNESCAPES = {"n": "\n", "r": "\r"}


def _escape_field(text: str) -> str:
    """One-line escape that also guards the issue-line delimiters."""
    return "".join(_FIELD_ESCAPES.get(char, char) for char in escape_line(text))


def _unescape_field(text: str) -> str:
    return _FIELD_UNESCAPE.sub(
        lambda match: _FIELD_UNESCAPES.get(match.group(1), match.group(1)), text
    )


def issue_line(issue: Issue) -> str:
    """One narrative bullet; ``parse_markdown_issues`` reads it back."""
    line = f"- {_escape_field(issue.message)} (code={_escape_field(issue.code)}"
    if issue.selector is not None:
        line += f", selector={_escape_field(issue.selector)}"
    return line + ")"


class MarkdownFormatter(BaseFormatter):
    """Formatter for Markdown narrative reports."""

    name = "markdown"
    extension = "md"
    media_type = "text/markdown"

    def __init__(self, template_dir: Path | None = None, *, include_page_detail: bool = True):
        """
        Initialize Markdown formatter.

        Args:
            template_dir: Directory containing Markdown templates
            include_page_detail: Render per-page issue sections
        """
        super().__init__(template_dir)
        self.include_page_detail = include_page_detail
        self._setup_jinja_env()

    def _setup_jinja_env(self) -> None:
        """Setup Jinja2 environment for Markdown."""
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        # Register custom filters
        self.jinja_env.filters["format_timestamp"] = lambda dt: format_timestamp(
            dt, "display"
        )
        self.jinja_env.filters["num"] = format_number
        self.jinja_env.filters["or_no_data"] = or_placeholder
        self.jinja_env.filters["tier_label"] = get_tier_label
        self.jinja_env.filters["escape_line"] = escape_line
        self.jinja_env.filters["escape_md"] = self._escape_markdown
        self.jinja_env.filters["issue_line"] = issue_line

    def format(self, record: AuditRunRecord) -> str:
        """Format an audit run as Markdown."""
        template = self.jinja_env.get_template("report.md.j2")
        context = build_report_context(record, include_page_detail=self.include_page_detail)
        return template.render(data=context, page_heading=PAGE_HEADING, no_url=NO_URL)

    def _escape_markdown(self, text: Optional[str]) -> str:
        """Escape characters that would break a Markdown table cell."""
        if not text:
            return ""
        return escape_line(text).replace("|", "\\|")


def parse_markdown_issues(text: str) -> list[tuple[str, Issue]]:
    """Read ``(page URL, issue)`` pairs back out of a Markdown report.

    Only the per-page issue sections are read; everything else is skipped.
    """
    issues: list[tuple[str, Issue]] = []
    page_url: Optional[str] = None
    severity: Optional[str] = None

    for line in text.splitlines():
        if line.startswith(PAGE_HEADING):
            page_url = unescape_line(line[len(PAGE_HEADING):])
            if page_url == NO_URL:
                page_url = ""
            severity = None
            continue
        if line.startswith("## "):
            page_url = None
            severity = None
            continue
        if line.startswith("### "):
            severity = _HEADING_SEVERITY.get(line[4:].strip())
            continue
        if page_url is None or severity is None:
            continue

        match = _ISSUE_LINE.match(line)
        if match is None:
            continue
        selector = match.group("selector")
        issues.append(
            (
                page_url,
                Issue(
                    severity=severity,  # type: ignore[arg-type]
                    code=_unescape_field(match.group("code")),
                    message=_unescape_field(match.group("message")),
                    selector=_unescape_field(selector) if selector is not None else None,
                ),
            )
        )
    return issues


__all__ = ["MarkdownFormatter", "issue_line", "parse_markdown_issues"]
