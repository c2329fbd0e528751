"""Utility functions for report generation."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Literal, Optional

NOT_AVAILABLE = "N/A"
NO_DATA = "No data"

_ESCAPES = {"\\": "\\\\", "\n": "\\n", "\r": "\\r"}
_UNESCAPE_PATTERN = re.compile(r"\\(\\|n|r)")
_UNESCAPES = {"\\": "\\", "n": "\n", "r": "\r"}


def format_number(value: Optional[float]) -> str:
    """Render a metric; absence is ``N/A`` and never ``0`` or ``NaN``."""
    if value is None:
        return NOT_AVAILABLE
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return str(round(number, 2))


def or_placeholder(value: Any, placeholder: str = NO_DATA) -> Any:
    if value is None or value == "":
        return placeholder
    return value


def get_grade_color(grade: Optional[str]) -> str:
    """Get color code for a letter grade (for HTML/CSS)."""
    mapping = {
        "A": "#28a745",  # Green
        "B": "#7cb342",
        "C": "#ffc107",  # Yellow
        "D": "#fd7e14",
        "F": "#dc3545",  # Red
    }
    return mapping.get(grade or "", "#6c757d")  # Gray for unknown


def get_tier_label(tier: Optional[str]) -> str:
    """Get human-readable label for a certificate tier."""
    mapping = {
        "PLATINUM": "Platinum",
        "GOLD": "Gold",
        "SILVER": "Silver",
        "BRONZE": "Bronze",
        "NEEDS_IMPROVEMENT": "Needs improvement",
    }
    if tier is None:
        return NO_DATA
    return mapping.get(tier, str(tier))


def escape_line(text: Optional[str]) -> str:
    """Keep a value on one line so narrative output stays parseable."""
    if not text:
        return ""
    return "".join(_ESCAPES.get(char, char) for char in text)


def unescape_line(text: str) -> str:
    return _UNESCAPE_PATTERN.sub(lambda match: _UNESCAPES[match.group(1)], text)


def sanitize_filename(name: str) -> str:
    """Sanitize a string for use in filenames."""
    # Remove or replace invalid filename characters
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        name = name.replace(char, "_")
    return name.strip()


def format_timestamp(dt: object, fmt: Literal["file", "display"] = "file") -> str:
    """Format a datetime for filenames or display; missing values get a placeholder."""
    if not isinstance(dt, datetime):
        return "undated" if fmt == "file" else NO_DATA

    if fmt == "file":
        return dt.strftime("%Y%m%d_%H%M%S")
    else:
        return dt.strftime("%Y-%m-%d %H:%M:%S")


__all__ = [
    "NOT_AVAILABLE",
    "NO_DATA",
    "escape_line",
    "format_number",
    "format_timestamp",
    "get_grade_color",
    "get_tier_label",
    "or_placeholder",
    "sanitize_filename",
    "unescape_line",
]
