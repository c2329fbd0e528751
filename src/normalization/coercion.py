"""Lenient coercion helpers for loosely-typed analyzer output."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence

from schemas.internal.findings import (
    DEFAULT_ISSUE_CODE,
    IMPACT_LEVELS,
    LEGACY_STRING_CODE,
    Issue,
    Severity,
)
from schemas.internal.validation import NormalizationWarning

_MESSAGE_KEYS = ("message", "description", "issue", "title")
_CODE_KEYS = ("code", "rule", "id")
_SELECTOR_KEYS = ("selector", "locationHint", "location_hint", "line")
_REMEDIATION_KEYS = ("remediation", "recommendation", "help", "fix")
_HELP_URL_KEYS = ("helpUrl", "help_url")

_SEVERITY_ALIASES: dict[str, Severity] = {
    "error": "error",
    "errors": "error",
    "warning": "warning",
    "warnings": "warning",
    "warn": "warning",
    "notice": "notice",
    "notices": "notice",
    "info": "notice",
}
_URGENT_PRIORITIES = {"high", "critical"}


class CoercionError(ValueError):
    """A raw value could not be interpreted."""


@dataclass
class WarningSink:
    """Collects normalization warnings for one page or run."""

    page_url: Optional[str] = None
    warnings: List[NormalizationWarning] = field(default_factory=list)

    def add(self, field_name: str, message: str, *, category: str | None = None) -> None:
        self.warnings.append(
            NormalizationWarning(
                page_url=self.page_url,
                category=category,
                field=field_name,
                message=message,
            )
        )


def coerce_number(value: Any) -> Optional[float]:
    """Coerce numbers and numeric strings; None and blank strings are absent."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise CoercionError(f"expected a number, got boolean {value!r}")
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError as exc:
            raise CoercionError(f"not a number: {value!r}") from exc
    else:
        raise CoercionError(f"expected a number, got {type(value).__name__}")
    if not math.isfinite(number):
        raise CoercionError(f"non-finite number: {value!r}")
    return number


def first_number(bag: Mapping[str, Any], keys: Sequence[str]) -> Optional[float]:
    """First present numeric value among ``keys``; dotted keys walk nested maps."""
    for key in keys:
        value = lookup(bag, key)
        if value is not None:
            return coerce_number(value)
    return None


def lookup(bag: Mapping[str, Any], path: str) -> Any:
    current: Any = bag
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def text_or_none(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def slugify(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-") or "general"


def decode_issue(
    item: Any,
    *,
    default_severity: Severity,
    fallback_code: str = DEFAULT_ISSUE_CODE,
) -> Issue:
    """Decode one raw finding; plain strings become legacy issues."""
    if isinstance(item, str):
        message = item.strip()
        if not message:
            raise CoercionError("empty issue message")
        return Issue(severity=default_severity, code=LEGACY_STRING_CODE, message=message)

    if not isinstance(item, Mapping):
        raise CoercionError(f"expected a string or mapping, got {type(item).__name__}")

    message = _first_text(item, _MESSAGE_KEYS)
    if message is None:
        raise CoercionError("issue has no message")

    return Issue(
        severity=_item_severity(item, default_severity),
        code=_first_text(item, _CODE_KEYS) or fallback_code,
        message=message,
        selector=_selector(item),
        remediation=_first_text(item, _REMEDIATION_KEYS),
        context=text_or_none(item.get("context")),
        impact=_impact(item),
        help_url=_first_text(item, _HELP_URL_KEYS),
    )


def decode_issue_list(
    value: Any,
    *,
    default_severity: Severity,
    field_name: str,
    sink: WarningSink,
    category: str,
    code_for: Callable[[Any], str] | None = None,
) -> List[Issue]:
    """Decode an issue list; unreadable items are skipped with a warning.

    Raises ``CoercionError`` when the field itself has an unusable shape.
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = [value] if value.strip() else []
    if not isinstance(value, (list, tuple)):
        raise CoercionError(
            f"{field_name}: expected a list of issues, got {type(value).__name__}"
        )

    issues: List[Issue] = []
    for index, item in enumerate(value):
        fallback = code_for(item) if code_for is not None else DEFAULT_ISSUE_CODE
        try:
            issues.append(
                decode_issue(item, default_severity=default_severity, fallback_code=fallback)
            )
        except CoercionError as exc:
            sink.add(f"{field_name}[{index}]", f"skipped issue: {exc}", category=category)
            continue
        if isinstance(item, Mapping) and item.get("impact") is not None and _impact(item) is None:
            sink.add(
                f"{field_name}[{index}].impact",
                f"ignored unknown impact {item['impact']!r}",
                category=category,
            )
    return issues


def _item_severity(item: Mapping[str, Any], default: Severity) -> Severity:
    for key in ("severity", "type"):
        raw = item.get(key)
        if isinstance(raw, str) and raw.strip().lower() in _SEVERITY_ALIASES:
            return _SEVERITY_ALIASES[raw.strip().lower()]
    priority = item.get("priority")
    if isinstance(priority, str):
        return "warning" if priority.strip().lower() in _URGENT_PRIORITIES else "notice"
    return default


def _impact(item: Mapping[str, Any]) -> Optional[str]:
    value = item.get("impact")
    if isinstance(value, str) and value in IMPACT_LEVELS:
        return value
    return None


def _selector(item: Mapping[str, Any]) -> Optional[str]:
    for key in _SELECTOR_KEYS:
        value = item.get(key)
        if isinstance(value, bool):
            continue
        if isinstance(value, int):
            return f"line {value}"
        text = text_or_none(value)
        if text is not None:
            return text
    return None


def _first_text(item: Mapping[str, Any], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = item.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        text = text_or_none(value)
        if text is not None:
            return text
    return None


__all__ = [
    "CoercionError",
    "WarningSink",
    "coerce_number",
    "decode_issue",
    "decode_issue_list",
    "first_number",
    "lookup",
    "slugify",
    "text_or_none",
]
