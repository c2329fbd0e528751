"""Raw page/run normalization into typed audit records."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Sequence

from normalization.coercion import CoercionError, WarningSink, coerce_number, text_or_none
from normalization.decoders import CATEGORY_SPECS, Decoded, Rejected, decode_category, select_source
from schemas.internal.categories import Category, CategoryResult
from schemas.internal.pages import PAGE_STATUSES, PageRecord, PageStatus
from schemas.internal.runs import AuditRunRecord, RunMetadata
from schemas.internal.validation import NormalizationWarning

logger = logging.getLogger(__name__)

_STATUS_HINTS: tuple[tuple[str, PageStatus], ...] = (
    ("skip", "skipped"),
    ("pass", "passed"),
    ("crash", "crashed"),
    ("error", "crashed"),
    ("fail", "failed"),
)
_DURATION_KEYS = ("durationMs", "duration_ms", "duration")
_REASON_KEYS = ("reason", "skipReason", "error")


@dataclass(frozen=True)
class NormalizedRun:
    metadata: RunMetadata
    pages: List[PageRecord]
    warnings: List[NormalizationWarning] = field(default_factory=list)

    def to_record(self) -> AuditRunRecord:
        """Draft record (no summary yet) carrying every warning as text."""
        return AuditRunRecord(
            metadata=self.metadata,
            pages=self.pages,
            warnings=[str(warning) for warning in self.warnings],
        )


def normalize_page(raw_page: Any) -> tuple[PageRecord, List[NormalizationWarning]]:
    """Convert one raw page into a ``PageRecord``. Never raises."""
    sink = WarningSink()
    if not isinstance(raw_page, Mapping):
        sink.add("page", f"expected a mapping, got {type(raw_page).__name__}")
        page = PageRecord(url="", status="crashed", reason="unreadable page payload")
        return page, sink.warnings

    url = text_or_none(raw_page.get("url")) or ""
    sink.page_url = url or None
    if not url:
        sink.add("url", "missing page URL")

    status = _normalize_status(raw_page, sink)
    categories: dict[Category, CategoryResult] = {}
    for spec in CATEGORY_SPECS:
        bag = select_source(raw_page, spec, sink)
        if status == "skipped":
            if bag is not None:
                sink.add("bag", "dropped; skipped pages carry no category results", category=spec.category)
            continue
        outcome = decode_category(spec, bag, sink)
        if isinstance(outcome, Decoded):
            categories[spec.category] = outcome.result
        elif isinstance(outcome, Rejected):
            sink.warnings.append(outcome.warning)

    page = PageRecord(
        url=url,
        title=text_or_none(raw_page.get("title")),
        status=status,
        duration_ms=_duration(raw_page, sink),
        categories=categories,
        reason=_first_text(raw_page, _REASON_KEYS),
        tested_at=_first_text(raw_page, ("testedAt", "tested_at")),
    )
    for warning in sink.warnings:
        logger.debug("Normalization warning: %s", warning)
    return page, sink.warnings


def normalize_pages(
    raw_pages: Sequence[Any],
    *,
    max_workers: int = 1,
) -> tuple[List[PageRecord], List[NormalizationWarning]]:
    """Normalize pages, fanning out across threads; output keeps input order."""
    if max_workers < 1:
        raise ValueError("max_workers must be >= 1")

    if max_workers == 1 or len(raw_pages) <= 1:
        outcomes = [normalize_page(raw) for raw in raw_pages]
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(normalize_page, raw) for raw in raw_pages]
            outcomes = [future.result() for future in futures]

    pages: List[PageRecord] = []
    warnings: List[NormalizationWarning] = []
    for page, page_warnings in outcomes:
        pages.append(page)
        warnings.extend(page_warnings)
    return pages, warnings


def normalize_run(
    raw_run: Any,
    *,
    max_workers: int = 1,
    tool_version: str | None = None,
) -> NormalizedRun:
    """Normalize a raw run (``{metadata, pages}`` or a bare page list)."""
    sink = WarningSink()
    if isinstance(raw_run, Mapping):
        raw_metadata = raw_run.get("metadata")
        raw_pages = raw_run.get("pages")
    elif isinstance(raw_run, (list, tuple)):
        raw_metadata, raw_pages = None, raw_run
    else:
        sink.add("run", f"expected a mapping or page list, got {type(raw_run).__name__}")
        raw_metadata, raw_pages = None, None

    if raw_pages is None:
        raw_pages = []
    elif not isinstance(raw_pages, (list, tuple)):
        sink.add("pages", f"expected a list, got {type(raw_pages).__name__}; no pages read")
        raw_pages = []

    metadata = _normalize_metadata(raw_metadata, sink, tool_version=tool_version)
    pages, page_warnings = normalize_pages(raw_pages, max_workers=max_workers)
    warnings = [*sink.warnings, *page_warnings]
    logger.info(
        "Normalized %d page(s) with %d warning(s)", len(pages), len(warnings)
    )
    return NormalizedRun(metadata=metadata, pages=pages, warnings=warnings)


def _normalize_status(raw_page: Mapping[str, Any], sink: WarningSink) -> PageStatus:
    value = raw_page.get("status")
    if isinstance(value, str):
        lowered = value.strip().lower()
        for status in PAGE_STATUSES:
            if lowered == status:
                return status
        for needle, status in _STATUS_HINTS:
            if needle in lowered:
                sink.add("status", f"inferred '{status}' from {value!r}")
                return status

    if raw_page.get("skipped") is True:
        return "skipped"
    if raw_page.get("crashed") is True:
        return "crashed"
    passed = raw_page.get("passed")
    if isinstance(passed, bool):
        return "passed" if passed else "failed"

    sink.add("status", f"unrecognized status {value!r}; treated as crashed")
    return "crashed"


def _duration(raw_page: Mapping[str, Any], sink: WarningSink) -> float | None:
    for key in _DURATION_KEYS:
        if raw_page.get(key) is None:
            continue
        try:
            value = coerce_number(raw_page[key])
        except CoercionError as exc:
            sink.add(key, f"{exc}; duration left absent")
            return None
        if value is not None and value < 0:
            sink.add(key, f"negative duration {value:g}")
        return value
    sink.add("duration", "missing page duration")
    return None


def _normalize_metadata(
    raw: Any,
    sink: WarningSink,
    *,
    tool_version: str | None,
) -> RunMetadata:
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        sink.add("metadata", f"expected a mapping, got {type(raw).__name__}")
        raw = {}

    timestamp = None
    raw_timestamp = raw.get("timestamp")
    if isinstance(raw_timestamp, datetime):
        timestamp = raw_timestamp
    elif isinstance(raw_timestamp, str) and raw_timestamp.strip():
        text = raw_timestamp.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            timestamp = datetime.fromisoformat(text)
        except ValueError:
            sink.add("metadata.timestamp", f"unparseable timestamp {raw_timestamp!r}")
    elif raw_timestamp is not None:
        sink.add("metadata.timestamp", f"unsupported timestamp {raw_timestamp!r}")

    duration = None
    for key in ("durationMs", "duration"):
        if raw.get(key) is None:
            continue
        try:
            duration = coerce_number(raw[key])
        except CoercionError as exc:
            sink.add(f"metadata.{key}", str(exc))
        break

    features = raw.get("features")
    if isinstance(features, (list, tuple)):
        features = [item for item in features if isinstance(item, str)]
    else:
        features = []

    return RunMetadata(
        timestamp=timestamp,
        source_url=_first_text(raw, ("sourceUrl", "sitemapUrl", "source_url")),
        duration_ms=duration,
        tool_version=text_or_none(raw.get("toolVersion")) or tool_version or "unknown",
        standard=text_or_none(raw.get("standard")),
        features=features,
    )


def _first_text(raw: Mapping[str, Any], keys: Sequence[str]) -> str | None:
    for key in keys:
        text = text_or_none(raw.get(key))
        if text is not None:
            return text
    return None


__all__ = ["NormalizedRun", "normalize_page", "normalize_pages", "normalize_run"]
