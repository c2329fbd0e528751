"""Per-category decoders for raw analyzer measurement bags.

Each decoder yields exactly one outcome: a ``Decoded`` category result, a
``Rejected`` warning (the category is omitted), or ``None`` when the analyzer
did not measure the category at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from normalization.coercion import (
    CoercionError,
    WarningSink,
    coerce_number,
    decode_issue_list,
    first_number,
    lookup,
    slugify,
)
from schemas.internal.categories import Category, CategoryResult
from schemas.internal.findings import DEFAULT_ISSUE_CODE, Issue, Severity
from schemas.internal.grades import grade_for
from schemas.internal.validation import NormalizationWarning


@dataclass(frozen=True)
class CategorySpec:
    """Where a category's data lives in a raw page and how to read it.

    ``sources`` is ordered by precedence: enhanced key, canonical key, then
    legacy aliases. The first key present wins.
    """

    category: Category
    sources: tuple[str, ...]
    score_keys: tuple[str, ...]
    issue_fields: tuple[tuple[str, Severity], ...]
    metric_fields: tuple[tuple[str, tuple[str, ...]], ...] = ()
    code_for: Optional[Callable[[Any], str]] = None


@dataclass(frozen=True)
class Decoded:
    result: CategoryResult


@dataclass(frozen=True)
class Rejected:
    warning: NormalizationWarning


DecodeOutcome = Union[Decoded, Rejected, None]


def _mobile_code(item: Any) -> str:
    if isinstance(item, Mapping) and isinstance(item.get("category"), str):
        return f"mobile-{slugify(item['category'])}"
    return DEFAULT_ISSUE_CODE


CATEGORY_SPECS: tuple[CategorySpec, ...] = (
    CategorySpec(
        category="accessibility",
        sources=("enhancedAccessibility", "accessibility", "pa11y"),
        score_keys=("score", "pa11yScore"),
        issue_fields=(
            ("errors", "error"),
            ("warnings", "warning"),
            ("notices", "notice"),
            ("issues", "notice"),
            ("pa11yIssues", "notice"),
        ),
    ),
    CategorySpec(
        category="performance",
        sources=("enhancedPerformance", "performance", "performanceMetrics"),
        score_keys=("score", "performanceScore"),
        issue_fields=(("issues", "notice"), ("recommendations", "notice")),
        metric_fields=(
            (
                "largestContentfulPaint",
                ("coreWebVitals.largestContentfulPaint", "metrics.largestContentfulPaint", "largestContentfulPaint", "lcp"),
            ),
            (
                "firstContentfulPaint",
                ("coreWebVitals.firstContentfulPaint", "metrics.firstContentfulPaint", "firstContentfulPaint", "fcp"),
            ),
            (
                "cumulativeLayoutShift",
                ("coreWebVitals.cumulativeLayoutShift", "metrics.cumulativeLayoutShift", "cumulativeLayoutShift", "cls"),
            ),
            (
                "timeToFirstByte",
                ("coreWebVitals.timeToFirstByte", "metrics.timeToFirstByte", "timeToFirstByte", "ttfb"),
            ),
            ("loadTime", ("coreWebVitals.loadComplete", "metrics.loadTime", "loadTime")),
        ),
    ),
    CategorySpec(
        category="seo",
        sources=("enhancedSEO", "enhancedSeo", "seo"),
        score_keys=("score", "overallScore"),
        issue_fields=(("issues", "notice"), ("recommendations", "notice")),
    ),
    CategorySpec(
        category="contentWeight",
        sources=("enhancedContentWeight", "contentWeight"),
        score_keys=("score",),
        issue_fields=(("issues", "notice"), ("optimizations", "notice")),
        metric_fields=(
            ("totalSize", ("totalSize", "resources.totalSize", "resources.total", "total")),
        ),
    ),
    CategorySpec(
        category="mobileFriendliness",
        sources=("enhancedMobileFriendliness", "mobileFriendliness", "mobile"),
        score_keys=("overallScore", "score"),
        issue_fields=(("issues", "notice"), ("recommendations", "notice")),
        code_for=_mobile_code,
    ),
)

SPECS_BY_CATEGORY: dict[str, CategorySpec] = {spec.category: spec for spec in CATEGORY_SPECS}


def select_source(raw_page: Mapping[str, Any], spec: CategorySpec, sink: WarningSink) -> Any:
    """Pick the highest-precedence bag present for ``spec``; report the rest."""
    present = [key for key in spec.sources if raw_page.get(key) is not None]
    if not present:
        return None
    chosen = present[0]
    for key in present[1:]:
        sink.add(key, f"ignored; '{chosen}' takes precedence", category=spec.category)
    return raw_page[chosen]


def decode_category(spec: CategorySpec, bag: Any, sink: WarningSink) -> DecodeOutcome:
    if bag is None:
        return None
    if not isinstance(bag, Mapping):
        return _reject(sink, spec, "bag", f"expected a mapping, got {type(bag).__name__}")

    try:
        score = first_number(bag, spec.score_keys)
    except CoercionError as exc:
        return _reject(sink, spec, "score", str(exc))
    if score is not None and not 0 <= score <= 100:
        return _reject(sink, spec, "score", f"score {score:g} is outside [0, 100]")

    issues: list[Issue] = []
    for field_name, severity in spec.issue_fields:
        try:
            issues.extend(
                decode_issue_list(
                    bag.get(field_name),
                    default_severity=severity,
                    field_name=field_name,
                    sink=sink,
                    category=spec.category,
                    code_for=spec.code_for,
                )
            )
        except CoercionError as exc:
            return _reject(sink, spec, field_name, str(exc))

    metrics = _decode_metrics(spec, bag, sink)

    if score is None and not issues and not metrics:
        sink.add("bag", "no score or findings; treated as not measured", category=spec.category)
        return None

    _check_raw_grade(spec, bag, score, sink)

    try:
        result = CategoryResult(
            category=spec.category,
            score=score,
            issues=issues,
            metrics=metrics,
        )
    except ValidationError as exc:
        return _reject(sink, spec, "bag", f"invalid result: {exc.error_count()} error(s)")
    return Decoded(result)


def _decode_metrics(spec: CategorySpec, bag: Mapping[str, Any], sink: WarningSink) -> dict[str, float]:
    metrics: dict[str, float] = {}
    for name, paths in spec.metric_fields:
        for path in paths:
            raw = lookup(bag, path)
            if raw is None:
                continue
            try:
                value = coerce_number(raw)
            except CoercionError as exc:
                sink.add(f"metrics.{name}", f"dropped: {exc}", category=spec.category)
                break
            if value is not None:
                metrics[name] = value
            break
    return metrics


def _check_raw_grade(
    spec: CategorySpec,
    bag: Mapping[str, Any],
    score: Optional[float],
    sink: WarningSink,
) -> None:
    raw_grade = bag.get("grade")
    if not isinstance(raw_grade, str) or not raw_grade.strip():
        return
    derived = grade_for(score)
    if raw_grade.strip().upper() != derived:
        sink.add(
            "grade",
            f"raw grade {raw_grade!r} ignored; derived grade is {derived or 'absent'}",
            category=spec.category,
        )


def _reject(sink: WarningSink, spec: CategorySpec, field_name: str, message: str) -> Rejected:
    return Rejected(
        NormalizationWarning(
            page_url=sink.page_url,
            category=spec.category,
            field=field_name,
            message=f"{message}; category omitted",
        )
    )


__all__ = [
    "CATEGORY_SPECS",
    "CategorySpec",
    "DecodeOutcome",
    "Decoded",
    "Rejected",
    "SPECS_BY_CATEGORY",
    "decode_category",
    "select_source",
]
