"""Core audit runner service for CLI reuse."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from time import perf_counter
from typing import Any, Mapping

from core.config import Settings, get_settings
from normalization.normalizer import normalize_run
from reporting.generator import ReportGenerator
from reporting.schemas import ReportBundle, ReportOptions
from schemas.internal.runs import AuditRunRecord
from schemas.internal.validation import ValidationReport
from schemas.requests import AuditRunOptions
from schemas.responses import AuditRunResult
from scoring.engine import finalize_run
from siteaudit import __version__
from validation.completeness import compute_completeness
from validation.validator import enforce, validate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """Options merged over settings; every field is resolved."""

    validation_policy: str
    required_categories: tuple[str, ...]
    normalize_concurrency: int
    tool_version: str | None
    output_formats: tuple[str, ...]
    output_dir: Path | None
    badge_dir: Path | None
    include_page_detail: bool
    csv_layout: str
    metrics_only: tuple[str, ...] | None
    include_completeness: bool

    def report_options(self) -> ReportOptions:
        return ReportOptions(
            output_dir=self.output_dir,
            output_formats=list(self.output_formats),
            include_page_detail=self.include_page_detail,
            csv_layout=self.csv_layout,  # type: ignore[arg-type]
            metrics_only=list(self.metrics_only) if self.metrics_only is not None else None,  # type: ignore[arg-type]
            badge_dir=self.badge_dir,
        )


def resolve_run_config(
    options: AuditRunOptions | Mapping[str, Any] | None = None,
    settings: Settings | None = None,
) -> RunConfig:
    options_obj = _coerce_options(options)
    settings = settings or get_settings()

    output_dir = _resolve_str(options_obj.output_dir) or _resolve_str(settings.output_dir)
    badge_dir = _resolve_str(options_obj.badge_dir) or _resolve_str(settings.badge_dir)
    return RunConfig(
        validation_policy=options_obj.validation_policy or settings.validation_policy,
        required_categories=tuple(
            options_obj.required_categories
            if options_obj.required_categories is not None
            else settings.required_category_list
        ),
        normalize_concurrency=_resolve_int(
            options_obj.normalize_concurrency, settings.normalize_concurrency
        ),
        tool_version=(
            _resolve_str(options_obj.tool_version)
            or _resolve_str(settings.tool_version)
            or __version__
        ),
        output_formats=tuple(options_obj.output_formats or settings.output_format_list or ["json"]),
        output_dir=Path(output_dir) if output_dir else None,
        badge_dir=Path(badge_dir) if badge_dir else None,
        include_page_detail=_resolve_bool(
            options_obj.include_page_detail, settings.include_page_detail
        ),
        csv_layout=options_obj.csv_layout or "wide",
        metrics_only=tuple(options_obj.metrics_only) if options_obj.metrics_only is not None else None,
        include_completeness=_resolve_bool(options_obj.include_completeness, True),
    )


def check_run(
    raw_run: Any,
    options: AuditRunOptions | Mapping[str, Any] | None = None,
) -> tuple[AuditRunRecord, ValidationReport]:
    """Normalize and validate without scoring or raising."""
    return _check(raw_run, resolve_run_config(options))


def _check(raw_run: Any, config: RunConfig) -> tuple[AuditRunRecord, ValidationReport]:
    normalized = normalize_run(
        raw_run,
        max_workers=config.normalize_concurrency,
        tool_version=config.tool_version,
    )
    draft = normalized.to_record()
    report = validate(draft, config.validation_policy, config.required_categories)  # type: ignore[arg-type]
    return draft, report


def run_audit(
    raw_run: Any,
    options: AuditRunOptions | Mapping[str, Any] | None = None,
    *,
    write_reports: bool = False,
) -> AuditRunResult:
    """Normalize, validate and score a raw run and return a typed result.

    Raises:
        IncompleteDataError: fail-fast policy and a structural violation
        MissingAnalysisError: fail-fast policy and a required category absent
        EmissionFailure: ``write_reports`` and a destination could not be written
    """
    config = resolve_run_config(options)
    start = perf_counter()

    draft, report = _check(raw_run, config)
    if config.validation_policy == "fail_fast":
        enforce(report)

    warnings = [*draft.warnings, *(str(entry) for entry in report.warnings)]
    if warnings != draft.warnings:
        draft = draft.model_copy(update={"warnings": warnings})
    record = finalize_run(draft)

    completeness = compute_completeness(record.pages) if config.include_completeness else None

    artifacts: dict[str, str] = {}
    if write_reports:
        bundle = emit_reports(record, config)
        artifacts = {fmt: str(path) for fmt, path in bundle.paths.items()}

    runtime_ms = int((perf_counter() - start) * 1000)
    logger.info(
        "Audit run scored: overall=%s pages=%d warnings=%d",
        record.summary.overall_score if record.summary else None,
        len(record.pages),
        len(warnings),
    )
    return AuditRunResult(
        record=record,
        validation=report,
        completeness=completeness,
        artifacts=artifacts,
        runtime_ms=runtime_ms,
        warnings=warnings,
    )


def emit_reports(record: AuditRunRecord, config: RunConfig) -> ReportBundle:
    generator = ReportGenerator(config.report_options())
    return generator.generate(record)


def _coerce_options(options: AuditRunOptions | Mapping[str, Any] | None) -> AuditRunOptions:
    if isinstance(options, AuditRunOptions):
        return options
    return AuditRunOptions.model_validate(options or {})


def _resolve_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in {"1", "true", "yes", "y", "on"}


def _resolve_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _resolve_int(value: Any, default: int) -> int:
    if value is None:
        return int(default)
    return int(str(value))


__all__ = ["RunConfig", "check_run", "emit_reports", "resolve_run_config", "run_audit"]
