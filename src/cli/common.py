"""Shared helpers for CLI commands."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from core.errors import AuditPipelineError, EmissionFailure
from schemas.internal.categories import CATEGORY_LABELS, CATEGORY_ORDER
from schemas.internal.runs import AuditRunRecord
from schemas.internal.validation import ValidationReport
from schemas.requests import AuditRunOptions
from scoring.engine import category_average, ensure_summary

EXIT_PIPELINE_ERROR = 1
EXIT_EMISSION_FAILURE = 2

err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Route library logging through rich on stderr."""
    numeric = logging.getLevelName(level.strip().upper())
    if not isinstance(numeric, int):
        raise typer.BadParameter(f"Unknown log level: {level}")
    logging.basicConfig(
        level=numeric,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def load_options_payload(
    options: str | None,
    options_file: Path | None,
    set_values: list[str] | None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {}

    if options:
        payload.update(_parse_json_string(options))

    if options_file:
        payload.update(_load_options_file(options_file))

    if set_values:
        payload.update(_parse_set_values(set_values))

    return payload


def build_options(payload: dict[str, Any]) -> AuditRunOptions:
    try:
        return AuditRunOptions.model_validate(payload)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


def parse_value(value: str) -> Any:
    if value == "":
        return ""
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def emit_json(data: Any) -> None:
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


@contextmanager
def pipeline_errors() -> Iterator[None]:
    """Turn pipeline aborts into a message on stderr and a non-zero exit."""
    try:
        yield
    except EmissionFailure as exc:
        err_console.print(f"[red]Emission failed[/red] ({exc.fmt or 'unknown format'}): {exc}")
        raise typer.Exit(code=EXIT_EMISSION_FAILURE) from exc
    except AuditPipelineError as exc:
        err_console.print(f"[red]{type(exc).__name__}[/red]: {exc}")
        raise typer.Exit(code=EXIT_PIPELINE_ERROR) from exc


def print_summary(record: AuditRunRecord, console: Console | None = None) -> None:
    console = console or Console()
    summary = ensure_summary(record)

    table = Table(title=record.metadata.source_url or "Audit run")
    table.add_column("Category")
    table.add_column("Average", justify="right")
    for category in CATEGORY_ORDER:
        average = category_average(record.pages, category)
        table.add_row(CATEGORY_LABELS[category], "N/A" if average is None else f"{average:.2f}")
    console.print(table)

    score = "N/A" if summary.overall_score is None else f"{summary.overall_score:.2f}"
    console.print(
        f"Overall: [bold]{score}[/bold] grade={summary.overall_grade or 'N/A'} "
        f"tier={summary.certificate_tier or 'N/A'} "
        f"pages={summary.total_pages} tested={summary.tested_pages} skipped={summary.skipped_pages}"
    )
    if record.warnings:
        console.print(f"[yellow]Partial data: {len(record.warnings)} warning(s)[/yellow]")


def print_validation(report: ValidationReport, console: Console | None = None) -> None:
    console = console or Console()
    verdict = "[green]valid[/green]" if report.valid else "[red]invalid[/red]"
    console.print(f"Validation ({report.policy}): {verdict}")
    for entry in report.errors:
        console.print(f"  [red]error[/red] {entry.kind}: {entry}")
    for entry in report.warnings:
        console.print(f"  [yellow]warning[/yellow] {entry.kind}: {entry}")


def _parse_json_string(text: str) -> dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise typer.BadParameter("Options must be a JSON object.")
    return data


def _load_options_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise typer.BadParameter(f"Options file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    else:
        data = _parse_json_string(text)
    if not isinstance(data, dict):
        raise typer.BadParameter("Options file must contain a JSON/YAML object.")
    return data


def _parse_set_values(items: list[str]) -> dict[str, Any]:
    parsed: dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            raise typer.BadParameter("--set requires key=value syntax.")
        key, raw_value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter("--set requires a non-empty key.")
        parsed[key] = parse_value(raw_value.strip())
    return parsed
