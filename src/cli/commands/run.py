"""Full audit run: normalize, validate, score and write reports."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer

from cli.common import (
    build_options,
    emit_json,
    load_options_payload,
    pipeline_errors,
    print_summary,
)
from services.audit_runner import run_audit
from services.io import load_raw_run


def run_command(
    raw_path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        metavar="RAW",
        help="Raw analyzer output (JSON or YAML)",
    ),
    policy: str | None = typer.Option(
        None,
        "--policy",
        help="Validation policy: fail_fast|tolerant",
    ),
    require: list[str] | None = typer.Option(
        None,
        "--require",
        help="Category every tested page must carry; repeatable",
    ),
    formats: list[str] | None = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: json|csv|markdown|html; repeatable",
    ),
    output_dir: Path | None = typer.Option(
        None,
        "--output-dir",
        help="Report directory (default: AUDIT_OUTPUT_DIR or ./results)",
    ),
    page_detail: bool | None = typer.Option(
        None,
        "--page-detail/--no-page-detail",
        help="Include per-page detail in CSV/Markdown/HTML",
    ),
    csv_layout: str | None = typer.Option(
        None,
        "--csv-layout",
        help="CSV layout: wide|long",
    ),
    options: str | None = typer.Option(
        None,
        "--options",
        help="AuditRunOptions as a JSON string",
    ),
    options_file: Path | None = typer.Option(
        None,
        "--options-file",
        help="JSON/YAML file with AuditRunOptions",
    ),
    set_values: list[str] | None = typer.Option(
        None,
        "--set",
        help="Override a single option as key=value; repeatable",
    ),
    json_out: bool = typer.Option(
        False,
        "--json",
        help="Print the full result as JSON",
    ),
    write: bool = typer.Option(
        True,
        "--write/--no-write",
        help="Write report artifacts to the output directory",
    ),
) -> None:
    payload = load_options_payload(options, options_file, set_values)
    payload.update(
        _flag_overrides(
            validation_policy=policy,
            required_categories=require or None,
            output_formats=formats or None,
            output_dir=str(output_dir) if output_dir else None,
            include_page_detail=page_detail,
            csv_layout=csv_layout,
        )
    )
    options_obj = build_options(payload)

    try:
        raw_run = load_raw_run(raw_path)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    with pipeline_errors():
        result = run_audit(raw_run, options_obj, write_reports=write)

    if json_out:
        emit_json(result.model_dump(mode="json"))
        return

    print_summary(result.record)
    for fmt, path in result.artifacts.items():
        typer.echo(f"{fmt}: {path}")


def _flag_overrides(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


__all__ = ["run_command"]
