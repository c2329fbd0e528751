"""Validation-only command."""

from __future__ import annotations

from pathlib import Path

import typer

from cli.common import build_options, emit_json, load_options_payload, print_validation
from services.audit_runner import check_run
from services.io import load_raw_run


def validate_command(
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
    options: str | None = typer.Option(None, "--options", help="AuditRunOptions as a JSON string"),
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
    json_out: bool = typer.Option(False, "--json", help="Print the report as JSON"),
) -> None:
    """Check raw output against the policy; exits 1 when the run is invalid."""
    payload = load_options_payload(options, options_file, set_values)
    if policy is not None:
        payload["validation_policy"] = policy
    if require:
        payload["required_categories"] = require
    options_obj = build_options(payload)

    try:
        raw_run = load_raw_run(raw_path)
        record, report = check_run(raw_run, options_obj)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if json_out:
        emit_json(
            {
                "validation": report.model_dump(mode="json"),
                "normalization_warnings": list(record.warnings),
            }
        )
    else:
        print_validation(report)
        if record.warnings:
            typer.echo(f"{len(record.warnings)} normalization warning(s)")
            for warning in record.warnings:
                typer.echo(f"  - {warning}")

    if not report.valid:
        raise typer.Exit(code=1)


__all__ = ["validate_command"]
