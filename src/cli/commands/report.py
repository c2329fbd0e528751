"""Re-render reports from a JSON audit result."""

from __future__ import annotations

import json
from pathlib import Path

import typer

from cli.common import err_console, pipeline_errors
from core.config import get_settings
from reporting.formatters import load_record
from reporting.generator import ReportGenerator
from reporting.schemas import ReportOptions
from scoring.engine import finalize_run


def report_command(
    result_file: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        metavar="RESULT_JSON",
        help="JSON report written by `siteaudit run`",
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
    csv_layout: str = typer.Option("wide", "--csv-layout", help="CSV layout: wide|long"),
    metrics_only: list[str] | None = typer.Option(
        None,
        "--metrics-only",
        help="Category kept in a metrics-only JSON projection; repeatable",
    ),
    badge_dir: Path | None = typer.Option(
        None,
        "--badge-dir",
        help="Directory with <tier>.svg/.png certificate badges",
    ),
) -> None:
    settings = get_settings()
    try:
        record = load_record(json.loads(result_file.read_text(encoding="utf-8")))
    except ValueError as exc:
        raise typer.BadParameter(f"{result_file}: {exc}") from exc
    refreshed = finalize_run(record)
    if record.summary is not None and record.summary != refreshed.summary:
        err_console.print(
            f"[yellow]Stored summary in {result_file} does not match its pages; recomputed.[/yellow]"
        )
    record = refreshed

    try:
        report_options = ReportOptions(
            output_dir=output_dir or Path(settings.output_dir),
            output_formats=formats or settings.output_format_list or ["json"],
            include_page_detail=(
                settings.include_page_detail if page_detail is None else page_detail
            ),
            csv_layout=csv_layout,  # type: ignore[arg-type]
            metrics_only=metrics_only or None,  # type: ignore[arg-type]
            badge_dir=badge_dir or (Path(settings.badge_dir) if settings.badge_dir else None),
        )
        generator = ReportGenerator(report_options)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    with pipeline_errors():
        bundle = generator.generate(record)

    for fmt, path in bundle.paths.items():
        typer.echo(f"{fmt}: {path}")


__all__ = ["report_command"]
