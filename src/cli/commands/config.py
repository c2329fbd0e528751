"""Configuration inspection commands."""

from __future__ import annotations

from typing import Any

import typer

from cli.common import emit_json
from core.config import Settings, get_settings
from schemas.requests import AuditRunOptions


app = typer.Typer(
    help="Inspect effective configuration",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
    no_args_is_help=True,
)


@app.command("show", help="Show the effective settings")
def show_config(
    json_out: bool = typer.Option(True, "--json/--no-json", help="Print JSON"),
) -> None:
    settings = get_settings()
    payload = settings.model_dump()
    if json_out:
        emit_json(payload)
        return
    defaults = _settings_defaults()
    for key, value in payload.items():
        marker = "" if value == defaults.get(key) else "  (overridden)"
        typer.echo(f"{key}={value}{marker}")


@app.command("options", help="List per-run options accepted by --options/--set")
def list_run_options(
    json_out: bool = typer.Option(False, "--json", help="Print JSON"),
    schema: bool = typer.Option(False, "--schema", help="Print the pydantic schema"),
) -> None:
    if schema:
        emit_json(AuditRunOptions.model_json_schema())
        return
    catalog = _options_catalog()
    if json_out:
        emit_json(catalog)
        return

    for group in catalog:
        typer.echo(f"\n[{group['group']}]")
        for item in group["items"]:
            desc = item.get("desc") or ""
            choices = item.get("choices")
            hint = f"  choices: {' | '.join(choices)}" if choices else ""
            typer.echo(f"- {item['key']}: {desc}{hint}")


def _settings_defaults() -> dict[str, Any]:
    defaults: dict[str, Any] = {}
    for name, field in Settings.model_fields.items():
        defaults[name] = field.default
    return defaults


def _options_catalog() -> list[dict[str, Any]]:
    categories = ["accessibility", "performance", "seo", "contentWeight", "mobileFriendliness"]
    return [
        {
            "group": "Validation",
            "items": [
                {
                    "key": "validation_policy",
                    "desc": "How structural problems are treated",
                    "choices": ["fail_fast", "tolerant"],
                },
                {
                    "key": "required_categories",
                    "desc": "Categories every tested page must carry",
                    "choices": categories,
                },
                {"key": "include_completeness", "desc": "Attach the completeness report"},
            ],
        },
        {
            "group": "Normalization",
            "items": [
                {"key": "normalize_concurrency", "desc": "Worker threads for page normalization"},
                {"key": "tool_version", "desc": "Version recorded when the input has none"},
            ],
        },
        {
            "group": "Output",
            "items": [
                {
                    "key": "output_formats",
                    "desc": "Report formats to write",
                    "choices": ["json", "csv", "markdown", "html"],
                },
                {"key": "output_dir", "desc": "Report directory"},
                {"key": "badge_dir", "desc": "Certificate badge image directory"},
                {"key": "include_page_detail", "desc": "Per-page detail in CSV/Markdown/HTML"},
                {"key": "csv_layout", "desc": "CSV row layout", "choices": ["wide", "long"]},
                {
                    "key": "metrics_only",
                    "desc": "Categories kept in a metrics-only JSON projection",
                    "choices": categories,
                },
            ],
        },
    ]


__all__ = ["app"]
