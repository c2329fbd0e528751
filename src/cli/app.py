"""Typer CLI entrypoint for site audit runs."""

from __future__ import annotations

import typer

from siteaudit import __version__
from cli.commands import config as config_commands
from cli.commands.report import report_command
from cli.commands.run import run_command
from cli.commands.validate import validate_command
from cli.common import configure_logging
from core.config import get_settings

app = typer.Typer(
    help=(
        "Site audit toolkit\n\nNormalize raw analyzer output, validate it, "
        "score it and render reports.\n"
    ),
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    add_completion=False,
)


@app.callback()
def root(
    ctx: typer.Context,
    version_flag: bool = typer.Option(
        False,
        "-v",
        "--version",
        help="Print the version and exit",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: AUDIT_LOG_LEVEL or INFO)",
    ),
) -> None:
    if version_flag:
        typer.echo(__version__)
        raise typer.Exit()
    configure_logging(log_level or get_settings().log_level)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.command("run", help="Normalize, validate and score a run, then write reports")(run_command)
app.command("validate", help="Validate raw analyzer output without scoring")(validate_command)
app.command("report", help="Render reports from a JSON audit result")(report_command)
app.add_typer(config_commands.app, name="config")


def main() -> None:
    app()


__all__ = ["app", "main"]
