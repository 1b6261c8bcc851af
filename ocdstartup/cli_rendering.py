"""CLI output and error rendering helpers.

This module centralizes user-facing CLI presentation for command diagnostics
and the finalized startup plan.
"""

from __future__ import annotations

from typing import NoReturn, Sequence

import typer

from .errors import StartupError
from .models import StartupPlan


def exit_with_command_error(command_name: str, exc: Exception) -> NoReturn:
    """Print concise diagnostics for command failures and exit with code 1."""

    if isinstance(exc, StartupError):
        typer.secho(
            f"{command_name} failed at stage `{exc.stage}`: {exc.detail}",
            fg=typer.colors.RED,
            err=True,
        )
        if exc.hint:
            typer.secho(f"Hint: {exc.hint}", fg=typer.colors.YELLOW, err=True)
    else:
        typer.secho(f"{command_name} failed: {exc}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _echo_section(title: str, entries: Sequence[str]) -> None:
    """Print a titled list with one indented entry per line."""

    typer.echo(f"{title}:")
    if not entries:
        typer.echo("  (none)")
        return
    for entry in entries:
        typer.echo(f"  {entry}")


def echo_startup_plan(plan: StartupPlan) -> None:
    """Print search directories in priority order, then queued commands."""

    _echo_section("Script search directories", plan.search_dirs)
    _echo_section("Configuration commands", plan.config_commands)
