"""Command-line interface for ocdstartup.

Responsibilities:
- Forward raw arguments to the startup option parser unchanged.
- Render the finalized search directories and queued commands.

Key public functions:
- `app`: Typer application instance.
- `main`: invoke the Typer application.
"""

from __future__ import annotations

from functools import partial
from pathlib import Path
import sys

import typer

from . import __version__
from .cli_rendering import echo_startup_plan, exit_with_command_error
from .command_context import LoggingCommandContext
from .config import BUILD_CONFIG_ENV_KEY, BuildConfig, load_build_config
from .errors import StartupError
from .models import StartupState
from .options import parse_cmdline_args
from .search_dirs import add_default_dirs
from .telemetry.logger import StartupLogger

app = typer.Typer(
    name="ocdstartup",
    add_completion=False,
    help="Resolve script search directories and startup commands.",
)


def _load_build_config() -> BuildConfig:
    """Load the build configuration and map failures to stage errors."""

    try:
        return load_build_config()
    except FileNotFoundError as exc:
        raise StartupError(
            stage="config",
            detail=f"Build config file not found: `{Path(exc.filename or '')}`.",
            hint=f"Point `{BUILD_CONFIG_ENV_KEY}` at an existing YAML file or unset it.",
        ) from exc
    except ValueError as exc:
        raise StartupError(
            stage="config",
            detail=f"Invalid build configuration: {exc}",
            hint="Fix config values and rerun.",
        ) from exc
    except Exception as exc:
        raise StartupError(
            stage="config",
            detail=f"Failed to load build configuration: {exc}",
            hint="Verify YAML syntax and file permissions.",
        ) from exc


@app.command(
    context_settings={
        "allow_extra_args": True,
        "ignore_unknown_options": True,
        "help_option_names": [],
    },
)
def startup_command(ctx: typer.Context) -> None:
    """Parse startup options and print the resulting search order and commands."""

    startup_logger = StartupLogger(sys.stderr)
    try:
        build_config = _load_build_config()
    except StartupError as exc:
        exit_with_command_error("startup", exc)

    typer.echo(f"ocdstartup {__version__}")
    state = StartupState()
    parse_cmdline_args(
        LoggingCommandContext(startup_logger),
        list(ctx.args),
        state,
        default_dirs=partial(
            add_default_dirs,
            build_config=build_config,
            startup_logger=startup_logger,
        ),
        startup_logger=startup_logger,
    )
    plan = state.finalize()
    startup_logger.info(
        "plan_ready",
        "cli",
        search_dirs=len(plan.search_dirs),
        config_commands=len(plan.config_commands),
    )
    echo_startup_plan(plan)


def main() -> None:
    """CLI entrypoint for console scripts."""
    app()


if __name__ == "__main__":
    main()
