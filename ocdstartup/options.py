"""Command-line option parsing and dispatch.

Each option is handled in command-line order: search directories are appended
to the startup state immediately, configuration commands are queued, and
debug/log commands run right away against the command context. Built-in
search directories are appended only after every option has been handled.
"""

from __future__ import annotations

from typing import Callable, Sequence

import typer

from .errors import ERROR_OK
from .models import CommandContext, StartupState
from .option_scanner import (
    NO_ARGUMENT,
    OPTIONAL_ARGUMENT,
    REQUIRED_ARGUMENT,
    UNKNOWN_OPTION,
    LongOption,
    OptionScanner,
)
from .search_dirs import add_default_dirs
from .telemetry.logger import StartupLogger


SHORT_OPTIONS = "hvd::l:f:s:c:p"
LONG_OPTIONS = (
    LongOption("help", NO_ARGUMENT, "h"),
    LongOption("version", NO_ARGUMENT, "v"),
    LongOption("debug", OPTIONAL_ARGUMENT, "d"),
    LongOption("file", REQUIRED_ARGUMENT, "f"),
    LongOption("search", REQUIRED_ARGUMENT, "s"),
    LongOption("log_output", REQUIRED_ARGUMENT, "l"),
    LongOption("command", REQUIRED_ARGUMENT, "c"),
)

HELP_EXIT_CODE = -1
VERSION_EXIT_CODE = 0
DEFAULT_DEBUG_LEVEL_ARGUMENT = "3"
PIPE_COMMAND = "gdb_port pipe; log_output openocd.log"

USAGE_TEXT = (
    "Open On-Chip Debugger\n"
    "Licensed under GNU GPL v2\n"
    "--help       | -h\tdisplay this help\n"
    "--version    | -v\tdisplay OpenOCD version\n"
    "--file       | -f\tuse configuration file <name>\n"
    "--search     | -s\tdir to search for config files and scripts\n"
    "--debug      | -d\tset debug level <0-4>\n"
    "--log_output | -l\tredirect log output to file <name>\n"
    "--command    | -c\trun <command>\n"
)


def parse_cmdline_args(
    cmd_ctx: CommandContext,
    args: Sequence[str],
    state: StartupState,
    *,
    default_dirs: Callable[[StartupState], None] | None = None,
    startup_logger: StartupLogger | None = None,
) -> int:
    """Parse `args` into `state`, running immediate commands against `cmd_ctx`.

    Args:
        cmd_ctx: Command interpreter used for `-d`, `-l` and `-p`.
        args: Raw arguments, without the program name.
        state: Startup state receiving search directories and queued commands.
        default_dirs: Appends built-in search directories; defaults to
            `add_default_dirs` with the host configuration.
        startup_logger: Logger for deprecation and scanning diagnostics.

    Returns:
        `ERROR_OK` once built-in directories have been appended.

    Raises:
        typer.Exit: With `HELP_EXIT_CODE` after printing usage for `--help`, or
            `VERSION_EXIT_CODE` for `--version`.
    """

    log = startup_logger or StartupLogger()
    scanner = OptionScanner(SHORT_OPTIONS, LONG_OPTIONS)

    for option in scanner.scan(args):
        code, argument = option.code, option.argument
        if code == UNKNOWN_OPTION:
            typer.echo(option.diagnostic, err=True)
        elif code == "h":
            state.help_requested = True
        elif code == "v":
            state.version_requested = True
        elif code == "f":
            state.add_config_command(f"script {{{argument}}}")
        elif code == "s":
            state.add_script_search_dir(argument)
        elif code == "d":
            level = argument if argument is not None else DEFAULT_DEBUG_LEVEL_ARGUMENT
            cmd_ctx.run_line(f"debug_level {level}")
        elif code == "l":
            if argument is not None:
                cmd_ctx.run_line(f"log_output {argument}")
        elif code == "c":
            if argument is not None:
                state.add_config_command(argument)
        elif code == "p":
            # Synchronous so a gdb pipe consumer never sees the warning first.
            cmd_ctx.run_line(PIPE_COMMAND)
            log.warning(
                "deprecated_option",
                "options",
                option="-p/--pipe",
                replacement=f'-c "{PIPE_COMMAND}"',
            )

    if scanner.operands:
        log.debug("ignored_operands", "options", count=len(scanner.operands))

    if state.help_requested:
        typer.echo(USAGE_TEXT, nl=False)
        raise typer.Exit(code=HELP_EXIT_CODE)

    if state.version_requested:
        raise typer.Exit(code=VERSION_EXIT_CODE)

    if default_dirs is None:
        add_default_dirs(state, startup_logger=log)
    else:
        default_dirs(state)

    return ERROR_OK
