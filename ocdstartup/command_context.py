"""Minimal command context for the startup CLI.

Only the commands the option parser issues immediately are understood:
`debug_level` and `log_output`, which restores stderr when given no file name.
Anything else is recorded as unhandled, to be picked up by a full interpreter.
"""

from __future__ import annotations

from typing import Callable

import typer

from .errors import ERROR_COMMAND_NOTFOUND, ERROR_COMMAND_SYNTAX_ERROR, ERROR_OK
from .telemetry.logger import StartupLogger


OutputHandler = Callable[["LoggingCommandContext", str], int]


def configuration_output_handler(context: "LoggingCommandContext", line: str) -> int:
    """Write command output to the user unmodified."""

    del context
    typer.echo(line, nl=False)
    return ERROR_OK


class LoggingCommandContext:
    """Run `debug_level` and `log_output` against a `StartupLogger`."""

    def __init__(
        self,
        startup_logger: StartupLogger,
        output_handler: OutputHandler = configuration_output_handler,
    ) -> None:
        """Initialize the context around the logger it reconfigures."""

        self._logger = startup_logger
        self._output_handler = output_handler
        self.executed: list[str] = []
        self.unhandled: list[str] = []

    def run_line(self, line: str) -> int:
        """Run each `;`-separated command in `line` and return the first failing status."""

        result = ERROR_OK
        for raw_command in line.split(";"):
            command = raw_command.strip()
            if not command:
                continue
            status = self._run_command(command)
            if result == ERROR_OK:
                result = status
        return result

    def _run_command(self, command: str) -> int:
        name, _, argument = command.partition(" ")
        argument = argument.strip()
        self.executed.append(command)

        if name == "debug_level":
            return self._debug_level(argument)
        if name == "log_output":
            self._logger.redirect(argument or None)
            return ERROR_OK

        self.unhandled.append(command)
        self._logger.warning("unhandled_command", "command", command=name)
        return ERROR_COMMAND_NOTFOUND

    def _debug_level(self, argument: str) -> int:
        try:
            level = int(argument)
        except ValueError:
            self._logger.warning("invalid_debug_level", "command", value=argument)
            return ERROR_COMMAND_SYNTAX_ERROR

        self._logger.set_debug_level(level)
        return self._output_handler(self, f"debug_level: {self._logger.debug_level}\n")
