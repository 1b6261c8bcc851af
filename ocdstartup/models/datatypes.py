"""Core datatypes shared across startup modules.

Key types:
- `CommandContext`: protocol for the external command interpreter handle.
- `StartupState`: append-only search directories and deferred commands
  collected while parsing the command line.
- `StartupPlan`: frozen snapshot of `StartupState` for later consumers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class CommandContext(Protocol):
    """Protocol for a command interpreter that runs one command line."""

    def run_line(self, line: str) -> int:
        """Run `line` synchronously and return a status code."""


@dataclass(frozen=True, slots=True)
class StartupPlan:
    """Finalized startup outputs.

    Attributes:
        search_dirs: Script search directories, highest precedence first.
        config_commands: Deferred configuration commands in execution order.
    """

    search_dirs: tuple[str, ...]
    config_commands: tuple[str, ...]


@dataclass(slots=True)
class StartupState:
    """Mutable startup configuration written once by the startup sequence.

    Attributes:
        search_dirs: Script search directories in insertion (priority) order.
        config_commands: Commands queued for the interpreter, in insertion order.
        help_requested: Whether `--help` was seen.
        version_requested: Whether `--version` was seen.
    """

    search_dirs: list[str] = field(default_factory=list)
    config_commands: list[str] = field(default_factory=list)
    help_requested: bool = False
    version_requested: bool = False

    def add_script_search_dir(self, directory: str) -> None:
        """Append a search directory; duplicates are kept."""

        self.search_dirs.append(directory)

    def add_config_command(self, command: str) -> None:
        """Queue a configuration command for deferred execution."""

        self.config_commands.append(command)

    def finalize(self) -> StartupPlan:
        """Return an immutable snapshot of the collected startup outputs."""

        return StartupPlan(
            search_dirs=tuple(self.search_dirs),
            config_commands=tuple(self.config_commands),
        )
