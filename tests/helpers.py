"""Shared test doubles for startup collaborators."""

from __future__ import annotations


class FixedLocator:
    """Executable locator returning a preset path (or `None`)."""

    def __init__(self, path: str | None) -> None:
        """Store the path reported by `locate`."""

        self.path = path
        self.calls = 0

    def locate(self) -> str | None:
        """Return the preset executable path."""

        self.calls += 1
        return self.path


class RecordingCommandContext:
    """Command context that records every line it is asked to run."""

    def __init__(self) -> None:
        """Initialize an empty run history."""

        self.lines: list[str] = []

    def run_line(self, line: str) -> int:
        """Record `line` and report success."""

        self.lines.append(line)
        return 0
