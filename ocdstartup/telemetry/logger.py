"""Structured startup logging utilities.

Responsibilities:
- Emit concise, deterministic startup-stage log lines through `loguru`.
- Map numeric debug levels (0-4) onto loguru level names.
- Redirect log output to a file on request.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

from loguru import logger as _loguru_logger


DEFAULT_DEBUG_LEVEL = 2
_DEBUG_LEVEL_NAMES = ("ERROR", "WARNING", "INFO", "DEBUG", "TRACE")


def _sanitize_context_value(value: object) -> str:
    """Convert context values into stable, shell-safe tokens."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Serialize context key/value pairs in deterministic key order."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


def clamp_debug_level(debug_level: int) -> int:
    """Clamp a numeric debug level into the supported 0-4 range."""

    return min(max(debug_level, 0), len(_DEBUG_LEVEL_NAMES) - 1)


def debug_level_name(debug_level: int) -> str:
    """Return the loguru level name for a numeric debug level."""

    return _DEBUG_LEVEL_NAMES[clamp_debug_level(debug_level)]


class StartupLogger:
    """Emit deterministic startup log lines and own the active loguru sink.

    A logger created without a sink writes through whatever loguru handlers are
    already installed; passing a sink replaces them with that single sink.
    """

    def __init__(
        self,
        sink: TextIO | str | Path | None = None,
        debug_level: int = DEFAULT_DEBUG_LEVEL,
    ) -> None:
        """Initialize the logger and attach `sink` when one is given."""

        self._sink: TextIO | str | Path | None = None
        self._debug_level = clamp_debug_level(debug_level)
        if sink is not None:
            self.attach(sink, debug_level)

    @property
    def debug_level(self) -> int:
        """Return the current numeric debug level."""

        return self._debug_level

    def attach(self, sink: TextIO | str | Path, debug_level: int | None = None) -> None:
        """Replace loguru handlers with one plain-message sink."""

        if debug_level is not None:
            self._debug_level = clamp_debug_level(debug_level)
        self._sink = sink
        _loguru_logger.remove()
        _loguru_logger.add(
            sink,
            format="{message}",
            level=debug_level_name(self._debug_level),
            colorize=False,
        )

    def set_debug_level(self, debug_level: int) -> None:
        """Change the level filter of the active sink."""

        self.attach(self._sink if self._sink is not None else sys.stderr, debug_level)

    def redirect(self, path: str | Path | None) -> None:
        """Send further log output to the file at `path`, or back to stderr."""

        self.attach(str(path) if path else sys.stderr)

    def _emit(self, level: str, event: str, stage: str, **context: object) -> None:
        """Emit one structured startup log line."""

        line = f"[startup] level={level} stage={stage} event={event}{_format_context(context)}"
        _loguru_logger.log(level, line)

    def debug(self, event: str, stage: str, **context: object) -> None:
        """Emit a debug-level startup event."""

        self._emit("DEBUG", event, stage, **context)

    def info(self, event: str, stage: str, **context: object) -> None:
        """Emit an info-level startup event."""

        self._emit("INFO", event, stage, **context)

    def warning(self, event: str, stage: str, **context: object) -> None:
        """Emit a warning-level startup event."""

        self._emit("WARNING", event, stage, **context)
