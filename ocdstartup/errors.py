"""Domain exceptions and command status codes for startup diagnostics."""

from __future__ import annotations


ERROR_OK = 0
ERROR_COMMAND_SYNTAX_ERROR = -601
ERROR_COMMAND_NOTFOUND = -602


class StartupError(RuntimeError):
    """Raised when a specific startup stage cannot continue."""

    def __init__(
        self,
        *,
        stage: str,
        detail: str,
        hint: str | None = None,
    ) -> None:
        """Initialize a stage-scoped startup error."""

        super().__init__(detail)
        self.stage = stage
        self.detail = detail
        self.hint = hint
