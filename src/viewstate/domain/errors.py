"""Error taxonomy of the reconciliation engine."""

from __future__ import annotations


class ViewStateError(RuntimeError):
    """Base class for reconciliation errors."""


class ToolError(ViewStateError):
    """Raised when the external tool ran but reported a failure."""

    def __init__(self, message: str, *, command: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.command = command


class ConnectivityFailure(ToolError):
    """Raised when the repository server cannot be reached."""


class ToolStartFailure(ViewStateError):
    """Raised when the external tool is missing or cannot be started."""

    def __init__(self, message: str, *, command: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.command = command


class ParseAnomaly(ViewStateError):
    """Raised for a single unexpected line of tool output."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Unexpected tool output: {line!r}")
        self.line = line


class InvariantViolation(ViewStateError):
    """Raised when engine preconditions are broken. Always fatal."""


class PassInProgressError(InvariantViolation):
    """Raised when a pass is started while another one runs for the same working copy."""
