"""Subprocess wrapper around the ``cleartool`` executable."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from viewstate.config import CleartoolConfig, get_cleartool_config
from viewstate.domain.errors import ConnectivityFailure, ToolError, ToolStartFailure

if TYPE_CHECKING:
    from viewstate.domain.model import WorkPath

log = getLogger(__name__)

SERVER_DOWN_SIGNATURES: tuple[str, ...] = (
    "Unable to contact",
    "Unable to connect",
    "RPC: Unable to receive",
    "Unable to access",
    "server not responding",
)


def is_server_down_message(text: str) -> bool:
    return any(signature in text for signature in SERVER_DOWN_SIGNATURES)


def _first_error_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


@dataclass(frozen=True, slots=True)
class CleartoolOutput:
    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def text(self) -> str:
        """Standard output followed by standard error."""

        if not self.stderr:
            return self.stdout
        if not self.stdout:
            return self.stderr
        separator = "" if self.stdout.endswith("\n") else "\n"
        return f"{self.stdout}{separator}{self.stderr}"


@dataclass(slots=True)
class CleartoolRunner:
    """Run one cleartool command and classify how it failed, if it did.

    Failing to start the process raises ``ToolStartFailure``. Output carrying
    a server-down signature raises ``ConnectivityFailure`` whatever the exit
    code. With ``check`` set, any other non-zero exit raises ``ToolError``.
    """

    config: CleartoolConfig = field(default_factory=get_cleartool_config)

    def run(
        self,
        *args: str,
        cwd: WorkPath | None = None,
        check: bool = True,
    ) -> CleartoolOutput:
        command = (self.config.executable, *args)
        log.debug("Running %s (%d arguments)", args[0] if args else "", len(args))
        try:
            completed = subprocess.run(  # noqa: S603
                command,
                capture_output=True,
                text=True,
                timeout=self.config.timeout_seconds,
                cwd=cwd.path if cwd is not None else None,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise ConnectivityFailure(
                f"cleartool did not answer within {self.config.timeout_seconds:g} seconds",
                command=command,
            ) from exc
        except OSError as exc:
            raise ToolStartFailure(
                f"Unable to start {self.config.executable}: {exc}",
                command=command,
            ) from exc

        output = CleartoolOutput(
            command=command,
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        if is_server_down_message(output.stderr) or is_server_down_message(output.stdout):
            message = _first_error_line(output.stderr) or _first_error_line(output.stdout)
            log.warning("cleartool reported a connectivity problem: %s", message)
            raise ConnectivityFailure(message, command=command)
        if check and not output.ok:
            message = _first_error_line(output.stderr) or f"exit status {output.returncode}"
            raise ToolError(message, command=command)
        return output
