"""Ports for user-facing notifications and progress reporting."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Callable


@runtime_checkable
class UiScheduler(Protocol):
    """Runs callbacks in the context that owns presentation state."""

    def invoke_later(self, callback: Callable[[], None]) -> None: ...


@runtime_checkable
class Notifier(Protocol):
    def error(self, title: str, message: str) -> None: ...

    def warning(self, title: str, message: str) -> None: ...


@runtime_checkable
class ProgressToken(Protocol):
    """Consulted only between phases of a pass."""

    def set_text(self, text: str) -> None: ...

    def is_canceled(self) -> bool: ...
