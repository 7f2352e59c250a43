"""Port for the presentation boundary receiving classified paths."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from viewstate.domain.model import ChangeRecord, WorkPath


@runtime_checkable
class ChangeSink(Protocol):
    """Ordered emission API. Calls arrive in the order the engine emits them."""

    def unversioned(self, path: WorkPath) -> None: ...

    def change_in_list(self, change: ChangeRecord, activity: str | None) -> None: ...

    def change(self, change: ChangeRecord) -> None: ...

    def ignored(self, path: WorkPath) -> None: ...

    def locally_deleted(self, path: WorkPath, *, is_directory: bool) -> None: ...
