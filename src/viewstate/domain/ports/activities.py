"""Port for activity (change list) bookkeeping used in activities mode."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from viewstate.domain.model import WorkPath


@runtime_checkable
class ActivityRegistry(Protocol):
    def checkout_activity_for(self, path: WorkPath) -> str | None: ...

    def normalized_activity_name(self, activity: str) -> str | None: ...

    def reload_activities(self) -> None: ...

    def view_activity_for(self, root: WorkPath) -> str | None: ...

    def has_change_in_list(self, path: WorkPath) -> bool: ...

    def assign_to_changelist(self, path: WorkPath, activity_name: str) -> None: ...
