"""In-process implementations of the host-side ports.

Used by the command line, where there is no IDE to keep markers, displayed
statuses or change lists, and by the test-suite.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from viewstate.domain.model import ChangeStatus, IdeStatus

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from viewstate.domain.model import ChangeRecord, DirtyScope, WorkPath

log = getLogger(__name__)


class InMemoryMarkers:
    """Checkout and merge markers keyed by path."""

    def __init__(self) -> None:
        self._checked_out: set[WorkPath] = set()
        self._merged: set[WorkPath] = set()

    def mark_checked_out(self, path: WorkPath) -> None:
        self._checked_out.add(path)

    def mark_merge_conflict(self, path: WorkPath) -> None:
        self._merged.add(path)

    def clear_merge_marker(self, path: WorkPath) -> None:
        self._merged.discard(path)

    def has_checkout_marker(self, path: WorkPath) -> bool:
        return path in self._checked_out

    def clear_checkout_marker(self, path: WorkPath) -> None:
        self._checked_out.discard(path)

    def has_merge_marker(self, path: WorkPath) -> bool:
        return path in self._merged


class EmissionKind(StrEnum):
    UNVERSIONED = "unversioned"
    CHANGE_IN_LIST = "change_in_list"
    CHANGE = "change"
    IGNORED = "ignored"
    LOCALLY_DELETED = "locally_deleted"


@dataclass(frozen=True, slots=True)
class Emission:
    kind: EmissionKind
    path: WorkPath
    change: ChangeRecord | None = None
    activity: str | None = None
    is_directory: bool = False


@dataclass(slots=True)
class RecordingSink:
    """``ChangeSink`` keeping every emission in arrival order."""

    events: list[Emission] = field(default_factory=list)

    def unversioned(self, path: WorkPath) -> None:
        self.events.append(Emission(EmissionKind.UNVERSIONED, path))

    def change_in_list(self, change: ChangeRecord, activity: str | None) -> None:
        self.events.append(
            Emission(EmissionKind.CHANGE_IN_LIST, change.path, change, activity)
        )

    def change(self, change: ChangeRecord) -> None:
        self.events.append(Emission(EmissionKind.CHANGE, change.path, change))

    def ignored(self, path: WorkPath) -> None:
        self.events.append(Emission(EmissionKind.IGNORED, path))

    def locally_deleted(self, path: WorkPath, *, is_directory: bool) -> None:
        self.events.append(Emission(EmissionKind.LOCALLY_DELETED, path, is_directory=is_directory))

    def paths(self, kind: EmissionKind) -> list[WorkPath]:
        return [event.path for event in self.events if event.kind is kind]

    def kinds(self) -> list[EmissionKind]:
        return [event.kind for event in self.events]


_STATUS_BY_CHANGE = {
    ChangeStatus.ADDED: IdeStatus.ADDED,
    ChangeStatus.MODIFIED: IdeStatus.MODIFIED,
    ChangeStatus.HIJACKED: IdeStatus.HIJACKED,
    ChangeStatus.DELETED: IdeStatus.DELETED,
    ChangeStatus.MERGED_WITH_CONFLICTS: IdeStatus.MERGED_WITH_CONFLICTS,
}


class InMemoryStatusCache:
    """Statuses last shown for each path, fed from completed passes."""

    def __init__(self) -> None:
        self._statuses: dict[WorkPath, IdeStatus] = {}

    def remember(self, path: WorkPath, status: IdeStatus) -> None:
        self._statuses[path] = status

    def last_known_status(self, path: WorkPath) -> IdeStatus | None:
        return self._statuses.get(path)

    def record(self, events: Iterable[Emission], *, scope: DirtyScope | None = None) -> None:
        """Remember what a completed pass emitted.

        Paths ``scope`` covered that got no emission came back clean, so their
        old status is dropped.
        """

        if scope is not None:
            for path in [path for path in self._statuses if scope.covers(path)]:
                del self._statuses[path]
        for event in events:
            status = self._status_of(event)
            if status is None:
                self._statuses.pop(event.path, None)
            else:
                self._statuses[event.path] = status

    @staticmethod
    def _status_of(event: Emission) -> IdeStatus | None:
        match event.kind:
            case EmissionKind.UNVERSIONED:
                return IdeStatus.UNKNOWN
            case EmissionKind.IGNORED:
                return IdeStatus.IGNORED
            case EmissionKind.LOCALLY_DELETED:
                return None
            case _:
                if event.change is None:
                    return None
                return _STATUS_BY_CHANGE[event.change.status]


class ImmediateScheduler:
    def invoke_later(self, callback: Callable[[], None]) -> None:
        callback()


class QueuedScheduler:
    """Defers callbacks until the owner drains the queue."""

    def __init__(self) -> None:
        self._pending: deque[Callable[[], None]] = deque()

    def invoke_later(self, callback: Callable[[], None]) -> None:
        self._pending.append(callback)

    def __len__(self) -> int:
        return len(self._pending)

    def drain(self) -> int:
        ran = 0
        while self._pending:
            self._pending.popleft()()
            ran += 1
        return ran


class LoggingNotifier:
    def error(self, title: str, message: str) -> None:
        log.error("%s: %s", title, message)

    def warning(self, title: str, message: str) -> None:
        log.warning("%s: %s", title, message)


ACTIVITY_PREFIX = "activity:"


def normalize_activity(activity: str) -> str:
    """``activity:fix_login@/vobs/pvob`` -> ``fix_login``."""

    name = activity.strip()
    if name.startswith(ACTIVITY_PREFIX):
        name = name[len(ACTIVITY_PREFIX) :]
    return name.split("@", 1)[0]


class InMemoryActivityRegistry:
    """Activities and the change lists named after them."""

    def __init__(self) -> None:
        self._known: set[str] = set()
        self._discoverable: set[str] = set()
        self._view_activities: dict[WorkPath, str] = {}
        self._checkout_activities: dict[WorkPath, str] = {}
        self.changelists: dict[WorkPath, str] = {}
        self.reloads = 0

    def add_activity(self, name: str) -> None:
        self._known.add(name)

    def add_remote_activity(self, name: str) -> None:
        """Make ``name`` visible only after the next reload."""

        self._discoverable.add(name)

    def set_view_activity(self, root: WorkPath, name: str) -> None:
        self._known.add(name)
        self._view_activities[root] = name

    def record_checkout(self, path: WorkPath, name: str) -> None:
        self._known.add(name)
        self._checkout_activities[path] = name

    def checkout_activity_for(self, path: WorkPath) -> str | None:
        return self._checkout_activities.get(path)

    def normalized_activity_name(self, activity: str) -> str | None:
        name = normalize_activity(activity)
        return name if name in self._known else None

    def reload_activities(self) -> None:
        self.reloads += 1
        self._known |= self._discoverable
        self._discoverable.clear()

    def view_activity_for(self, root: WorkPath) -> str | None:
        return self._view_activities.get(root)

    def has_change_in_list(self, path: WorkPath) -> bool:
        return path in self.changelists

    def assign_to_changelist(self, path: WorkPath, activity_name: str) -> None:
        log.debug("Filing %s under activity %s", path, activity_name)
        self.changelists[path] = activity_name
