"""Ports for the host IDE and its view of the working copy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from viewstate.domain.model import FileEntry, IdeStatus, PendingRemovals, WorkPath


@runtime_checkable
class VersionControlHost(Protocol):
    """Predicates and cached state the host keeps per working copy."""

    def owns(self, path: WorkPath) -> bool: ...

    def is_ignored(self, path: WorkPath) -> bool: ...

    def is_under_version_control(self, path: WorkPath) -> bool: ...

    def exists_in_repository(self, path: WorkPath) -> bool: ...

    def is_new_over_renamed(self, path: WorkPath) -> bool: ...

    def contains_new(self, path: WorkPath) -> bool: ...

    def contains_modified(self, path: WorkPath) -> bool: ...

    def pending_removals(self) -> PendingRemovals: ...


@runtime_checkable
class ProjectLayout(Protocol):
    """Content roots mapped to the VCS and traversal below them."""

    def content_roots(self) -> Sequence[WorkPath]: ...

    def is_under_project(self, path: WorkPath) -> bool: ...

    def iter_content(self, root: WorkPath) -> Iterable[FileEntry]: ...

    def root_for(self, path: WorkPath) -> WorkPath | None: ...


@runtime_checkable
class FileMarkers(Protocol):
    """Per-file flags set by checkout and merge operations."""

    def has_checkout_marker(self, path: WorkPath) -> bool: ...

    def clear_checkout_marker(self, path: WorkPath) -> None: ...

    def has_merge_marker(self, path: WorkPath) -> bool: ...


@runtime_checkable
class StatusCache(Protocol):
    """Last status the IDE displayed for a path."""

    def last_known_status(self, path: WorkPath) -> IdeStatus | None: ...
