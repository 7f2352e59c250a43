"""Working copy on the local file system.

``LocalWorkspace`` maps content roots to directories and walks them;
``WorkspaceHost`` answers the host predicates from the workspace, the rename
ledger and the statuses remembered from earlier passes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from viewstate.domain.model import (
    DirtyPath,
    DirtyScope,
    FileEntry,
    IdeStatus,
    PendingRemovals,
    WorkPath,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from viewstate.domain.reconciliation import RenameLedger

    from .memory import InMemoryStatusCache

log = getLogger(__name__)


class ElementLookup(Protocol):
    def exists_in_repository(self, path: WorkPath) -> bool: ...


@dataclass(slots=True)
class LocalWorkspace:
    roots: tuple[WorkPath, ...]

    def content_roots(self) -> Sequence[WorkPath]:
        return self.roots

    def root_for(self, path: WorkPath) -> WorkPath | None:
        """Innermost content root containing ``path``."""

        best: WorkPath | None = None
        for root in self.roots:
            if path.is_at_or_under(root) and (best is None or len(root.key) > len(best.key)):
                best = root
        return best

    def is_under_project(self, path: WorkPath) -> bool:
        return self.root_for(path) is not None

    def iter_content(self, root: WorkPath) -> Iterator[FileEntry]:
        for directory, dirnames, filenames in os.walk(root.path):
            dirnames.sort()
            base = WorkPath(directory)
            for name in dirnames:
                yield FileEntry(base.child(name), is_directory=True)
            for name in sorted(filenames):
                path = base.child(name)
                yield FileEntry(path, is_writable=os.access(path.path, os.W_OK))

    def describe(self, path: WorkPath) -> DirtyPath:
        if not os.path.lexists(path.path):
            return DirtyPath.deleted(path)
        return DirtyPath.present(
            path,
            is_directory=os.path.isdir(path.path),
            is_writable=os.access(path.path, os.W_OK),
        )

    def scope_for(self, paths: Iterable[WorkPath] = ()) -> DirtyScope:
        """Dirty scope for ``paths``, or every content root when none are given."""

        dirty = [self.describe(path) for path in paths]
        if not dirty:
            return DirtyScope(recursively_dirty_dirs=list(self.roots))
        return DirtyScope(dirty_files=dirty)


@dataclass(slots=True)
class WorkspaceHost:
    workspace: LocalWorkspace
    repository: ElementLookup
    ledger: RenameLedger
    statuses: InMemoryStatusCache
    ignore_patterns: tuple[str, ...] = ()
    scheduled_additions: set[WorkPath] = field(default_factory=set)
    removals: PendingRemovals = field(default_factory=PendingRemovals)

    def owns(self, path: WorkPath) -> bool:
        return self.workspace.is_under_project(path)

    def is_ignored(self, path: WorkPath) -> bool:
        name = path.name.lower()
        return any(fnmatchcase(name, pattern.lower()) for pattern in self.ignore_patterns)

    def is_under_version_control(self, path: WorkPath) -> bool:
        return self.workspace.is_under_project(path)

    def exists_in_repository(self, path: WorkPath) -> bool:
        return self.repository.exists_in_repository(path)

    def is_new_over_renamed(self, path: WorkPath) -> bool:
        if path not in self.scheduled_additions:
            return False
        return any(entry.original == path for entry in self.ledger.file_renames())

    def contains_new(self, path: WorkPath) -> bool:
        return (
            path in self.scheduled_additions
            or self.statuses.last_known_status(path) is IdeStatus.ADDED
        )

    def contains_modified(self, path: WorkPath) -> bool:
        return self.statuses.last_known_status(path) is IdeStatus.MODIFIED

    def pending_removals(self) -> PendingRemovals:
        return self.removals

    def schedule_addition(self, path: WorkPath) -> None:
        log.debug("Scheduled %s for addition", path)
        self.scheduled_additions.add(path)
