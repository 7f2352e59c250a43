"""Rename ledger: pending renames/moves of files and folders.

The ledger maps the *current* location of a renamed path to the location the
repository still knows it under. It is shared between reconciliation passes and
the check-in/rollback side, so every mutation is a single-entry operation taken
under one lock; readers never observe a half-replaced table.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from viewstate.domain.model import WorkPath

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RenameEntry:
    current: WorkPath
    original: WorkPath


class RenameLedger:
    """Bidirectional bookkeeping for pending file and folder renames."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._files: dict[str, RenameEntry] = {}
        self._folders: dict[str, RenameEntry] = {}

    def record_file_rename(self, old: WorkPath, new: WorkPath) -> None:
        with self._lock:
            self._record(self._files, old, new)

    def record_folder_rename(self, old: WorkPath, new: WorkPath) -> None:
        with self._lock:
            self._record(self._folders, old, new)

    def forget_file(self, current: WorkPath) -> WorkPath | None:
        """Drop the entry for ``current`` once its change is committed or rolled back."""

        with self._lock:
            entry = self._files.pop(current.key, None)
        return entry.original if entry is not None else None

    def forget_folder(self, current: WorkPath) -> WorkPath | None:
        with self._lock:
            entry = self._folders.pop(current.key, None)
        return entry.original if entry is not None else None

    def original_of_file(self, current: WorkPath) -> WorkPath | None:
        with self._lock:
            entry = self._files.get(current.key)
        return entry.original if entry is not None else None

    def original_of_folder(self, current: WorkPath) -> WorkPath | None:
        with self._lock:
            entry = self._folders.get(current.key)
        return entry.original if entry is not None else None

    def file_renames(self) -> tuple[RenameEntry, ...]:
        with self._lock:
            return tuple(self._files.values())

    def folder_renames(self) -> tuple[RenameEntry, ...]:
        with self._lock:
            return tuple(self._folders.values())

    def lookup_original(self, path: WorkPath) -> WorkPath:
        """Return the name to use when querying the repository for ``path``.

        Resolution order: direct file rename, direct folder rename, nearest
        renamed ancestor folder (with the rebased path substituted by its own
        file rename when one is recorded), else ``path`` itself.
        """

        with self._lock:
            entry = self._files.get(path.key) or self._folders.get(path.key)
            if entry is not None:
                return entry.original

            ancestor = self._nearest_renamed_ancestor(path)
            if ancestor is None:
                return path

            in_old_folder = path.rebase(ancestor.current, ancestor.original)
            renamed = self._files.get(in_old_folder.key)
            if renamed is not None:
                return renamed.original
            return in_old_folder

    def is_under_renamed_folder(self, path: WorkPath) -> bool:
        with self._lock:
            return self._nearest_renamed_ancestor(path) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._files) + len(self._folders)

    def _nearest_renamed_ancestor(self, path: WorkPath) -> RenameEntry | None:
        # One prefix rule for lookup_original and is_under_renamed_folder.
        best: RenameEntry | None = None
        for entry in self._folders.values():
            if not path.is_strictly_under(entry.current):
                continue
            if best is None or len(entry.current.key) > len(best.current.key):
                best = entry
        return best

    @staticmethod
    def _record(table: dict[str, RenameEntry], old: WorkPath, new: WorkPath) -> None:
        previous = table.pop(old.key, None)
        original = previous.original if previous is not None else old
        if original.key == new.key:
            log.debug("Rename of %s back to its original name cleared the entry", new)
            return
        table[new.key] = RenameEntry(current=new, original=original)
