"""Inputs of a reconciliation pass: the dirty scope and walked file entries."""

from __future__ import annotations

from dataclasses import dataclass, field

from .paths import WorkPath


@dataclass(frozen=True, slots=True)
class DirtyPath:
    """One path the host believes may have changed.

    ``path`` is the location the notification was issued for. ``current_name``
    and ``current_parent`` describe the tracked file identity as it is *now*:
    after a rename or move they differ from ``path``, after a deletion the
    identity is gone and ``current_name`` is ``None``.
    """

    path: WorkPath
    current_name: str | None
    current_parent: WorkPath | None
    is_directory: bool = False
    is_writable: bool = True

    @property
    def exists(self) -> bool:
        return self.current_name is not None

    @classmethod
    def present(
        cls,
        path: WorkPath,
        *,
        is_directory: bool = False,
        is_writable: bool = True,
    ) -> DirtyPath:
        return cls(
            path=path,
            current_name=path.name,
            current_parent=path.parent,
            is_directory=is_directory,
            is_writable=is_writable,
        )

    @classmethod
    def deleted(cls, path: WorkPath, *, is_directory: bool = False) -> DirtyPath:
        return cls(
            path=path,
            current_name=None,
            current_parent=path.parent,
            is_directory=is_directory,
            is_writable=False,
        )

    @classmethod
    def relocated(cls, old_path: WorkPath, new_path: WorkPath) -> DirtyPath:
        """Stale notification for ``old_path`` whose identity now lives at ``new_path``."""

        return cls(path=old_path, current_name=new_path.name, current_parent=new_path.parent)


@dataclass(slots=True)
class DirtyScope:
    """Flat dirty files (directories included) plus recursively dirty directories."""

    dirty_files: list[DirtyPath] = field(default_factory=list)
    recursively_dirty_dirs: list[WorkPath] = field(default_factory=list)

    def all_paths(self) -> list[WorkPath]:
        return [entry.path for entry in self.dirty_files] + list(self.recursively_dirty_dirs)

    def covers(self, path: WorkPath) -> bool:
        """True when a pass over this scope looks at ``path``."""

        if any(entry.path == path for entry in self.dirty_files):
            return True
        return any(path.is_at_or_under(folder) for folder in self.recursively_dirty_dirs)


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A file visited while walking a content root."""

    path: WorkPath
    is_directory: bool = False
    is_writable: bool = True
