"""Canonical working-copy paths.

Every structure in the engine is keyed by ``WorkPath``. Two paths compare equal
when their canonical lowercase forms match, while the original spelling is kept
for presentation and for handing back to collaborators.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field


def canonical_path(value: str) -> str:
    """Return ``value`` with forward slashes, collapsed segments and no trailing slash."""

    if not value or not value.strip():
        raise ValueError("Path must not be blank")
    return posixpath.normpath(value.strip().replace("\\", "/"))


def path_key(value: str) -> str:
    return canonical_path(value).lower()


@dataclass(frozen=True, slots=True)
class WorkPath:
    """Case-insensitive, canonicalized absolute file-system location."""

    path: str = field(compare=False)
    key: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        canonical = canonical_path(self.path)
        object.__setattr__(self, "path", canonical)
        object.__setattr__(self, "key", canonical.lower())

    def __str__(self) -> str:
        return self.path

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def parent(self) -> WorkPath | None:
        head = posixpath.dirname(self.path)
        if not head or head == self.path:
            return None
        return WorkPath(head)

    def child(self, *parts: str) -> WorkPath:
        return WorkPath(posixpath.join(self.path, *parts))

    def is_strictly_under(self, folder: WorkPath) -> bool:
        """True when ``folder`` is a proper ancestor of this path."""

        prefix = folder.key if folder.key.endswith("/") else folder.key + "/"
        return self.key.startswith(prefix) and self.key != folder.key

    def is_at_or_under(self, folder: WorkPath) -> bool:
        return self.key == folder.key or self.is_strictly_under(folder)

    def rebase(self, old_prefix: WorkPath, new_prefix: WorkPath) -> WorkPath:
        """Move this path from under ``old_prefix`` to the same spot under ``new_prefix``."""

        if not self.is_at_or_under(old_prefix):
            raise ValueError(f"{self.path} is not under {old_prefix.path}")
        suffix = self.path[len(old_prefix.path) :].lstrip("/")
        return new_prefix.child(suffix) if suffix else new_prefix

    def ancestors(self) -> list[WorkPath]:
        """Parents from the nearest outwards."""

        result: list[WorkPath] = []
        current = self.parent
        while current is not None:
            result.append(current)
            current = current.parent
        return result


def as_work_path(value: WorkPath | str) -> WorkPath:
    if isinstance(value, WorkPath):
        return value
    return WorkPath(value)
