"""Records handed to the presentation boundary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .enums import ChangeStatus
    from .paths import WorkPath


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """A change with before/after content identities.

    ``before`` is ``None`` for added paths and ``after`` is ``None`` for deleted
    ones. For renames ``before`` holds the original location.
    """

    before: WorkPath | None
    after: WorkPath | None
    status: ChangeStatus

    def __post_init__(self) -> None:
        if self.before is None and self.after is None:
            raise ValueError("Change must have a before or an after revision")

    @property
    def path(self) -> WorkPath:
        """Location the change is shown under: ``after``, or ``before`` for deletions."""

        path = self.after if self.after is not None else self.before
        if path is None:
            raise ValueError("Change must have a before or an after revision")
        return path

    @property
    def is_rename(self) -> bool:
        return (
            self.before is not None
            and self.after is not None
            and self.before.key != self.after.key
        )


@dataclass(frozen=True, slots=True)
class PendingRemovals:
    """Removed/deleted paths tracked by the host outside of this engine.

    ``removed_*`` are gone locally but not yet scheduled in the repository;
    ``deleted_*`` are already scheduled for deletion.
    """

    removed_folders: frozenset[WorkPath] = field(default_factory=frozenset)
    removed_files: frozenset[WorkPath] = field(default_factory=frozenset)
    deleted_folders: frozenset[WorkPath] = field(default_factory=frozenset)
    deleted_files: frozenset[WorkPath] = field(default_factory=frozenset)
