"""Corrections applied after classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from viewstate.domain.model import Classification

if TYPE_CHECKING:
    from viewstate.domain.model import WorkPath
    from viewstate.domain.ports import VersionControlHost

    from .context import ReconciliationContext


def reclassify_new_over_renamed(
    context: ReconciliationContext, host: VersionControlHost
) -> list[WorkPath]:
    """Move Changed paths that a refactoring rewrote under a stale name to New.

    "Extract superclass" with "rename original" renames the class file and then
    writes fresh content under the old name, which the repository still knows.
    """

    moved = [
        path
        for path in context.sets.members(Classification.CHANGED)
        if host.is_new_over_renamed(path)
    ]
    context.sets.assign_all(moved, Classification.NEW)
    return moved


def restore_cached_statuses(context: ReconciliationContext, host: VersionControlHost) -> None:
    """Offline classification of writable candidates from cached state alone.

    Anything not known as changed or new is assumed to be an untracked local
    write until the server is reachable again.
    """

    for path in context.sets.writable:
        if host.contains_modified(path):
            context.assign(path, Classification.CHANGED)
        elif host.contains_new(path):
            context.assign(path, Classification.NEW)
        else:
            context.assign(path, Classification.HIJACKED)
