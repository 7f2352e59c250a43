"""Collection phase: turn the dirty scope into ignored paths and writable candidates.

Batch passes walk every dirty content root; both kinds of pass then look at the
flat dirty list, directories first.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from viewstate.domain.model import Classification

if TYPE_CHECKING:
    from collections.abc import Sequence

    from viewstate.domain.model import DirtyPath, DirtyScope, FileEntry, WorkPath
    from viewstate.domain.ports import ProgressToken, ProjectLayout, VersionControlHost

    from .context import ReconciliationContext

log = getLogger(__name__)

COLLECT_MSG = "Collecting writable files"
SEARCH_NEW_MSG = "Searching New"


def collect_project_content(
    context: ReconciliationContext,
    roots: Sequence[WorkPath],
    *,
    host: VersionControlHost,
    layout: ProjectLayout,
    progress: ProgressToken | None = None,
) -> None:
    """Walk every file under ``roots`` sorting it into ignored or writable."""

    for root in roots:
        log.info("Iterating over content root: %s", root)
        if progress is not None:
            progress.set_text(COLLECT_MSG)

        for entry in layout.iter_content(root):
            if not _is_valid_entry(entry) or not layout.is_under_project(entry.path):
                continue
            if host.is_ignored(entry.path):
                context.assign(entry.path, Classification.IGNORED)
            else:
                context.sets.add_writable(entry.path)

        log.info("Total: %s writable files after the last root", len(context.sets.writable))
        if progress is not None:
            progress.set_text(SEARCH_NEW_MSG)


def collect_dirty_directories(
    context: ReconciliationContext,
    scope: DirtyScope,
    *,
    host: VersionControlHost,
) -> None:
    """Classify dirty folders that still exist and are under version control.

    Offline passes never ask the repository; a folder is New only when the host
    already tracks it as new.
    """

    ledger = context.ledger
    for entry in scope.dirty_files:
        if not entry.is_directory or not entry.exists:
            continue
        path = entry.path
        if not host.is_under_version_control(path):
            continue
        if host.is_ignored(path):
            context.assign(path, Classification.IGNORED)
            continue

        original = ledger.lookup_original(path)
        if context.offline:
            is_new = host.contains_new(path)
        else:
            is_new = not host.exists_in_repository(original)
        if is_new:
            context.assign(path, Classification.NEW)
        elif original.key != path.key and not ledger.is_under_renamed_folder(path):
            # Folders inside another renamed folder are checked in with it.
            context.assign(path, Classification.CHANGED)


def collect_dirty_files(
    context: ReconciliationContext,
    scope: DirtyScope,
    *,
    host: VersionControlHost,
    layout: ProjectLayout,
) -> None:
    for entry in scope.dirty_files:
        if entry.is_directory:
            continue
        if entry.exists and host.is_ignored(entry.path):
            context.assign(entry.path, Classification.IGNORED)
        elif is_processable(entry, layout) and is_proper_notification(entry):
            context.sets.add_writable(entry.path)


def is_processable(entry: DirtyPath, layout: ProjectLayout) -> bool:
    return (
        entry.exists
        and entry.is_writable
        and not entry.is_directory
        and layout.is_under_project(entry.path)
    )


def is_proper_notification(entry: DirtyPath) -> bool:
    """Reject the stale half of a rename or move notification.

    A rename produces one notification for the old name whose tracked identity
    now carries the new name; a move produces one whose identity now lives in
    another folder. Deletions (no current identity) are accepted.
    """

    notified_name = entry.path.name
    current_name = entry.current_name or ""
    notified_parent = entry.path.parent
    notified_parent_key = notified_parent.key if notified_parent is not None else ""
    current_parent_key = entry.current_parent.key if entry.current_parent is not None else ""

    if notified_parent_key != current_parent_key:
        return False
    return current_name == notified_name or (not current_name and bool(notified_name))


def _is_valid_entry(entry: FileEntry) -> bool:
    return entry.is_writable and not entry.is_directory
