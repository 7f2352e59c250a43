"""Hand classified paths to the presentation boundary in a fixed order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from viewstate.domain.model import ChangeRecord, ChangeStatus, Classification

if TYPE_CHECKING:
    from collections.abc import Iterable

    from viewstate.domain.model import WorkPath
    from viewstate.domain.ports import ChangeSink, VersionControlHost

    from .activities import ActivityTagger
    from .context import ReconciliationContext


def _sorted(paths: Iterable[WorkPath]) -> list[WorkPath]:
    return sorted(paths, key=lambda path: path.key)


@dataclass(slots=True)
class ResultEmitter:
    host: VersionControlHost
    tagger: ActivityTagger | None = None

    def emit(self, context: ReconciliationContext, sink: ChangeSink) -> None:
        self.emit_added(context, sink)
        self.emit_changed(context, sink)
        self.emit_removed(sink)
        for path in context.sets.members(Classification.IGNORED):
            sink.ignored(path)
        for path in context.sets.members(Classification.MERGE_CONFLICT):
            sink.change(ChangeRecord(path, path, ChangeStatus.MERGED_WITH_CONFLICTS))

    def emit_added(self, context: ReconciliationContext, sink: ChangeSink) -> None:
        """New paths go in a change list when scheduled for addition, else unversioned.

        The addition may have been recorded before or after a rename, so both
        names are checked.
        """

        for path in context.sets.members(Classification.NEW):
            original = context.ledger.lookup_original(path)
            if self.host.contains_new(path) or self.host.contains_new(original):
                change = ChangeRecord(None, path, ChangeStatus.ADDED)
                sink.change_in_list(change, self._activity(path, path))
            else:
                sink.unversioned(path)

    def emit_changed(self, context: ReconciliationContext, sink: ChangeSink) -> None:
        ledger = context.ledger
        emitted: set[WorkPath] = set()
        for classification, status in (
            (Classification.CHANGED, ChangeStatus.MODIFIED),
            (Classification.HIJACKED, ChangeStatus.HIJACKED),
        ):
            for path in context.sets.members(classification):
                original = ledger.lookup_original(path)
                change = ChangeRecord(original, path, status)
                sink.change_in_list(change, self._activity(original, path))
                emitted.add(path)

        for entry in ledger.folder_renames():
            if entry.current in emitted:
                continue
            change = ChangeRecord(entry.original, entry.current, ChangeStatus.MODIFIED)
            sink.change_in_list(change, self._activity(entry.original, entry.current))

    def emit_removed(self, sink: ChangeSink) -> None:
        removals = self.host.pending_removals()
        for path in _sorted(removals.removed_folders):
            sink.locally_deleted(path, is_directory=True)
        for path in _sorted(removals.removed_files):
            sink.locally_deleted(path, is_directory=False)
        for path in _sorted(removals.deleted_folders):
            sink.change(ChangeRecord(path, None, ChangeStatus.DELETED))
        for path in _sorted(removals.deleted_files):
            sink.change(ChangeRecord(path, None, ChangeStatus.DELETED))

    def _activity(self, before: WorkPath, after: WorkPath) -> str | None:
        if self.tagger is None:
            return None
        return self.tagger.activity_for(before, after)
