from __future__ import annotations

from tests.support.fakes import FakeHost, FakeLayout, FakeTool, wp
from viewstate.adapters.memory import EmissionKind, InMemoryActivityRegistry, RecordingSink
from viewstate.domain.model import (
    ChangeRecord,
    ChangeStatus,
    Classification,
    PendingRemovals,
    ScanMode,
)
from viewstate.domain.reconciliation import (
    ActivityTagger,
    ReconciliationContext,
    RenameLedger,
    ResultEmitter,
)

ROOT = wp("/root")


def _setup() -> tuple[ReconciliationContext, FakeHost]:
    host = FakeHost(layout=FakeLayout(roots=[ROOT]))
    return ReconciliationContext(ledger=RenameLedger(), mode=ScanMode.INCREMENTAL), host


def test_emission_order_follows_classification_groups() -> None:
    context, host = _setup()
    context.assign(wp("/root/conflict.txt"), Classification.MERGE_CONFLICT)
    context.assign(wp("/root/a.class"), Classification.IGNORED)
    context.assign(wp("/root/hijacked.txt"), Classification.HIJACKED)
    context.assign(wp("/root/changed.txt"), Classification.CHANGED)
    context.assign(wp("/root/new.txt"), Classification.NEW)
    host.removals = PendingRemovals(
        removed_files=frozenset({wp("/root/gone.txt")}),
        deleted_folders=frozenset({wp("/root/old_dir")}),
    )
    sink = RecordingSink()

    ResultEmitter(host).emit(context, sink)

    assert sink.kinds() == [
        EmissionKind.UNVERSIONED,
        EmissionKind.CHANGE_IN_LIST,
        EmissionKind.CHANGE_IN_LIST,
        EmissionKind.LOCALLY_DELETED,
        EmissionKind.CHANGE,
        EmissionKind.IGNORED,
        EmissionKind.CHANGE,
    ]
    statuses = [event.change.status for event in sink.events if event.change is not None]
    assert statuses == [
        ChangeStatus.MODIFIED,
        ChangeStatus.HIJACKED,
        ChangeStatus.DELETED,
        ChangeStatus.MERGED_WITH_CONFLICTS,
    ]


def test_new_file_scheduled_under_either_name_is_tracked() -> None:
    context, host = _setup()
    context.ledger.record_file_rename(wp("/root/before.txt"), wp("/root/after.txt"))
    context.assign(wp("/root/after.txt"), Classification.NEW)
    context.assign(wp("/root/plain.txt"), Classification.NEW)
    host.scheduled_new.add(wp("/root/before.txt"))
    sink = RecordingSink()

    ResultEmitter(host).emit_added(context, sink)

    tracked, untracked = sink.events
    assert tracked.change == ChangeRecord(None, wp("/root/after.txt"), ChangeStatus.ADDED)
    assert untracked.kind is EmissionKind.UNVERSIONED
    assert untracked.path == wp("/root/plain.txt")


def test_changed_files_pair_original_and_current_names() -> None:
    context, host = _setup()
    context.ledger.record_file_rename(wp("/root/old.txt"), wp("/root/new.txt"))
    context.assign(wp("/root/new.txt"), Classification.CHANGED)
    sink = RecordingSink()

    ResultEmitter(host).emit_changed(context, sink)

    (event,) = sink.events
    assert event.change is not None
    assert event.change.before == wp("/root/old.txt")
    assert event.change.after == wp("/root/new.txt")
    assert event.change.is_rename


def test_folder_renames_are_emitted_once() -> None:
    context, host = _setup()
    context.ledger.record_folder_rename(wp("/root/a"), wp("/root/b"))
    context.ledger.record_folder_rename(wp("/root/c"), wp("/root/d"))
    context.assign(wp("/root/b"), Classification.CHANGED)
    sink = RecordingSink()

    ResultEmitter(host).emit_changed(context, sink)

    pairs = [(event.change.before, event.change.after) for event in sink.events if event.change]
    assert pairs == [(wp("/root/a"), wp("/root/b")), (wp("/root/c"), wp("/root/d"))]


def test_removed_paths_are_sorted_and_split() -> None:
    _, host = _setup()
    host.removals = PendingRemovals(
        removed_folders=frozenset({wp("/root/z_dir"), wp("/root/a_dir")}),
        deleted_files=frozenset({wp("/root/b.txt"), wp("/root/a.txt")}),
    )
    sink = RecordingSink()

    ResultEmitter(host).emit_removed(sink)

    assert [event.path for event in sink.events] == [
        wp("/root/a_dir"),
        wp("/root/z_dir"),
        wp("/root/a.txt"),
        wp("/root/b.txt"),
    ]
    assert [event.is_directory for event in sink.events[:2]] == [True, True]


def test_changes_carry_activity_when_tagging() -> None:
    context, host = _setup()
    registry = InMemoryActivityRegistry()
    registry.set_view_activity(ROOT, "current")
    tagger = ActivityTagger(registry, FakeTool(), host.layout)
    context.assign(wp("/root/a.txt"), Classification.CHANGED)
    sink = RecordingSink()

    ResultEmitter(host, tagger).emit(context, sink)

    assert [event.activity for event in sink.events] == ["current"]
