from __future__ import annotations

import pytest

from viewstate.domain.model import (
    ChangeRecord,
    ChangeStatus,
    DirtyPath,
    DirtyScope,
    WorkPath,
)


def test_present_dirty_path_keeps_its_identity() -> None:
    entry = DirtyPath.present(WorkPath("/view/a.txt"))

    assert entry.exists
    assert entry.current_name == "a.txt"
    assert entry.current_parent == WorkPath("/view")


def test_deleted_dirty_path_has_no_identity() -> None:
    entry = DirtyPath.deleted(WorkPath("/view/a.txt"))

    assert not entry.exists
    assert not entry.is_writable
    assert entry.current_parent == WorkPath("/view")


def test_relocated_dirty_path_points_at_new_location() -> None:
    entry = DirtyPath.relocated(WorkPath("/view/a.txt"), WorkPath("/view/sub/b.txt"))

    assert entry.current_name == "b.txt"
    assert entry.current_parent == WorkPath("/view/sub")


def test_scope_lists_files_then_directories() -> None:
    scope = DirtyScope(
        dirty_files=[DirtyPath.present(WorkPath("/view/a.txt"))],
        recursively_dirty_dirs=[WorkPath("/view")],
    )

    assert scope.all_paths() == [WorkPath("/view/a.txt"), WorkPath("/view")]


def test_change_record_requires_a_side() -> None:
    with pytest.raises(ValueError, match="before or an after"):
        ChangeRecord(None, None, ChangeStatus.MODIFIED)


def test_change_record_detects_renames() -> None:
    renamed = ChangeRecord(WorkPath("/v/old.txt"), WorkPath("/v/new.txt"), ChangeStatus.MODIFIED)
    edited = ChangeRecord(WorkPath("/v/A.txt"), WorkPath("/v/a.txt"), ChangeStatus.MODIFIED)
    added = ChangeRecord(None, WorkPath("/v/a.txt"), ChangeStatus.ADDED)

    assert renamed.is_rename
    assert not edited.is_rename
    assert not added.is_rename


def test_change_is_shown_under_after_or_before_for_deletions() -> None:
    moved = ChangeRecord(WorkPath("/v/old.txt"), WorkPath("/v/new.txt"), ChangeStatus.MODIFIED)
    deleted = ChangeRecord(WorkPath("/v/gone.txt"), None, ChangeStatus.DELETED)

    assert moved.path == WorkPath("/v/new.txt")
    assert deleted.path == WorkPath("/v/gone.txt")
