from __future__ import annotations

from viewstate.domain.model import WorkPath
from viewstate.domain.reconciliation import RenameEntry, RenameLedger


def _wp(path: str) -> WorkPath:
    return WorkPath(path)


def test_unrenamed_path_resolves_to_itself() -> None:
    ledger = RenameLedger()

    assert ledger.lookup_original(_wp("/v/a.txt")) == _wp("/v/a.txt")
    assert not ledger.is_under_renamed_folder(_wp("/v/a.txt"))


def test_direct_file_rename_wins() -> None:
    ledger = RenameLedger()
    ledger.record_file_rename(_wp("/v/old.txt"), _wp("/v/new.txt"))

    assert ledger.lookup_original(_wp("/V/NEW.txt")) == _wp("/v/old.txt")


def test_direct_folder_rename() -> None:
    ledger = RenameLedger()
    ledger.record_folder_rename(_wp("/v/old"), _wp("/v/new"))

    assert ledger.lookup_original(_wp("/v/new")) == _wp("/v/old")
    assert not ledger.is_under_renamed_folder(_wp("/v/new"))


def test_file_inside_renamed_folder_is_rebased() -> None:
    ledger = RenameLedger()
    ledger.record_folder_rename(_wp("/v/old"), _wp("/v/new"))

    assert ledger.lookup_original(_wp("/v/new/pkg/a.txt")) == _wp("/v/old/pkg/a.txt")
    assert ledger.is_under_renamed_folder(_wp("/v/new/pkg/a.txt"))


def test_rebased_path_substitutes_its_own_file_rename() -> None:
    ledger = RenameLedger()
    ledger.record_file_rename(_wp("/v/old/first.txt"), _wp("/v/old/second.txt"))
    ledger.record_folder_rename(_wp("/v/old"), _wp("/v/new"))

    assert ledger.lookup_original(_wp("/v/new/second.txt")) == _wp("/v/old/first.txt")


def test_nearest_renamed_ancestor_wins() -> None:
    ledger = RenameLedger()
    ledger.record_folder_rename(_wp("/v/a"), _wp("/v/b"))
    ledger.record_folder_rename(_wp("/v/b/x"), _wp("/v/b/y"))

    assert ledger.lookup_original(_wp("/v/b/y/f.txt")) == _wp("/v/b/x/f.txt")


def test_prefix_match_needs_a_whole_component() -> None:
    ledger = RenameLedger()
    ledger.record_folder_rename(_wp("/v/old"), _wp("/v/new"))

    assert ledger.lookup_original(_wp("/v/newer/a.txt")) == _wp("/v/newer/a.txt")
    assert not ledger.is_under_renamed_folder(_wp("/v/newer/a.txt"))


def test_lookup_reaches_a_fixpoint_in_one_hop() -> None:
    ledger = RenameLedger()
    ledger.record_folder_rename(_wp("/v/old"), _wp("/v/new"))
    ledger.record_file_rename(_wp("/v/x.txt"), _wp("/v/y.txt"))

    for path in (_wp("/v/new/a.txt"), _wp("/v/y.txt"), _wp("/v/plain.txt")):
        once = ledger.lookup_original(path)
        assert ledger.lookup_original(once) == once


def test_chained_renames_keep_the_first_original() -> None:
    ledger = RenameLedger()
    ledger.record_file_rename(_wp("/v/a.txt"), _wp("/v/b.txt"))
    ledger.record_file_rename(_wp("/v/b.txt"), _wp("/v/c.txt"))

    assert ledger.file_renames() == (
        RenameEntry(current=_wp("/v/c.txt"), original=_wp("/v/a.txt")),
    )


def test_renaming_back_clears_the_entry() -> None:
    ledger = RenameLedger()
    ledger.record_file_rename(_wp("/v/a.txt"), _wp("/v/b.txt"))
    ledger.record_file_rename(_wp("/v/b.txt"), _wp("/v/A.txt"))

    assert len(ledger) == 0


def test_forget_returns_the_original_once() -> None:
    ledger = RenameLedger()
    ledger.record_folder_rename(_wp("/v/old"), _wp("/v/new"))

    assert ledger.forget_folder(_wp("/v/new")) == _wp("/v/old")
    assert ledger.forget_folder(_wp("/v/new")) is None
    assert ledger.original_of_folder(_wp("/v/new")) is None
    assert ledger.forget_file(_wp("/v/none.txt")) is None


def test_lookups_have_no_side_effects() -> None:
    ledger = RenameLedger()
    ledger.record_file_rename(_wp("/v/a.txt"), _wp("/v/b.txt"))

    ledger.lookup_original(_wp("/v/b.txt"))
    ledger.is_under_renamed_folder(_wp("/v/b.txt"))

    assert ledger.original_of_file(_wp("/v/b.txt")) == _wp("/v/a.txt")
    assert len(ledger) == 1
