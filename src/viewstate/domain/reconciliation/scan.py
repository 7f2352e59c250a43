"""Choose between a full project walk and an incremental scan."""

from __future__ import annotations

from typing import TYPE_CHECKING

from viewstate.domain.model import ScanMode

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from viewstate.domain.model import WorkPath


def select_scan_mode(
    recursively_dirty_dirs: Sequence[WorkPath],
    content_roots: Iterable[WorkPath],
) -> ScanMode:
    """Batch only when every recursively dirty directory is itself a content root.

    A handful of dirty subfolders is cheaper to scan path by path, so an empty
    or partially matching scope stays incremental.
    """

    if not recursively_dirty_dirs:
        return ScanMode.INCREMENTAL
    root_keys = {root.key for root in content_roots}
    if all(directory.key in root_keys for directory in recursively_dirty_dirs):
        return ScanMode.BATCH
    return ScanMode.INCREMENTAL
