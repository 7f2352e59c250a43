"""Value types shared by the reconciliation engine and its adapters."""

from __future__ import annotations

from .changes import ChangeRecord, PendingRemovals
from .enums import ChangeStatus, Classification, IdeStatus, PassOutcome, ScanMode, Verdict
from .paths import WorkPath, as_work_path, canonical_path, path_key
from .scope import DirtyPath, DirtyScope, FileEntry

__all__ = [
    "ChangeRecord",
    "ChangeStatus",
    "Classification",
    "DirtyPath",
    "DirtyScope",
    "FileEntry",
    "IdeStatus",
    "PassOutcome",
    "PendingRemovals",
    "ScanMode",
    "Verdict",
    "WorkPath",
    "as_work_path",
    "canonical_path",
    "path_key",
]
