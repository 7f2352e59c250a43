"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Classification(StrEnum):
    """Bucket a path lands in after one reconciliation pass."""

    NEW = "new"
    CHANGED = "changed"
    HIJACKED = "hijacked"
    IGNORED = "ignored"
    MERGE_CONFLICT = "merge_conflict"


class Verdict(StrEnum):
    """Per-path answer of the external tool. Absence means unchanged/unknown."""

    NON_EXISTENT = "non_existent"
    CHECKED_OUT = "checked_out"
    HIJACKED = "hijacked"


class IdeStatus(StrEnum):
    """Last status the host IDE displayed for a file."""

    NOT_CHANGED = "not_changed"
    ADDED = "added"
    UNKNOWN = "unknown"
    MODIFIED = "modified"
    HIJACKED = "hijacked"
    DELETED = "deleted"
    IGNORED = "ignored"
    MERGED_WITH_CONFLICTS = "merged_with_conflicts"


class ChangeStatus(StrEnum):
    """Status attached to an emitted change record."""

    ADDED = "added"
    MODIFIED = "modified"
    HIJACKED = "hijacked"
    DELETED = "deleted"
    MERGED_WITH_CONFLICTS = "merged_with_conflicts"


class ScanMode(StrEnum):
    BATCH = "batch"
    INCREMENTAL = "incremental"


class PassOutcome(StrEnum):
    """How a reconciliation pass ended."""

    COMPLETED = "completed"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"
    CONNECTIVITY_LOST = "connectivity_lost"
    TOOL_FAILED = "tool_failed"
