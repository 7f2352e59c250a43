"""Change-classification engine for a working copy of a remote repository.

One pass flows through these stages:
1) pick batch or incremental scanning from the dirty scope
2) collect ignored paths and writable candidates
3) settle what the heuristic decision table can decide
4) resolve the rest with the external tool (or cached state when offline)
5) correct refactoring artefacts
6) tag activities and emit the result

The rename ledger is consulted by every stage that talks to the repository.
"""

from __future__ import annotations

from .activities import ActivityTagger
from .context import ClassificationSets, ReconciliationContext
from .emission import ResultEmitter
from .heuristics import (
    CachedStatusRule,
    HeuristicDecision,
    HeuristicRule,
    JustCheckedOutRule,
    MergeConflictRule,
    StatusHeuristicFilter,
    default_rules,
)
from .ledger import RenameEntry, RenameLedger
from .orchestrator import ReconciliationOrchestrator, ReconciliationResult
from .resolver import BatchStatusResolver
from .scan import select_scan_mode
from .walk import is_proper_notification

__all__ = [
    "ActivityTagger",
    "BatchStatusResolver",
    "CachedStatusRule",
    "ClassificationSets",
    "HeuristicDecision",
    "HeuristicRule",
    "JustCheckedOutRule",
    "MergeConflictRule",
    "ReconciliationContext",
    "ReconciliationOrchestrator",
    "ReconciliationResult",
    "RenameEntry",
    "RenameLedger",
    "ResultEmitter",
    "StatusHeuristicFilter",
    "default_rules",
    "is_proper_notification",
    "select_scan_mode",
]
