"""Per-pass state owned by the orchestrator.

A fresh ``ReconciliationContext`` is created for every pass and handed to each
phase in turn; nothing in it survives the pass. The rename ledger is the only
long-lived structure it references, and phases only read from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from viewstate.domain.model import Classification, ScanMode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from viewstate.domain.model import WorkPath

    from .ledger import RenameLedger


def _new_buckets() -> dict[Classification, dict[str, WorkPath]]:
    return {classification: {} for classification in Classification}


@dataclass(slots=True)
class ClassificationSets:
    """Pairwise disjoint classification buckets plus the writable candidates.

    Assigning a path to a bucket removes it from every other bucket, so the
    latest decision for a path wins. Buckets keep insertion order.
    """

    _buckets: dict[Classification, dict[str, WorkPath]] = field(
        default_factory=_new_buckets, repr=False
    )
    _writable: dict[str, WorkPath] = field(default_factory=dict, repr=False)

    def assign(self, path: WorkPath, classification: Classification) -> None:
        for other, bucket in self._buckets.items():
            if other is not classification:
                bucket.pop(path.key, None)
        if classification is Classification.IGNORED:
            self._writable.pop(path.key, None)
        self._buckets[classification][path.key] = path

    def assign_all(self, paths: Iterable[WorkPath], classification: Classification) -> None:
        for path in paths:
            self.assign(path, classification)

    def classification_of(self, path: WorkPath) -> Classification | None:
        for classification, bucket in self._buckets.items():
            if path.key in bucket:
                return classification
        return None

    def members(self, classification: Classification) -> tuple[WorkPath, ...]:
        return tuple(self._buckets[classification].values())

    def count(self, classification: Classification) -> int:
        return len(self._buckets[classification])

    def counts(self) -> dict[Classification, int]:
        return {classification: len(bucket) for classification, bucket in self._buckets.items()}

    def add_writable(self, path: WorkPath) -> None:
        if path.key in self._buckets[Classification.IGNORED]:
            return
        self._writable[path.key] = path

    @property
    def writable(self) -> tuple[WorkPath, ...]:
        return tuple(self._writable.values())


@dataclass(slots=True)
class ReconciliationContext:
    ledger: RenameLedger
    mode: ScanMode
    offline: bool = False
    sets: ClassificationSets = field(default_factory=ClassificationSets)

    @property
    def is_batch(self) -> bool:
        return self.mode is ScanMode.BATCH

    def assign(self, path: WorkPath, classification: Classification) -> None:
        self.sets.assign(path, classification)
