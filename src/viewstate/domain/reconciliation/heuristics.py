"""Decision table that settles a candidate's status without asking the tool.

Rules are evaluated in order and the first one returning a classification wins,
so precedence is exactly the order of ``default_rules``: markers left by
checkout/merge operations come before the IDE's cached status, which may still
be stale right after a checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from viewstate.domain.model import Classification, IdeStatus

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from viewstate.domain.model import WorkPath
    from viewstate.domain.ports import FileMarkers, StatusCache

    from .context import ReconciliationContext

log = getLogger(__name__)

_GUESSED_NEW_STATUSES = frozenset({IdeStatus.ADDED, IdeStatus.UNKNOWN})


class HeuristicRule(Protocol):
    """One row of the decision table."""

    name: str

    def __call__(self, path: WorkPath) -> Classification | None: ...


@dataclass(frozen=True, slots=True)
class HeuristicDecision:
    path: WorkPath
    classification: Classification
    rule: str


@dataclass(slots=True)
class JustCheckedOutRule:
    """A successful checkout leaves the file Changed. The marker is consumed."""

    markers: FileMarkers
    name: str = "just_checked_out"

    def __call__(self, path: WorkPath) -> Classification | None:
        if not self.markers.has_checkout_marker(path):
            return None
        self.markers.clear_checkout_marker(path)
        return Classification.CHANGED


@dataclass(slots=True)
class MergeConflictRule:
    markers: FileMarkers
    name: str = "merge_conflict"

    def __call__(self, path: WorkPath) -> Classification | None:
        if self.markers.has_merge_marker(path):
            return Classification.MERGE_CONFLICT
        return None


@dataclass(slots=True)
class CachedStatusRule:
    """Added/unversioned files can only stay new.

    Without "keep checked out after check-in" an added or unknown file cannot
    have become modified, and the added/unversioned split is decided at
    emission time.
    """

    status_cache: StatusCache
    name: str = "cached_status"

    def __call__(self, path: WorkPath) -> Classification | None:
        if self.status_cache.last_known_status(path) in _GUESSED_NEW_STATUSES:
            return Classification.NEW
        return None


def default_rules(markers: FileMarkers, status_cache: StatusCache) -> tuple[HeuristicRule, ...]:
    return (
        JustCheckedOutRule(markers),
        MergeConflictRule(markers),
        CachedStatusRule(status_cache),
    )


@dataclass(slots=True)
class StatusHeuristicFilter:
    rules: Sequence[HeuristicRule] = field(default_factory=tuple)

    def decide(self, path: WorkPath) -> HeuristicDecision | None:
        for rule in self.rules:
            classification = rule(path)
            if classification is not None:
                return HeuristicDecision(path=path, classification=classification, rule=rule.name)
        return None

    def apply(
        self, context: ReconciliationContext, candidates: Iterable[WorkPath]
    ) -> list[WorkPath]:
        """Classify what the table can decide and return the undecided rest."""

        survivors: list[WorkPath] = []
        decided = 0
        for path in candidates:
            decision = self.decide(path)
            if decision is None:
                survivors.append(path)
                continue
            decided += 1
            context.assign(path, decision.classification)
        log.info("Heuristics decided %s paths, %s left for the tool", decided, len(survivors))
        return survivors
