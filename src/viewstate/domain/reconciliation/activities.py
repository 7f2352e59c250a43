"""Activity tagging: which change list (activity) a changed path belongs to."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from viewstate.domain.errors import InvariantViolation
from viewstate.domain.model import Classification

if TYPE_CHECKING:
    from collections.abc import Sequence

    from viewstate.domain.model import DirtyScope, WorkPath
    from viewstate.domain.ports import ActivityRegistry, ProjectLayout, RepositoryTool

    from .context import ReconciliationContext
    from .ledger import RenameLedger

log = getLogger(__name__)

_TAGGED = (Classification.NEW, Classification.CHANGED, Classification.HIJACKED)


@dataclass(slots=True)
class ActivityTagger:
    """Resolves activities for changed paths and remembers them across passes."""

    registry: ActivityRegistry
    tool: RepositoryTool
    layout: ProjectLayout
    _cache: dict[WorkPath, str] = field(default_factory=dict, repr=False)

    def cached(self, path: WorkPath) -> str | None:
        return self._cache.get(path)

    def forget(self, path: WorkPath) -> None:
        self._cache.pop(path, None)

    def prune(self, context: ReconciliationContext, scope: DirtyScope) -> None:
        """Drop cached activities of covered paths that no longer carry a change."""

        keep = {
            path
            for classification in _TAGGED
            for path in context.sets.members(classification)
        }
        keep.update(entry.current for entry in context.ledger.folder_renames())
        stale = [path for path in self._cache if path not in keep and scope.covers(path)]
        for path in stale:
            self.forget(path)
        if stale:
            log.debug("Forgot activities of %s clean paths", len(stale))

    def tag_changed(self, context: ReconciliationContext) -> None:
        """Describe Changed paths whose activity is not known yet."""

        pending = [
            path
            for path in context.sets.members(Classification.CHANGED)
            if path not in self._cache and self.registry.checkout_activity_for(path) is None
        ]
        self.tag(pending, ledger=context.ledger)

    def tag(self, paths: Sequence[WorkPath], *, ledger: RenameLedger) -> None:
        if not paths:
            return
        originals = [ledger.lookup_original(path) for path in paths]
        log.info("Describing %s files to find their activities", len(originals))
        activities = self.tool.describe_multi(originals)

        reloaded = False
        for path, original in zip(paths, originals, strict=True):
            activity = activities.get(original)
            if activity is None:
                continue
            name = self.registry.normalized_activity_name(activity)
            if name is None and not reloaded:
                # Activities changed outside of the IDE; resync once per pass.
                reloaded = True
                self.registry.reload_activities()
                name = self.registry.normalized_activity_name(activity)
            if name is None:
                log.warning("Unknown activity %r for %s", activity, path)
                continue
            self._cache[path] = name
            self.registry.assign_to_changelist(path, name)

    def activity_for(self, before: WorkPath, after: WorkPath) -> str | None:
        """Activity to file the change ``before`` -> ``after`` under."""

        activity = self.registry.checkout_activity_for(before)
        if activity is not None:
            return activity
        activity = self._cache.get(after)
        if activity is not None:
            return activity
        if self.registry.has_change_in_list(after):
            return None

        # First sighting of this change: file it under the view's current activity.
        root = self.layout.root_for(after)
        if root is None:
            raise InvariantViolation(f"No content root owns {after}")
        activity = self.registry.view_activity_for(root)
        if activity is None:
            raise InvariantViolation(f"View for {root} has no current activity")
        self.registry.assign_to_changelist(before, activity)
        self._cache[after] = activity
        return activity
