"""Ask the external tool for the status of the remaining candidates.

Below the iterative limit every candidate is resolved individually (in one
aggregate query) under its rename-resolved name. At or above it, a single
"checked out by me" listing per content root replaces per-path status: listed
files are Changed and everything else is New. Hijacked files cannot be told
apart from new ones in that mode; the listing is what makes large passes
affordable, so the imprecision is accepted.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from viewstate.config.view import DEFAULT_ITERATIVE_STATUS_LIMIT
from viewstate.domain.model import Classification, Verdict

if TYPE_CHECKING:
    from collections.abc import Sequence

    from viewstate.domain.model import WorkPath
    from viewstate.domain.ports import ProjectLayout, RepositoryTool, VersionControlHost

    from .context import ReconciliationContext

log = getLogger(__name__)

_CLASSIFICATION_BY_VERDICT = {
    Verdict.NON_EXISTENT: Classification.NEW,
    Verdict.CHECKED_OUT: Classification.CHANGED,
    Verdict.HIJACKED: Classification.HIJACKED,
}


@dataclass(slots=True)
class BatchStatusResolver:
    tool: RepositoryTool
    host: VersionControlHost
    layout: ProjectLayout
    iterative_limit: int = DEFAULT_ITERATIVE_STATUS_LIMIT

    def resolve(self, context: ReconciliationContext, candidates: Sequence[WorkPath]) -> None:
        if len(candidates) < self.iterative_limit:
            self.resolve_iteratively(context, candidates)
        else:
            self.resolve_from_checkouts(context, candidates)

        if context.is_batch:
            self.propagate_new_folders(context)

    def resolve_iteratively(
        self, context: ReconciliationContext, candidates: Sequence[WorkPath]
    ) -> None:
        if not candidates:
            return
        originals = [context.ledger.lookup_original(path) for path in candidates]
        log.info("Resolving status of %s files in one query", len(originals))
        verdicts = self.tool.resolve_multi(originals)
        log.info("Status query finished")

        for path, original in zip(candidates, originals, strict=True):
            verdict = verdicts.get(original)
            if verdict is None:
                continue
            context.assign(path, _CLASSIFICATION_BY_VERDICT[verdict])

    def resolve_from_checkouts(
        self, context: ReconciliationContext, candidates: Sequence[WorkPath]
    ) -> None:
        log.info("Resolving %s files from the list of checkouts", len(candidates))
        checked_out: set[WorkPath] = set()
        for root in self.layout.content_roots():
            checked_out |= self.tool.list_checked_out_by_me(root)
        log.info("Total %s non-folder checkouts found", len(checked_out))

        for path in checked_out:
            if context.sets.classification_of(path) is None:
                context.assign(path, Classification.CHANGED)
        for path in candidates:
            if path not in checked_out:
                context.assign(path, Classification.NEW)

    def propagate_new_folders(self, context: ReconciliationContext) -> None:
        """Mark version-controlled ancestors of new paths that the repository lacks.

        Climbs from each New path towards the project boundary, stopping at the
        first ancestor the repository knows. Ancestors are visited once per pass.
        """

        visited: set[WorkPath] = set()
        new_folders: list[WorkPath] = []
        for path in context.sets.members(Classification.NEW):
            parent = path.parent
            while (
                parent is not None
                and parent not in visited
                and self.layout.is_under_project(parent)
                and self.host.is_under_version_control(parent)
            ):
                visited.add(parent)
                if self.host.exists_in_repository(context.ledger.lookup_original(parent)):
                    break
                log.info("Folder %s is not in the repository", parent)
                new_folders.append(parent)
                parent = parent.parent

        context.sets.assign_all(new_folders, Classification.NEW)
