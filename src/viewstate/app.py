"""Application entry points wiring the engine to cleartool and the local disk."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from viewstate.adapters.cleartool import CleartoolRepository, CleartoolRunner
from viewstate.adapters.memory import (
    InMemoryActivityRegistry,
    InMemoryMarkers,
    InMemoryStatusCache,
    LoggingNotifier,
    QueuedScheduler,
    RecordingSink,
)
from viewstate.adapters.workspace import LocalWorkspace, WorkspaceHost
from viewstate.config import (
    get_cleartool_config,
    get_view_settings,
    get_workspace_config,
)
from viewstate.domain.model import as_work_path
from viewstate.domain.reconciliation import (
    ReconciliationOrchestrator,
    ReconciliationResult,
    RenameLedger,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from viewstate.adapters.cleartool import ViewUpdate
    from viewstate.config import ViewSettings, WorkspaceConfig
    from viewstate.domain.model import WorkPath
    from viewstate.domain.ports import Notifier, ProgressToken

log = getLogger(__name__)


@dataclass(slots=True)
class StatusReport:
    result: ReconciliationResult
    sink: RecordingSink


@dataclass(slots=True)
class ViewSession:
    """Everything one working copy needs across reconciliation passes."""

    workspace: LocalWorkspace
    host: WorkspaceHost
    repository: CleartoolRepository
    statuses: InMemoryStatusCache
    markers: InMemoryMarkers
    scheduler: QueuedScheduler
    orchestrator: ReconciliationOrchestrator

    @property
    def settings(self) -> ViewSettings:
        return self.orchestrator.settings

    @property
    def ledger(self) -> RenameLedger:
        return self.orchestrator.ledger

    def schedule_addition(self, path: WorkPath | str) -> None:
        """Track ``path`` as added so it is reported in a change list."""

        self.host.schedule_addition(as_work_path(path))

    def mark_checked_out(self, path: WorkPath | str) -> None:
        self.markers.mark_checked_out(as_work_path(path))

    def mark_merge_conflict(self, path: WorkPath | str) -> None:
        self.markers.mark_merge_conflict(as_work_path(path))

    def resolve_merge_conflict(self, path: WorkPath | str) -> None:
        self.markers.clear_merge_marker(as_work_path(path))

    def status(
        self,
        paths: Iterable[WorkPath | str] = (),
        *,
        progress: ProgressToken | None = None,
    ) -> StatusReport:
        """Run one pass over ``paths`` (or the whole workspace) and remember the result."""

        scope = self.workspace.scope_for(as_work_path(path) for path in paths)
        sink = RecordingSink()
        result = self.orchestrator.reconcile(scope, sink, progress)
        if result.emitted:
            self.statuses.record(sink.events, scope=scope)
        self.scheduler.drain()
        return StatusReport(result=result, sink=sink)


def _roots(roots: Sequence[WorkPath | str]) -> tuple[WorkPath, ...]:
    if not roots:
        raise ValueError("At least one content root is required")
    return tuple(dict.fromkeys(as_work_path(root) for root in roots))


def open_view_session(
    roots: Sequence[WorkPath | str],
    *,
    settings: ViewSettings | None = None,
    workspace_config: WorkspaceConfig | None = None,
    repository: CleartoolRepository | None = None,
    notifier: Notifier | None = None,
    ledger: RenameLedger | None = None,
) -> ViewSession:
    """Wire a session over ``roots`` using environment configuration by default."""

    effective_settings = settings or get_view_settings()
    effective_workspace = workspace_config or get_workspace_config()
    effective_repository = repository or CleartoolRepository(
        CleartoolRunner(get_cleartool_config())
    )
    effective_ledger = ledger or RenameLedger()

    workspace = LocalWorkspace(_roots(roots))
    statuses = InMemoryStatusCache()
    host = WorkspaceHost(
        workspace=workspace,
        repository=effective_repository,
        ledger=effective_ledger,
        statuses=statuses,
        ignore_patterns=effective_workspace.ignore_patterns,
    )
    markers = InMemoryMarkers()
    scheduler = QueuedScheduler()
    activities = (
        _load_view_activities(workspace, effective_repository, effective_settings)
        if effective_settings.use_activities
        else None
    )
    orchestrator = ReconciliationOrchestrator(
        host=host,
        layout=workspace,
        tool=effective_repository,
        markers=markers,
        status_cache=statuses,
        settings=effective_settings,
        ledger=effective_ledger,
        scheduler=scheduler,
        notifier=notifier or LoggingNotifier(),
        activities=activities,
    )
    log.info(
        "Opened view session: roots=%s, offline=%s, activities=%s, limit=%s",
        len(workspace.roots),
        effective_settings.offline,
        effective_settings.use_activities,
        effective_settings.iterative_status_limit,
    )
    return ViewSession(
        workspace=workspace,
        host=host,
        repository=effective_repository,
        statuses=statuses,
        markers=markers,
        scheduler=scheduler,
        orchestrator=orchestrator,
    )


def _load_view_activities(
    workspace: LocalWorkspace,
    repository: CleartoolRepository,
    settings: ViewSettings,
) -> InMemoryActivityRegistry | None:
    if settings.offline:
        log.warning("Current activities cannot be read offline, activities disabled")
        settings.use_activities = False
        return None
    registry = InMemoryActivityRegistry()
    for root in workspace.roots:
        activity = repository.current_activity(root)
        if activity is None:
            log.warning("View at %s has no current activity, activities disabled", root)
            settings.use_activities = False
            return None
        registry.set_view_activity(root, activity)
    return registry


def update_view(
    roots: Sequence[WorkPath | str],
    *,
    repository: CleartoolRepository | None = None,
) -> list[ViewUpdate]:
    """Update every snapshot view holding one of ``roots``."""

    effective_repository = repository or CleartoolRepository(
        CleartoolRunner(get_cleartool_config())
    )
    results = [effective_repository.update(root) for root in _roots(roots)]
    log.info(
        "Finished view update: roots=%s, updated=%s, skipped=%s, removed=%s",
        len(results),
        sum(len(result.updated) for result in results),
        sum(len(result.skipped) for result in results),
        sum(len(result.removed) for result in results),
    )
    return results
