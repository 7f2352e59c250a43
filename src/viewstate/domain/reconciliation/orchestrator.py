"""Reconciliation orchestrator: one pass from dirty scope to emitted changes.

Phases run strictly in order (collect, analyse, tag activities, emit) and the
progress token is only consulted between them. A pass owns its
``ReconciliationContext`` exclusively; a second pass for the same working copy
may not start while one is running.

Errors from the external tool end the pass without emitting anything, leaving
whatever the presentation layer showed before untouched:
- connectivity failure: switch to offline mode for the following passes
- any other tool failure, or the tool not starting: report and abort
Invariant violations propagate to the caller.
"""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from viewstate.domain.errors import (
    ConnectivityFailure,
    InvariantViolation,
    PassInProgressError,
    ToolError,
    ToolStartFailure,
)
from viewstate.domain.model import Classification, PassOutcome, ScanMode

from .activities import ActivityTagger
from .context import ReconciliationContext
from .emission import ResultEmitter
from .heuristics import StatusHeuristicFilter, default_rules
from .postprocess import reclassify_new_over_renamed, restore_cached_statuses
from .resolver import BatchStatusResolver
from .scan import select_scan_mode
from .walk import collect_dirty_directories, collect_dirty_files, collect_project_content

if TYPE_CHECKING:
    from viewstate.config.view import ViewSettings
    from viewstate.domain.model import DirtyScope
    from viewstate.domain.ports import (
        ActivityRegistry,
        ChangeSink,
        FileMarkers,
        Notifier,
        ProgressToken,
        ProjectLayout,
        RepositoryTool,
        StatusCache,
        UiScheduler,
        VersionControlHost,
    )

    from .ledger import RenameLedger

log = getLogger(__name__)

REMINDER_TITLE = "Reminder"
REMINDER_TEXT = "Project started with ClearCase configured to be in the Offline mode."
CONNECTION_PROBLEM_TITLE = "Server Connection Problem"
FAIL_TO_CONNECT_MSG = "Failed to connect to ClearCase Server: "
OFFLINE_SWITCH_MSG = "\n\nSwitching to the offline mode"
FAIL_TO_START_MSG = "Failed to start Cleartool. Check ClearCase installation."


class _PassCancelled(Exception):  # noqa: N818
    pass


@dataclass(slots=True)
class ReconciliationResult:
    """Summary of one pass."""

    outcome: PassOutcome
    mode: ScanMode | None = None
    counts: dict[Classification, int] = field(default_factory=dict)
    message: str | None = None

    @property
    def emitted(self) -> bool:
        return self.outcome is PassOutcome.COMPLETED


@dataclass(slots=True)
class ReconciliationOrchestrator:
    host: VersionControlHost
    layout: ProjectLayout
    tool: RepositoryTool
    markers: FileMarkers
    status_cache: StatusCache
    settings: ViewSettings
    ledger: RenameLedger
    scheduler: UiScheduler
    notifier: Notifier
    activities: ActivityRegistry | None = None
    heuristics: StatusHeuristicFilter = field(init=False)
    tagger: ActivityTagger | None = field(init=False)
    _first_pass: bool = field(default=True, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.heuristics = StatusHeuristicFilter(default_rules(self.markers, self.status_cache))
        self.tagger = (
            ActivityTagger(self.activities, self.tool, self.layout)
            if self.activities is not None
            else None
        )

    def reconcile(
        self,
        scope: DirtyScope,
        sink: ChangeSink,
        progress: ProgressToken | None = None,
    ) -> ReconciliationResult:
        if not self._lock.acquire(blocking=False):
            raise PassInProgressError("A reconciliation pass is already running")
        try:
            return self._run_pass(scope, sink, progress)
        finally:
            self._lock.release()

    def _run_pass(
        self,
        scope: DirtyScope,
        sink: ChangeSink,
        progress: ProgressToken | None,
    ) -> ReconciliationResult:
        self._validate_scope(scope)
        _log_scope(scope)

        roots = self.layout.content_roots()
        if not roots:
            log.info("No content roots mapped to the VCS, nothing to reconcile")
            return ReconciliationResult(outcome=PassOutcome.SKIPPED)

        mode = select_scan_mode(scope.recursively_dirty_dirs, roots)
        offline = self.settings.offline
        self._show_optional_reminder(mode, offline=offline)
        self._first_pass = False

        context = ReconciliationContext(ledger=self.ledger, mode=mode, offline=offline)
        try:
            self._collect(context, scope, progress)
            log.info("Passed collection phase")
            _checkpoint(progress)

            if offline:
                restore_cached_statuses(context, self.host)
            else:
                self._compute_statuses(context)
                reclassify_new_over_renamed(context, self.host)
            log.info("Passed analysis phase")
            _checkpoint(progress)

            if self.settings.use_activities and self.tagger is not None and not offline:
                self.tagger.prune(context, scope)
                self.tagger.tag_changed(context)
                log.info("Passed activity description phase")
            _checkpoint(progress)

            tagger = self.tagger if self.settings.use_activities else None
            ResultEmitter(self.host, tagger).emit(context, sink)
            return ReconciliationResult(
                outcome=PassOutcome.COMPLETED, mode=mode, counts=context.sets.counts()
            )
        except _PassCancelled:
            log.info("Reconciliation cancelled")
            return ReconciliationResult(outcome=PassOutcome.CANCELLED, mode=mode)
        except ConnectivityFailure as exc:
            message = FAIL_TO_CONNECT_MSG + str(exc) + OFFLINE_SWITCH_MSG
            self.settings.offline = True
            self._report_error(message)
            return ReconciliationResult(
                outcome=PassOutcome.CONNECTIVITY_LOST, mode=mode, message=message
            )
        except ToolError as exc:
            message = FAIL_TO_CONNECT_MSG + str(exc)
            self._report_error(message)
            return ReconciliationResult(outcome=PassOutcome.TOOL_FAILED, mode=mode, message=message)
        except ToolStartFailure as exc:
            message = f"{FAIL_TO_START_MSG}: {exc}"
            self._report_error(message)
            return ReconciliationResult(outcome=PassOutcome.TOOL_FAILED, mode=mode, message=message)
        finally:
            sets = context.sets
            log.info(
                "End of pass | New: %s, modified: %s, hijacked: %s, ignored: %s",
                sets.count(Classification.NEW),
                sets.count(Classification.CHANGED),
                sets.count(Classification.HIJACKED),
                sets.count(Classification.IGNORED),
            )

    def _collect(
        self,
        context: ReconciliationContext,
        scope: DirtyScope,
        progress: ProgressToken | None,
    ) -> None:
        if context.is_batch:
            collect_project_content(
                context,
                scope.recursively_dirty_dirs,
                host=self.host,
                layout=self.layout,
                progress=progress,
            )
        collect_dirty_directories(context, scope, host=self.host)
        collect_dirty_files(context, scope, host=self.host, layout=self.layout)

    def _compute_statuses(self, context: ReconciliationContext) -> None:
        log.info("%s ignored files accumulated so far", context.sets.count(Classification.IGNORED))
        survivors = self.heuristics.apply(context, context.sets.writable)
        resolver = BatchStatusResolver(
            tool=self.tool,
            host=self.host,
            layout=self.layout,
            iterative_limit=self.settings.iterative_status_limit,
        )
        resolver.resolve(context, survivors)

    def _validate_scope(self, scope: DirtyScope) -> None:
        for path in scope.all_paths():
            if not self.host.owns(path):
                raise InvariantViolation(f"Not valid scope for current VCS: {path}")

    def _show_optional_reminder(self, mode: ScanMode, *, offline: bool) -> None:
        """Remind on the first full pass that offline mode was left switched on."""

        if mode is ScanMode.BATCH and self._first_pass and offline:
            notifier = self.notifier
            self.scheduler.invoke_later(lambda: notifier.warning(REMINDER_TITLE, REMINDER_TEXT))

    def _report_error(self, message: str) -> None:
        log.info(message)
        notifier = self.notifier
        self.scheduler.invoke_later(lambda: notifier.error(CONNECTION_PROBLEM_TITLE, message))


def _checkpoint(progress: ProgressToken | None) -> None:
    if progress is not None and progress.is_canceled():
        raise _PassCancelled


def _log_scope(scope: DirtyScope) -> None:
    extensions = Counter(
        suffix
        for entry in scope.dirty_files
        if (suffix := _extension(entry.path.name)) is not None
    )
    masks = "; ".join(f"{ext} - {count}" for ext, count in sorted(extensions.items()))
    log.info(
        "Dirty files: %s == %s, dirty recursive directories: %s",
        len(scope.dirty_files),
        masks,
        len(scope.recursively_dirty_dirs),
    )
    for entry in scope.dirty_files:
        log.debug("  dirty file: %s", entry.path)
    for directory in scope.recursively_dirty_dirs:
        log.debug("  dirty directory: %s", directory)


def _extension(name: str) -> str | None:
    index = name.rfind(".")
    if index == -1:
        return None
    return name[index:]
