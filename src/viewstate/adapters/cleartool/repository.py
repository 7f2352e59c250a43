"""``RepositoryTool`` backed by cleartool, plus the view update command."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from viewstate.domain.errors import ToolError
from viewstate.domain.model import Verdict, WorkPath

from .client import CleartoolRunner
from .parser import (
    ViewUpdate,
    parse_checkout_output,
    parse_describe_output,
    parse_status_output,
    parse_update_output,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

log = getLogger(__name__)

DESCRIBE_ACTIVITY_FORMAT = "%En\\t%[activity]p\\n"
DYNAMIC_VIEW_SIGNATURE = "valid snapshot view path"


def _chunks(paths: Sequence[WorkPath], size: int) -> Iterator[Sequence[WorkPath]]:
    for start in range(0, len(paths), size):
        yield paths[start : start + size]


@dataclass(slots=True)
class CleartoolRepository:
    runner: CleartoolRunner = field(default_factory=CleartoolRunner)

    @property
    def chunk_size(self) -> int:
        return self.runner.config.paths_per_invocation

    def resolve_multi(self, paths: Iterable[WorkPath]) -> dict[WorkPath, Verdict]:
        """One ``ls`` per chunk; paths without a verdict are absent from the result."""

        ordered = list(dict.fromkeys(paths))
        verdicts: dict[WorkPath, Verdict] = {}
        for chunk in _chunks(ordered, self.chunk_size):
            output = self.runner.run("ls", "-directory", *(p.path for p in chunk), check=False)
            for record in parse_status_output(output.text):
                verdicts[WorkPath(record.path)] = record.verdict
        log.debug("Resolved %d verdicts for %d paths", len(verdicts), len(ordered))
        return verdicts

    def exists_in_repository(self, path: WorkPath) -> bool:
        return self.resolve_multi([path]).get(path) is not Verdict.NON_EXISTENT

    def list_checked_out_by_me(self, root: WorkPath) -> set[WorkPath]:
        output = self.runner.run("lsco", "-me", "-short", "-recurse", cwd=root)
        return {
            path for path in parse_checkout_output(root, output.stdout) if os.path.isfile(path.path)
        }

    def describe_multi(self, paths: Iterable[WorkPath]) -> dict[WorkPath, str]:
        ordered = list(dict.fromkeys(paths))
        activities: dict[WorkPath, str] = {}
        for chunk in _chunks(ordered, self.chunk_size):
            output = self.runner.run(
                "describe",
                "-fmt",
                DESCRIBE_ACTIVITY_FORMAT,
                *(p.path for p in chunk),
                check=False,
            )
            for record in parse_describe_output(output.stdout):
                activities[WorkPath(record.path)] = record.activity
        return activities

    def current_activity(self, root: WorkPath) -> str | None:
        """Activity the view holding ``root`` is currently set to, if any."""

        output = self.runner.run("lsactivity", "-cact", "-short", cwd=root, check=False)
        for line in output.stdout.splitlines():
            if line.strip():
                return line.strip()
        return None

    def update(self, root: WorkPath) -> ViewUpdate:
        output = self.runner.run("update", "-force", root.path, check=False)
        if DYNAMIC_VIEW_SIGNATURE in output.text:
            raise ToolError(
                f"You can not update a dynamic view: {root.path}",
                command=output.command,
            )
        if not output.ok and not output.stdout.strip():
            raise ToolError(output.stderr.strip() or "update failed", command=output.command)
        result = parse_update_output(root, output.stdout)
        log.info(
            "Updated %s: %d loaded, %d kept hijacked, %d unloaded",
            root,
            len(result.updated),
            len(result.skipped),
            len(result.removed),
        )
        return result
