"""Turn raw cleartool output into typed records.

Nothing outside this module looks at cleartool text. Lines that match no known
shape raise ``ParseAnomaly`` internally and are skipped; a bad line never fails
the whole command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

from pydantic import ValidationError

from viewstate.domain.errors import ParseAnomaly
from viewstate.domain.model import Verdict, WorkPath

from .schema import ActivityRecord, StatusRecord, UpdateKind, UpdateRecord

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

log = getLogger(__name__)

T = TypeVar("T")

VERSION_SEPARATOR = "@@"
HIJACKED_MARKER = "[hijacked]"
CHECKEDOUT_MARKER = "CHECKEDOUT"
TOOL_PREFIX = "cleartool:"
NOT_FOUND_PREFIX = 'cleartool: Error: Pathname not found: "'
DESCRIBE_DELIMITER = "\t"

LOADING_SIG = 'Loading "'
KEEP_HIJACKED_SIG = 'Keeping hijacked object "'
UNLOADED_SIG = 'Unloaded "'
BASE_DELIM = " - base "
VIEW_BASE_PATH_SIG = "Log has been written to"
UPDATE_FILE_PREFIX_SIG = "update."


def _lines(output: str) -> Iterator[str]:
    for line in output.splitlines():
        stripped = line.strip()
        if stripped:
            yield stripped


def _parse_each(output: str, parse_line: Callable[[str], T | None]) -> list[T]:
    records: list[T] = []
    for line in _lines(output):
        try:
            record = parse_line(line)
        except (ParseAnomaly, ValidationError) as exc:
            log.debug("Skipping tool output line: %s", exc)
            continue
        if record is not None:
            records.append(record)
    return records


def parse_status_line(line: str) -> StatusRecord | None:
    """Interpret one line of ``cleartool ls -directory``.

    ``foo.c@@/main/CHECKEDOUT from /main/3  Rule: CHECKEDOUT`` is checked out,
    ``foo.c@@/main/3 [hijacked]  Rule: ...`` is hijacked, a bare name is a
    view-private object and a "Pathname not found" error means the element
    does not exist. Other versioned lines carry no verdict.
    """

    if line.startswith(NOT_FOUND_PREFIX):
        path = line[len(NOT_FOUND_PREFIX) :].rsplit('"', 1)[0]
        return StatusRecord(path=path, verdict=Verdict.NON_EXISTENT)
    if line.startswith(TOOL_PREFIX):
        raise ParseAnomaly(line)

    path, separator, rest = line.partition(VERSION_SEPARATOR)
    if not separator:
        return StatusRecord(path=line, verdict=Verdict.NON_EXISTENT)

    parts = rest.split()
    version = parts[0] if parts else ""
    if HIJACKED_MARKER in rest:
        return StatusRecord(path=path, verdict=Verdict.HIJACKED)
    if version.endswith(CHECKEDOUT_MARKER) or f"/{CHECKEDOUT_MARKER}." in version:
        return StatusRecord(path=path, verdict=Verdict.CHECKED_OUT)
    return None


def parse_status_output(output: str) -> list[StatusRecord]:
    return _parse_each(output, parse_status_line)


def parse_checkout_output(root: WorkPath, output: str) -> list[WorkPath]:
    """Paths listed by ``cleartool lsco -me -short -recurse`` run inside ``root``."""

    def parse_line(line: str) -> WorkPath:
        if line.startswith(TOOL_PREFIX):
            raise ParseAnomaly(line)
        candidate = line.replace("\\", "/")
        if candidate.startswith("/") or (len(candidate) > 1 and candidate[1] == ":"):
            return WorkPath(candidate)
        return root.child(candidate)

    return _parse_each(output, parse_line)


def parse_describe_line(line: str) -> ActivityRecord | None:
    """``<element path>\\t<activity>`` as produced by ``describe -fmt``."""

    if line.startswith(TOOL_PREFIX) or DESCRIBE_DELIMITER not in line:
        raise ParseAnomaly(line)
    path, _, activity = line.partition(DESCRIBE_DELIMITER)
    if not activity.strip():
        return None
    return ActivityRecord(path=path, activity=activity)


def parse_describe_output(output: str) -> list[ActivityRecord]:
    return _parse_each(output, parse_describe_line)


@dataclass(slots=True)
class ViewUpdate:
    """Grouped outcome of ``cleartool update`` for one content root."""

    root: WorkPath
    updated: list[WorkPath] = field(default_factory=list)
    skipped: list[WorkPath] = field(default_factory=list)
    removed: list[WorkPath] = field(default_factory=list)

    def add(self, record: UpdateRecord, base: str) -> None:
        path = WorkPath(base + record.path)
        bucket = {
            UpdateKind.UPDATED: self.updated,
            UpdateKind.SKIPPED: self.skipped,
            UpdateKind.REMOVED: self.removed,
        }[record.kind]
        if path not in bucket:
            bucket.append(path)


def parse_update_output(root: WorkPath, output: str) -> ViewUpdate:
    """Group the paths reported by an update log.

    Reported paths are relative to the view root; the "Log has been written to"
    line names that root and overrides ``root`` when present.
    """

    base = root.path if root.path.endswith("/") else root.path + "/"
    records: list[UpdateRecord] = []
    for line in _lines(output):
        try:
            if line.startswith(VIEW_BASE_PATH_SIG):
                base = _view_base(line) or base
                continue
            record = _parse_update_line(line)
        except (ParseAnomaly, ValidationError) as exc:
            log.debug("Skipping update output line: %s", exc)
            continue
        if record is not None:
            records.append(record)

    result = ViewUpdate(root=root)
    for record in records:
        result.add(record, base)
    return result


def _parse_update_line(line: str) -> UpdateRecord | None:
    if line.startswith(LOADING_SIG):
        last_quote = line.rfind('"')
        if last_quote < len(LOADING_SIG):
            raise ParseAnomaly(line)
        return UpdateRecord(path=line[len(LOADING_SIG) : last_quote], kind=UpdateKind.UPDATED)
    if line.startswith(KEEP_HIJACKED_SIG):
        delimiter = line.rfind(BASE_DELIM)
        if delimiter == -1:
            raise ParseAnomaly(line)
        path = line[len(KEEP_HIJACKED_SIG) : delimiter].rstrip('"')
        return UpdateRecord(path=path, kind=UpdateKind.SKIPPED)
    if line.startswith(UNLOADED_SIG):
        path = line[len(UNLOADED_SIG) :].rstrip(".").rstrip('"')
        return UpdateRecord(path=path, kind=UpdateKind.REMOVED)
    return None


def _view_base(line: str) -> str | None:
    start = line.rfind(UPDATE_FILE_PREFIX_SIG)
    if start == -1:
        return None
    base = line[len(VIEW_BASE_PATH_SIG) : start].strip().lstrip('"')
    return base.replace("\\", "/") or None
