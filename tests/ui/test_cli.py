from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from viewstate.adapters.cleartool import ViewUpdate
from viewstate.adapters.memory import RecordingSink
from viewstate.app import StatusReport
from viewstate.domain.errors import ToolError
from viewstate.domain.model import ChangeRecord, ChangeStatus, PassOutcome, WorkPath
from viewstate.domain.reconciliation import ReconciliationResult
from viewstate.ui import cli

if TYPE_CHECKING:
    from viewstate.config import ViewSettings


class FakeSession:
    def __init__(self, outcome: PassOutcome = PassOutcome.COMPLETED) -> None:
        self.outcome = outcome
        self.paths: list[str] = []
        self.added: list[str] = []
        self.conflicts: list[str] = []

    def schedule_addition(self, path: str) -> None:
        self.added.append(path)

    def mark_merge_conflict(self, path: str) -> None:
        self.conflicts.append(path)

    def status(self, paths: list[str]) -> StatusReport:
        self.paths = list(paths)
        sink = RecordingSink()
        sink.unversioned(WorkPath("/view/New.java"))
        sink.change_in_list(
            ChangeRecord(
                WorkPath("/view/Old.java"), WorkPath("/view/Renamed.java"), ChangeStatus.MODIFIED
            ),
            "task",
        )
        return StatusReport(result=ReconciliationResult(outcome=self.outcome), sink=sink)


@pytest.fixture(autouse=True)
def quiet_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "VIEWSTATE_OFFLINE",
        "VIEWSTATE_USE_ACTIVITIES",
        "VIEWSTATE_ITERATIVE_LIMIT",
        "VIEWSTATE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def _patch_session(
    monkeypatch: pytest.MonkeyPatch, session: FakeSession
) -> dict[str, object]:
    captured: dict[str, object] = {}

    def fake_open(roots: list[str], *, settings: ViewSettings) -> FakeSession:
        captured["roots"] = roots
        captured["settings"] = settings
        return session

    monkeypatch.setattr(cli, "open_view_session", fake_open)
    return captured


def test_status_prints_each_emission(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    session = FakeSession()
    captured = _patch_session(monkeypatch, session)

    cli.main(["status", "/view", "--file", "/view/New.java", "--offline", "--limit", "10"])

    out = capsys.readouterr().out.splitlines()
    assert out[0].split() == ["unversioned", "/view/New.java"]
    assert out[1].split() == ["modified", "/view/Old.java", "->", "/view/Renamed.java", "[task]"]
    assert captured["roots"] == ["/view"]
    settings = captured["settings"]
    assert settings.offline  # type: ignore[attr-defined]
    assert settings.iterative_status_limit == 10  # type: ignore[attr-defined]
    assert session.paths == ["/view/New.java"]


def test_status_passes_additions_and_conflicts_to_the_session(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    session = FakeSession()
    _patch_session(monkeypatch, session)

    cli.main(
        [
            "status",
            "/view",
            "--added",
            "/view/New.java",
            "--added",
            "/view/Other.java",
            "--merge-conflict",
            "/view/Merged.java",
        ]
    )

    assert session.added == ["/view/New.java", "/view/Other.java"]
    assert session.conflicts == ["/view/Merged.java"]
    assert session.paths == []


def test_failed_pass_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_session(monkeypatch, FakeSession(PassOutcome.TOOL_FAILED))

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["status", "/view"])

    assert excinfo.value.code == 1


def test_invalid_limit_exits_with_two(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_session(monkeypatch, FakeSession())

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["status", "/view", "--limit", "0"])

    assert excinfo.value.code == 2


def test_configuration_error_exits_with_two(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_session(monkeypatch, FakeSession())
    monkeypatch.setenv("VIEWSTATE_OFFLINE", "sometimes")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["status", "/view"])

    assert excinfo.value.code == 2


def test_missing_roots_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["status"])

    assert excinfo.value.code == 2


def test_update_prints_grouped_result(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fake_update(roots: list[str]) -> list[ViewUpdate]:
        root = WorkPath(roots[0])
        return [ViewUpdate(root=root, updated=[root.child("a.txt")], skipped=[root.child("h")])]

    monkeypatch.setattr(cli, "update_view", fake_update)

    cli.main(["update", "/view"])

    out = capsys.readouterr().out.splitlines()
    assert out[0] == "/view:"
    assert out[1].split() == ["updated", "/view/a.txt"]
    assert out[2].split() == ["kept", "hijacked", "/view/h"]


def test_tool_error_during_update_exits_with_one(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_update(roots: list[str]) -> list[ViewUpdate]:
        raise ToolError("You can not update a dynamic view: /view")

    monkeypatch.setattr(cli, "update_view", fake_update)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["update", "/view"])

    assert excinfo.value.code == 1
