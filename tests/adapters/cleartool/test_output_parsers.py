from __future__ import annotations

import pytest
from pydantic import ValidationError

from viewstate.adapters.cleartool import (
    parse_checkout_output,
    parse_describe_output,
    parse_status_output,
    parse_update_output,
)
from viewstate.adapters.cleartool.parser import parse_status_line
from viewstate.adapters.cleartool.schema import StatusRecord
from viewstate.domain.errors import ParseAnomaly
from viewstate.domain.model import Verdict, WorkPath

LS_OUTPUT = """\
/view/src/Main.java@@/main/dev/CHECKEDOUT from /main/dev/4    Rule: CHECKEDOUT
/view/src/Util.java@@/main/7 [hijacked]                      Rule: /main/LATEST
/view/src/Clean.java@@/main/3                                Rule: /main/LATEST
/view/src/Fresh.java
cleartool: Error: Pathname not found: "/view/src/Gone.java".
cleartool: Warning: something odd happened
"""


def test_ls_output_yields_verdicts_only_for_interesting_paths() -> None:
    records = parse_status_output(LS_OUTPUT)

    assert [(record.path, record.verdict) for record in records] == [
        ("/view/src/Main.java", Verdict.CHECKED_OUT),
        ("/view/src/Util.java", Verdict.HIJACKED),
        ("/view/src/Fresh.java", Verdict.NON_EXISTENT),
        ("/view/src/Gone.java", Verdict.NON_EXISTENT),
    ]


def test_unexpected_tool_line_is_an_anomaly() -> None:
    with pytest.raises(ParseAnomaly):
        parse_status_line("cleartool: Error: Unable to access element")


def test_record_rejects_blank_path() -> None:
    with pytest.raises(ValidationError):
        StatusRecord(path="  ", verdict=Verdict.HIJACKED)


def test_lsco_output_is_joined_to_the_root() -> None:
    output = "src/Main.java\n.\\lib\\Util.java\n/abs/Other.java\ncleartool: Error: oops\n\n"

    paths = parse_checkout_output(WorkPath("/view"), output)

    assert paths == [
        WorkPath("/view/src/Main.java"),
        WorkPath("/view/lib/Util.java"),
        WorkPath("/abs/Other.java"),
    ]


def test_describe_output_pairs_paths_with_activities() -> None:
    output = (
        "/view/a.txt\tactivity:fix@/vobs/pvob\n"
        "/view/b.txt\t\n"
        "no delimiter here\n"
    )

    records = parse_describe_output(output)

    assert [(record.path, record.activity) for record in records] == [
        ("/view/a.txt", "activity:fix@/vobs/pvob"),
    ]


def test_update_log_is_grouped_by_outcome() -> None:
    output = """\
Loading "src/Main.java" (1234 bytes).
Keeping hijacked object "src/Util.java" - base "/main/3".
Unloaded "src/Old.java".
Processing dir "src".
"""

    result = parse_update_output(WorkPath("/view"), output)

    assert result.updated == [WorkPath("/view/src/Main.java")]
    assert result.skipped == [WorkPath("/view/src/Util.java")]
    assert result.removed == [WorkPath("/view/src/Old.java")]


def test_update_log_location_rebases_reported_paths() -> None:
    output = (
        'Log has been written to "/snap/view/update.2024-01-01T10:00:00+01:00.updt".\n'
        'Loading "src/Main.java" (12 bytes).\n'
    )

    result = parse_update_output(WorkPath("/snap/view/src"), output)

    assert result.updated == [WorkPath("/snap/view/src/Main.java")]
