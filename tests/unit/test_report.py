"""Tests for the text report."""

from collections.abc import Callable

import pytest

from maildedup.models import DupeRecord, GroupResult, KeyKind
from maildedup.parse import FileFailure
from maildedup.report import format_group_result, format_report, format_summary, summarize
from maildedup.report.formatter import format_failures, format_record


def _result(keep: DupeRecord, *dupes: DupeRecord) -> GroupResult:
    return GroupResult(key=keep.key, dupes=tuple(dupes), keep=(keep,))


@pytest.mark.unit
def test_format_record_marks_secondary_origin(make_record: Callable[..., DupeRecord]) -> None:
    assert format_record(make_record("/a", header_count=12)) == "/a: 12"
    assert (
        format_record(make_record("/b", header_count=3, is_primary_origin=False))
        == "/b: 3 (secondary origin)"
    )


@pytest.mark.unit
def test_format_group_result_layout(make_record: Callable[..., DupeRecord]) -> None:
    keep = make_record("/Sent/7", header_count=9)
    result = _result(keep, make_record("/Inbox/1", header_count=12), make_record("/Inbox/2"))

    text = format_group_result(result)

    assert text == (
        f"clean:{keep.key.hex}:\n"
        "\tDupes:\n"
        "\t\t/Inbox/1: 12\n"
        "\t\t/Inbox/2: 10\n"
        "\tKeep:\n"
        "\t\t/Sent/7: 9"
    )


@pytest.mark.unit
def test_format_group_without_dupes(make_record: Callable[..., DupeRecord]) -> None:
    text = format_group_result(_result(make_record("/only", kind=KeyKind.DIRTY)))

    assert text.startswith("dirty:")
    assert "\tDupes:\n\t\t\n\tKeep:\n\t\t/only: 10" in text


@pytest.mark.unit
def test_summarize_counts(make_record: Callable[..., DupeRecord]) -> None:
    results = [
        _result(make_record("/a", seed="x"), *(make_record(p, seed="x") for p in ("/b", "/c"))),
        _result(make_record("/d", seed="y", kind=KeyKind.DIRTY)),
        _result(make_record("/e", seed="z"), make_record("/f", seed="z")),
    ]

    summary = summarize(results)

    assert summary.total_emails == 6
    assert summary.total_dupes == 3
    assert summary.total_unique == 3
    assert summary.clean_keys == 2
    assert summary.dirty_keys == 1
    assert summary.total_groups == 3
    assert summary.total_unique == summary.total_groups


@pytest.mark.unit
def test_format_summary_lines(make_record: Callable[..., DupeRecord]) -> None:
    summary = summarize([_result(make_record("/a"), make_record("/b"))])

    assert format_summary(summary) == [
        "Total emails: 2, total dupes: 1, total unique: 1",
        "Total keys: 1 clean, 0 dirty",
    ]


@pytest.mark.unit
def test_format_failures() -> None:
    assert format_failures([]) == []
    assert format_failures([FileFailure("/x", "no message headers found")]) == [
        "Skipped 1 unparseable file(s):",
        "\t/x: no message headers found",
    ]


@pytest.mark.unit
def test_format_report_empty_run() -> None:
    assert format_report([]) == (
        "Total emails: 0, total dupes: 0, total unique: 0\nTotal keys: 0 clean, 0 dirty"
    )


@pytest.mark.unit
def test_format_report_orders_blocks_then_totals(make_record: Callable[..., DupeRecord]) -> None:
    first = _result(make_record("/a", seed="a"))
    second = _result(make_record("/b", seed="b"), make_record("/c", seed="b"))

    lines = format_report([first, second], [FileFailure("/junk", "bad")]).split("\n")

    assert lines[0] == f"clean:{first.key.hex}:"
    assert lines[5] == f"clean:{second.key.hex}:"
    assert lines[-4] == "Total emails: 3, total dupes: 1, total unique: 2"
    assert lines[-3] == "Total keys: 2 clean, 0 dirty"
    assert lines[-2:] == ["Skipped 1 unparseable file(s):", "\t/junk: bad"]
