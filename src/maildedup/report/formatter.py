"""Plain-text report for group results.

Each group prints as::

    clean:3F2A...:
    	Dupes:
    		/mail/Inbox/cur/1: 12
    	Keep:
    		/mail/Sent/cur/7: 9

followed by the totals produced by ``format_summary``.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from maildedup.models import DupeRecord, GroupResult
from maildedup.parse.ingestion import FileFailure

__all__ = [
    "DedupSummary",
    "summarize",
    "format_record",
    "format_group_result",
    "format_summary",
    "format_failures",
    "format_report",
]


@dataclass(frozen=True)
class DedupSummary:
    """Aggregate counts over all group results.

    Attributes
    ----------
    total_emails : int
        Records across all groups.
    total_dupes : int
        Records marked for deletion.
    total_unique : int
        Records kept.
    clean_keys : int
        Groups with a clean key.
    dirty_keys : int
        Groups with a dirty key.
    """

    total_emails: int
    total_dupes: int
    total_unique: int
    clean_keys: int
    dirty_keys: int

    @property
    def total_groups(self) -> int:
        return self.clean_keys + self.dirty_keys


def summarize(results: Iterable[GroupResult]) -> DedupSummary:
    """Count emails, dupes, survivors and key kinds."""
    dupes = unique = clean = dirty = 0
    for result in results:
        dupes += len(result.dupes)
        unique += len(result.keep)
        if result.key.is_clean:
            clean += 1
        else:
            dirty += 1

    return DedupSummary(
        total_emails=dupes + unique,
        total_dupes=dupes,
        total_unique=unique,
        clean_keys=clean,
        dirty_keys=dirty,
    )


def format_record(record: DupeRecord) -> str:
    line = f"{record.path}: {record.header_count}"
    if not record.is_primary_origin:
        line += " (secondary origin)"
    return line


def _format_records(records: Sequence[DupeRecord]) -> str:
    return "\n\t\t".join(format_record(r) for r in records)


def format_group_result(result: GroupResult) -> str:
    """Format one group result as a report block."""
    return (
        f"{result.key.kind}:{result.key.hex}:\n"
        f"\tDupes:\n\t\t{_format_records(result.dupes)}\n"
        f"\tKeep:\n\t\t{_format_records(result.keep)}"
    )


def format_summary(summary: DedupSummary) -> list[str]:
    """Format the summary lines printed after the group blocks."""
    return [
        f"Total emails: {summary.total_emails}, "
        f"total dupes: {summary.total_dupes}, "
        f"total unique: {summary.total_unique}",
        f"Total keys: {summary.clean_keys} clean, {summary.dirty_keys} dirty",
    ]


def format_failures(failures: Sequence[FileFailure]) -> list[str]:
    if not failures:
        return []
    lines = [f"Skipped {len(failures)} unparseable file(s):"]
    lines.extend(f"\t{f.path}: {f.message}" for f in failures)
    return lines


def format_report(
    results: Sequence[GroupResult],
    failures: Sequence[FileFailure] = (),
) -> str:
    """Format the complete report: group blocks, summary and skipped files."""
    lines = [format_group_result(result) for result in results]
    lines.extend(format_summary(summarize(results)))
    lines.extend(format_failures(failures))
    return "\n".join(lines)
