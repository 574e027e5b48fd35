"""Text report of group results and run totals."""

from maildedup.report.formatter import (
    DedupSummary,
    format_group_result,
    format_report,
    format_summary,
    summarize,
)

__all__ = [
    "DedupSummary",
    "format_group_result",
    "format_report",
    "format_summary",
    "summarize",
]
