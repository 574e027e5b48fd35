"""Run configuration and result dataclasses."""

from dataclasses import dataclass, field
from typing import Any

from maildedup.models import GroupResult
from maildedup.parse.ingestion import DEFAULT_ORIGIN_MARKERS, FileFailure
from maildedup.report.formatter import DedupSummary
from maildedup.selection.keep_selector import DEFAULT_PREFERRED_FOLDERS


@dataclass
class DedupConfig:
    """Configuration for a deduplication run.

    Attributes
    ----------
    workers : int | None
        Maximum ingestion threads. None uses the executor default.
    origin_markers : tuple[str, ...]
        Headers whose presence marks a copy synced from a secondary source.
    preferred_folders : tuple[str, ...]
        Path substrings preferred for the survivor, most preferred first.
    """

    workers: int | None = None
    origin_markers: tuple[str, ...] = DEFAULT_ORIGIN_MARKERS
    preferred_folders: tuple[str, ...] = DEFAULT_PREFERRED_FOLDERS

    def __post_init__(self) -> None:
        """Normalize sequences and validate."""
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")

        self.origin_markers = tuple(self.origin_markers)
        self.preferred_folders = tuple(self.preferred_folders)

        if any(not marker.strip() for marker in self.origin_markers):
            raise ValueError("origin_markers must not contain empty header names")
        if any(not folder for folder in self.preferred_folders):
            raise ValueError("preferred_folders must not contain empty names")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "workers": self.workers,
            "origin_markers": list(self.origin_markers),
            "preferred_folders": list(self.preferred_folders),
        }


@dataclass
class DedupResult:
    """Results from a deduplication run.

    Attributes
    ----------
    success : bool
        Whether the run completed.
    total_files : int
        Regular files found below the root.
    total_records : int
        Files turned into records.
    results : list[GroupResult]
        One result per group, ascending by group size.
    skipped : list[FileFailure]
        Files skipped as unreadable or not a message.
    summary : DedupSummary | None
        Totals over ``results``; None if the run failed before selection.
    error_message : str | None
        Error message if failed.
    """

    success: bool
    total_files: int
    total_records: int
    results: list[GroupResult] = field(default_factory=list)
    skipped: list[FileFailure] = field(default_factory=list)
    summary: DedupSummary | None = None
    error_message: str | None = None

    @property
    def dupe_count(self) -> int:
        return sum(len(result.dupes) for result in self.results)
