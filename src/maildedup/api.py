"""Public API for finding and removing duplicate messages.

This module provides the main public API for maildedup, enabling:
- Scanning a maildir into DupeRecord objects
- Exporting records to JSONL format
- Running duplicate detection and deleting the dupes it found
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from maildedup.deletion import DeletionReport
from maildedup.engine import DedupConfig, DedupResult, run_dedup, run_deletion
from maildedup.errors import MailDedupError
from maildedup.models import DupeRecord, GroupResult
from maildedup.parse import DEFAULT_ORIGIN_MARKERS, enumerate_message_files, ingest_paths
from maildedup.selection import DEFAULT_PREFERRED_FOLDERS

__all__ = [
    "scan_maildir",
    "write_jsonl",
    "find_duplicates",
    "delete_duplicates",
]


def scan_maildir(
    path: str | Path,
    *,
    origin_markers: Sequence[str] = DEFAULT_ORIGIN_MARKERS,
    workers: int | None = None,
) -> list[DupeRecord]:
    """Build one record per message file below a maildir root.

    Files that are not messages are skipped.

    Parameters
    ----------
    path : str | Path
        Maildir root, traversed recursively.
    origin_markers : Sequence[str], optional
        Headers marking a copy synced from a secondary source.
    workers : int | None, optional
        Maximum ingestion threads.

    Returns
    -------
    list[DupeRecord]
        Records sorted by path.

    Raises
    ------
    FileNotFoundError
        If the folder does not exist.
    ValueError
        If the path is not a directory.

    Examples
    --------
        >>> from maildedup import scan_maildir
        >>> records = scan_maildir("Mail/")
        >>> print(records[0].key)
    """
    paths = enumerate_message_files(Path(path))
    records, _report = ingest_paths(paths, origin_markers=origin_markers, workers=workers)
    return records


def write_jsonl(
    records: Sequence[DupeRecord],
    path: str | Path,
    *,
    sort_keys: bool = True,
) -> None:
    """Write records to JSONL file (one JSON object per line).

    Output is deterministic with consistent field ordering and UTF-8 encoding.

    Parameters
    ----------
    records : Sequence[DupeRecord]
        Records to write.
    path : str | Path
        Output file path.
    sort_keys : bool, optional
        Whether to sort dictionary keys, by default True.
    """
    file_path = Path(path)

    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for record in records:
            f.write(json.dumps(record.to_dict(), ensure_ascii=False, sort_keys=sort_keys))
            f.write("\n")


def find_duplicates(
    input_path: str | Path,
    *,
    workers: int | None = None,
    origin_markers: Sequence[str] = DEFAULT_ORIGIN_MARKERS,
    preferred_folders: Sequence[str] = DEFAULT_PREFERRED_FOLDERS,
) -> DedupResult:
    """Group the messages below a maildir root and pick survivors.

    Parameters
    ----------
    input_path : str | Path
        Maildir root.
    workers : int | None, optional
        Maximum ingestion threads.
    origin_markers : Sequence[str], optional
        Headers marking a copy synced from a secondary source.
    preferred_folders : Sequence[str], optional
        Path substrings preferred for the survivor, most preferred first.

    Returns
    -------
    DedupResult
        Group results, skipped files and totals.

    Raises
    ------
    FileNotFoundError
        If input path does not exist.
    MailDedupError
        If the run fails.

    Examples
    --------
        >>> from maildedup import find_duplicates
        >>> result = find_duplicates("Mail/")
        >>> print(result.summary.total_dupes, result.summary.dirty_keys)
    """
    input_path_obj = Path(input_path)
    if not input_path_obj.exists():
        raise FileNotFoundError(f"Input path not found: {input_path}")

    config = DedupConfig(
        workers=workers,
        origin_markers=tuple(origin_markers),
        preferred_folders=tuple(preferred_folders),
    )
    result = run_dedup(input_path_obj, config=config)

    if not result.success:
        raise MailDedupError(f"Deduplication failed: {result.error_message}")

    return result


def delete_duplicates(results: Sequence[GroupResult]) -> DeletionReport:
    """Delete every dupe of every group result.

    Kept records are never touched. Failures are collected per file.

    Parameters
    ----------
    results : Sequence[GroupResult]
        Results from ``find_duplicates``.

    Returns
    -------
    DeletionReport
        Deleted paths and per-file failures.
    """
    return run_deletion(results)
