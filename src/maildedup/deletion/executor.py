"""Sequential deletion of files marked as dupes.

Deletion has no rollback. Each file is removed independently; a failure is
recorded for that path and the batch continues.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from maildedup.errors import DeleteFailure
from maildedup.models import GroupResult

__all__ = ["DeletionReport", "collect_dupe_paths", "delete_file", "delete_dupes"]


@dataclass(frozen=True)
class DeletionReport:
    """Outcome of a deletion batch.

    Attributes
    ----------
    deleted : tuple[str, ...]
        Paths removed.
    failures : tuple[DeleteFailure, ...]
        Paths that could not be removed, with the reason.
    """

    deleted: tuple[str, ...]
    failures: tuple[DeleteFailure, ...] = ()

    @property
    def attempted(self) -> int:
        return len(self.deleted) + len(self.failures)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "deleted": list(self.deleted),
            "failures": [{"path": f.path, "message": f.message} for f in self.failures],
        }


def collect_dupe_paths(results: Iterable[GroupResult]) -> list[str]:
    """Return every dupe path in report order.

    Raises
    ------
    ValueError
        If a dupe path is also kept by some group.
    """
    results = list(results)
    keep_paths = {record.path for result in results for record in result.keep}
    dupe_paths = [record.path for result in results for record in result.dupes]

    kept_dupes = keep_paths.intersection(dupe_paths)
    if kept_dupes:
        raise ValueError(f"Refusing to delete kept files: {sorted(kept_dupes)}")
    return dupe_paths


def delete_file(path: str) -> None:
    """Remove one file.

    Raises
    ------
    DeleteFailure
        If the file cannot be removed.
    """
    try:
        Path(path).unlink()
    except OSError as e:
        raise DeleteFailure(path, e.strerror or str(e)) from e


def delete_dupes(
    results: Iterable[GroupResult],
    *,
    on_deleted: Callable[[str, DeleteFailure | None], None] | None = None,
) -> DeletionReport:
    """Delete every dupe of every group result, one file at a time.

    Parameters
    ----------
    results : Iterable[GroupResult]
        Selection results. Kept records are never touched.
    on_deleted : Callable[[str, DeleteFailure | None], None] | None, optional
        Called after each path with the failure, if any.

    Returns
    -------
    DeletionReport
        Deleted paths and per-file failures.
    """
    deleted: list[str] = []
    failures: list[DeleteFailure] = []

    for path in collect_dupe_paths(results):
        failure: DeleteFailure | None = None
        try:
            delete_file(path)
        except DeleteFailure as e:
            failure = e
            failures.append(e)
        else:
            deleted.append(path)
        if on_deleted is not None:
            on_deleted(path, failure)

    return DeletionReport(deleted=tuple(deleted), failures=tuple(failures))
