"""End-to-end deduplication runner.

Stages:
    ingest: enumerate message files and build records concurrently
    group:  partition records by identity key
    select: choose the survivor of every group
    delete: remove dupes (separate call, after confirmation)

Every stage is reported to the optional RunContext.
"""

from collections.abc import Callable, Sequence
from pathlib import Path

from maildedup.audit import RunContext
from maildedup.deletion import DeletionReport, delete_dupes
from maildedup.engine.config import DedupConfig, DedupResult
from maildedup.errors import DeleteFailure
from maildedup.grouping import group_records
from maildedup.models import DupeGroup, DupeRecord, GroupResult
from maildedup.parse import IngestionReport, enumerate_message_files, ingest_paths
from maildedup.report import summarize
from maildedup.selection import select_all

__all__ = ["run_dedup", "run_deletion"]


def _stage_ingest(
    input_path: Path,
    config: DedupConfig,
    run: RunContext | None,
    on_files_found: Callable[[int], None] | None,
    on_progress: Callable[[int], None] | None,
) -> tuple[list[DupeRecord], IngestionReport]:
    paths = enumerate_message_files(input_path)
    if on_files_found is not None:
        on_files_found(len(paths))

    if run:
        run.start_stage("ingest", expected=len(paths))

    records, report = ingest_paths(
        paths,
        origin_markers=config.origin_markers,
        workers=config.workers,
        on_progress=on_progress,
    )

    if run:
        for failure in report.failures:
            run.events.file_skipped(failure.path, failure.message, stage="ingest")
        run.record_inventory(
            root=input_path,
            total_files=report.total_files,
            total_records=report.total_records,
            skipped_files=[f.path for f in report.failures],
        )
        run.finish_stage(
            "ingest",
            counters={
                "files": report.total_files,
                "records": report.total_records,
                "skipped": report.total_failures,
                "dirty_keys": sum(1 for r in records if not r.key.is_clean),
            },
        )

    return records, report


def _stage_group(records: Sequence[DupeRecord], run: RunContext | None) -> list[DupeGroup]:
    if run:
        run.start_stage("group", expected=len(records))

    groups = group_records(records)

    if run:
        run.finish_stage(
            "group",
            counters={
                "groups": len(groups),
                "groups_with_dupes": sum(1 for g in groups if g.size > 1),
            },
        )
    return groups


def _stage_select(
    groups: Sequence[DupeGroup],
    config: DedupConfig,
    run: RunContext | None,
) -> list[GroupResult]:
    if run:
        run.start_stage("select", expected=len(groups))

    results = select_all(groups, preferred_folders=config.preferred_folders)

    if run:
        summary = summarize(results)
        run.finish_stage(
            "select",
            counters={
                "dupes": summary.total_dupes,
                "keep": summary.total_unique,
                "clean_keys": summary.clean_keys,
                "dirty_keys": summary.dirty_keys,
            },
        )
    return results


def run_dedup(
    input_path: Path | str,
    config: DedupConfig | None = None,
    run: RunContext | None = None,
    *,
    on_files_found: Callable[[int], None] | None = None,
    on_progress: Callable[[int], None] | None = None,
) -> DedupResult:
    """Find duplicate messages below a maildir root.

    Nothing is deleted; pass the result to ``run_deletion`` once the user
    confirmed.

    Parameters
    ----------
    input_path : Path | str
        Maildir root.
    config : DedupConfig | None, optional
        Run configuration. If None, uses defaults.
    run : RunContext | None, optional
        Audit context. If None, nothing is logged.
    on_files_found : Callable[[int], None] | None, optional
        Called once with the number of files about to be ingested.
    on_progress : Callable[[int], None] | None, optional
        Called with 1 after each ingested file.

    Returns
    -------
    DedupResult
        Group results and totals. On failure ``success`` is False and
        ``error_message`` is set.

    Examples
    --------
        >>> from maildedup.engine import run_dedup
        >>> result = run_dedup("~/Mail/merged")
        >>> print(result.summary.total_dupes)
    """
    input_path = Path(input_path).expanduser()
    if config is None:
        config = DedupConfig()

    total_files = 0
    total_records = 0

    try:
        records, report = _stage_ingest(input_path, config, run, on_files_found, on_progress)
        total_files = report.total_files
        total_records = report.total_records

        groups = _stage_group(records, run)
        results = _stage_select(groups, config, run)

        return DedupResult(
            success=True,
            total_files=total_files,
            total_records=total_records,
            results=results,
            skipped=list(report.failures),
            summary=summarize(results),
        )

    except Exception as e:
        error_msg = f"{type(e).__name__}: {e}"
        if run:
            run.record_error(e, stage=run.events.current_stage, include_traceback=True)
        return DedupResult(
            success=False,
            total_files=total_files,
            total_records=total_records,
            error_message=error_msg,
        )


def run_deletion(
    results: Sequence[GroupResult],
    run: RunContext | None = None,
    *,
    on_deleted: Callable[[str, DeleteFailure | None], None] | None = None,
) -> DeletionReport:
    """Delete every dupe in ``results``, reporting each file.

    Parameters
    ----------
    results : Sequence[GroupResult]
        Selection results from ``run_dedup``.
    run : RunContext | None, optional
        Audit context. If None, nothing is logged.
    on_deleted : Callable[[str, DeleteFailure | None], None] | None, optional
        Called after each file with the failure, if any.

    Returns
    -------
    DeletionReport
        Deleted paths and per-file failures.
    """
    key_by_path = {record.path: str(result.key) for result in results for record in result.dupes}

    def _on_deleted(path: str, failure: DeleteFailure | None) -> None:
        if run:
            if failure is None:
                run.events.file_deleted(path, key_by_path[path], stage="delete")
            else:
                run.record_error(failure, stage="delete", path=path)
        if on_deleted is not None:
            on_deleted(path, failure)

    if run:
        run.start_stage("delete", expected=len(key_by_path))

    report = delete_dupes(results, on_deleted=_on_deleted)

    if run:
        run.finish_stage(
            "delete",
            counters={"deleted": len(report.deleted), "failed": len(report.failures)},
        )
    return report
