"""Append-only JSONL event log of a run."""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from maildedup.audit.models import LogEvent
from maildedup.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """Write one JSON object per line to ``events.jsonl``.

    The file stays open for the lifetime of the logger and is flushed after
    every event, so a crashed run still leaves a readable log.

    Parameters
    ----------
    run_id : str
        Run identifier stamped on every event.
    log_path : Path
        Target file; parent directories are created and existing content is
        kept.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        self.run_id = run_id
        self.log_path = log_path
        self.current_stage: str | None = None

        log_path.parent.mkdir(parents=True, exist_ok=True)
        self._handle = log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()

    def event(
        self,
        name: str,
        data: dict[str, Any] | None = None,
        *,
        level: str = "INFO",
        stage: str | None = None,
        path: str | None = None,
    ) -> None:
        """Append an event; ``stage`` defaults to the current stage."""
        record = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=name,
            data=data or {},
            stage=stage or self.current_stage,
            path=path,
        )
        self._handle.write(json.dumps(asdict(record), ensure_ascii=False, separators=(",", ":")))
        self._handle.write("\n")
        self._handle.flush()

    def run_started(self, argv: list[str], config: dict[str, Any]) -> None:
        self.event("run_started", {"argv": argv, "config": config})

    def run_finished(
        self, status: str, duration_seconds: float, records_processed: int | None = None
    ) -> None:
        data: dict[str, Any] = {"status": status, "duration_seconds": duration_seconds}
        if records_processed is not None:
            data["records_processed"] = records_processed
        self.event("run_finished", data)

    def stage_started(self, stage: str, expected: int | None = None) -> None:
        """Enter ``stage``; later events default to it."""
        self.current_stage = stage
        self.event("stage_started", {} if expected is None else {"expected": expected})

    def stage_finished(
        self, stage: str, duration_seconds: float, counters: dict[str, int] | None = None
    ) -> None:
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters
        self.event("stage_finished", data, stage=stage)

    def file_skipped(self, path: str, reason: str, stage: str | None = None) -> None:
        """Log a file ingestion could not turn into a record."""
        self.event("file_skipped", {"reason": reason}, level="WARN", stage=stage, path=path)

    def file_deleted(self, path: str, key: str, stage: str | None = None) -> None:
        """Log a dupe removed from disk, with the ``kind:HEX`` key of its group."""
        self.event("file_deleted", {"key": key}, stage=stage, path=path)

    def error(
        self,
        exception_class: str,
        message: str,
        *,
        stage: str | None = None,
        path: str | None = None,
        traceback: str | None = None,
    ) -> None:
        data = {"exception_class": exception_class, "message": message}
        if traceback is not None:
            data["traceback"] = traceback
        self.event("error", data, level="ERROR", stage=stage, path=path)
