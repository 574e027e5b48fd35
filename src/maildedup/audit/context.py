"""Lifecycle of one audited run."""

import sys
import time
import traceback
from pathlib import Path
from typing import Any

from maildedup.audit.helpers import (
    environment_snapshot,
    generate_run_id,
    git_revision,
    package_version,
)
from maildedup.audit.logger import AuditLogger
from maildedup.audit.manifest import ManifestWriter
from maildedup.audit.models import ErrorRecord, MaildirInventory
from maildedup.utils import get_iso_timestamp

__all__ = ["RunContext"]

EVENTS_FILE = "events.jsonl"


class RunContext:
    """Tie the event log and the manifest of one run together.

    Stages are timed here; callers pass stage names and counters only.
    ``finish`` closes the log, registers it as an artifact and writes
    ``run.json``. Used as a context manager, an escaping exception is
    recorded and the run finishes as "failed".

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    output_dir : Path
        Audit directory.
    events : AuditLogger
        JSONL event log.
    manifest : ManifestWriter
        Manifest under construction.
    """

    def __init__(
        self,
        run_id: str,
        output_dir: Path,
        events: AuditLogger,
        manifest: ManifestWriter,
    ) -> None:
        self.run_id = run_id
        self.output_dir = output_dir
        self.events = events
        self.manifest = manifest
        self._started = time.monotonic()
        self._stage_clock: dict[str, float] = {}

    @classmethod
    def start(
        cls,
        output_dir: Path,
        config: dict[str, Any],
        argv: list[str] | None = None,
    ) -> "RunContext":
        """Create the audit directory and log ``run_started``.

        Parameters
        ----------
        output_dir : Path
            Audit directory, created if missing.
        config : dict[str, Any]
            Run configuration snapshot.
        argv : list[str] | None, optional
            Command line; defaults to ``sys.argv``.
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        run_id = generate_run_id()
        argv = list(argv if argv is not None else sys.argv)
        revision = git_revision()

        events = AuditLogger(run_id, output_dir / EVENTS_FILE)
        manifest = ManifestWriter(
            output_dir=output_dir,
            run_id=run_id,
            argv=argv,
            environment=environment_snapshot(),
            tool_version=f"git:{revision}" if revision else package_version(),
            config=config,
        )
        events.run_started(argv, config)
        return cls(run_id, output_dir, events, manifest)

    def record_inventory(
        self, root: Path, total_files: int, total_records: int, skipped_files: list[str]
    ) -> None:
        self.manifest.set_maildir(
            MaildirInventory(
                root=root.name,
                total_files=total_files,
                total_records=total_records,
                skipped_files=list(skipped_files),
            )
        )

    def start_stage(self, name: str, expected: int | None = None) -> None:
        self._stage_clock[name] = time.monotonic()
        self.manifest.open_stage(name)
        self.events.stage_started(name, expected=expected)

    def finish_stage(self, name: str, counters: dict[str, int] | None = None) -> None:
        """Close a stage with its counters.

        Raises
        ------
        ValueError
            If the stage was never started.
        """
        started = self._stage_clock.pop(name, None)
        if started is None:
            raise ValueError(f"Stage not started: {name}")
        elapsed = time.monotonic() - started
        self.manifest.close_stage(name, elapsed, counters)
        self.events.stage_finished(name, elapsed, counters)

    def record_error(
        self,
        exception: BaseException,
        stage: str | None = None,
        path: str | None = None,
        include_traceback: bool = False,
    ) -> None:
        """Add an error to both the event log and the manifest."""
        tb = None
        if include_traceback:
            tb = "".join(traceback.format_exception(exception))
        error = ErrorRecord(
            timestamp=get_iso_timestamp(),
            exception_class=type(exception).__name__,
            message=str(exception),
            stage=stage,
            path=path,
            traceback=tb,
        )
        self.manifest.add_error(error)
        self.events.error(
            error.exception_class, error.message, stage=stage, path=path, traceback=tb
        )

    def finish(self, status: str = "success", records_processed: int | None = None) -> None:
        """Close the event log and write the manifest."""
        elapsed = time.monotonic() - self._started
        self.events.run_finished(status, elapsed, records_processed)
        self.events.close()
        self.manifest.add_artifact(EVENTS_FILE)
        self.manifest.write(status, elapsed)

    def __enter__(self) -> "RunContext":
        return self

    def __exit__(self, exc_type: Any, exc: BaseException | None, tb: Any) -> None:
        if exc is not None:
            self.record_error(exc, stage=self.events.current_stage, include_traceback=True)
            self.finish(status="failed")
        else:
            self.finish()
