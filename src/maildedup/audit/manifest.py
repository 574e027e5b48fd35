"""Builder for the ``run.json`` manifest."""

import json
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any

from maildedup.audit.models import (
    Artifact,
    ErrorRecord,
    MaildirInventory,
    RunManifest,
    StageRecord,
)
from maildedup.utils import calculate_file_sha256, get_iso_timestamp

__all__ = ["MANIFEST_VERSION", "ManifestWriter"]

MANIFEST_VERSION = "1.0.0"


class ManifestWriter:
    """Accumulate run metadata and write it as ``run.json``.

    The manifest is only written by ``write``, through a temporary file
    renamed into place, so readers never see a half-written document.

    Parameters
    ----------
    output_dir : Path
        Audit directory.
    run_id : str
        Run identifier.
    argv : list[str]
        Command line of the run.
    environment : dict[str, Any]
        Interpreter, platform and dependency versions.
    tool_version : str
        Version string of the code that ran.
    config : dict[str, Any]
        Run configuration snapshot.
    """

    def __init__(
        self,
        output_dir: Path,
        run_id: str,
        argv: list[str],
        environment: dict[str, Any],
        tool_version: str,
        config: dict[str, Any],
    ) -> None:
        self.output_dir = output_dir
        self.path = output_dir / "run.json"
        self.manifest = RunManifest(
            manifest_version=MANIFEST_VERSION,
            run_id=run_id,
            started_at=get_iso_timestamp(),
            status="running",
            tool_version=tool_version,
            argv=list(argv),
            environment=environment,
            config=config,
        )
        self._open_stages: dict[str, StageRecord] = {}

    def set_maildir(self, inventory: MaildirInventory) -> None:
        self.manifest.maildir = inventory

    def open_stage(self, name: str) -> None:
        stage = StageRecord(name=name, started_at=get_iso_timestamp())
        self.manifest.stages.append(stage)
        self._open_stages[name] = stage

    def close_stage(
        self, name: str, duration_seconds: float, counters: dict[str, int] | None = None
    ) -> None:
        """Stamp the end of an open stage and merge its counters.

        Raises
        ------
        ValueError
            If no stage named ``name`` is open.
        """
        stage = self._open_stages.pop(name, None)
        if stage is None:
            raise ValueError(f"Stage not open: {name}")
        stage.finished_at = get_iso_timestamp()
        stage.duration_seconds = duration_seconds
        if counters:
            stage.counters.update(counters)

    def add_error(self, error: ErrorRecord) -> None:
        self.manifest.errors.append(error)

    def add_artifact(self, relative_path: str) -> None:
        """Register a file of the audit directory with its digest and size."""
        target = self.output_dir / relative_path
        self.manifest.artifacts.append(
            Artifact(
                path=relative_path,
                sha256=calculate_file_sha256(target),
                bytes=target.stat().st_size,
            )
        )

    def write(self, status: str, duration_seconds: float) -> Path:
        """Set the final status and write the manifest atomically."""
        self.manifest.status = status
        self.manifest.finished_at = get_iso_timestamp()
        self.manifest.duration_seconds = duration_seconds

        tmp_path = self.path.with_suffix(".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(asdict(self.manifest), f, indent=2, ensure_ascii=False)
            f.write("\n")
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(self.path)
        return self.path
