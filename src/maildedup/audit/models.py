"""Records written to an audit directory.

``LogEvent`` is one line of ``events.jsonl``; ``RunManifest`` is the
content of ``run.json``. Both serialize with ``dataclasses.asdict``.
"""

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "LogEvent",
    "StageRecord",
    "ErrorRecord",
    "MaildirInventory",
    "Artifact",
    "RunManifest",
]


@dataclass
class LogEvent:
    """One audit event.

    Attributes
    ----------
    ts : str
        ISO8601 UTC timestamp.
    run_id : str
        Run the event belongs to.
    level : str
        "DEBUG", "INFO", "WARN" or "ERROR".
    event : str
        Event name, e.g. "file_deleted".
    data : dict[str, Any]
        Event payload.
    stage : str | None
        Pipeline stage active when the event was written.
    path : str | None
        Message file the event is about, if any.
    """

    ts: str
    run_id: str
    level: str
    event: str
    data: dict[str, Any]
    stage: str | None = None
    path: str | None = None


@dataclass
class StageRecord:
    """Timing and counters of one pipeline stage."""

    name: str
    started_at: str
    counters: dict[str, int] = field(default_factory=dict)
    finished_at: str | None = None
    duration_seconds: float | None = None


@dataclass
class ErrorRecord:
    timestamp: str
    exception_class: str
    message: str
    stage: str | None = None
    path: str | None = None
    traceback: str | None = None


@dataclass
class MaildirInventory:
    """What ingestion found below the maildir root.

    Attributes
    ----------
    root : str
        Basename of the maildir root.
    total_files : int
        Regular files found.
    total_records : int
        Files fingerprinted.
    skipped_files : list[str]
        Files that were unreadable or not messages.
    """

    root: str = ""
    total_files: int = 0
    total_records: int = 0
    skipped_files: list[str] = field(default_factory=list)


@dataclass
class Artifact:
    path: str
    sha256: str
    bytes: int


@dataclass
class RunManifest:
    """Summary of one audited run.

    Attributes
    ----------
    manifest_version : str
        Version of this layout.
    run_id : str
        Unique run identifier.
    started_at : str
        ISO8601 UTC start time.
    status : str
        "running" until finished, then "success", "failed" or "partial".
    tool_version : str
        ``git:<sha>`` inside a checkout, package version otherwise.
    argv : list[str]
        Command line of the run.
    environment : dict[str, Any]
        Python, platform and dependency versions.
    config : dict[str, Any]
        Snapshot of the run configuration.
    maildir : MaildirInventory
        Ingestion inventory.
    stages : list[StageRecord]
        Stages in the order they started.
    artifacts : list[Artifact]
        Files written to the audit directory, with digests.
    errors : list[ErrorRecord]
        Errors recorded during the run.
    finished_at : str | None
        ISO8601 UTC end time.
    duration_seconds : float | None
        Wall time of the run.
    """

    manifest_version: str
    run_id: str
    started_at: str
    status: str
    tool_version: str
    argv: list[str]
    environment: dict[str, Any]
    config: dict[str, Any]
    maildir: MaildirInventory = field(default_factory=MaildirInventory)
    stages: list[StageRecord] = field(default_factory=list)
    artifacts: list[Artifact] = field(default_factory=list)
    errors: list[ErrorRecord] = field(default_factory=list)
    finished_at: str | None = None
    duration_seconds: float | None = None
