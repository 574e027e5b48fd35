"""Concurrent ingestion of message files into dupe records.

Each file is read, parsed and fingerprinted independently on a thread pool.
Results are collected in the calling thread, which is also the only place
progress is reported, so no state is shared between tasks. Files that
cannot be read or are not messages are skipped and reported.
"""

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from maildedup.errors import FileParseFailure
from maildedup.extract import MessageFields, derive_identity_key
from maildedup.models import DupeRecord
from maildedup.parse.base import parse_message_bytes

DEFAULT_ORIGIN_MARKERS: tuple[str, ...] = ("X-getmail-retrieved-from-mailbox",)

ProgressFn = Callable[[int], None]


@dataclass(frozen=True)
class FileFailure:
    """A file skipped during ingestion.

    Attributes
    ----------
    path : str
        Path of the skipped file.
    message : str
        Reason it was skipped.
    """

    path: str
    message: str


@dataclass(frozen=True)
class IngestionReport:
    """Immutable report for one ingestion run.

    Attributes
    ----------
    total_files : int
        Files submitted for ingestion.
    total_records : int
        Records built.
    failures : tuple[FileFailure, ...]
        Files skipped, sorted by path.
    """

    total_files: int
    total_records: int
    failures: tuple[FileFailure, ...] = ()

    @property
    def total_failures(self) -> int:
        return len(self.failures)


def is_primary_origin(fields: MessageFields, origin_markers: Iterable[str]) -> bool:
    """Return True unless the message carries one of the origin marker headers."""
    return not any(fields.has_header(marker) for marker in origin_markers)


def build_record(
    path: str,
    data: bytes,
    origin_markers: Sequence[str] = DEFAULT_ORIGIN_MARKERS,
) -> DupeRecord:
    """Build a record from raw message bytes.

    Parameters
    ----------
    path : str
        Path the bytes were read from.
    data : bytes
        Complete file contents.
    origin_markers : Sequence[str], optional
        Headers marking a copy synced from a secondary source.

    Returns
    -------
    DupeRecord
        Record for the message.

    Raises
    ------
    FileParseFailure
        If the bytes do not contain a single header field.
    """
    message = parse_message_bytes(data)
    fields = MessageFields(message)

    header_count = fields.header_count()
    if header_count == 0:
        raise FileParseFailure(path, "no message headers found")

    return DupeRecord(
        path=path,
        key=derive_identity_key(fields),
        is_primary_origin=is_primary_origin(fields, origin_markers),
        header_count=header_count,
        date=fields.parsed_date(),
    )


def read_record(
    path: Path,
    origin_markers: Sequence[str] = DEFAULT_ORIGIN_MARKERS,
) -> DupeRecord:
    """Read one message file and build its record.

    Raises
    ------
    FileParseFailure
        If the file cannot be read or no record can be built from it.
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileParseFailure(str(path), f"Failed to read file: {e}") from e

    try:
        return build_record(str(path), data, origin_markers)
    except FileParseFailure:
        raise
    except Exception as e:
        raise FileParseFailure(str(path), f"Parser exception: {e}") from e


def ingest_paths(
    paths: Sequence[Path],
    *,
    origin_markers: Sequence[str] = DEFAULT_ORIGIN_MARKERS,
    workers: int | None = None,
    on_progress: ProgressFn | None = None,
) -> tuple[list[DupeRecord], IngestionReport]:
    """Build records for all paths on a thread pool.

    Parameters
    ----------
    paths : Sequence[Path]
        Message files to ingest.
    origin_markers : Sequence[str], optional
        Headers marking a copy synced from a secondary source.
    workers : int | None, optional
        Maximum pool size. None uses the executor default.
    on_progress : ProgressFn | None, optional
        Called with 1 after each completed file, from the calling thread.

    Returns
    -------
    tuple[list[DupeRecord], IngestionReport]
        - Records sorted by path
        - Ingestion report listing skipped files
    """
    records: list[DupeRecord] = []
    failures: list[FileFailure] = []

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(read_record, path, origin_markers): path for path in paths}

        for future in as_completed(futures):
            try:
                records.append(future.result())
            except FileParseFailure as e:
                failures.append(FileFailure(path=e.path, message=e.message))
            if on_progress is not None:
                on_progress(1)

    records.sort(key=lambda record: record.path)
    failures.sort(key=lambda failure: failure.path)

    report = IngestionReport(
        total_files=len(paths),
        total_records=len(records),
        failures=tuple(failures),
    )

    return records, report
