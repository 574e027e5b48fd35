"""Message file discovery and concurrent ingestion."""

from maildedup.parse.base import enumerate_message_files, parse_message_bytes
from maildedup.parse.ingestion import (
    DEFAULT_ORIGIN_MARKERS,
    FileFailure,
    IngestionReport,
    build_record,
    ingest_paths,
    read_record,
)

__all__ = [
    "DEFAULT_ORIGIN_MARKERS",
    "FileFailure",
    "IngestionReport",
    "build_record",
    "enumerate_message_files",
    "ingest_paths",
    "parse_message_bytes",
    "read_record",
]
