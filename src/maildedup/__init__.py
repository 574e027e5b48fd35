"""Deduplication of maildir-style message collections.

This package provides:
- Data models (maildedup.models): identity keys, records, groups, results
- Extraction (maildedup.extract): message fields and identity keys
- Parsing (maildedup.parse): file discovery and concurrent ingestion
- Grouping (maildedup.grouping): partition records by identity key
- Selection (maildedup.selection): choose one survivor per group
- Report (maildedup.report): text report and totals
- Deletion (maildedup.deletion): removal of dupes
- Engine (maildedup.engine): run orchestration
- Audit (maildedup.audit): logging and traceability
- CLI (maildedup.cli): command-line interface
- Public API (maildedup.api): high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from maildedup.api import (
    delete_duplicates,
    find_duplicates,
    scan_maildir,
    write_jsonl,
)
from maildedup.errors import (
    DeleteFailure,
    FieldExtractionError,
    FileParseFailure,
    MailDedupError,
)
from maildedup.models import DupeRecord, GroupResult, IdentityKey, KeyKind

__all__ = [
    "__version__",
    "__license__",
    "DupeRecord",
    "GroupResult",
    "IdentityKey",
    "KeyKind",
    "scan_maildir",
    "find_duplicates",
    "delete_duplicates",
    "write_jsonl",
    "MailDedupError",
    "FieldExtractionError",
    "FileParseFailure",
    "DeleteFailure",
]
