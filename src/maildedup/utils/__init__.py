"""Hashing and timestamp helpers shared by the pipeline and the audit log."""

from maildedup.utils.hashing import (
    DIGEST_SIZE,
    calculate_file_sha256,
    format_sha256,
    sha256_digest,
)
from maildedup.utils.timestamps import get_iso_timestamp

__all__ = [
    "DIGEST_SIZE",
    "calculate_file_sha256",
    "format_sha256",
    "get_iso_timestamp",
    "sha256_digest",
]
