"""Tests for hashing and timestamp helpers."""

import hashlib
from datetime import datetime
from pathlib import Path

import pytest

from maildedup.utils import DIGEST_SIZE, calculate_file_sha256, get_iso_timestamp, sha256_digest


@pytest.mark.unit
def test_sha256_digest_is_raw_utf8_digest() -> None:
    digest = sha256_digest("Café")

    assert len(digest) == DIGEST_SIZE == 32
    assert digest == hashlib.sha256("Café".encode()).digest()


@pytest.mark.unit
def test_calculate_file_sha256(tmp_path: Path) -> None:
    path = tmp_path / "blob"
    path.write_bytes(b"x" * 20000)

    assert calculate_file_sha256(path) == "sha256:" + hashlib.sha256(b"x" * 20000).hexdigest()


@pytest.mark.unit
def test_calculate_file_sha256_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        calculate_file_sha256(tmp_path / "missing")


@pytest.mark.unit
def test_iso_timestamp_is_utc() -> None:
    ts = get_iso_timestamp()

    assert ts.endswith("Z")
    assert datetime.fromisoformat(ts.replace("Z", "+00:00")).utcoffset().total_seconds() == 0
