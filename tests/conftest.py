"""Pytest configuration and fixtures for test suite."""

import hashlib
import sys
from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from maildedup.models import DupeRecord, IdentityKey, KeyKind  # noqa: E402

DEFAULT_DATE = "Mon, 02 Jan 2023 10:00:00 +0000"


def _digest(seed: str) -> bytes:
    return hashlib.sha256(seed.encode("utf-8")).digest()


@pytest.fixture
def make_key() -> Callable[..., IdentityKey]:
    """Factory for identity keys from a readable seed."""

    def _factory(seed: str = "m1", kind: KeyKind = KeyKind.CLEAN) -> IdentityKey:
        return IdentityKey(kind, _digest(seed))

    return _factory


@pytest.fixture
def make_record() -> Callable[..., DupeRecord]:
    """Factory for records with minimal boilerplate.

    All records default to the same clean key so they group together.
    """

    def _factory(
        path: str = "/mail/INBOX/cur/1",
        *,
        key: IdentityKey | None = None,
        seed: str = "m1",
        kind: KeyKind = KeyKind.CLEAN,
        is_primary_origin: bool = True,
        header_count: int = 10,
        date: datetime | None = None,
    ) -> DupeRecord:
        return DupeRecord(
            path=path,
            key=key if key is not None else IdentityKey(kind, _digest(seed)),
            is_primary_origin=is_primary_origin,
            header_count=header_count,
            date=date,
        )

    return _factory


@pytest.fixture
def message_bytes() -> Callable[..., bytes]:
    """Factory for RFC 5322 message bytes.

    Pass ``None`` for message_id, date or subject to omit that header.
    Each entry of ``extra_headers`` is a ``(name, value)`` pair.
    """

    def _factory(
        *,
        message_id: str | None = "<abc123@example.com>",
        date: str | None = DEFAULT_DATE,
        subject: str | None = "Quarterly report",
        extra_headers: Sequence[tuple[str, str]] = (),
        body: str = "Hello,\n\nsee attached.\n",
    ) -> bytes:
        lines = ["From: Alice <alice@example.com>", "To: bob@example.com"]
        if message_id is not None:
            lines.append(f"Message-ID: {message_id}")
        if date is not None:
            lines.append(f"Date: {date}")
        if subject is not None:
            lines.append(f"Subject: {subject}")
        lines.extend(f"{name}: {value}" for name, value in extra_headers)
        return ("\n".join(lines) + "\n\n" + body).encode("utf-8")

    return _factory


@pytest.fixture
def write_message(tmp_path: Path, message_bytes: Callable[..., bytes]) -> Callable[..., Path]:
    """Write a message file below tmp_path and return its path."""

    def _write(relative: str, data: bytes | None = None, **kwargs) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data if data is not None else message_bytes(**kwargs))
        return path

    return _write
