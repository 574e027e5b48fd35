"""Base utilities for reading message files."""

from email import policy
from email.message import Message
from email.parser import BytesParser
from pathlib import Path

__all__ = ["enumerate_message_files", "parse_message_bytes"]


def enumerate_message_files(root: Path) -> list[Path]:
    """List every regular file below a maildir root.

    Parameters
    ----------
    root : Path
        Directory to traverse recursively.

    Returns
    -------
    list[Path]
        Regular files, sorted by path for deterministic processing.

    Raises
    ------
    FileNotFoundError
        If root does not exist.
    ValueError
        If root is not a directory.
    """
    if not root.exists():
        raise FileNotFoundError(f"Folder not found: {root}")
    if not root.is_dir():
        raise ValueError(f"Path is not a directory: {root}")

    return sorted(p for p in root.rglob("*") if p.is_file())


def parse_message_bytes(data: bytes) -> Message:
    """Parse raw bytes into a message using the modern email policy.

    Parameters
    ----------
    data : bytes
        Complete file contents.

    Returns
    -------
    Message
        Parsed message (an ``EmailMessage`` instance).
    """
    return BytesParser(policy=policy.default).parsebytes(data)
