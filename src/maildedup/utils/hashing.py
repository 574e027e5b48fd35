"""SHA-256 helpers for identity digests and audit artifacts."""

import hashlib
from pathlib import Path

__all__ = ["DIGEST_SIZE", "format_sha256", "sha256_digest", "calculate_file_sha256"]

DIGEST_SIZE = hashlib.sha256().digest_size

_CHUNK_SIZE = 64 * 1024


def format_sha256(hex_digest: str) -> str:
    """Prefix a hex digest with ``sha256:`` as stored in manifests."""
    return f"sha256:{hex_digest}"


def sha256_digest(text: str) -> bytes:
    """Raw ``DIGEST_SIZE``-byte digest of ``text`` encoded as UTF-8.

    Surrogate escapes left by the email parser for undecodable header bytes
    are encoded back to those original bytes.
    """
    return hashlib.sha256(text.encode("utf-8", "surrogateescape")).digest()


def calculate_file_sha256(path: Path) -> str:
    """Digest a file in fixed-size chunks.

    Parameters
    ----------
    path : Path
        File to hash.

    Returns
    -------
    str
        ``sha256:<hex>`` digest of the file contents.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    """
    digest = hashlib.sha256()
    with path.open("rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            digest.update(chunk)
    return format_sha256(digest.hexdigest())
