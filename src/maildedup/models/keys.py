"""Identity key model.

An identity key is a tagged SHA-256 fingerprint. The tag records how much
the fingerprint can be trusted: clean keys come from Message-ID, Date and
Subject; dirty keys are the date+subject fallback.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from maildedup.utils import DIGEST_SIZE

__all__ = ["KeyKind", "IdentityKey"]


class KeyKind(StrEnum):
    """Confidence tag of an identity key.

    Attributes
    ----------
    CLEAN : str
        Derived from Message-ID, raw Date header and Subject.
    DIRTY : str
        Fallback derived from parsed date and Subject only.
    """

    CLEAN = "clean"
    DIRTY = "dirty"


@dataclass(frozen=True)
class IdentityKey:
    """Tagged message fingerprint.

    Equality and hashing cover both ``kind`` and ``digest``, so a clean and
    a dirty key never compare equal even if their bytes coincide.

    Attributes
    ----------
    kind : KeyKind
        Confidence tag.
    digest : bytes
        SHA-256 digest (32 bytes).
    """

    kind: KeyKind
    digest: bytes

    def __post_init__(self) -> None:
        """Validate kind and digest length."""
        if not isinstance(self.kind, KeyKind):
            raise TypeError(f"kind must be a KeyKind, got {type(self.kind).__name__}")
        if len(self.digest) != DIGEST_SIZE:
            raise ValueError(f"digest must be {DIGEST_SIZE} bytes, got {len(self.digest)}")

    @classmethod
    def clean(cls, digest: bytes) -> "IdentityKey":
        """Build a clean key."""
        return cls(KeyKind.CLEAN, digest)

    @classmethod
    def dirty(cls, digest: bytes) -> "IdentityKey":
        """Build a dirty key."""
        return cls(KeyKind.DIRTY, digest)

    @property
    def is_clean(self) -> bool:
        return self.kind is KeyKind.CLEAN

    @property
    def hex(self) -> str:
        """Upper-case hexadecimal digest, as printed in reports."""
        return self.digest.hex().upper()

    def __str__(self) -> str:
        return f"{self.kind}:{self.hex}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-safe dictionary."""
        return {"kind": str(self.kind), "digest": self.hex}
