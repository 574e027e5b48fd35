"""Record, group and selection result models.

All types are frozen: a record is built once per message file during
ingestion, groups and results once during the grouping and selection pass.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from maildedup.models.keys import IdentityKey

__all__ = ["DupeRecord", "DupeGroup", "GroupResult"]


@dataclass(frozen=True)
class DupeRecord:
    """A single message file with its identity key and ranking metadata.

    Attributes
    ----------
    path : str
        Path of the message file. Unique within a run.
    key : IdentityKey
        Identity fingerprint of the message.
    is_primary_origin : bool
        False when the message carries a header saying it was synced from a
        secondary source.
    header_count : int
        Number of header fields in the message.
    date : datetime | None
        Parsed Date header, None when missing or unparseable.
    """

    path: str
    key: IdentityKey
    is_primary_origin: bool
    header_count: int
    date: datetime | None = None

    def __post_init__(self) -> None:
        """Validate header count."""
        if self.header_count < 0:
            raise ValueError(f"header_count must be >= 0, got {self.header_count}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-safe dictionary.

        Returns
        -------
        dict[str, Any]
            Dictionary representation.
        """
        return {
            "path": self.path,
            "key": self.key.to_dict(),
            "is_primary_origin": self.is_primary_origin,
            "header_count": self.header_count,
            "date": self.date.isoformat() if self.date is not None else None,
        }


@dataclass(frozen=True)
class DupeGroup:
    """All records sharing one identity key.

    Attributes
    ----------
    key : IdentityKey
        Shared identity key.
    members : tuple[DupeRecord, ...]
        Non-empty member records in ingestion order.
    """

    key: IdentityKey
    members: tuple[DupeRecord, ...]

    def __post_init__(self) -> None:
        """Validate that the group is non-empty and homogeneous."""
        if not self.members:
            raise ValueError("A group must have at least one member")
        for member in self.members:
            if member.key != self.key:
                raise ValueError(f"Record {member.path} does not belong to group {self.key}")

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class GroupResult:
    """Outcome of keep selection for one group.

    Attributes
    ----------
    key : IdentityKey
        Identity key of the group.
    dupes : tuple[DupeRecord, ...]
        Records to remove.
    keep : tuple[DupeRecord, ...]
        Surviving records (never empty).
    """

    key: IdentityKey
    dupes: tuple[DupeRecord, ...]
    keep: tuple[DupeRecord, ...]

    def __post_init__(self) -> None:
        """Validate keep is non-empty and disjoint from dupes."""
        if not self.keep:
            raise ValueError("A group result must keep at least one record")
        overlap = _paths(self.dupes) & _paths(self.keep)
        if overlap:
            raise ValueError(f"Records both kept and marked as dupes: {sorted(overlap)}")

    @property
    def size(self) -> int:
        return len(self.dupes) + len(self.keep)


def _paths(records: Iterable[DupeRecord]) -> set[str]:
    return {record.path for record in records}
