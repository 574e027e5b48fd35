"""Partition records into groups of identical identity keys."""

from collections.abc import Iterable

from maildedup.models import DupeGroup, DupeRecord, IdentityKey

__all__ = ["group_records"]


def group_records(records: Iterable[DupeRecord]) -> list[DupeGroup]:
    """Group records by exact identity key equality.

    Parameters
    ----------
    records : Iterable[DupeRecord]
        All records of a run.

    Returns
    -------
    list[DupeGroup]
        One group per distinct key, sorted ascending by member count. Ties
        keep the order in which each key was first seen; members keep input
        order.

    Notes
    -----
    Keys compare on kind and digest, so clean and dirty keys with the same
    bytes land in different groups. Singletons are returned like any other
    group.
    """
    buckets: dict[IdentityKey, list[DupeRecord]] = {}
    for record in records:
        buckets.setdefault(record.key, []).append(record)

    groups = [DupeGroup(key=key, members=tuple(members)) for key, members in buckets.items()]
    groups.sort(key=lambda group: group.size)
    return groups
