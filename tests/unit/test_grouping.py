"""Tests for grouping records by identity key."""

import hashlib
from collections.abc import Callable

import pytest

from maildedup.grouping import group_records
from maildedup.models import DupeRecord, IdentityKey, KeyKind


@pytest.mark.unit
def test_empty_input_gives_no_groups() -> None:
    assert group_records([]) == []


@pytest.mark.unit
def test_every_record_lands_in_exactly_one_group(
    make_record: Callable[..., DupeRecord],
) -> None:
    records = [
        make_record("/a", seed="m1"),
        make_record("/b", seed="m2"),
        make_record("/c", seed="m1"),
        make_record("/d", seed="m3"),
        make_record("/e", seed="m1"),
    ]

    groups = group_records(records)

    assert len(groups) == len({r.key for r in records}) == 3
    grouped_paths = [m.path for g in groups for m in g.members]
    assert sorted(grouped_paths) == ["/a", "/b", "/c", "/d", "/e"]
    for group in groups:
        assert all(m.key == group.key for m in group.members)


@pytest.mark.unit
def test_groups_sorted_ascending_by_size(make_record: Callable[..., DupeRecord]) -> None:
    records = [
        make_record("/a1", seed="big"),
        make_record("/a2", seed="big"),
        make_record("/a3", seed="big"),
        make_record("/b1", seed="mid"),
        make_record("/b2", seed="mid"),
        make_record("/c1", seed="single"),
    ]

    sizes = [g.size for g in group_records(records)]

    assert sizes == [1, 2, 3]


@pytest.mark.unit
def test_equal_sized_groups_keep_first_seen_order(
    make_record: Callable[..., DupeRecord],
) -> None:
    records = [make_record(f"/{s}", seed=s) for s in ("x", "y", "z")]

    assert [g.members[0].path for g in group_records(records)] == ["/x", "/y", "/z"]


@pytest.mark.unit
def test_members_keep_input_order(make_record: Callable[..., DupeRecord]) -> None:
    records = [make_record("/3"), make_record("/1"), make_record("/2")]

    (group,) = group_records(records)

    assert [m.path for m in group.members] == ["/3", "/1", "/2"]


@pytest.mark.unit
def test_clean_and_dirty_keys_with_same_bytes_never_group(
    make_record: Callable[..., DupeRecord],
) -> None:
    digest = hashlib.sha256(b"collision").digest()
    records = [
        make_record("/clean", key=IdentityKey(KeyKind.CLEAN, digest)),
        make_record("/dirty", key=IdentityKey(KeyKind.DIRTY, digest)),
    ]

    groups = group_records(records)

    assert len(groups) == 2
    assert {g.key.kind for g in groups} == {KeyKind.CLEAN, KeyKind.DIRTY}
    assert all(g.size == 1 for g in groups)
