"""Keep selection for a group of identical messages.

The selector narrows the candidate set in a fixed order:

1. primary origin copies (no sync marker header) over secondary ones
2. fewest header fields
3. first preferred folder name found in a candidate path
   (default: "Sent", then "Archive")
4. lexicographically smallest path

A stage that would leave no candidates is skipped. Exactly one record is
kept per group.
"""

from collections.abc import Callable, Iterable, Sequence

from maildedup.models import DupeGroup, DupeRecord, GroupResult

__all__ = [
    "DEFAULT_PREFERRED_FOLDERS",
    "narrow",
    "select_keep",
    "select_all",
]

DEFAULT_PREFERRED_FOLDERS: tuple[str, ...] = ("Sent", "Archive")

Candidates = tuple[DupeRecord, ...]


def narrow(candidates: Candidates, predicate: Callable[[DupeRecord], bool]) -> Candidates:
    """Keep candidates matching predicate, or all of them if none match."""
    matching = tuple(c for c in candidates if predicate(c))
    return matching or candidates


def _prefer_primary_origin(candidates: Candidates) -> Candidates:
    return narrow(candidates, lambda c: c.is_primary_origin)


def _fewest_headers(candidates: Candidates) -> Candidates:
    min_headers = min(c.header_count for c in candidates)
    return narrow(candidates, lambda c: c.header_count == min_headers)


def _preferred_folder(candidates: Candidates, folders: Sequence[str]) -> Candidates:
    for folder in folders:
        if any(folder in c.path for c in candidates):
            return narrow(candidates, lambda c, folder=folder: folder in c.path)
    return candidates


def select_keep(
    group: DupeGroup,
    *,
    preferred_folders: Sequence[str] = DEFAULT_PREFERRED_FOLDERS,
) -> GroupResult:
    """Split a group into the survivor and the dupes.

    Parameters
    ----------
    group : DupeGroup
        Records sharing one identity key.
    preferred_folders : Sequence[str], optional
        Path substrings in decreasing order of preference.

    Returns
    -------
    GroupResult
        One kept record, every other member as a dupe in member order.
    """
    candidates = _prefer_primary_origin(group.members)
    candidates = _fewest_headers(candidates)
    candidates = _preferred_folder(candidates, preferred_folders)
    survivor = min(candidates, key=lambda c: c.path)

    dupes = tuple(m for m in group.members if m.path != survivor.path)
    return GroupResult(key=group.key, dupes=dupes, keep=(survivor,))


def select_all(
    groups: Iterable[DupeGroup],
    *,
    preferred_folders: Sequence[str] = DEFAULT_PREFERRED_FOLDERS,
) -> list[GroupResult]:
    """Apply ``select_keep`` to every group, preserving group order."""
    return [select_keep(group, preferred_folders=preferred_folders) for group in groups]
