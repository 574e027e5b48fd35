"""Deletion of duplicate message files."""

from maildedup.deletion.executor import DeletionReport, collect_dupe_paths, delete_dupes

__all__ = ["DeletionReport", "collect_dupe_paths", "delete_dupes"]
