"""Survivor selection within groups of duplicate messages."""

from maildedup.selection.keep_selector import (
    DEFAULT_PREFERRED_FOLDERS,
    select_all,
    select_keep,
)

__all__ = ["DEFAULT_PREFERRED_FOLDERS", "select_all", "select_keep"]
