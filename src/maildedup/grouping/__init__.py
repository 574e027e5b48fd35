"""Grouping of records by identity key."""

from maildedup.grouping.grouper import group_records

__all__ = ["group_records"]
