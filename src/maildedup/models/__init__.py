"""Shared data types for maildedup.

This package contains the identity key and the record, group and result
dataclasses consumed across the pipeline.

Domain-specific types live closer to their consumers:
- Audit types → maildedup.audit.models
- Ingestion types → maildedup.parse.ingestion
"""

from maildedup.models.keys import IdentityKey, KeyKind
from maildedup.models.records import DupeGroup, DupeRecord, GroupResult

__all__ = [
    "IdentityKey",
    "KeyKind",
    "DupeRecord",
    "DupeGroup",
    "GroupResult",
]
