"""Deduplication engine.

This package provides the main entry points for finding and deleting
duplicate messages, including configuration and result types.
"""

from maildedup.engine.config import DedupConfig, DedupResult
from maildedup.engine.runner import run_dedup, run_deletion

__all__ = [
    "DedupConfig",
    "DedupResult",
    "run_dedup",
    "run_deletion",
]
