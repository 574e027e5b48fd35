"""Audit trail of a deduplication run.

``RunContext`` drives a run; it writes ``events.jsonl`` through
``AuditLogger`` and ``run.json`` through ``ManifestWriter``.
"""

from maildedup.audit.context import RunContext
from maildedup.audit.helpers import generate_run_id
from maildedup.audit.logger import AuditLogger
from maildedup.audit.manifest import ManifestWriter

__all__ = ["AuditLogger", "ManifestWriter", "RunContext", "generate_run_id"]
