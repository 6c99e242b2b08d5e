"""Audit logging for parse runs.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent: one structured event
- generate_run_id: unique run identifiers
"""

from bibgrammar.audit.helpers import generate_run_id
from bibgrammar.audit.logger import AuditLogger
from bibgrammar.audit.models import LogEvent

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
]
