"""
Event log storage and integrity verification.

This module provides:
- EventLogStore: Abstract interface for saving/loading recorded sessions
- FileEventLogStore: File-based storage (JSONL, hash chained)
- Integrity: Hash chain construction and verification
"""

from .store import EventLogStore
from .file_store import FileEventLogStore
from .integrity import ZERO_HASH, VerificationResult, hash_event, chain_record, verify_records

__all__ = [
    "EventLogStore",
    "FileEventLogStore",
    "ZERO_HASH",
    "VerificationResult",
    "hash_event",
    "chain_record",
    "verify_records",
]
