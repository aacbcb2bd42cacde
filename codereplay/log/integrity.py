"""
Hash chain integrity for saved logs.

Each stored record carries the hash of the previous one. Replaying a log
whose records were edited or reordered would apply edits at stale
coordinates, so loaders can verify the chain first.
"""

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from ..core.canonical import canonical_json_bytes

ZERO_HASH = "0" * 64


def hash_event(prev_hash: str, seq: int, event: Dict[str, Any]) -> str:
    """
    Compute hash of an event record chained to previous hash.

    Hash input: prev_hash + canonical_json({"seq", "event"})
    """
    b = prev_hash.encode("utf-8") + canonical_json_bytes({"seq": seq, "event": event})
    return hashlib.sha256(b).hexdigest()


def chain_record(seq: int, prev_hash: str, event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create hash chain record for storage.

    Record includes:
    - seq: Position in the log
    - prev_hash: Hash of previous record (ZERO_HASH for the first)
    - event_hash: Hash of this record
    - event: Event data
    """
    return {
        "seq": seq,
        "prev_hash": prev_hash,
        "event_hash": hash_event(prev_hash, seq, event),
        "event": event,
    }


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    count: int
    broken_at: Optional[int] = None
    reason: Optional[str] = None


def verify_records(records: Iterable[Dict[str, Any]]) -> VerificationResult:
    """Walk records in order and check seq, prev_hash and event_hash links."""
    prev_hash = ZERO_HASH
    count = 0
    for i, rec in enumerate(records):
        if rec.get("seq") != i:
            return VerificationResult(False, count, i, f"expected seq {i}, found {rec.get('seq')}")
        if rec.get("prev_hash") != prev_hash:
            return VerificationResult(False, count, i, "prev_hash does not match previous record")
        computed = hash_event(prev_hash, i, rec.get("event", {}))
        if computed != rec.get("event_hash"):
            return VerificationResult(False, count, i, "event_hash mismatch")
        prev_hash = computed
        count += 1
    return VerificationResult(True, count)
