"""
Byte-stable JSON for saved logs.

Hashes in the chain and log fingerprints are computed over these bytes, so
two logs with the same events always serialize identically regardless of
dict insertion order.
"""

import json
import math
from typing import Any, Dict

from .errors import EventLogError


def _check_finite(obj: Any) -> None:
    # NaN/Infinity have no JSON spelling; events never carry floats anyway
    if isinstance(obj, float) and not math.isfinite(obj):
        raise EventLogError(f"non-finite number in record: {obj!r}")
    if isinstance(obj, dict):
        for value in obj.values():
            _check_finite(value)
    elif isinstance(obj, (list, tuple)):
        for value in obj:
            _check_finite(value)


def canonical_json_str(obj: Any) -> str:
    """
    Compact JSON with sorted keys at every level.

    Inserted text stays unescaped (ensure_ascii=False) so saved logs are
    readable as-is.
    """
    _check_finite(obj)
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonical_json_bytes(obj: Any) -> bytes:
    return canonical_json_str(obj).encode("utf-8")


def encode_line(record: Dict[str, Any]) -> str:
    """One JSONL line, newline included."""
    return canonical_json_str(record) + "\n"


def decode_line(line: str, where: str = "") -> Dict[str, Any]:
    """
    Parse one stored JSONL line.

    Raises:
        EventLogError: If the line is not a JSON object (message prefixed with where)
    """
    prefix = f"{where}: " if where else ""
    try:
        record = json.loads(line)
    except ValueError as ex:
        raise EventLogError(f"{prefix}invalid JSON: {ex}") from ex
    if not isinstance(record, dict):
        raise EventLogError(f"{prefix}expected a JSON object, got {type(record).__name__}")
    return record
