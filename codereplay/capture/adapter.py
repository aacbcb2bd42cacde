"""
JSON-lines host adapter.

Editor integrations that run out of process emit one JSON object per
notification:

    {"kind": "text_changed", "document_id": "file:///w/a.py", "is_transient": false,
     "changes": [{"range": {"start": {"line": 0, "character": 0},
                            "end": {"line": 0, "character": 0}},
                  "text": "hi", "range_length": 0}]}
    {"kind": "active_changed", "document_id": "file:///w/b.py", "is_transient": false}
"""

import json
from typing import Any, Dict, Iterable

from ..core.document import ContentChange
from ..core.errors import EventLogError
from ..core.events import TextRange
from .listener import CaptureListener

TEXT_CHANGED = "text_changed"
ACTIVE_CHANGED = "active_changed"


def _parse_change(data: Dict[str, Any]) -> ContentChange:
    text = data["text"]
    if not isinstance(text, str):
        raise TypeError(f"text must be a string, got {type(text).__name__}")
    range_length = data["range_length"]
    if isinstance(range_length, bool) or not isinstance(range_length, int) or range_length < 0:
        raise ValueError(f"range_length must be a non-negative integer, got {range_length!r}")
    return ContentChange(
        range=TextRange.from_dict(data["range"]),
        text=text,
        range_length=range_length,
    )


def _transient_flag(data: Dict[str, Any]) -> bool:
    flag = data.get("is_transient", False)
    if not isinstance(flag, bool):
        raise TypeError(f"is_transient must be a boolean, got {flag!r}")
    return flag


def parse_notification(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a decoded notification and normalize its fields.

    Every change needs range, text and range_length; is_transient, when
    present, must be a JSON boolean.

    Raises:
        EventLogError: If the notification kind is unknown or fields are malformed
    """
    if not isinstance(data, dict):
        raise EventLogError(f"notification must be an object, got {type(data).__name__}")
    kind = data.get("kind")
    try:
        if kind == TEXT_CHANGED:
            return {
                "kind": kind,
                "document_id": str(data["document_id"]),
                "is_transient": _transient_flag(data),
                "changes": [_parse_change(c) for c in data.get("changes", [])],
            }
        if kind == ACTIVE_CHANGED:
            doc = data.get("document_id")
            return {
                "kind": kind,
                "document_id": str(doc) if doc is not None else None,
                "is_transient": _transient_flag(data),
            }
    except KeyError as ex:
        raise EventLogError(f"malformed {kind} notification: missing {ex}") from ex
    except (TypeError, ValueError) as ex:
        raise EventLogError(f"malformed {kind} notification: {ex}") from ex
    raise EventLogError(f"unknown notification kind: {kind!r}")


def feed_notifications(listener: CaptureListener, lines: Iterable[str]) -> int:
    """
    Dispatch JSON-lines notifications to listener in order.

    Blank lines are skipped.

    Returns:
        Number of notifications dispatched

    Raises:
        EventLogError: With the 1-based line number of the first bad line
    """
    count = 0
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            note = parse_notification(json.loads(line))
        except ValueError as ex:
            raise EventLogError(f"line {lineno}: {ex}") from ex
        except EventLogError as ex:
            raise EventLogError(f"line {lineno}: {ex}") from ex

        if note["kind"] == TEXT_CHANGED:
            listener.on_text_changed(note["document_id"], note["is_transient"], note["changes"])
        else:
            listener.on_active_document_changed(note["document_id"], note["is_transient"])
        count += 1
    return count
