"""
Core recording primitives.

This module provides the foundational abstractions shared by capture and replay:
- Events: EditEvent / SwitchFileEvent records and the EventLog trace
- TextDocument: editor-style text buffer (UTF-16 columns)
- Canonical: Deterministic serialization
- Clock: Timestamp sources
- IDs: File identity helpers
"""

from .events import (
    Position,
    TextRange,
    EditEvent,
    SwitchFileEvent,
    CodeEvent,
    event_to_dict,
    event_from_dict,
)
from .event_log import EventLog
from .document import TextDocument, ContentChange, utf16_len
from .canonical import canonical_json_bytes, canonical_json_str, encode_line, decode_line
from .clock import SystemClock, DeterministicClock
from .ids import stable_id, path_to_uri, uri_to_path, uri_basename, playback_name
from .errors import (
    CodeReplayError,
    EventLogError,
    IntegrityError,
    ReplayError,
    NoOutputRoot,
    DocumentOpenFailure,
    DocumentNotFound,
    EditConflict,
)

__all__ = [
    "Position",
    "TextRange",
    "EditEvent",
    "SwitchFileEvent",
    "CodeEvent",
    "event_to_dict",
    "event_from_dict",
    "EventLog",
    "TextDocument",
    "ContentChange",
    "utf16_len",
    "encode_line",
    "decode_line",
    "canonical_json_bytes",
    "canonical_json_str",
    "SystemClock",
    "DeterministicClock",
    "stable_id",
    "path_to_uri",
    "uri_to_path",
    "uri_basename",
    "playback_name",
    "CodeReplayError",
    "EventLogError",
    "IntegrityError",
    "ReplayError",
    "NoOutputRoot",
    "DocumentOpenFailure",
    "DocumentNotFound",
    "EditConflict",
]
