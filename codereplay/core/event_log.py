"""
EventLog: the ordered trace of one recording session.
"""

from typing import Any, Dict, Iterable, Iterator, List, Optional

from .canonical import canonical_json_str
from .events import CodeEvent, event_from_dict, event_to_dict
from .ids import stable_id


class EventLog:
    """
    Insertion-ordered sequence of CodeEvents.

    Order is significant: an edit's range is only valid against the document
    produced by every earlier edit to the same file.
    """

    def __init__(self, events: Optional[Iterable[CodeEvent]] = None) -> None:
        self._events: List[CodeEvent] = list(events or [])

    def append(self, event: CodeEvent) -> None:
        self._events.append(event)

    def extend(self, events: Iterable[CodeEvent]) -> None:
        self._events.extend(events)

    def clear(self) -> None:
        self._events = []

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[CodeEvent]:
        return iter(self._events)

    def __getitem__(self, index: int) -> CodeEvent:
        return self._events[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EventLog):
            return NotImplemented
        return self._events == other._events

    def __repr__(self) -> str:
        return f"EventLog({len(self._events)} events)"

    def file_ids(self) -> List[str]:
        """Distinct file ids in order of first reference."""
        seen: Dict[str, None] = {}
        for ev in self._events:
            seen.setdefault(ev.file_id, None)
        return list(seen)

    def to_records(self) -> List[Dict[str, Any]]:
        return [event_to_dict(ev) for ev in self._events]

    @staticmethod
    def from_records(records: Iterable[Dict[str, Any]]) -> "EventLog":
        return EventLog(event_from_dict(rec) for rec in records)

    def fingerprint(self) -> str:
        """Stable short hash of the log contents (used as a trace id)."""
        return stable_id(canonical_json_str(self.to_records()))[:16]
