"""
Event model for recorded editor sessions.

Events are immutable records of what the editor observed:
- EditEvent: a text mutation with its pre-change range
- SwitchFileEvent: focus moved to another document
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from .errors import EventLogError

EDIT = "edit"
SWITCH_FILE = "switch_file"


@dataclass(frozen=True)
class Position:
    """Zero-based line and UTF-16 code-unit column."""
    line: int
    character: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.character < 0:
            raise ValueError(f"negative position: {self.line}:{self.character}")

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "character": self.character}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Position":
        return Position(line=int(data["line"]), character=int(data["character"]))

    def __str__(self) -> str:
        return f"{self.line}:{self.character}"


@dataclass(frozen=True)
class TextRange:
    start: Position
    end: Position

    def to_dict(self) -> Dict[str, Any]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "TextRange":
        return TextRange(start=Position.from_dict(data["start"]), end=Position.from_dict(data["end"]))

    @staticmethod
    def at(line: int, character: int) -> "TextRange":
        """Empty range (caret) at line:character."""
        p = Position(line, character)
        return TextRange(p, p)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class EditEvent:
    """
    Text mutation observed in a document.

    Fields:
        timestamp: ISO-8601 instant (diagnostic only, not used for pacing)
        file_id: URI of the original document
        range: Pre-change range replaced by this edit
        inserted_text: Text inserted at range.start
        deleted_length: Length (UTF-16 units) of the text removed
    """
    timestamp: str
    file_id: str
    range: TextRange
    inserted_text: str = ""
    deleted_length: int = 0

    @property
    def type(self) -> str:
        return EDIT


@dataclass(frozen=True)
class SwitchFileEvent:
    """Focus moved to file_id."""
    timestamp: str
    file_id: str

    @property
    def type(self) -> str:
        return SWITCH_FILE


CodeEvent = Union[EditEvent, SwitchFileEvent]


def event_to_dict(event: CodeEvent) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "type": event.type,
        "timestamp": event.timestamp,
        "file_id": event.file_id,
    }
    if isinstance(event, EditEvent):
        data["range"] = event.range.to_dict()
        data["inserted_text"] = event.inserted_text
        data["deleted_length"] = event.deleted_length
    return data


def event_from_dict(data: Dict[str, Any]) -> CodeEvent:
    """
    Decode a stored event record.

    Raises:
        EventLogError: If the record type is unknown or fields are missing
    """
    try:
        kind = data["type"]
        if kind == EDIT:
            return EditEvent(
                timestamp=data["timestamp"],
                file_id=data["file_id"],
                range=TextRange.from_dict(data["range"]),
                inserted_text=data.get("inserted_text", ""),
                deleted_length=int(data.get("deleted_length", 0)),
            )
        if kind == SWITCH_FILE:
            return SwitchFileEvent(timestamp=data["timestamp"], file_id=data["file_id"])
    except (KeyError, TypeError, ValueError) as ex:
        raise EventLogError(f"malformed event record: {ex}") from ex
    raise EventLogError(f"unknown event type: {kind}")
