"""
Editor-style text buffer.

Positions follow editor conventions: zero-based lines split on "\r\n", "\n"
or a lone "\r" (the break itself belongs to no line), columns in UTF-16 code
units, and out-of-range positions clamped to the nearest valid one. A column
that falls between the two halves of a surrogate pair clamps to before the
pair.
"""

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .events import Position, TextRange

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def utf16_len(text: str) -> int:
    """Length of text in UTF-16 code units."""
    return sum(2 if ord(c) > 0xFFFF else 1 for c in text)


def _utf16_to_index(line_text: str, units: int) -> int:
    count = 0
    for i, c in enumerate(line_text):
        count += 2 if ord(c) > 0xFFFF else 1
        if count > units:
            return i
    return len(line_text)


@dataclass(frozen=True)
class ContentChange:
    """
    One content change as reported by a host.

    Fields:
        range: Pre-change range that was replaced
        text: Inserted text
        range_length: Length (UTF-16 units) of the replaced text
    """
    range: TextRange
    text: str
    range_length: int


class TextDocument:
    """Mutable text buffer addressed by editor positions."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._starts: Optional[List[int]] = None

    @property
    def text(self) -> str:
        return self._text

    def _line_starts(self) -> List[int]:
        if self._starts is None:
            self._starts = [0] + [m.end() for m in _LINE_BREAK.finditer(self._text)]
        return self._starts

    @property
    def line_count(self) -> int:
        return len(self._line_starts())

    def _line_bounds(self, line: int) -> Tuple[int, int]:
        starts = self._line_starts()
        start = starts[line]
        if line + 1 < len(starts):
            nxt = starts[line + 1]
            end = nxt - 2 if nxt - 2 >= start and self._text[nxt - 2:nxt] == "\r\n" else nxt - 1
        else:
            end = len(self._text)
        return start, end

    def line_text(self, line: int) -> str:
        start, end = self._line_bounds(line)
        return self._text[start:end]

    def offset_at(self, position: Position) -> int:
        """String index for a position, clamped to the document."""
        if position.line >= self.line_count:
            return len(self._text)
        start, end = self._line_bounds(position.line)
        return start + _utf16_to_index(self._text[start:end], position.character)

    def position_at(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self._text)))
        line = bisect_right(self._line_starts(), offset) - 1
        start, end = self._line_bounds(line)
        return Position(line, utf16_len(self._text[start:min(offset, end)]))

    def validate_range(self, rng: TextRange) -> TextRange:
        s, e = sorted((self.offset_at(rng.start), self.offset_at(rng.end)))
        return TextRange(self.position_at(s), self.position_at(e))

    def get_text(self, rng: Optional[TextRange] = None) -> str:
        if rng is None:
            return self._text
        s, e = sorted((self.offset_at(rng.start), self.offset_at(rng.end)))
        return self._text[s:e]

    def apply_edit(
        self,
        delete_range: Optional[TextRange] = None,
        insert_at: Optional[Position] = None,
        text: str = "",
    ) -> None:
        """
        Delete delete_range (if given), then insert text at insert_at.

        The insertion offset is computed against the post-deletion buffer.
        """
        if delete_range is not None:
            s, e = sorted((self.offset_at(delete_range.start), self.offset_at(delete_range.end)))
            self._set(self._text[:s] + self._text[e:])
        if text:
            if insert_at is None:
                raise ValueError("insert_at is required when inserting text")
            o = self.offset_at(insert_at)
            self._set(self._text[:o] + text + self._text[o:])

    def replace(self, rng: TextRange, text: str) -> ContentChange:
        """Replace rng with text, returning the change as a host would report it."""
        valid = self.validate_range(rng)
        removed = self.get_text(valid)
        s = self.offset_at(valid.start)
        self._set(self._text[:s] + text + self._text[s + len(removed):])
        return ContentChange(range=valid, text=text, range_length=utf16_len(removed))

    def _set(self, text: str) -> None:
        self._text = text
        self._starts = None
