"""
Tests for the editor-style text buffer.

Critical: Replayed edits land where they landed when recorded only if
positions are resolved exactly like the editor resolves them.
"""

from codereplay.core.document import TextDocument, utf16_len
from codereplay.core.events import Position, TextRange


def test_offset_at_multiline():
    """Line/character maps to string index across lines."""
    doc = TextDocument("abc\ndef\nghi")

    assert doc.line_count == 3
    assert doc.offset_at(Position(0, 0)) == 0
    assert doc.offset_at(Position(1, 2)) == 6
    assert doc.offset_at(Position(2, 3)) == 11


def test_positions_are_clamped():
    """Positions past a line or past the document clamp to the nearest end."""
    doc = TextDocument("ab\ncd")

    assert doc.offset_at(Position(0, 99)) == 2
    assert doc.offset_at(Position(7, 0)) == len("ab\ncd")


def test_crlf_belongs_to_line_break():
    """Column past the end of a CRLF line stops before the \\r."""
    doc = TextDocument("ab\r\ncd")

    assert doc.line_text(0) == "ab"
    assert doc.offset_at(Position(0, 5)) == 2
    assert doc.position_at(3) == Position(0, 2)
    assert doc.position_at(4) == Position(1, 0)


def test_utf16_columns():
    """Characters outside the BMP count as two columns."""
    doc = TextDocument("a😀b")

    assert utf16_len("😀") == 2
    assert doc.offset_at(Position(0, 3)) == 2  # after the emoji
    assert doc.position_at(3) == Position(0, 4)


def test_apply_edit_delete_then_insert():
    """Deletion is applied before insertion at the same anchor."""
    doc = TextDocument("hello world")
    rng = TextRange(Position(0, 6), Position(0, 11))

    doc.apply_edit(rng, rng.start, "there")

    assert doc.text == "hello there"


def test_pure_insertion_and_pure_deletion():
    doc = TextDocument("abc")

    doc.apply_edit(None, Position(0, 1), "XY")
    assert doc.text == "aXYbc"

    doc.apply_edit(TextRange(Position(0, 1), Position(0, 3)), Position(0, 1), "")
    assert doc.text == "abc"


def test_replace_reports_pre_change_range():
    """replace() reports what a host would: validated range, text, UTF-16 removed length."""
    doc = TextDocument("x😀y\nz")

    change = doc.replace(TextRange(Position(0, 1), Position(0, 3)), "--")

    assert change.range == TextRange(Position(0, 1), Position(0, 3))
    assert change.text == "--"
    assert change.range_length == 2
    assert doc.text == "x--y\nz"


def test_replace_normalizes_reversed_range():
    doc = TextDocument("abcdef")

    change = doc.replace(TextRange(Position(0, 4), Position(0, 1)), "")

    assert change.range == TextRange(Position(0, 1), Position(0, 4))
    assert doc.text == "aef"


def test_lone_cr_is_a_line_break():
    """A bare \\r ends a line the same way \\n and \\r\\n do."""
    doc = TextDocument("a\rb\r\nc\nd")

    assert doc.line_count == 4
    assert [doc.line_text(i) for i in range(4)] == ["a", "b", "c", "d"]
    assert doc.offset_at(Position(1, 0)) == 2
    assert doc.offset_at(Position(2, 0)) == 5
    assert doc.position_at(2) == Position(1, 0)


def test_column_inside_surrogate_pair_clamps_before_it():
    doc = TextDocument("a😀b")

    assert doc.offset_at(Position(0, 2)) == 1
    assert doc.position_at(1) == Position(0, 1)
