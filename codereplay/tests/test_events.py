"""
Tests for the event model, EventLog and file identity helpers.
"""

import pytest

from codereplay.core.errors import EventLogError
from codereplay.core.event_log import EventLog
from codereplay.core.events import (
    EditEvent,
    Position,
    SwitchFileEvent,
    TextRange,
    event_from_dict,
    event_to_dict,
)
from codereplay.core.ids import path_to_uri, playback_name, uri_basename, uri_to_path
from codereplay.core.clock import DeterministicClock

A = "file:///work/a.py"
B = "file:///work/b.py"


def _sample_log() -> EventLog:
    return EventLog([
        EditEvent("2024-01-01T00:00:00.000Z", A, TextRange.at(0, 0), "hi", 0),
        SwitchFileEvent("2024-01-01T00:00:01.000Z", B),
        EditEvent("2024-01-01T00:00:02.000Z", B, TextRange(Position(0, 0), Position(0, 2)), "", 2),
        SwitchFileEvent("2024-01-01T00:00:03.000Z", A),
    ])


def test_edit_event_record_shape():
    ev = EditEvent("t", A, TextRange(Position(1, 2), Position(1, 4)), "xy", 2)

    assert event_to_dict(ev) == {
        "type": "edit",
        "timestamp": "t",
        "file_id": A,
        "range": {"start": {"line": 1, "character": 2}, "end": {"line": 1, "character": 4}},
        "inserted_text": "xy",
        "deleted_length": 2,
    }


def test_switch_event_record_shape():
    assert event_to_dict(SwitchFileEvent("t", B)) == {"type": "switch_file", "timestamp": "t", "file_id": B}


def test_records_decode_to_equal_log():
    log = _sample_log()

    assert EventLog.from_records(log.to_records()) == log


def test_unknown_event_type_rejected():
    with pytest.raises(EventLogError):
        event_from_dict({"type": "cursor", "timestamp": "t", "file_id": A})


def test_malformed_edit_rejected():
    with pytest.raises(EventLogError):
        event_from_dict({"type": "edit", "timestamp": "t", "file_id": A, "range": {"start": {}}})


def test_negative_position_rejected():
    with pytest.raises(ValueError):
        Position(-1, 0)


def test_file_ids_in_first_reference_order():
    assert _sample_log().file_ids() == [A, B]


def test_fingerprint_stable_and_content_sensitive():
    log = _sample_log()

    assert log.fingerprint() == _sample_log().fingerprint()
    log.append(SwitchFileEvent("t", B))
    assert log.fingerprint() != _sample_log().fingerprint()


@pytest.mark.parametrize(
    "file_id,expected",
    [
        ("file:///work/app.py", "app(playback).py"),
        ("file:///work/.bashrc", ".bashrc(playback)"),
        ("file:///work/a.tar.gz", "a.tar(playback).gz"),
        ("file:///work/Makefile", "Makefile(playback)"),
        ("file:///work/my%20notes.md", "my notes(playback).md"),
    ],
)
def test_playback_name(file_id, expected):
    assert playback_name(file_id) == expected


def test_playback_name_numbered():
    assert playback_name(A, 2) == "a(playback-2).py"


def test_uri_helpers():
    uri = path_to_uri("/tmp/some dir/x.txt")

    assert uri.startswith("file:///")
    assert uri_to_path(uri) == "/tmp/some dir/x.txt"
    assert uri_basename(uri) == "x.txt"
    assert uri_to_path("untitled:Untitled-1") is None


def test_deterministic_clock_iso():
    clock = DeterministicClock(1_700_000_000_250)

    assert clock.now_iso() == "2023-11-14T22:13:20.250Z"
    assert clock.tick(750).now_iso() == "2023-11-14T22:13:21.000Z"
