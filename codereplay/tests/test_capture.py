"""
Tests for the capture filter.

Critical: Only non-transient changes observed while recording become
events, in exactly the order the host reported them.
"""

import json

import pytest

from codereplay.capture import ContentChange, RecordingSession, feed_notifications
from codereplay.core.clock import DeterministicClock
from codereplay.core.errors import EventLogError
from codereplay.core.events import EditEvent, Position, SwitchFileEvent, TextRange
from codereplay.host import MemoryHost
from codereplay.replay import ReplayOptions, TargetMode, replay

A = "file:///work/a.py"
B = "file:///work/b.py"
TS = "2024-01-01T00:00:00.000Z"


def _session() -> RecordingSession:
    return RecordingSession(clock=DeterministicClock(1_704_067_200_000))


def _change(line: int, ch: int, text: str) -> ContentChange:
    return ContentChange(range=TextRange.at(line, ch), text=text, range_length=0)


def test_not_recording_captures_nothing():
    """Notifications before start() or after stop() are ignored."""
    session = _session()

    session.on_text_changed(A, False, [_change(0, 0, "x")])
    session.on_active_document_changed(B, False)
    assert len(session.log) == 0

    session.start()
    session.stop()
    session.on_text_changed(A, False, [_change(0, 0, "x")])
    assert len(session.log) == 0


def test_transient_documents_ignored():
    session = _session()
    session.start()

    session.on_text_changed("untitled:Untitled-1", True, [_change(0, 0, "x")])
    session.on_active_document_changed("untitled:Untitled-1", True)

    assert len(session.log) == 0


def test_focus_to_no_editor_ignored():
    session = _session()
    session.start()

    session.on_active_document_changed(None, False)

    assert len(session.log) == 0


def test_multi_change_notification_keeps_host_order():
    """A bundled notification yields one EditEvent per change, in order."""
    session = _session()
    session.start()

    changes = [_change(3, 0, "c"), _change(1, 0, "b"), _change(0, 0, "a")]
    session.on_text_changed(A, False, changes)

    assert [ev.inserted_text for ev in session.log] == ["c", "b", "a"]
    assert all(ev.timestamp == TS for ev in session.log)


def test_start_resets_log_mid_session():
    session = _session()
    session.start()
    session.on_text_changed(A, False, [_change(0, 0, "x")])
    assert len(session.log) == 1

    session.start()

    assert session.is_recording
    assert len(session.log) == 0


def test_stop_returns_count_and_keeps_log():
    session = _session()
    session.start()
    session.on_text_changed(A, False, [_change(0, 0, "x"), _change(0, 1, "y")])
    session.on_active_document_changed(B, False)

    assert session.stop() == 3
    assert not session.is_recording
    assert len(session.log) == 3


def test_snapshot_is_independent_copy():
    session = _session()
    session.start()
    session.on_active_document_changed(B, False)

    snap = session.snapshot()
    session.on_active_document_changed(A, False)

    assert len(snap) == 1
    assert len(session.log) == 2


def test_recorded_scenario_log():
    """insert "hi" in A, switch to B, append "!" in B."""
    host = MemoryHost({A: "", B: "ab"})
    session = _session()
    host.subscribe(session)
    host.focus(A)

    session.start()
    host.type_text(A, Position(0, 0), "hi")
    host.focus(B)
    host.type_text(B, Position(0, 2), "!")
    assert session.stop() == 3

    assert list(session.log) == [
        EditEvent(TS, A, TextRange.at(0, 0), "hi", 0),
        SwitchFileEvent(TS, B),
        EditEvent(TS, B, TextRange.at(0, 2), "!", 0),
    ]


def test_host_replacement_records_deleted_length():
    host = MemoryHost({A: "hello world"})
    session = _session()
    host.subscribe(session)
    session.start()

    host.replace(A, TextRange(Position(0, 0), Position(0, 5)), "bye")

    ev = session.log[0]
    assert ev.range == TextRange(Position(0, 0), Position(0, 5))
    assert ev.inserted_text == "bye"
    assert ev.deleted_length == 5


def test_unsubscribe_stops_delivery():
    host = MemoryHost({A: ""})
    session = _session()
    unsubscribe = host.subscribe(session)
    session.start()

    unsubscribe()
    host.type_text(A, Position(0, 0), "x")

    assert len(session.log) == 0


def test_feed_notifications():
    session = _session()
    session.start()
    lines = [
        json.dumps({"kind": "active_changed", "document_id": A, "is_transient": False}),
        "",
        json.dumps({
            "kind": "text_changed",
            "document_id": A,
            "is_transient": False,
            "changes": [
                {"range": TextRange.at(0, 0).to_dict(), "text": "x", "range_length": 0},
            ],
        }),
        json.dumps({"kind": "text_changed", "document_id": "untitled:1", "is_transient": True,
                    "changes": [{"range": TextRange.at(0, 0).to_dict(), "text": "y", "range_length": 0}]}),
    ]

    assert feed_notifications(session, lines) == 3
    assert [ev.type for ev in session.log] == ["switch_file", "edit"]


def test_feed_notifications_reports_bad_line():
    session = _session()
    session.start()
    lines = [
        json.dumps({"kind": "active_changed", "document_id": A}),
        json.dumps({"kind": "selection_changed", "document_id": A}),
    ]

    with pytest.raises(EventLogError, match="line 2"):
        feed_notifications(session, lines)


def test_feed_notifications_rejects_invalid_json():
    with pytest.raises(EventLogError, match="line 1"):
        feed_notifications(_session(), ["{not json"])


def _text_changed(change: dict, **extra) -> str:
    return json.dumps({"kind": "text_changed", "document_id": A, "changes": [change], **extra})


def test_feed_notifications_requires_range_length():
    """A replacement without its removed length cannot be replayed faithfully."""
    session = _session()
    session.start()
    rng = TextRange(Position(0, 0), Position(0, 3)).to_dict()

    with pytest.raises(EventLogError, match="line 1: .*range_length"):
        feed_notifications(session, [_text_changed({"range": rng, "text": "X"})])
    assert len(session.log) == 0


def test_feed_notifications_replacement_replays_deletion():
    session = _session()
    session.start()
    rng = TextRange(Position(0, 0), Position(0, 3)).to_dict()
    feed_notifications(session, [_text_changed({"range": rng, "text": "X", "range_length": 3})])
    session.stop()

    host = MemoryHost({A: "abcdef"})
    result = replay(session.log, host, host, ReplayOptions(mode=TargetMode.IN_PLACE), sleep=lambda s: None)

    assert result.ok
    assert host.content(A) == "Xdef"


@pytest.mark.parametrize(
    "change",
    [
        {"range": TextRange.at(0, 0).to_dict(), "text": None, "range_length": 0},
        {"range": TextRange.at(0, 0).to_dict(), "text": 5, "range_length": 0},
        {"range": TextRange.at(0, 0).to_dict(), "text": "x", "range_length": -1},
        {"range": TextRange.at(0, 0).to_dict(), "text": "x", "range_length": "2"},
    ],
)
def test_feed_notifications_rejects_bad_change_fields(change):
    session = _session()
    session.start()

    with pytest.raises(EventLogError, match="line 1"):
        feed_notifications(session, [_text_changed(change)])
    assert len(session.log) == 0


@pytest.mark.parametrize("kind", ["active_changed", "text_changed"])
def test_feed_notifications_requires_boolean_transient_flag(kind):
    """A string "false" is not a boolean; it must not silently drop the document."""
    session = _session()
    session.start()
    line = json.dumps({"kind": kind, "document_id": A, "is_transient": "false", "changes": []})

    with pytest.raises(EventLogError, match="is_transient"):
        feed_notifications(session, [line])
