"""
Tests for the record/stop/play command surface.
"""

import os
import tempfile

import pytest

from codereplay.controller import CodeReplayController
from codereplay.core.errors import ReplayError
from codereplay.core.events import Position
from codereplay.host import MemoryHost
from codereplay.log import FileEventLogStore
from codereplay.replay import ReplayOptions, TargetMode

A = "file:///work/a.py"
B = "file:///work/b.py"


def _record(ctl: CodeReplayController, host: MemoryHost) -> int:
    ctl.start_recording()
    host.focus(A)
    host.type_text(A, Position(0, 0), "hi")
    host.focus(B)
    host.type_text(B, Position(0, 0), "!")
    return ctl.stop_recording()


def test_record_then_play_in_place_on_fresh_host():
    host = MemoryHost({A: "", B: ""})
    ctl = CodeReplayController(host, host, subscribe=host.subscribe)

    assert _record(ctl, host) == 4
    assert ("info", "CodeReplay: Recording stopped. Captured 4 events.") in host.messages

    # replaying in place onto the recorded files applies the edits a second time
    result = ctl.start_playback(ReplayOptions(mode=TargetMode.IN_PLACE), sleep=lambda s: None)
    assert result.ok
    assert host.content(A) == "hihi"


def test_playback_refused_while_recording():
    host = MemoryHost({A: ""})
    ctl = CodeReplayController(host, host, subscribe=host.subscribe)
    ctl.start_recording()

    with pytest.raises(ReplayError):
        ctl.start_playback(sleep=lambda s: None)


def test_playback_does_not_record_itself():
    """Replay edits reach the subscribed session but are not captured."""
    host = MemoryHost({A: "", B: ""}, root="/workspace")
    ctl = CodeReplayController(host, host, subscribe=host.subscribe)
    _record(ctl, host)

    ctl.start_playback(ReplayOptions(mode=TargetMode.CLONED), sleep=lambda s: None)

    assert len(ctl.session.log) == 4


def test_save_and_load_round_trip():
    host = MemoryHost({A: "", B: ""})
    ctl = CodeReplayController(host, host, subscribe=host.subscribe)
    _record(ctl, host)

    with tempfile.TemporaryDirectory() as tmpdir:
        store = FileEventLogStore(os.path.join(tmpdir, "s.jsonl"))
        assert ctl.save(store) == 4

        fresh_host = MemoryHost({A: "", B: ""})
        fresh = CodeReplayController(fresh_host, fresh_host)
        loaded = fresh.load(store)

    assert loaded == ctl.session.log
    result = fresh.start_playback(ReplayOptions(mode=TargetMode.IN_PLACE), sleep=lambda s: None)
    assert result.ok
    assert fresh_host.content(A) == "hi"
    assert fresh_host.content(B) == "!"


def test_close_unsubscribes():
    host = MemoryHost({A: ""})
    ctl = CodeReplayController(host, host, subscribe=host.subscribe)
    ctl.close()
    ctl.start_recording()

    host.type_text(A, Position(0, 0), "x")

    assert ctl.stop_recording() == 0
