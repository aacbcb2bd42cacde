"""
Replay system for recorded editor sessions.

Replay walks an EventLog in order and re-applies each event to a target
document, in place or in "(playback)" clones, with fixed pacing.
"""

from .options import ReplayOptions, TargetMode
from .mapping import CloneAssignment, PlaybackFileMapping, OpenEditorRegistry
from .engine import ReplayEngine, ReplayResult, ReplayState, ReplayStep
from .runner import CancelToken, replay

__all__ = [
    "ReplayOptions",
    "TargetMode",
    "CloneAssignment",
    "PlaybackFileMapping",
    "OpenEditorRegistry",
    "ReplayEngine",
    "ReplayResult",
    "ReplayState",
    "ReplayStep",
    "CancelToken",
    "replay",
]
