"""
Command surface a host binds its record/stop/play actions to.

The controller owns one RecordingSession and wires it to a host that acts
as a change source; it never runs recording and playback at the same time.
"""

import logging
from typing import Callable, Optional

from .capture.session import RecordingSession
from .core.errors import ReplayError
from .core.event_log import EventLog
from .host.base import DocumentStore, PresentationSurface
from .log.store import EventLogStore
from .replay.engine import ReplayResult
from .replay.options import ReplayOptions
from .replay.runner import CancelToken, replay

logger = logging.getLogger(__name__)


class CodeReplayController:
    """
    Usage:
        host = MemoryHost(...)
        ctl = CodeReplayController(host, host, subscribe=host.subscribe)
        ctl.start_recording()
        ...
        ctl.stop_recording()
        ctl.start_playback(ReplayOptions(mode=TargetMode.CLONED))
    """

    def __init__(
        self,
        documents: DocumentStore,
        surface: PresentationSurface,
        session: Optional[RecordingSession] = None,
        subscribe: Optional[Callable] = None,
    ) -> None:
        self.documents = documents
        self.surface = surface
        self.session = session or RecordingSession()
        self._unsubscribe = subscribe(self.session) if subscribe is not None else None
        self._playing = False

    def start_recording(self) -> None:
        if self._playing:
            raise ReplayError("cannot start recording during playback")
        self.session.start()
        self.surface.info("CodeReplay: Recording started!")

    def stop_recording(self) -> int:
        count = self.session.stop()
        self.surface.info(f"CodeReplay: Recording stopped. Captured {count} events.")
        return count

    def start_playback(
        self,
        options: Optional[ReplayOptions] = None,
        sleep: Optional[Callable[[float], object]] = None,
        cancel: Optional[CancelToken] = None,
    ) -> ReplayResult:
        """
        Replay the last recording.

        Raises:
            ReplayError: While a recording is running
            NoOutputRoot: Cloned mode with no resolvable output directory
        """
        if self.session.is_recording:
            raise ReplayError("stop recording before starting playback")
        self._playing = True
        try:
            return replay(self.session.snapshot(), self.documents, self.surface, options, sleep=sleep, cancel=cancel)
        finally:
            self._playing = False

    def save(self, store: EventLogStore) -> int:
        return store.save(self.session.log)

    def load(self, store: EventLogStore) -> EventLog:
        """Replace the session's log with a stored one (recording must be stopped)."""
        if self.session.is_recording:
            raise ReplayError("stop recording before loading a saved log")
        log = store.load()
        self.session.clear()
        self.session.log.extend(log)
        logger.info("Loaded %d events", len(log))
        return log

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
