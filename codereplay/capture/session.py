"""
Recording session: the capture filter plus its recording state.

The session is an explicit object owned by the caller; nothing here is
module-global. Capture is synchronous and only mutates in-memory state.
"""

import logging
from typing import Optional, Sequence

from ..core.clock import SystemClock
from ..core.document import ContentChange
from ..core.event_log import EventLog
from ..core.events import EditEvent, SwitchFileEvent
from .listener import CaptureListener

logger = logging.getLogger(__name__)


class RecordingSession(CaptureListener):
    """
    Accumulates EditEvents and SwitchFileEvents while recording.

    Lifecycle:
        start()  -> log cleared, recording on
        stop()   -> recording off, log kept until the next start()

    Usage:
        session = RecordingSession()
        host.subscribe(session)
        session.start()
        ...
        count = session.stop()
    """

    def __init__(self, clock=None) -> None:
        self.clock = clock or SystemClock()
        self._log = EventLog()
        self._recording = False

    @property
    def is_recording(self) -> bool:
        return self._recording

    @property
    def log(self) -> EventLog:
        return self._log

    def start(self) -> None:
        """Discard any previous log and begin capturing."""
        if len(self._log):
            logger.info("Discarding %d previously captured events", len(self._log))
        self._log = EventLog()
        self._recording = True
        logger.info("Recording started")

    def stop(self) -> int:
        """Stop capturing and return the number of captured events."""
        self._recording = False
        count = len(self._log)
        logger.info("Recording stopped, captured %d events", count)
        return count

    def clear(self) -> None:
        self._log = EventLog()

    def snapshot(self) -> EventLog:
        """Copy of the current log, safe to hand to replay."""
        return EventLog(self._log)

    def on_text_changed(
        self,
        document_id: str,
        is_transient: bool,
        changes: Sequence[ContentChange],
    ) -> None:
        if not self._recording or is_transient or not changes:
            return
        timestamp = self.clock.now_iso()
        for change in changes:
            event = EditEvent(
                timestamp=timestamp,
                file_id=document_id,
                range=change.range,
                inserted_text=change.text,
                deleted_length=change.range_length,
            )
            self._log.append(event)
            logger.debug(
                "Captured edit %s in %s (+%d/-%d)",
                change.range,
                document_id,
                len(change.text),
                change.range_length,
            )

    def on_active_document_changed(self, document_id: Optional[str], is_transient: bool) -> None:
        if not self._recording or is_transient or document_id is None:
            return
        self._log.append(SwitchFileEvent(timestamp=self.clock.now_iso(), file_id=document_id))
        logger.debug("Captured switch to %s", document_id)
