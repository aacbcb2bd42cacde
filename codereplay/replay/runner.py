"""
Replay runner: drive the engine's steps in real (or injected) time.
"""

import threading
import time
from typing import Callable, Optional

from ..core.event_log import EventLog
from ..host.base import DocumentStore, PresentationSurface
from .engine import ReplayEngine, ReplayResult
from .options import ReplayOptions


class CancelToken:
    """Cooperative cancellation, checked at every suspension point."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to seconds; returns early (True) when cancelled."""
        return self._event.wait(seconds)


def replay(
    log: EventLog,
    documents: DocumentStore,
    surface: PresentationSurface,
    options: Optional[ReplayOptions] = None,
    sleep: Optional[Callable[[float], object]] = None,
    cancel: Optional[CancelToken] = None,
    file_creator: Optional[Callable[[str], object]] = None,
) -> ReplayResult:
    """
    Replay log against documents, pausing between steps.

    Args:
        log: Finished recording
        documents: Store used to open/create target documents
        surface: Focus and message surface
        options: Mode and pacing (defaults: cloned, 50/200/3000 ms)
        sleep: Called with seconds for each pause (default: time.sleep,
            or an interruptible wait when cancel is given)
        cancel: Token checked before and after each pause
        file_creator: Override for creating empty clone files

    Returns:
        ReplayResult (FINISHED, or ABORTED when cancelled)

    Raises:
        NoOutputRoot: Cloned mode with no resolvable output directory
    """
    if sleep is None:
        sleep = cancel.wait if cancel is not None else time.sleep

    engine = ReplayEngine(documents, surface, options, file_creator=file_creator)
    for step in engine.steps(log):
        if cancel is not None and cancel.cancelled:
            engine.abort("cancelled")
            break
        if step.delay_ms:
            sleep(step.delay_ms / 1000)
        if cancel is not None and cancel.cancelled:
            engine.abort("cancelled")
            break
    return engine.result
