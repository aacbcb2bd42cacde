"""
Replay engine: re-enact a finished EventLog against live documents.

The engine is a step generator. Each step applies its effect (resolve the
target, make it active, apply the edit) and is then yielded with the pause
that should follow it. A driving loop (see runner.replay) performs the
actual waiting, so tests can walk a replay without real time passing.

States: IDLE -> COUNTING_DOWN -> REPLAYING -> FINISHED | ABORTED
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional

from ..core.errors import (
    CodeReplayError,
    DocumentNotFound,
    DocumentOpenFailure,
    EditConflict,
    NoOutputRoot,
    ReplayError,
)
from ..core.event_log import EventLog
from ..core.events import CodeEvent, EditEvent
from ..host.base import DocumentHandle, DocumentStore, PresentationSurface
from ..logging_config import get_logger
from .mapping import OpenEditorRegistry, PlaybackFileMapping
from .options import ReplayOptions, TargetMode

COUNTDOWN = "countdown"
EDIT = "edit"
SWITCH = "switch"

MSG_EMPTY = "No recording to play back."
MSG_FINISHED = "Playback finished!"


class ReplayState(str, Enum):
    IDLE = "idle"
    COUNTING_DOWN = "counting_down"
    REPLAYING = "replaying"
    FINISHED = "finished"
    ABORTED = "aborted"


@dataclass(frozen=True)
class ReplayStep:
    """
    One applied step and the pause that follows it.

    Fields:
        kind: countdown | edit | switch
        delay_ms: Pause the driver should take after this step
        index: Position of the event in the log (None for the countdown)
        event: The replayed event (None for the countdown)
        target_id: Document the event was applied to
    """
    kind: str
    delay_ms: int
    index: Optional[int] = None
    event: Optional[CodeEvent] = None
    target_id: Optional[str] = None


@dataclass(frozen=True)
class ReplayResult:
    """
    Outcome of a replay.

    Fields:
        state: FINISHED or ABORTED
        applied: Number of events processed
        edits: Edit events applied
        switches: Switch events processed
        focus_changes: Times a document had to be opened/focused
        clones: Original file_id -> clone document id (cloned mode)
        failures: Recovered per-file/per-event errors, in order
        message: Final user-facing report
    """
    state: ReplayState
    applied: int = 0
    edits: int = 0
    switches: int = 0
    focus_changes: int = 0
    clones: Dict[str, str] = field(default_factory=dict)
    failures: List[CodeReplayError] = field(default_factory=list)
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.state == ReplayState.FINISHED


class _Run:
    """Mutable bookkeeping for one walk of a log."""

    def __init__(self, output_root: Optional[str]) -> None:
        self.output_root = output_root
        self.mapping = PlaybackFileMapping()
        self.registry = OpenEditorRegistry()
        self.clones: Dict[str, str] = {}
        self.failures: List[CodeReplayError] = []
        self.applied = 0
        self.edits = 0
        self.switches = 0
        self.focus_changes = 0
        self.message = ""


class ReplayEngine:
    """
    Usage:
        engine = ReplayEngine(host, host, ReplayOptions(mode=TargetMode.IN_PLACE))
        for step in engine.steps(log):
            time.sleep(step.delay_ms / 1000)
        print(engine.result.message)
    """

    def __init__(
        self,
        documents: DocumentStore,
        surface: PresentationSurface,
        options: Optional[ReplayOptions] = None,
        file_creator: Optional[Callable[[str], object]] = None,
    ) -> None:
        self.documents = documents
        self.surface = surface
        self.options = options or ReplayOptions()
        self.file_creator = file_creator or documents.create_empty_file
        self._state = ReplayState.IDLE
        self._run: Optional[_Run] = None
        self._walker: Optional[Iterator[ReplayStep]] = None
        self.logger = get_logger(__name__)

    @property
    def state(self) -> ReplayState:
        return self._state

    @property
    def result(self) -> ReplayResult:
        run = self._run or _Run(None)
        return ReplayResult(
            state=self._state,
            applied=run.applied,
            edits=run.edits,
            switches=run.switches,
            focus_changes=run.focus_changes,
            clones=dict(run.clones),
            failures=list(run.failures),
            message=run.message,
        )

    def steps(self, log: EventLog) -> Iterator[ReplayStep]:
        """
        Validate log and options, then return the lazy step sequence.

        Nothing is touched before the first step is pulled. An empty log
        yields no steps and finishes immediately.

        Raises:
            NoOutputRoot: Cloned mode with no output root (state ABORTED)
            ReplayError: If a replay is already in progress on this engine
        """
        if self._state in (ReplayState.COUNTING_DOWN, ReplayState.REPLAYING):
            raise ReplayError("replay already in progress")

        self.logger = get_logger(__name__, trace_id=log.fingerprint() if len(log) else None)

        if not len(log):
            self._run = _Run(None)
            self._run.message = MSG_EMPTY
            self._state = ReplayState.FINISHED
            self.surface.info(MSG_EMPTY)
            self.logger.info("Nothing to replay")
            return iter(())

        output_root = None
        if self.options.mode == TargetMode.CLONED:
            output_root = self.options.output_root or self.documents.workspace_root()
            if not output_root:
                err = NoOutputRoot()
                self._run = _Run(None)
                self._run.message = str(err)
                self._state = ReplayState.ABORTED
                self.surface.error(f"Cannot start playback: {err}")
                self.logger.error("Replay refused: %s", err)
                raise err

        self._run = _Run(output_root)
        self._walker = self._walk(log, self._run)
        return self._walker

    def abort(self, reason: str) -> None:
        """Stop an in-flight replay; clones already written are left in place."""
        if self._walker is not None:
            self._walker.close()
            self._walker = None
        if self._run is not None:
            self._run.message = f"Playback aborted: {reason}"
        self._state = ReplayState.ABORTED
        self.surface.info(f"Playback aborted: {reason}")
        self.logger.warning("Replay aborted: %s", reason)

    def _walk(self, log: EventLog, run: _Run) -> Iterator[ReplayStep]:
        self._state = ReplayState.COUNTING_DOWN
        seconds = self.options.countdown_ms / 1000
        self.surface.info(f"Playback starting in {seconds:g} seconds...")
        self.logger.info(
            "Replaying %d events (%s mode, %d files)",
            len(log),
            self.options.mode.value,
            len(log.file_ids()),
        )
        yield ReplayStep(COUNTDOWN, self.options.countdown_ms)

        self._state = ReplayState.REPLAYING
        for index, event in enumerate(log):
            target_id = self._resolve_target(run, event)
            handle = self._ensure_active(run, event, target_id)
            run.applied += 1

            if isinstance(event, EditEvent):
                self._apply_edit(run, index, event, handle)
                yield ReplayStep(EDIT, self.options.edit_delay_ms, index, event, target_id)
            else:
                # _ensure_active already performed the switch
                run.switches += 1
                yield ReplayStep(SWITCH, self.options.switch_delay_ms, index, event, target_id)

        self._walker = None
        run.message = MSG_FINISHED
        self._state = ReplayState.FINISHED
        self.surface.info(MSG_FINISHED)
        self.logger.info(
            "Replay finished: %d events, %d edits, %d failures",
            run.applied,
            run.edits,
            len(run.failures),
        )

    def _resolve_target(self, run: _Run, event: CodeEvent) -> str:
        if self.options.mode == TargetMode.IN_PLACE:
            return event.file_id

        clone = run.mapping.assign(event.file_id, run.output_root)
        if clone.created:
            try:
                self.file_creator(clone.path)
            except OSError as ex:
                self._substitute(run, event.file_id, clone.target_id, f"cannot create {clone.path}: {ex}")
            else:
                run.clones[event.file_id] = clone.target_id
                self.logger.info("Created playback file %s for %s", clone.path, event.file_id)
        return clone.target_id

    def _ensure_active(self, run: _Run, event: CodeEvent, target_id: str) -> DocumentHandle:
        handle = run.registry.get(target_id)
        if handle is None:
            try:
                handle = self.documents.open(target_id)
            except DocumentNotFound as ex:
                handle = self._substitute(run, event.file_id, target_id, ex.reason)

        if self.surface.active_document_id() != handle.document_id:
            handle = self.surface.show(handle)
            run.focus_changes += 1
        run.registry.set(target_id, handle)
        return handle

    def _substitute(self, run: _Run, file_id: str, target_id: str, reason: str) -> DocumentHandle:
        """Bind target_id to a scratch document for the rest of the run."""
        failure = DocumentOpenFailure(file_id, reason)
        run.failures.append(failure)
        self.surface.error(f"Playback: {failure}")
        self.logger.warning("Substituting scratch document for %s: %s", target_id, reason)
        scratch = self.documents.open_scratch()
        run.registry.set(target_id, scratch)
        return scratch

    def _apply_edit(self, run: _Run, index: int, event: EditEvent, handle: DocumentHandle) -> None:
        delete_range = event.range if event.deleted_length > 0 else None
        try:
            handle.edit(delete_range, event.range.start, event.inserted_text)
        except EditConflict as ex:
            run.failures.append(ex)
            self.surface.error(f"Playback: edit {index} in {handle.document_id} failed: {ex}")
            self.logger.warning("Edit %d in %s failed: %s", index, handle.document_id, ex)
            return
        run.edits += 1
