"""
Exception types for recording and replay.
"""


class CodeReplayError(Exception):
    """Base class for all CodeReplay errors."""
    pass


class EventLogError(CodeReplayError):
    """Raised when an event log cannot be read, written or decoded."""
    pass


class IntegrityError(EventLogError):
    """Raised when a saved log's hash chain does not verify."""
    pass


class ReplayError(CodeReplayError):
    """Raised when a replay cannot proceed."""
    pass


class NoOutputRoot(ReplayError):
    """Raised when cloned playback is requested without an output directory."""

    def __init__(self, message: str = "cloned playback requires an output root directory") -> None:
        super().__init__(message)


class DocumentOpenFailure(ReplayError):
    """
    A referenced document could not be opened (or its clone created) during replay.

    Recovered locally: the engine substitutes a scratch document and continues.
    """

    def __init__(self, file_id: str, reason: str) -> None:
        super().__init__(f"could not open {file_id}: {reason}")
        self.file_id = file_id
        self.reason = reason


class DocumentNotFound(CodeReplayError):
    """Raised by a document store when a document does not exist or is inaccessible."""

    def __init__(self, document_id: str, reason: str = "not found") -> None:
        super().__init__(f"{document_id}: {reason}")
        self.document_id = document_id
        self.reason = reason


class EditConflict(CodeReplayError):
    """Raised by a document handle when an edit cannot be applied."""
    pass
