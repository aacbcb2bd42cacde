"""
Host interfaces consumed by the replay engine.

Implementations are host-provided; the engine only depends on these contracts.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..core.document import TextDocument
from ..core.events import Position, TextRange


class DocumentHandle(ABC):
    """An open document that can be edited."""

    document_id: str
    is_transient: bool

    @property
    @abstractmethod
    def text(self) -> str:
        ...

    @abstractmethod
    def edit(
        self,
        delete_range: Optional[TextRange] = None,
        insert_at: Optional[Position] = None,
        text: str = "",
    ) -> None:
        """
        Delete delete_range (if given), then insert text at insert_at.

        Raises:
            EditConflict: If the edit cannot be applied
        """
        ...


class BufferHandle(DocumentHandle):
    """
    Handle over a TextDocument buffer.

    on_edit is called after each successful edit (hosts use it to write
    through to storage).
    """

    def __init__(
        self,
        document_id: str,
        buffer: TextDocument,
        is_transient: bool = False,
        on_edit: Optional[Callable[["BufferHandle"], None]] = None,
    ) -> None:
        self.document_id = document_id
        self.buffer = buffer
        self.is_transient = is_transient
        self._on_edit = on_edit

    @property
    def text(self) -> str:
        return self.buffer.text

    def edit(
        self,
        delete_range: Optional[TextRange] = None,
        insert_at: Optional[Position] = None,
        text: str = "",
    ) -> None:
        self.buffer.apply_edit(delete_range, insert_at, text)
        if self._on_edit is not None:
            self._on_edit(self)

    def __repr__(self) -> str:
        return f"BufferHandle({self.document_id!r})"


class DocumentStore(ABC):

    @abstractmethod
    def open(self, document_id: str) -> DocumentHandle:
        """
        Open a document.

        Raises:
            DocumentNotFound: If the document does not exist or is inaccessible
        """
        ...

    @abstractmethod
    def open_scratch(self) -> DocumentHandle:
        """Open a new empty, unsaved (transient) document."""
        ...

    @abstractmethod
    def create_empty_file(self, path: str) -> str:
        """
        Create (or truncate) an empty file.

        Returns:
            document_id of the created file

        Raises:
            OSError: If the file cannot be created
        """
        ...

    def workspace_root(self) -> Optional[str]:
        """Directory cloned playback writes into, if the host has one."""
        return None


class PresentationSurface(ABC):

    @abstractmethod
    def show(self, handle: DocumentHandle) -> DocumentHandle:
        """Make handle's document the focused one and return the focused handle."""
        ...

    @abstractmethod
    def active_document_id(self) -> Optional[str]:
        ...

    @abstractmethod
    def info(self, message: str) -> None:
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        ...
