"""
In-memory host.

Documents live in TextDocument buffers keyed by URI. Besides serving replay,
the host is a change source: edits made through type_text()/replace()/
apply_changes() and focus changes from show() are forwarded to subscribed
CaptureListeners, the way an editor reports user activity.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..capture.listener import CaptureListener
from ..core.document import ContentChange, TextDocument
from ..core.errors import DocumentNotFound
from ..core.events import Position, TextRange
from ..core.ids import path_to_uri
from .base import BufferHandle, DocumentHandle, DocumentStore, PresentationSurface


class MemoryHost(DocumentStore, PresentationSurface):

    def __init__(self, files: Optional[Dict[str, str]] = None, root: Optional[str] = None) -> None:
        self._documents: Dict[str, TextDocument] = {
            doc_id: TextDocument(text) for doc_id, text in (files or {}).items()
        }
        self._scratch: Dict[str, TextDocument] = {}
        self._root = root
        self._active: Optional[str] = None
        self._listeners: List[CaptureListener] = []
        self.focus_history: List[str] = []
        self.messages: List[Tuple[str, str]] = []
        self.created: List[str] = []

    # --- change source -------------------------------------------------

    def subscribe(self, listener: CaptureListener) -> Callable[[], None]:
        """Register listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _buffer(self, document_id: str) -> TextDocument:
        if document_id in self._documents:
            return self._documents[document_id]
        if document_id in self._scratch:
            return self._scratch[document_id]
        raise DocumentNotFound(document_id)

    def apply_changes(self, document_id: str, edits: Sequence[Tuple[TextRange, str]]) -> List[ContentChange]:
        """
        Apply edits in order as one notification.

        Each range is interpreted against the buffer after the previous edits.
        """
        buffer = self._buffer(document_id)
        changes = [buffer.replace(rng, text) for rng, text in edits]
        transient = document_id in self._scratch
        for listener in list(self._listeners):
            listener.on_text_changed(document_id, transient, changes)
        return changes

    def replace(self, document_id: str, rng: TextRange, text: str) -> ContentChange:
        return self.apply_changes(document_id, [(rng, text)])[0]

    def type_text(self, document_id: str, position: Position, text: str) -> ContentChange:
        return self.replace(document_id, TextRange(position, position), text)

    def focus(self, document_id: str) -> None:
        """Simulate the user switching to document_id."""
        self.show(self.open(document_id))

    # --- DocumentStore -------------------------------------------------

    def remove_file(self, document_id: str) -> None:
        self._documents.pop(document_id, None)

    def content(self, document_id: str) -> str:
        return self._buffer(document_id).text

    def exists(self, document_id: str) -> bool:
        return document_id in self._documents

    def open(self, document_id: str) -> DocumentHandle:
        if document_id not in self._documents:
            raise DocumentNotFound(document_id)
        return BufferHandle(document_id, self._documents[document_id])

    def open_scratch(self) -> DocumentHandle:
        doc_id = f"untitled:Untitled-{len(self._scratch) + 1}"
        self._scratch[doc_id] = TextDocument()
        return BufferHandle(doc_id, self._scratch[doc_id], is_transient=True)

    def create_empty_file(self, path: str) -> str:
        doc_id = path_to_uri(path)
        self._documents[doc_id] = TextDocument()
        self.created.append(doc_id)
        return doc_id

    def workspace_root(self) -> Optional[str]:
        return self._root

    # --- PresentationSurface -------------------------------------------

    def show(self, handle: DocumentHandle) -> DocumentHandle:
        if self._active != handle.document_id:
            self._active = handle.document_id
            self.focus_history.append(handle.document_id)
            for listener in list(self._listeners):
                listener.on_active_document_changed(handle.document_id, handle.is_transient)
        return handle

    def active_document_id(self) -> Optional[str]:
        return self._active

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))
