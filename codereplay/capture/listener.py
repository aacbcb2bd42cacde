"""
CaptureListener abstract interface.

Host glue adapts its native notifications into these two calls.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..core.document import ContentChange


class CaptureListener(ABC):

    @abstractmethod
    def on_text_changed(
        self,
        document_id: str,
        is_transient: bool,
        changes: Sequence[ContentChange],
    ) -> None:
        """
        A document's content changed.

        Args:
            document_id: URI of the changed document
            is_transient: True for unsaved/untitled documents
            changes: Content changes in the order the host reported them
        """
        ...

    @abstractmethod
    def on_active_document_changed(self, document_id: Optional[str], is_transient: bool) -> None:
        """
        Focus moved to another document.

        document_id is None when no editor is active.
        """
        ...
