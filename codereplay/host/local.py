"""
Local filesystem host.

Documents are files addressed by file:// URIs. Edits are written through to
disk after every change so an observer sees playback live in their own editor.
Scratch documents exist only in memory.
"""

import logging
import os
from typing import Dict, Optional

from rich.markup import escape

from ..core.document import TextDocument
from ..core.errors import DocumentNotFound, EditConflict
from ..core.ids import path_to_uri, uri_to_path
from .base import BufferHandle, DocumentHandle, DocumentStore, PresentationSurface

logger = logging.getLogger(__name__)


class LocalHost(DocumentStore, PresentationSurface):
    """
    Usage:
        host = LocalHost(root="/work/project", console=Console())
        result = replay(log, host, host, options)
    """

    def __init__(self, root: Optional[str] = None, console=None) -> None:
        self.root = os.path.abspath(root) if root else None
        self.console = console
        self._open: Dict[str, BufferHandle] = {}
        self._scratch_count = 0
        self._active: Optional[str] = None

    def _write_through(self, handle: BufferHandle) -> None:
        path = uri_to_path(handle.document_id)
        try:
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(handle.text)
        except OSError as ex:
            raise EditConflict(f"cannot write {path}: {ex}") from ex

    def open(self, document_id: str) -> DocumentHandle:
        if document_id in self._open:
            return self._open[document_id]
        path = uri_to_path(document_id)
        if path is None:
            raise DocumentNotFound(document_id, "not a file URI")
        if not os.path.isfile(path):
            raise DocumentNotFound(document_id, f"no such file: {path}")
        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as ex:
            raise DocumentNotFound(document_id, str(ex)) from ex

        handle = BufferHandle(document_id, TextDocument(text), on_edit=self._write_through)
        self._open[document_id] = handle
        logger.debug("Opened %s", path)
        return handle

    def open_scratch(self) -> DocumentHandle:
        self._scratch_count += 1
        return BufferHandle(f"untitled:Untitled-{self._scratch_count}", TextDocument(), is_transient=True)

    def create_empty_file(self, path: str) -> str:
        with open(path, "w", encoding="utf-8") as f:
            f.write("")
        document_id = path_to_uri(path)
        # a stale buffer would resurrect the old content on the next edit
        self._open.pop(document_id, None)
        logger.debug("Created empty file %s", path)
        return document_id

    def workspace_root(self) -> Optional[str]:
        return self.root

    def show(self, handle: DocumentHandle) -> DocumentHandle:
        if self._active != handle.document_id:
            self._active = handle.document_id
            if self.console is not None:
                self.console.print(f"[dim]▶ {escape(handle.document_id)}[/dim]")
        return handle

    def active_document_id(self) -> Optional[str]:
        return self._active

    def info(self, message: str) -> None:
        logger.info(message)
        if self.console is not None:
            self.console.print(f"[green]{escape(message)}[/green]")

    def error(self, message: str) -> None:
        logger.error(message)
        if self.console is not None:
            self.console.print(f"[red]{escape(message)}[/red]")
