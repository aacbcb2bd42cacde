"""
Host collaborators for capture and replay.

This module provides:
- DocumentHandle / DocumentStore / PresentationSurface: Interfaces replay consumes
- MemoryHost: In-memory documents (also a change source for capture)
- LocalHost: Documents backed by files on the local filesystem
"""

from .base import DocumentHandle, DocumentStore, PresentationSurface, BufferHandle
from .memory import MemoryHost
from .local import LocalHost

__all__ = [
    "DocumentHandle",
    "DocumentStore",
    "PresentationSurface",
    "BufferHandle",
    "MemoryHost",
    "LocalHost",
]
