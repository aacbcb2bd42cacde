"""
Replay bookkeeping: clone identities and open editors.

PlaybackFileMapping is pure data. It decides clone names and identities;
creating the files is left to the engine's file creator.
"""

import os
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Set, Tuple

from ..core.ids import path_to_uri, playback_name
from ..host.base import DocumentHandle


@dataclass(frozen=True)
class CloneAssignment:
    file_id: str
    target_id: str
    path: str
    created: bool


class PlaybackFileMapping:
    """
    Original file_id -> playback clone.

    Each distinct file_id gets exactly one clone. Distinct sources that share
    a basename get numbered names (app(playback).py, app(playback-2).py).
    """

    def __init__(self) -> None:
        self._clones: Dict[str, CloneAssignment] = {}
        self._names: Set[str] = set()

    def assign(self, file_id: str, output_root: str) -> CloneAssignment:
        """
        Return the clone for file_id, assigning one on first reference.

        created is True only for the first assignment of a file_id.
        """
        existing = self._clones.get(file_id)
        if existing is not None:
            return CloneAssignment(existing.file_id, existing.target_id, existing.path, created=False)

        index = 1
        name = playback_name(file_id, index)
        while name in self._names:
            index += 1
            name = playback_name(file_id, index)

        path = os.path.join(output_root, name)
        clone = CloneAssignment(file_id=file_id, target_id=path_to_uri(path), path=path, created=True)
        self._clones[file_id] = clone
        self._names.add(name)
        return clone

    def items(self) -> Iterator[Tuple[str, str]]:
        for file_id, clone in self._clones.items():
            yield file_id, clone.target_id

    def __len__(self) -> int:
        return len(self._clones)

    def __contains__(self, file_id: object) -> bool:
        return file_id in self._clones


class OpenEditorRegistry:
    """Target document id -> handle currently open for it."""

    def __init__(self) -> None:
        self._handles: Dict[str, DocumentHandle] = {}

    def get(self, target_id: str) -> Optional[DocumentHandle]:
        return self._handles.get(target_id)

    def set(self, target_id: str, handle: DocumentHandle) -> None:
        self._handles[target_id] = handle

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._handles
