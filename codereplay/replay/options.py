"""
Replay configuration.

Environment Variables:
    CODEREPLAY_MODE: cloned | in_place (default: cloned)
    CODEREPLAY_EDIT_DELAY_MS: pause after each edit (default: 50)
    CODEREPLAY_SWITCH_DELAY_MS: pause after each file switch (default: 200)
    CODEREPLAY_COUNTDOWN_MS: pause before the first event (default: 3000)
    CODEREPLAY_OUTPUT_ROOT: directory for cloned playback files (default: host workspace root)
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TargetMode(str, Enum):
    IN_PLACE = "in_place"
    CLONED = "cloned"

    @classmethod
    def parse(cls, value: str) -> "TargetMode":
        norm = value.strip().lower().replace("-", "_")
        if norm in ("in_place", "inplace"):
            return cls.IN_PLACE
        if norm in ("cloned", "clone"):
            return cls.CLONED
        raise ValueError(f"unknown target mode: {value!r} (expected 'cloned' or 'in_place')")


def _env_ms(key: str, default: int) -> int:
    val = os.getenv(key)
    if not val:
        return default
    try:
        return int(val)
    except ValueError as ex:
        raise ValueError(f"{key} must be an integer number of milliseconds, got {val!r}") from ex


@dataclass(frozen=True)
class ReplayOptions:
    """
    Fields:
        mode: Edit the original files, or "(playback)" clones of them
        edit_delay_ms: Pacing after each replayed edit
        switch_delay_ms: Pacing after each replayed file switch
        countdown_ms: Wait before the first event
        output_root: Directory for clones; falls back to the host's workspace root
    """
    mode: TargetMode = TargetMode.CLONED
    edit_delay_ms: int = 50
    switch_delay_ms: int = 200
    countdown_ms: int = 3000
    output_root: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("edit_delay_ms", "switch_delay_ms", "countdown_ms"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

    @staticmethod
    def from_env() -> "ReplayOptions":
        return ReplayOptions(
            mode=TargetMode.parse(os.getenv("CODEREPLAY_MODE", "cloned")),
            edit_delay_ms=_env_ms("CODEREPLAY_EDIT_DELAY_MS", 50),
            switch_delay_ms=_env_ms("CODEREPLAY_SWITCH_DELAY_MS", 200),
            countdown_ms=_env_ms("CODEREPLAY_COUNTDOWN_MS", 3000),
            output_root=os.getenv("CODEREPLAY_OUTPUT_ROOT") or None,
        )
