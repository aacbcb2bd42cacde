"""
Timestamp sources for captured events.

Timestamps are diagnostic only; replay never paces itself from them.
"""

from dataclasses import dataclass
from datetime import datetime, timezone


def format_iso(dt: datetime) -> str:
    """Format as ISO-8601 UTC with millisecond precision, e.g. 2024-05-01T12:00:00.250Z."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


class SystemClock:
    """Wall-clock time source used while recording."""

    def now_iso(self) -> str:
        return format_iso(datetime.now(timezone.utc))


@dataclass(frozen=True)
class DeterministicClock:
    """
    Deterministic time source.

    Holds epoch milliseconds. Since it is immutable, tick() returns a new
    instance; tests use it to get stable timestamps in recorded logs.
    """
    current: int = 0

    def now_iso(self) -> str:
        return format_iso(datetime.fromtimestamp(self.current / 1000, tz=timezone.utc))

    def tick(self, step: int = 1) -> "DeterministicClock":
        return DeterministicClock(self.current + step)
