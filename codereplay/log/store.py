"""
EventLogStore abstract interface.

Defines contract for saving a finished recording and loading it back.
"""

from abc import ABC, abstractmethod
from typing import Iterator

from ..core.event_log import EventLog
from ..core.events import CodeEvent


class EventLogStore(ABC):
    """
    Abstract recorded-session storage.

    All implementations must guarantee:
    - Event order is preserved exactly
    - save() replaces the previously stored log as a whole
    """

    @abstractmethod
    def save(self, log: EventLog) -> int:
        """
        Persist log, replacing any stored log.

        Returns:
            Number of events written

        Raises:
            EventLogError: If writing fails
        """
        ...

    @abstractmethod
    def read(self) -> Iterator[CodeEvent]:
        """
        Read stored events.

        Yields:
            Events in recorded order
        """
        ...

    def load(self) -> EventLog:
        return EventLog(self.read())
