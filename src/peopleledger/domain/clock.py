"""Injectable clock so services never call ``datetime.now()`` directly."""

from abc import ABC, abstractmethod
from datetime import date, datetime


class Clock(ABC):
    """Abstract clock interface."""

    @abstractmethod
    def now(self) -> datetime:
        """Get the current local time."""
        ...

    def today(self) -> date:
        """Get the current local date."""
        return self.now().date()


class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        return datetime.now()


class FixedClock(Clock):
    """Clock frozen at a given instant, advanced explicitly.

    Used by tests and by callers that need every timestamp of one operation
    to agree.
    """

    def __init__(self, fixed: datetime):
        self._now = fixed

    def now(self) -> datetime:
        return self._now

    def advance_to(self, moment: datetime) -> None:
        if moment < self._now:
            raise ValueError("FixedClock cannot move backwards")
        self._now = moment
