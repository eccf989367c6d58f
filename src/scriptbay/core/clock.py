"""Clock operations abstraction for testing.

This module provides an ABC for wall-clock reads so that log timestamps, log
file names and durations can be asserted without depending on the real time
of day.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Clock(ABC):
    """Abstract clock operations for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current local time."""
        ...


class RealClock(Clock):
    """Production implementation using datetime.now()."""

    def now(self) -> datetime:
        return datetime.now()
