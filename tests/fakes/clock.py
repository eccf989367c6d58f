"""Fake Clock implementation for testing.

FakeClock returns a controllable time, enabling fast and deterministic tests.
"""

from datetime import datetime, timedelta

from scriptbay.core.clock import Clock


class FakeClock(Clock):
    """In-memory fake clock.

    The current time only moves when advance() is called.
    """

    def __init__(self, now: datetime | None = None) -> None:
        """Create FakeClock starting at now (default: 2024-01-15 10:30:00)."""
        self._now = now or datetime(2024, 1, 15, 10, 30, 0)

    def advance(self, seconds: float) -> None:
        self._now += timedelta(seconds=seconds)

    def now(self) -> datetime:
        return self._now
