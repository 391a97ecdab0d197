"""Time sources for the psyche core."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

Clock = Callable[[], datetime]

SECONDS_PER_DAY = 86400.0


def utc_now() -> datetime:
    """Return UTC datetime for default timestamps."""
    return datetime.now(UTC)


def days_between(earlier: datetime, later: datetime) -> float:
    """Elapsed days between two timestamps (negative if reversed)."""
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


class SimulatedClock:
    """Manually advanced clock for game time, replays and tests."""

    def __init__(self, start: datetime | None = None) -> None:
        start = start or datetime(2024, 1, 1, tzinfo=UTC)
        if start.tzinfo is None:
            start = start.replace(tzinfo=UTC)
        self._now = start

    def __call__(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 0.0, days: float = 0.0) -> datetime:
        """Move time forward and return the new reading."""
        self._now = self._now + timedelta(seconds=seconds, days=days)
        return self._now
