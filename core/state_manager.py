"""Session state container for the psyche service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from core.clock import Clock, utc_now


@dataclass
class SessionState:
    """Mutable timers for a single play session."""

    started_at: datetime = field(default_factory=utc_now)
    last_decay_at: datetime | None = None
    last_happiness_at: datetime | None = None
    elapsed_seconds: float = 0.0
    since_decay_seconds: float = 0.0
    since_happiness_seconds: float = 0.0
    decay_ticks: int = 0
    happiness_passes: int = 0


class StateManager:
    """Wraps session state and provides convenience update methods."""

    def __init__(self, clock: Clock = utc_now) -> None:
        self.clock = clock
        self.state = SessionState(started_at=clock())

    def new_session(self) -> SessionState:
        self.state = SessionState(started_at=self.clock())
        return self.state

    def add_elapsed(self, seconds: float) -> None:
        self.state.elapsed_seconds += seconds
        self.state.since_decay_seconds += seconds
        self.state.since_happiness_seconds += seconds

    def mark_decay(self) -> None:
        self.state.last_decay_at = self.clock()
        self.state.since_decay_seconds = 0.0
        self.state.decay_ticks += 1

    def mark_happiness(self) -> None:
        self.state.last_happiness_at = self.clock()
        self.state.since_happiness_seconds = 0.0
        self.state.happiness_passes += 1
