"""Structured JSONL journal of core notifications."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from core.clock import Clock, utc_now
from core.event_bus import ALL_EVENTS, EventBus


class EventJournal:
    """Writes every bus notification as one JSON line."""

    def __init__(self, log_path: Path, clock: Clock = utc_now) -> None:
        self.log_path = log_path
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.clock = clock
        self.logger = logging.getLogger("psyche.journal")
        self._bus: EventBus | None = None

    def attach(self, event_bus: EventBus) -> None:
        """Start journaling everything emitted on ``event_bus``."""
        event_bus.subscribe(ALL_EVENTS, self.record)
        self._bus = event_bus

    def detach(self) -> None:
        if self._bus is not None:
            self._bus.unsubscribe(ALL_EVENTS, self.record)
            self._bus = None

    def record(self, payload: dict[str, Any]) -> None:
        """Append one JSONL event."""
        body = dict(payload)
        event = {
            "timestamp": self.clock().isoformat(),
            "event": body.pop("event", "unknown"),
            "payload": body,
        }
        line = json.dumps(event, ensure_ascii=True, default=str)
        with self.log_path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
        self.logger.debug(line)

    def read(self) -> list[dict[str, Any]]:
        if not self.log_path.exists():
            return []
        with self.log_path.open("r", encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
