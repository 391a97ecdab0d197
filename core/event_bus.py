"""Simple in-process event bus for decoupled notifications."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable
from typing import Any

EventHandler = Callable[[dict[str, Any]], None]

ALL_EVENTS = "*"

MEMORY_CREATED = "memory_created"
MEMORY_ACCESSED = "memory_accessed"
MEMORY_FORGOTTEN = "memory_forgotten"
MEMORY_REPRESSED = "memory_repressed"
MEMORY_RECOVERED = "memory_recovered"
MEMORY_CAPACITY_CHANGED = "memory_capacity_changed"
VIRTUE_ACTION_RECORDED = "virtue_action_recorded"
VIRTUE_LEVEL_CHANGED = "virtue_level_changed"
DEVELOPMENT_STATE_CHANGED = "development_state_changed"
VALUES_UPDATED = "values_updated"
HAPPINESS_UPDATED = "happiness_updated"


class EventBus:
    """Dispatches events to subscribers by event name.

    Handlers registered under ``"*"`` receive every event; their payload
    carries the event name under ``"event"``.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        """Register a callback for an event."""
        self._handlers[event_name].append(handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> bool:
        """Drop a previously registered callback. Returns False if absent."""
        handlers = self._handlers.get(event_name, [])
        if handler not in handlers:
            return False
        handlers.remove(handler)
        return True

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        """Emit an event to all subscribers."""
        for handler in list(self._handlers.get(event_name, [])):
            handler(payload)
        if event_name != ALL_EVENTS:
            for handler in list(self._handlers.get(ALL_EVENTS, [])):
                handler({"event": event_name, **payload})

    def subscriber_count(self, event_name: str) -> int:
        return len(self._handlers.get(event_name, []))
