"""Inbound memory-creation request shape."""

from __future__ import annotations

from pydantic import BaseModel


class MemoryCreationRequest(BaseModel):
    """Event report asking the core to remember something.

    Category and importance stay loosely typed so that unknown labels reach
    the store and are refused there instead of failing validation.
    """

    title: str
    content: str = ""
    category: str = "episodic"
    importance: str | int = "medium"
    emotional_intensity: float = 50.0
