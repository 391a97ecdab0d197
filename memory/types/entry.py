"""Memory entry model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from core.clock import utc_now
from core.coercion import clamp
from memory.types.enums import MemoryCategory, MemoryImportance


class MemoryEntry(BaseModel):
    """A single stored memory.

    Clarity and emotional intensity stay within [0, 100]; the store clamps on
    every mutation and the validators clamp on construction.
    """

    id: int
    title: str
    content: str = ""
    category: MemoryCategory = MemoryCategory.EPISODIC
    importance: MemoryImportance = MemoryImportance.MEDIUM
    emotional_intensity: float = 50.0
    clarity: float = 100.0
    decay_rate: float = 0.05
    created_at: datetime = Field(default_factory=utc_now)
    last_accessed: datetime = Field(default_factory=utc_now)
    access_count: int = 0
    is_fading: bool = False
    is_repressed: bool = False
    associations: set[int] = Field(default_factory=set)

    @field_validator("emotional_intensity", "clarity")
    @classmethod
    def _clamp_percent(cls, value: float) -> float:
        return clamp(value)
