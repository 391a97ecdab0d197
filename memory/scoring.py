"""Scoring helpers for memory retention and valuation."""

from __future__ import annotations

from collections.abc import Mapping

from core.coercion import clamp
from memory.types.entry import MemoryEntry
from memory.types.enums import MemoryCategory, MemoryImportance

DEFAULT_TYPE_DECAY_MULTIPLIERS: dict[MemoryCategory, float] = {
    MemoryCategory.EPISODIC: 1.0,
    MemoryCategory.SEMANTIC: 0.5,
    MemoryCategory.PROCEDURAL: 0.3,
    MemoryCategory.EMOTIONAL: 0.8,
    MemoryCategory.SOCIAL: 1.0,
    MemoryCategory.MORAL: 1.0,
    MemoryCategory.TRAUMATIC: 0.2,
}

# Base value per importance tier for the UI/analytics valuation.
IMPORTANCE_BASE_VALUE: dict[MemoryImportance, float] = {
    MemoryImportance.TRIVIAL: 10.0,
    MemoryImportance.LOW: 25.0,
    MemoryImportance.MEDIUM: 50.0,
    MemoryImportance.HIGH: 75.0,
    MemoryImportance.CRITICAL: 90.0,
    MemoryImportance.CORE: 100.0,
}

EMOTIONAL_RETENTION_THRESHOLD = 70.0


def initial_decay_rate(
    category: MemoryCategory,
    importance: MemoryImportance,
    emotional_intensity: float,
    base_rate: float,
    emotional_retention_multiplier: float,
    type_multipliers: Mapping[MemoryCategory, float] | None = None,
) -> float:
    """Decay rate assigned when a memory is created."""
    multipliers = type_multipliers or DEFAULT_TYPE_DECAY_MULTIPLIERS
    rate = base_rate * multipliers.get(category, 1.0)
    if importance >= MemoryImportance.HIGH:
        rate *= 0.5
    if emotional_intensity > EMOTIONAL_RETENTION_THRESHOLD:
        rate *= emotional_retention_multiplier
    return rate


def retention_score(entry: MemoryEntry, emotional_retention_multiplier: float) -> float:
    """Rank used by capacity eviction; lowest scores go first."""
    return (
        20.0 * int(entry.importance)
        + entry.emotional_intensity * emotional_retention_multiplier
        + entry.clarity
        + min(entry.access_count * 5.0, 50.0)
        + len(entry.associations) * 10.0
    )


def memory_value(entry: MemoryEntry) -> float:
    """Blend importance, emotion, use, clarity and links into [0, 100]."""
    value = IMPORTANCE_BASE_VALUE[entry.importance]
    value += entry.emotional_intensity * 0.2
    value += min(entry.access_count * 2.0, 20.0)
    value *= entry.clarity / 100.0
    value += len(entry.associations) * 5.0
    return clamp(value)


def clarity_loss(decay_rate: float, delta_time: float, days_since_access: float) -> float:
    """Clarity lost on one decay tick; zero within a day of the last access."""
    if days_since_access <= 1.0:
        return 0.0
    return decay_rate * delta_time * days_since_access
