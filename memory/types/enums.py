"""Memory categories, importance tiers and their display labels."""

from __future__ import annotations

from enum import Enum, IntEnum


class MemoryCategory(str, Enum):
    """Kind of memory; drives decay speed and happiness sub-scores."""

    EPISODIC = "episodic"
    SEMANTIC = "semantic"
    PROCEDURAL = "procedural"
    EMOTIONAL = "emotional"
    SOCIAL = "social"
    MORAL = "moral"
    TRAUMATIC = "traumatic"


class MemoryImportance(IntEnum):
    """Ordered importance tiers. The integer value is the tier index."""

    TRIVIAL = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4
    CORE = 5


MEMORY_CATEGORY_LABELS: dict[MemoryCategory, str] = {
    MemoryCategory.EPISODIC: "Episodic Memory",
    MemoryCategory.SEMANTIC: "Semantic Memory",
    MemoryCategory.PROCEDURAL: "Procedural Memory",
    MemoryCategory.EMOTIONAL: "Emotional Memory",
    MemoryCategory.SOCIAL: "Social Memory",
    MemoryCategory.MORAL: "Moral Memory",
    MemoryCategory.TRAUMATIC: "Traumatic Memory",
}

MEMORY_IMPORTANCE_LABELS: dict[MemoryImportance, str] = {
    MemoryImportance.TRIVIAL: "Trivial",
    MemoryImportance.LOW: "Low",
    MemoryImportance.MEDIUM: "Medium",
    MemoryImportance.HIGH: "High",
    MemoryImportance.CRITICAL: "Critical",
    MemoryImportance.CORE: "Core Identity",
}

# Aliases accepted in addition to member names ("high", "core", ...).
IMPORTANCE_ALIASES: dict[str, MemoryImportance] = {
    "core_identity": MemoryImportance.CORE,
    "core-identity": MemoryImportance.CORE,
    "core identity": MemoryImportance.CORE,
}
