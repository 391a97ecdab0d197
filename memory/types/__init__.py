"""Typed memory payload models."""

from memory.types.entry import MemoryEntry
from memory.types.enums import (
    MEMORY_CATEGORY_LABELS,
    MEMORY_IMPORTANCE_LABELS,
    MemoryCategory,
    MemoryImportance,
)
from memory.types.requests import MemoryCreationRequest

__all__ = [
    "MemoryEntry",
    "MemoryCategory",
    "MemoryImportance",
    "MemoryCreationRequest",
    "MEMORY_CATEGORY_LABELS",
    "MEMORY_IMPORTANCE_LABELS",
]
