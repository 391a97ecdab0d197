"""Memory consolidation pass."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from memory.types.enums import MemoryImportance

if TYPE_CHECKING:
    from memory.memory_store import MemoryStore

logger = logging.getLogger("psyche.consolidation")


class Consolidator:
    """Moves important, frequently recalled memories into long-term storage."""

    def __init__(
        self,
        store: MemoryStore,
        min_importance: MemoryImportance = MemoryImportance.HIGH,
        min_access_count: int = 3,
    ) -> None:
        self.store = store
        self.min_importance = min_importance
        self.min_access_count = min_access_count

    def run(self) -> dict[str, Any]:
        """Transfer every eligible memory and report what happened."""
        transferred: list[int] = []
        for entry in self.store.all_entries():
            if entry.importance < self.min_importance or entry.access_count < self.min_access_count:
                continue
            if self.store.is_consolidated(entry.id):
                continue
            if self.store.transfer_to_long_term(entry.id):
                transferred.append(entry.id)
        logger.info("Consolidated %d memories", len(transferred))
        return {"transferred": transferred, "count": len(transferred)}
