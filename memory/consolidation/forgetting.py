"""Retention and forgetting policies."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from core.clock import days_between
from memory.scoring import clarity_loss, retention_score
from memory.types.entry import MemoryEntry
from memory.types.enums import MemoryImportance

if TYPE_CHECKING:
    from memory.memory_store import MemoryStore

logger = logging.getLogger("psyche.forgetting")

FADING_CLARITY = 50.0


class ForgettingPolicy:
    """Applies clarity decay and capacity-driven eviction to a memory store."""

    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    def run_decay(self, delta_time: float) -> dict[str, int]:
        """One decay pass.

        Memories that fell below the forgetting threshold on an earlier pass
        are forgotten first; then every visible memory loses clarity in
        proportion to the days since it was last accessed.
        """
        settings = self.store.settings
        if not settings.use_decay:
            return {"decayed": 0, "fading": 0, "forgotten": 0}

        forgotten = 0
        for memory_id in self.expired_ids():
            if self.store.forget(memory_id, force=False, reason="decayed"):
                forgotten += 1

        now = self.store.clock()
        decayed = 0
        fading = 0
        for entry in self.store.records.values():
            if entry.is_repressed:
                continue
            loss = clarity_loss(entry.decay_rate, delta_time, days_between(entry.last_accessed, now))
            if loss <= 0.0:
                continue
            entry.clarity = max(entry.clarity - loss, 0.0)
            decayed += 1
            if entry.clarity < FADING_CLARITY and not entry.is_fading:
                entry.is_fading = True
                fading += 1

        if decayed or forgotten:
            logger.debug("Decay pass: %d decayed, %d fading, %d forgotten", decayed, fading, forgotten)
        return {"decayed": decayed, "fading": fading, "forgotten": forgotten}

    def expired_ids(self) -> list[int]:
        """Visible, non-critical memories whose clarity is under the threshold."""
        threshold = self.store.settings.decay_threshold * 100.0
        return [
            entry.id
            for entry in self.store.records.values()
            if not entry.is_repressed
            and entry.importance < MemoryImportance.CRITICAL
            and entry.clarity < threshold
        ]

    def ranked_candidates(self) -> list[MemoryEntry]:
        """Evictable memories, lowest retention score first.

        The sort is stable, so equal scores keep insertion order.
        """
        multiplier = self.store.settings.emotional_retention_multiplier
        candidates = [
            entry
            for entry in self.store.records.values()
            if entry.importance < MemoryImportance.CRITICAL and not entry.is_repressed
        ]
        return sorted(candidates, key=lambda entry: retention_score(entry, multiplier))

    def evict(self, count: int) -> list[int]:
        """Forget up to ``count`` of the lowest-scoring evictable memories."""
        if count <= 0:
            return []
        victims = [entry.id for entry in self.ranked_candidates()[:count]]
        evicted = [memory_id for memory_id in victims if self.store.forget(memory_id, reason="evicted")]
        if len(evicted) < count:
            logger.warning("Capacity eviction freed %d of %d requested slots", len(evicted), count)
        return evicted
