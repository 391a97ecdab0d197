"""In-process memory store with decay, strengthening and bounded capacity."""

from __future__ import annotations

import logging
from typing import Any

from core.clock import Clock, utc_now
from core.coercion import clamp, coerce_enum
from core.event_bus import (
    MEMORY_ACCESSED,
    MEMORY_CAPACITY_CHANGED,
    MEMORY_CREATED,
    MEMORY_FORGOTTEN,
    MEMORY_RECOVERED,
    MEMORY_REPRESSED,
    EventBus,
)
from core.settings import MemorySettings
from memory.consolidation.forgetting import ForgettingPolicy
from memory.scoring import initial_decay_rate, memory_value, retention_score
from memory.types.entry import MemoryEntry
from memory.types.enums import (
    IMPORTANCE_ALIASES,
    MEMORY_CATEGORY_LABELS,
    MEMORY_IMPORTANCE_LABELS,
    MemoryCategory,
    MemoryImportance,
)

logger = logging.getLogger("psyche.memory")


def parse_category(value: object) -> MemoryCategory | None:
    return coerce_enum(MemoryCategory, value)


def parse_importance(value: object) -> MemoryImportance | None:
    if isinstance(value, str) and value.strip().lower() in IMPORTANCE_ALIASES:
        return IMPORTANCE_ALIASES[value.strip().lower()]
    return coerce_enum(MemoryImportance, value)


class MemoryStore:
    """Owns every memory entry of a session.

    Entries live in an insertion-ordered dict keyed by a monotonically issued
    id. Ids are never reused after an entry is forgotten. Repressed entries
    stay stored but are invisible to reads, searches and decay until
    recovered. Callers always receive copies.
    """

    def __init__(
        self,
        settings: MemorySettings | None = None,
        event_bus: EventBus | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.settings = settings or MemorySettings()
        self.event_bus = event_bus or EventBus()
        self.clock = clock
        self.records: dict[int, MemoryEntry] = {}
        self._next_id = 1
        self.forgetting = ForgettingPolicy(store=self)

    # ── Properties ───────────────────────────────────────────────────

    @property
    def count(self) -> int:
        return len(self.records)

    @property
    def capacity(self) -> int:
        return self.settings.max_memories

    def usage_percentage(self) -> float:
        """Share of capacity in use, in percent."""
        if self.capacity <= 0:
            return 100.0
        return self.count / self.capacity * 100.0

    # ── Lifecycle ────────────────────────────────────────────────────

    def create(
        self,
        title: str,
        content: str,
        category: MemoryCategory | str,
        importance: MemoryImportance | str | int,
        emotional_intensity: float = 50.0,
    ) -> int | None:
        """Store a new memory and return its id, or None if it was not created."""
        resolved_category = parse_category(category)
        resolved_importance = parse_importance(importance)
        if resolved_category is None or resolved_importance is None:
            logger.warning(
                "Rejected memory '%s': unknown category=%r or importance=%r",
                title,
                category,
                importance,
            )
            return None
        if self.capacity < 1:
            logger.error("Memory store misconfigured with capacity %d", self.capacity)
            return None

        if self.count >= self.capacity and self.settings.auto_manage_capacity:
            self.forgetting.evict(self.count - self.capacity + 1)
        if self.count >= self.capacity:
            logger.warning(
                "Memory store full (%d/%d) and nothing evictable; '%s' not stored",
                self.count,
                self.capacity,
                title,
            )
            return None

        intensity = clamp(emotional_intensity)
        now = self.clock()
        entry = MemoryEntry(
            id=self._next_id,
            title=title,
            content=content,
            category=resolved_category,
            importance=resolved_importance,
            emotional_intensity=intensity,
            clarity=100.0,
            decay_rate=initial_decay_rate(
                resolved_category,
                resolved_importance,
                intensity,
                base_rate=self.settings.base_decay_rate,
                emotional_retention_multiplier=self.settings.emotional_retention_multiplier,
                type_multipliers=self.settings.type_decay_multipliers,
            ),
            created_at=now,
            last_accessed=now,
        )
        self._next_id += 1
        self.records[entry.id] = entry

        logger.info(
            "Created memory: %s (ID: %d, Type: %s, Importance: %s)",
            title,
            entry.id,
            MEMORY_CATEGORY_LABELS[resolved_category],
            MEMORY_IMPORTANCE_LABELS[resolved_importance],
        )
        self.event_bus.emit(MEMORY_CREATED, {"memory_id": entry.id, "memory": self._dump(entry)})
        return entry.id

    def access(self, memory_id: int) -> bool:
        """Recall a memory, strengthening its clarity."""
        entry = self.records.get(memory_id)
        if entry is None or entry.is_repressed:
            return False
        entry.last_accessed = self.clock()
        entry.access_count += 1
        entry.clarity = min(entry.clarity + self.settings.access_clarity_bonus, 100.0)
        logger.info("Accessed memory: %s (Access count: %d)", entry.title, entry.access_count)
        self.event_bus.emit(
            MEMORY_ACCESSED,
            {"memory_id": memory_id, "access_count": entry.access_count, "clarity": entry.clarity},
        )
        return True

    def forget(self, memory_id: int, force: bool = False, reason: str = "forgotten") -> bool:
        """Remove a memory. Critical and core memories need ``force``."""
        entry = self.records.get(memory_id)
        if entry is None:
            return False
        if not force and entry.importance >= MemoryImportance.CRITICAL:
            logger.warning("Cannot forget critical memory: %s", entry.title)
            return False

        del self.records[memory_id]
        for partner_id in entry.associations:
            partner = self.records.get(partner_id)
            if partner is not None:
                partner.associations.discard(memory_id)

        logger.info("Forgot memory: %s (%s)", entry.title, reason)
        self.event_bus.emit(
            MEMORY_FORGOTTEN,
            {"memory_id": memory_id, "reason": reason, "memory": self._dump(entry)},
        )
        return True

    def decay_tick(self, delta_time: float) -> dict[str, int]:
        """Weaken unaccessed memories and drop the ones that faded out."""
        return self.forgetting.run_decay(delta_time)

    def capacity_manage(self) -> list[int]:
        """Evict lowest-retention memories until the store fits its capacity."""
        if self.count <= self.capacity:
            return []
        evicted = self.forgetting.evict(self.count - self.capacity)
        logger.info("Managed memory capacity: forgot %d memories", len(evicted))
        return evicted

    def set_capacity(self, new_capacity: int) -> int:
        """Change the capacity.

        The result is floored at the configured minimum and never drops below
        the entries the store cannot shed: the non-evictable ones, or all of
        them when capacity management is off.
        """
        old_capacity = self.capacity
        requested = max(int(new_capacity), self.settings.min_capacity)
        if self.settings.auto_manage_capacity:
            floor = self.count - len(self.forgetting.ranked_candidates())
        else:
            floor = self.count
        if requested < floor:
            logger.warning(
                "Capacity %d would strand %d stored memories; using %d",
                requested,
                floor,
                floor,
            )
        self.settings.max_memories = max(requested, floor)
        self.event_bus.emit(
            MEMORY_CAPACITY_CHANGED,
            {"old_capacity": old_capacity, "new_capacity": self.settings.max_memories},
        )
        if self.settings.auto_manage_capacity:
            self.capacity_manage()
        logger.info("Memory capacity changed: %d -> %d", old_capacity, self.settings.max_memories)
        return self.settings.max_memories

    def candidates_for_forgetting(self, count: int = 5) -> list[int]:
        """Ids that eviction would pick first."""
        return [entry.id for entry in self.forgetting.ranked_candidates()[: max(count, 0)]]

    def reset(self) -> None:
        """Drop every entry and restart id numbering."""
        self.records.clear()
        self._next_id = 1

    # ── Queries ──────────────────────────────────────────────────────

    def get(self, memory_id: int) -> MemoryEntry | None:
        entry = self.records.get(memory_id)
        if entry is None or entry.is_repressed:
            return None
        return entry.model_copy(deep=True)

    def all_entries(self, include_repressed: bool = False) -> list[MemoryEntry]:
        return [
            entry.model_copy(deep=True)
            for entry in self.records.values()
            if include_repressed or not entry.is_repressed
        ]

    def by_type(self, category: MemoryCategory | str) -> list[MemoryEntry]:
        resolved = parse_category(category)
        if resolved is None:
            return []
        return [entry for entry in self.all_entries() if entry.category == resolved]

    def by_importance(self, importance: MemoryImportance | str | int) -> list[MemoryEntry]:
        resolved = parse_importance(importance)
        if resolved is None:
            return []
        return [entry for entry in self.all_entries() if entry.importance == resolved]

    def search(self, term: str) -> list[MemoryEntry]:
        """Case-insensitive substring match on title and content."""
        needle = term.lower()
        return [
            entry
            for entry in self.all_entries()
            if needle in entry.title.lower() or needle in entry.content.lower()
        ]

    def recent(self, count: int = 10) -> list[MemoryEntry]:
        """Newest memories first; ``count <= 0`` returns all of them."""
        entries = sorted(self.all_entries(), key=lambda e: (e.created_at, e.id), reverse=True)
        if count > 0:
            entries = entries[:count]
        return entries

    def associated_of(self, memory_id: int) -> list[MemoryEntry]:
        entry = self.records.get(memory_id)
        if entry is None or entry.is_repressed:
            return []
        linked = []
        for partner_id in sorted(entry.associations):
            partner = self.records.get(partner_id)
            if partner is not None and not partner.is_repressed:
                linked.append(partner.model_copy(deep=True))
        return linked

    def emotional_memories(self, min_intensity: float = 70.0) -> list[MemoryEntry]:
        return [e for e in self.all_entries() if e.emotional_intensity >= min_intensity]

    # ── Analysis ─────────────────────────────────────────────────────

    def value(self, memory_id: int) -> float:
        entry = self.records.get(memory_id)
        if entry is None or entry.is_repressed:
            return 0.0
        return memory_value(entry)

    def retention_score(self, memory_id: int) -> float:
        entry = self.records.get(memory_id)
        if entry is None or entry.is_repressed:
            return 0.0
        return retention_score(entry, self.settings.emotional_retention_multiplier)

    def associate(self, first_id: int, second_id: int) -> bool:
        first = self.records.get(first_id)
        second = self.records.get(second_id)
        if first is None or second is None or first_id == second_id:
            return False
        first.associations.add(second_id)
        second.associations.add(first_id)
        logger.info("Created memory association: %d <-> %d", first_id, second_id)
        return True

    def dissociate(self, first_id: int, second_id: int) -> bool:
        first = self.records.get(first_id)
        second = self.records.get(second_id)
        if first is None or second is None:
            return False
        first.associations.discard(second_id)
        second.associations.discard(first_id)
        logger.info("Removed memory association: %d <-> %d", first_id, second_id)
        return True

    def network_density(self) -> float:
        """Fraction of possible undirected links that exist."""
        n = self.count
        if n <= 1:
            return 0.0
        possible = n * (n - 1) / 2
        edges = sum(len(entry.associations) for entry in self.records.values()) / 2
        return edges / possible

    # ── Emotional processing ─────────────────────────────────────────

    def repress(self, memory_id: int) -> bool:
        """Hide a traumatic memory from every read and decay pass."""
        entry = self.records.get(memory_id)
        if entry is None or entry.category != MemoryCategory.TRAUMATIC or entry.is_repressed:
            return False
        entry.is_repressed = True
        logger.info("Repressed traumatic memory: %s", entry.title)
        self.event_bus.emit(MEMORY_REPRESSED, {"memory_id": memory_id})
        return True

    def recover(self, memory_id: int) -> bool:
        entry = self.records.get(memory_id)
        if entry is None or not entry.is_repressed:
            return False
        entry.is_repressed = False
        logger.info("Recovered repressed memory: %s", entry.title)
        self.event_bus.emit(MEMORY_RECOVERED, {"memory_id": memory_id})
        return True

    # ── Long-term storage ────────────────────────────────────────────

    def transfer_to_long_term(self, memory_id: int) -> bool:
        entry = self.records.get(memory_id)
        if entry is None:
            return False
        entry.decay_rate *= 0.1
        logger.info("Transferred to long-term memory: %s", entry.title)
        return True

    def is_consolidated(self, memory_id: int) -> bool:
        entry = self.records.get(memory_id)
        return entry is not None and entry.decay_rate < 0.01

    @staticmethod
    def _dump(entry: MemoryEntry) -> dict[str, Any]:
        return entry.model_dump(mode="json")
