"""Composite well-being score derived from memories, virtues and values."""

from __future__ import annotations

import logging

from core.clock import Clock, utc_now
from core.coercion import clamp
from core.event_bus import HAPPINESS_UPDATED, EventBus
from memory.memory_store import MemoryStore
from memory.types.entry import MemoryEntry
from memory.types.enums import MemoryCategory, MemoryImportance
from virtue.ledger import VirtueLedger
from virtue.value_inference import ValueInferenceEngine
from wellbeing.metrics import HappinessMetrics, weighted_overall

logger = logging.getLogger("psyche.happiness")

DEFAULT_SCORE = 50.0
LIFE_SATISFACTION_WINDOW = 50
RECENT_INFLUENCES = 5


def _mean(values: list[float], default: float = DEFAULT_SCORE) -> float:
    return sum(values) / len(values) if values else default


def positive_affect(entries: list[MemoryEntry]) -> float:
    return _mean(
        [
            e.emotional_intensity
            for e in entries
            if e.category == MemoryCategory.EMOTIONAL and e.emotional_intensity > 60.0
        ]
    )


def negative_affect(entries: list[MemoryEntry]) -> float:
    return _mean(
        [
            100.0 - e.emotional_intensity
            for e in entries
            if e.category == MemoryCategory.EMOTIONAL and e.emotional_intensity < 40.0
        ]
    )


def eudaimonia(entries: list[MemoryEntry]) -> float:
    if not entries:
        return DEFAULT_SCORE
    meaningful = sum(1 for e in entries if e.importance >= MemoryImportance.HIGH)
    return clamp(50.0 + 50.0 * meaningful / len(entries))


def flow(entries: list[MemoryEntry]) -> float:
    return clamp(
        _mean(
            [
                e.emotional_intensity
                for e in entries
                if e.category == MemoryCategory.PROCEDURAL and e.emotional_intensity > 60.0
            ]
        )
    )


def life_satisfaction(recent_entries: list[MemoryEntry]) -> float:
    satisfaction = DEFAULT_SCORE
    for entry in recent_entries:
        if entry.category != MemoryCategory.EMOTIONAL:
            continue
        if entry.emotional_intensity > 70.0:
            satisfaction += 2.0
        elif entry.emotional_intensity < 30.0:
            satisfaction -= 1.0
    return clamp(satisfaction)


class HappinessAggregator:
    """Rebuilds the happiness snapshot on the host's cadence."""

    def __init__(
        self,
        memory_store: MemoryStore,
        virtue_ledger: VirtueLedger | None = None,
        value_engine: ValueInferenceEngine | None = None,
        event_bus: EventBus | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.memory_store = memory_store
        self.virtue_ledger = virtue_ledger
        self.value_engine = value_engine
        self.event_bus = event_bus or EventBus()
        self.clock = clock
        self.current = HappinessMetrics(last_assessment=clock())

    def reset(self) -> None:
        self.current = HappinessMetrics(last_assessment=self.clock())

    def recompute(self) -> HappinessMetrics:
        """Compute a fresh snapshot, publish it and return it."""
        entries = self.memory_store.all_entries()
        recent = self.memory_store.recent(LIFE_SATISFACTION_WINDOW)

        satisfaction = life_satisfaction(recent)
        positive = positive_affect(entries)
        negative = negative_affect(entries)
        flourishing = eudaimonia(entries)
        engagement = flow(entries)

        snapshot = HappinessMetrics(
            overall=clamp(weighted_overall(satisfaction, positive, negative, flourishing, engagement)),
            life_satisfaction=satisfaction,
            positive_affect=positive,
            negative_affect=negative,
            eudaimonia=flourishing,
            flow=engagement,
            meaning=flourishing,
            engagement=engagement,
            sample_size=self.memory_store.count,
            last_assessment=self.clock(),
            detailed_metrics=self._detailed_metrics(),
            recent_influences=[
                e.title for e in recent if e.category == MemoryCategory.EMOTIONAL
            ][:RECENT_INFLUENCES],
        )

        previous = self.current
        self.current = snapshot
        self.event_bus.emit(
            HAPPINESS_UPDATED,
            {
                "before": previous.model_dump(mode="json"),
                "after": snapshot.model_dump(mode="json"),
            },
        )
        logger.info(
            "Updated happiness metrics: Overall %.1f, Life Satisfaction %.1f",
            snapshot.overall,
            snapshot.life_satisfaction,
        )
        return snapshot

    def record_happiness_event(self, event_type: str, impact: float, intensity: float = 1.0) -> int | None:
        """Remember a happiness-relevant event, then refresh the snapshot."""
        importance = MemoryImportance.HIGH if abs(impact) > 5.0 else MemoryImportance.MEDIUM
        memory_id = self.memory_store.create(
            f"Happiness Event: {event_type}",
            f"Impact: {impact:.1f}, Intensity: {intensity:.1f}",
            MemoryCategory.EMOTIONAL,
            importance,
            50.0 + impact * 5.0,
        )
        self.recompute()
        logger.info("Recorded happiness event: %s (Impact: %.1f)", event_type, impact)
        return memory_id

    def _detailed_metrics(self) -> dict[str, float]:
        details = {
            "memory_usage": self.memory_store.usage_percentage(),
            "network_density": self.memory_store.network_density(),
        }
        if self.virtue_ledger is not None:
            details["overall_virtue"] = self.virtue_ledger.overall_score()
        if self.value_engine is not None:
            details["value_confidence"] = self.value_engine.mean_confidence()
        return details
