"""Psyche service object wiring the memory, virtue and well-being components."""

from __future__ import annotations

import logging
from typing import Any

from core.clock import SECONDS_PER_DAY, Clock, utc_now
from core.event_bus import EventBus, EventHandler
from core.settings import CadenceSettings, MemorySettings, VirtueSettings
from core.state_manager import SessionState, StateManager
from memory.consolidation.consolidator import Consolidator
from memory.memory_store import MemoryStore
from memory.types.entry import MemoryEntry
from memory.types.enums import MemoryCategory, MemoryImportance
from memory.types.requests import MemoryCreationRequest
from virtue.ledger import VirtueLedger
from virtue.types.enums import VIRTUE_LABELS, DevelopmentState, VirtueCategory
from virtue.types.records import PlayerValueAssessment, VirtueActionRecord, VirtueActionReport
from virtue.value_inference import ValueInferenceEngine
from wellbeing.happiness import HappinessAggregator
from wellbeing.metrics import HappinessMetrics

logger = logging.getLogger("psyche.engine")

POSITIVE_ACTION_HAPPINESS = 2.0
NEGATIVE_ACTION_HAPPINESS = -1.5


class PsycheEngine:
    """One explicitly owned instance per game session.

    Gameplay code reports memories and virtue actions here, drives the decay
    and happiness cadences through ``advance`` and reads results back through
    the query methods. Observers attach with ``subscribe``.
    """

    def __init__(
        self,
        memory_settings: MemorySettings | None = None,
        virtue_settings: VirtueSettings | None = None,
        cadence: CadenceSettings | None = None,
        event_bus: EventBus | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.clock = clock
        self.event_bus = event_bus or EventBus()
        self.cadence = cadence or CadenceSettings()
        self.virtue_settings = virtue_settings or VirtueSettings()

        self.memory = MemoryStore(settings=memory_settings, event_bus=self.event_bus, clock=clock)
        self.values = ValueInferenceEngine(
            event_bus=self.event_bus,
            clock=clock,
            evidence_cap=self.virtue_settings.evidence_cap,
            assessment_window=self.virtue_settings.assessment_window,
        )
        self.virtues = VirtueLedger(
            settings=self.virtue_settings,
            value_engine=self.values,
            event_bus=self.event_bus,
            clock=clock,
        )
        self.happiness = HappinessAggregator(
            memory_store=self.memory,
            virtue_ledger=self.virtues,
            value_engine=self.values,
            event_bus=self.event_bus,
            clock=clock,
        )
        self.consolidator = Consolidator(store=self.memory)
        self.session = StateManager(clock=clock)

    @property
    def state(self) -> SessionState:
        return self.session.state

    # ── Inbound reports ──────────────────────────────────────────────

    def report_memory(self, request: MemoryCreationRequest | dict[str, Any]) -> int | None:
        if isinstance(request, dict):
            request = MemoryCreationRequest.model_validate(request)
        return self.memory.create(
            request.title,
            request.content,
            request.category,
            request.importance,
            request.emotional_intensity,
        )

    def report_virtue_action(self, report: VirtueActionReport | dict[str, Any]) -> VirtueActionRecord | None:
        """Record an action; optionally remember it and feel it."""
        if isinstance(report, dict):
            report = VirtueActionReport.model_validate(report)
        record = self.virtues.record_action(
            report.category,
            report.action_label,
            report.description,
            report.impact_magnitude,
            is_positive=report.is_positive,
            context_weight=report.context_weight,
        )
        if record is None:
            return None
        if report.remember:
            self._remember_action(record)
        return record

    def record_wisdom(self, decision_type: str, was_wise: bool, complexity: float = 1.0) -> VirtueActionRecord | None:
        return self._remembered(self.virtues.record_wisdom_action(decision_type, was_wise, complexity))

    def record_courage(self, threat_type: str, showed_courage: bool, risk_level: float = 1.0) -> VirtueActionRecord | None:
        return self._remembered(self.virtues.record_courage_action(threat_type, showed_courage, risk_level))

    def record_justice(self, situation_type: str, acted_justly: bool, moral_weight: float = 1.0) -> VirtueActionRecord | None:
        return self._remembered(self.virtues.record_justice_action(situation_type, acted_justly, moral_weight))

    def record_temperance(
        self, temptation_type: str, showed_restraint: bool, temptation_strength: float = 1.0
    ) -> VirtueActionRecord | None:
        return self._remembered(
            self.virtues.record_temperance_action(temptation_type, showed_restraint, temptation_strength)
        )

    def access_memory(self, memory_id: int) -> bool:
        return self.memory.access(memory_id)

    def forget_memory(self, memory_id: int, force: bool = False) -> bool:
        return self.memory.forget(memory_id, force=force)

    def associate_memories(self, first_id: int, second_id: int) -> bool:
        return self.memory.associate(first_id, second_id)

    # ── Cadence ──────────────────────────────────────────────────────

    def decay_tick(self, delta_time: float) -> dict[str, Any]:
        """Run memory and virtue decay once."""
        memory_result = self.memory.decay_tick(delta_time)
        moved = self.virtues.decay_tick(delta_time)
        self.session.mark_decay()
        return {"memory": memory_result, "virtues_moved": moved}

    def recompute_happiness(self) -> HappinessMetrics:
        metrics = self.happiness.recompute()
        self.session.mark_happiness()
        return metrics

    def consolidate(self) -> dict[str, Any]:
        return self.consolidator.run()

    def advance(self, seconds: float) -> dict[str, Any]:
        """Account for elapsed host time and fire any passes that are due.

        Decay passes receive the time since the previous pass in days.
        """
        fired: dict[str, Any] = {"decay": None, "happiness": None}
        if seconds <= 0.0:
            return fired
        self.session.add_elapsed(seconds)
        state = self.session.state

        if state.since_decay_seconds >= self.cadence.decay_interval_seconds:
            fired["decay"] = self.decay_tick(state.since_decay_seconds / SECONDS_PER_DAY)
        if state.since_happiness_seconds >= self.cadence.happiness_interval_seconds:
            fired["happiness"] = self.recompute_happiness().overall
        logger.debug("Advanced %.1fs (elapsed %.1fs)", seconds, state.elapsed_seconds)
        return fired

    def new_session(self) -> SessionState:
        """Clear every store and timer. Subscribers stay attached."""
        self.memory.reset()
        self.virtues.reset()
        self.values.reset()
        self.happiness.reset()
        state = self.session.new_session()
        logger.info("Started new psyche session at %s", state.started_at.isoformat())
        return state

    # ── Queries ──────────────────────────────────────────────────────

    def get_memory(self, memory_id: int) -> MemoryEntry | None:
        return self.memory.get(memory_id)

    def memories_by_category(self, category: MemoryCategory | str) -> list[MemoryEntry]:
        return self.memory.by_type(category)

    def memories_by_importance(self, importance: MemoryImportance | str | int) -> list[MemoryEntry]:
        return self.memory.by_importance(importance)

    def search_memories(self, term: str) -> list[MemoryEntry]:
        return self.memory.search(term)

    def recent_memories(self, count: int = 10) -> list[MemoryEntry]:
        return self.memory.recent(count)

    def get_virtue_level(self, category: VirtueCategory | str) -> float:
        return self.virtues.get_level(category)

    def get_development_state(self, category: VirtueCategory | str) -> DevelopmentState:
        return self.virtues.get_development_state(category)

    def get_value_profile(self) -> list[PlayerValueAssessment]:
        return self.values.profile()

    def get_happiness_metrics(self) -> HappinessMetrics:
        return self.happiness.current

    def get_overall_virtue_score(self) -> float:
        return self.virtues.overall_score()

    def virtue_report(self) -> str:
        return self.virtues.report()

    def summary(self) -> dict[str, Any]:
        """JSON-friendly snapshot of the whole psyche."""
        return {
            "session": {
                "started_at": self.state.started_at.isoformat(),
                "elapsed_seconds": self.state.elapsed_seconds,
                "decay_ticks": self.state.decay_ticks,
                "happiness_passes": self.state.happiness_passes,
            },
            "memory": {
                "count": self.memory.count,
                "capacity": self.memory.capacity,
                "usage_percentage": self.memory.usage_percentage(),
                "recent": [entry.title for entry in self.memory.recent(5)],
            },
            "virtues": {
                record.category.value: {
                    "level": record.level,
                    "development_state": record.development_state.value,
                    "consistency": record.consistency,
                }
                for record in self.virtues.all_records()
            },
            "overall_virtue": self.virtues.overall_score(),
            "dominant_values": [value.value for value in self.values.dominant()],
            "happiness": self.happiness.current.model_dump(mode="json"),
        }

    # ── Observers ────────────────────────────────────────────────────

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        self.event_bus.subscribe(event_name, handler)

    def unsubscribe(self, event_name: str, handler: EventHandler) -> bool:
        return self.event_bus.unsubscribe(event_name, handler)

    # ── Internals ────────────────────────────────────────────────────

    def _remembered(self, record: VirtueActionRecord | None) -> VirtueActionRecord | None:
        if record is not None:
            self._remember_action(record)
        return record

    def _remember_action(self, record: VirtueActionRecord) -> None:
        virtue = VIRTUE_LABELS[record.category]
        self.memory.create(
            f"Virtue Action: {record.label}",
            f"Performed {record.label} action related to {virtue}",
            MemoryCategory.MORAL,
            MemoryImportance.MEDIUM if record.is_positive else MemoryImportance.LOW,
            70.0 if record.is_positive else 30.0,
        )
        self.happiness.record_happiness_event(
            f"Virtue: {virtue}",
            POSITIVE_ACTION_HAPPINESS if record.is_positive else NEGATIVE_ACTION_HAPPINESS,
            1.0,
        )
