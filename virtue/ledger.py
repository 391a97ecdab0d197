"""Virtue ledger: weighted actions, decaying trait levels and classification."""

from __future__ import annotations

import logging
import math
from datetime import timedelta

from core.clock import Clock, days_between, utc_now
from core.coercion import clamp, coerce_enum, round_half_up
from core.event_bus import (
    DEVELOPMENT_STATE_CHANGED,
    VIRTUE_ACTION_RECORDED,
    VIRTUE_LEVEL_CHANGED,
    EventBus,
)
from core.settings import VirtueSettings
from virtue.types.enums import (
    DEVELOPMENT_LABELS,
    VALUE_MAPPING,
    VIRTUE_ALIASES,
    VIRTUE_LABELS,
    DevelopmentState,
    VirtueCategory,
)
from virtue.types.records import VirtueActionRecord, VirtueRecord
from virtue.value_inference import ValueInferenceEngine

logger = logging.getLogger("psyche.virtue")

NEUTRAL_LEVEL = 50.0
DECAY_NOTIFY_THRESHOLD = 0.1

# Impact scale applied to the opposite (non-virtuous) outcome of each wrapper.
VICE_DISCOUNT: dict[VirtueCategory, float] = {
    VirtueCategory.PRACTICAL_WISDOM: 0.5,
    VirtueCategory.COURAGE: 0.3,
    VirtueCategory.JUSTICE: 0.2,
    VirtueCategory.TEMPERANCE: 0.1,
}


def parse_virtue(value: object) -> VirtueCategory | None:
    if isinstance(value, str) and value.strip().lower() in VIRTUE_ALIASES:
        return VIRTUE_ALIASES[value.strip().lower()]
    return coerce_enum(VirtueCategory, value)


def classify_development(level: float, consistency: float) -> DevelopmentState:
    """Development state as a pure function of level and consistency."""
    if level > 95.0:
        return DevelopmentState.EXCESSIVE
    adjusted = level * (consistency / 100.0)
    if adjusted >= 80.0:
        return DevelopmentState.EXEMPLARY
    if adjusted >= 65.0:
        return DevelopmentState.STRONG
    if adjusted >= 40.0:
        return DevelopmentState.MODERATE
    if adjusted >= 25.0:
        return DevelopmentState.DEVELOPING
    return DevelopmentState.DEFICIENT


class VirtueLedger:
    """Bounded action history plus one incrementally maintained record per virtue.

    The incremental ``level`` on each record is authoritative. ``compute_level``
    rebuilds a level from history for audits and never writes it back.
    """

    def __init__(
        self,
        settings: VirtueSettings | None = None,
        value_engine: ValueInferenceEngine | None = None,
        event_bus: EventBus | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self.settings = settings or VirtueSettings()
        self.event_bus = event_bus or EventBus()
        self.clock = clock
        self.value_engine = value_engine
        self.history: list[VirtueActionRecord] = []
        self.records: dict[VirtueCategory, VirtueRecord] = {}
        self._next_action_id = 1
        self.reset()

    def reset(self) -> None:
        """Return every virtue to neutral and clear the history."""
        now = self.clock()
        self.history.clear()
        self._next_action_id = 1
        self.records = {}
        for category in VirtueCategory:
            record = VirtueRecord(category=category, last_updated=now)
            record.development_state = classify_development(record.level, record.consistency)
            self.records[category] = record

    # ── Recording ────────────────────────────────────────────────────

    def record_action(
        self,
        category: VirtueCategory | str,
        label: str,
        description: str,
        impact_magnitude: float,
        is_positive: bool = True,
        context_weight: float = 1.0,
    ) -> VirtueActionRecord | None:
        """Append an action and ripple it into the level and value estimates."""
        resolved = parse_virtue(category)
        if resolved is None:
            logger.warning("Rejected virtue action '%s': unknown category %r", label, category)
            return None

        record = VirtueActionRecord(
            id=self._next_action_id,
            category=resolved,
            label=label,
            description=description,
            impact_magnitude=clamp(impact_magnitude, 0.0, 10.0),
            is_positive=is_positive,
            timestamp=self.clock(),
            context_weight=context_weight,
            affected_values=frozenset(value for value, _ in VALUE_MAPPING[resolved]),
        )
        self._next_action_id += 1
        self.history.append(record)

        delta = record.impact_magnitude * self.settings.impact_multiplier * record.sign
        self.update_level(resolved, delta, f"Action: {label}")

        if self.value_engine is not None and self.settings.track_player_values:
            self.value_engine.ingest(record)

        if len(self.history) > self.settings.max_action_history:
            self._prune()

        self.event_bus.emit(VIRTUE_ACTION_RECORDED, {"action": record.model_dump(mode="json")})
        logger.info(
            "Recorded virtue action: %s (%s) - Impact: %.2f",
            VIRTUE_LABELS[resolved],
            label,
            delta,
        )
        return record

    def update_level(self, category: VirtueCategory | str, delta: float, reason: str = "") -> bool:
        resolved = parse_virtue(category)
        if resolved is None:
            return False
        virtue = self.records[resolved]
        old_level = virtue.level
        virtue.level = clamp(virtue.level + delta)
        virtue.last_updated = self.clock()
        virtue.recent_actions += 1
        if delta > 0.0:
            virtue.experience += round_half_up(delta * 10.0)

        consistency = self.consistency(resolved)
        virtue.consistency = NEUTRAL_LEVEL if consistency is None else consistency
        self._refresh_state(resolved)

        self.event_bus.emit(
            VIRTUE_LEVEL_CHANGED,
            {
                "category": resolved.value,
                "old_level": old_level,
                "new_level": virtue.level,
                "reason": reason,
            },
        )
        logger.info(
            "Updated virtue %s: %.2f -> %.2f (%s)",
            VIRTUE_LABELS[resolved],
            old_level,
            virtue.level,
            reason,
        )
        return True

    def record_wisdom_action(self, decision_type: str, was_wise: bool, complexity: float = 1.0) -> VirtueActionRecord | None:
        return self._record_choice(
            VirtueCategory.PRACTICAL_WISDOM,
            "Decision Making",
            f"Decision: {decision_type} (Wise: {_yes_no(was_wise)}, Complexity: {complexity:.1f})",
            complexity,
            was_wise,
        )

    def record_courage_action(self, threat_type: str, showed_courage: bool, risk_level: float = 1.0) -> VirtueActionRecord | None:
        return self._record_choice(
            VirtueCategory.COURAGE,
            "Risk Taking",
            f"Threat: {threat_type} (Courage: {_yes_no(showed_courage)}, Risk: {risk_level:.1f})",
            risk_level,
            showed_courage,
        )

    def record_justice_action(self, situation_type: str, acted_justly: bool, moral_weight: float = 1.0) -> VirtueActionRecord | None:
        return self._record_choice(
            VirtueCategory.JUSTICE,
            "Moral Decision",
            f"Situation: {situation_type} (Just: {_yes_no(acted_justly)}, Weight: {moral_weight:.1f})",
            moral_weight,
            acted_justly,
        )

    def record_temperance_action(
        self, temptation_type: str, showed_restraint: bool, temptation_strength: float = 1.0
    ) -> VirtueActionRecord | None:
        return self._record_choice(
            VirtueCategory.TEMPERANCE,
            "Self Control",
            f"Temptation: {temptation_type} (Restraint: {_yes_no(showed_restraint)}, "
            f"Strength: {temptation_strength:.1f})",
            temptation_strength,
            showed_restraint,
        )

    def _record_choice(
        self,
        category: VirtueCategory,
        label: str,
        description: str,
        magnitude: float,
        virtuous: bool,
    ) -> VirtueActionRecord | None:
        impact = magnitude * (1.0 if virtuous else VICE_DISCOUNT[category])
        return self.record_action(category, label, description, impact, is_positive=virtuous)

    # ── Derived values ───────────────────────────────────────────────

    def compute_level(self, category: VirtueCategory | str) -> float:
        """Time-weighted level rebuilt from the most recent actions."""
        actions = self.actions_by_category(category, self.settings.level_window)
        if not actions:
            return NEUTRAL_LEVEL
        now = self.clock()
        total_impact = 0.0
        total_weight = 0.0
        for action in actions:
            time_weight = math.exp(-0.1 * days_between(action.timestamp, now))
            total_impact += action.impact_magnitude * action.context_weight * time_weight * action.sign
            total_weight += time_weight
        average = total_impact / total_weight if total_weight > 0.0 else 0.0
        return clamp(NEUTRAL_LEVEL + average * 5.0)

    def consistency(self, category: VirtueCategory | str, window_days: float | None = None) -> float | None:
        """Percent of positive actions within the window, or None if too few."""
        resolved = parse_virtue(category)
        if resolved is None:
            return None
        days = self.settings.consistency_window_days if window_days is None else window_days
        cutoff = self.clock() - timedelta(days=days)
        in_window = [a for a in self.history if a.category == resolved and a.timestamp >= cutoff]
        if len(in_window) < self.settings.min_consistency_samples:
            return None
        positives = sum(1 for action in in_window if action.is_positive)
        return 100.0 * positives / len(in_window)

    def meets_consistency(self, category: VirtueCategory | str, window_days: float | None = None) -> bool:
        score = self.consistency(category, window_days)
        if score is None:
            return True
        return score >= self.settings.consistency_requirement * 100.0

    def growth_rate(self, category: VirtueCategory | str) -> float:
        """Signed growth per day from the frequency and polarity of recent actions."""
        actions = self.actions_by_category(category, 10)
        if len(actions) < 2:
            return 0.0
        intervals = [
            days_between(older.timestamp, newer.timestamp)
            for newer, older in zip(actions, actions[1:])
        ]
        average_interval = sum(intervals) / len(intervals)
        positive_ratio = sum(1 for action in actions if action.is_positive) / len(actions)
        return (positive_ratio * 2.0 - 1.0) / max(average_interval, 0.1)

    # ── Decay ────────────────────────────────────────────────────────

    def decay_tick(self, delta_time: float) -> int:
        """Pull idle virtues toward neutral without overshooting it."""
        if not self.settings.use_decay or delta_time <= 0.0:
            return 0
        now = self.clock()
        moved = 0
        for category, virtue in self.records.items():
            days_idle = days_between(virtue.last_updated, now)
            if days_idle <= 1.0 or virtue.level == NEUTRAL_LEVEL:
                continue
            amount = self.settings.decay_rate * days_idle * delta_time
            old_level = virtue.level
            if virtue.level > NEUTRAL_LEVEL:
                virtue.level = clamp(max(virtue.level - amount, NEUTRAL_LEVEL))
            else:
                virtue.level = clamp(min(virtue.level + amount, NEUTRAL_LEVEL))
            if virtue.level != old_level:
                moved += 1
                self._refresh_state(category)
            if abs(old_level - virtue.level) > DECAY_NOTIFY_THRESHOLD:
                self.event_bus.emit(
                    VIRTUE_LEVEL_CHANGED,
                    {
                        "category": category.value,
                        "old_level": old_level,
                        "new_level": virtue.level,
                        "reason": "decay",
                    },
                )
        return moved

    # ── Queries ──────────────────────────────────────────────────────

    def get_record(self, category: VirtueCategory | str) -> VirtueRecord | None:
        resolved = parse_virtue(category)
        if resolved is None:
            return None
        return self.records[resolved].model_copy()

    def all_records(self) -> list[VirtueRecord]:
        return [record.model_copy() for record in self.records.values()]

    def get_level(self, category: VirtueCategory | str) -> float:
        record = self.get_record(category)
        return record.level if record is not None else NEUTRAL_LEVEL

    def get_development_state(self, category: VirtueCategory | str) -> DevelopmentState:
        record = self.get_record(category)
        return record.development_state if record is not None else DevelopmentState.MODERATE

    def overall_score(self) -> float:
        return sum(record.level for record in self.records.values()) / len(self.records)

    def recent_actions(self, count: int = 10) -> list[VirtueActionRecord]:
        """Newest first; ``count <= 0`` returns the whole history."""
        ordered = sorted(self.history, key=lambda a: (a.timestamp, a.id), reverse=True)
        return ordered[:count] if count > 0 else ordered

    def actions_by_category(self, category: VirtueCategory | str, count: int = 10) -> list[VirtueActionRecord]:
        resolved = parse_virtue(category)
        if resolved is None:
            return []
        ordered = [action for action in self.recent_actions(0) if action.category == resolved]
        return ordered[:count] if count > 0 else ordered

    def clear_history(self) -> None:
        self.history.clear()
        logger.info("Cleared virtue action history")

    def report(self) -> str:
        """Plain-text summary of every virtue."""
        lines = ["=== Virtue Assessment Report ==="]
        for category, record in self.records.items():
            lines.append(
                f"{VIRTUE_LABELS[category]}: Level {record.level:.1f} "
                f"({DEVELOPMENT_LABELS[record.development_state]}) - "
                f"Consistency: {record.consistency:.1f}%"
            )
        lines.append("")
        lines.append(f"Overall Virtue Score: {self.overall_score():.1f}")
        lines.append(f"Total Actions Recorded: {len(self.history)}")
        return "\n".join(lines) + "\n"

    # ── Internals ────────────────────────────────────────────────────

    def _refresh_state(self, category: VirtueCategory) -> None:
        virtue = self.records[category]
        old_state = virtue.development_state
        virtue.development_state = classify_development(virtue.level, virtue.consistency)
        if old_state != virtue.development_state:
            self.event_bus.emit(
                DEVELOPMENT_STATE_CHANGED,
                {
                    "category": category.value,
                    "old_state": old_state.value,
                    "new_state": virtue.development_state.value,
                },
            )
            logger.info(
                "Virtue %s development changed: %s -> %s",
                VIRTUE_LABELS[category],
                DEVELOPMENT_LABELS[old_state],
                DEVELOPMENT_LABELS[virtue.development_state],
            )

    def _prune(self) -> None:
        excess = len(self.history) - self.settings.max_action_history
        del self.history[:excess]
        logger.info("Cleaned up %d old virtue actions", excess)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"
