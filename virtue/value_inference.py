"""Infers latent player values from the virtue action stream."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from typing import Any

from core.clock import Clock, utc_now
from core.coercion import clamp, coerce_enum
from core.event_bus import VALUES_UPDATED, EventBus
from virtue.types.enums import PLAYER_VALUE_LABELS, VALUE_MAPPING, PlayerValue
from virtue.types.records import PlayerValueAssessment, VirtueActionRecord

logger = logging.getLogger("psyche.values")

TREND_LIMIT = 10.0


class ValueInferenceEngine:
    """Keeps one smoothed strength/confidence estimate per player value.

    ``ingest`` nudges estimates incrementally as actions arrive; ``assess_all``
    rebuilds them from the most recent window of actions.
    """

    def __init__(
        self,
        event_bus: EventBus | None = None,
        clock: Clock = utc_now,
        evidence_cap: int = 10,
        assessment_window: int = 100,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.clock = clock
        self.evidence_cap = evidence_cap
        self.window: deque[VirtueActionRecord] = deque(maxlen=assessment_window)
        self.assessments: dict[PlayerValue, PlayerValueAssessment] = {}
        self.reset()

    def reset(self) -> None:
        now = self.clock()
        self.window.clear()
        self.assessments = {
            value: PlayerValueAssessment(value=value, last_assessed=now) for value in PlayerValue
        }

    def ingest(self, record: VirtueActionRecord) -> None:
        """Fold one recorded action into every value it evidences."""
        self.window.append(record)
        before = self._strengths()
        for value, weight in VALUE_MAPPING[record.category]:
            self.update_value(value, record.impact_magnitude * weight * record.sign, record.description)
        self._publish(before)

    def update_value(self, value: PlayerValue | str, evidence: float, context: str) -> bool:
        resolved = coerce_enum(PlayerValue, value)
        if resolved is None:
            logger.warning("Ignored evidence for unknown player value %r", value)
            return False
        assessment = self.assessments[resolved]
        assessment.strength = clamp(assessment.strength + evidence * 0.1)
        assessment.recent_trend = clamp(
            0.8 * assessment.recent_trend + 0.2 * evidence, -TREND_LIMIT, TREND_LIMIT
        )
        assessment.supporting_evidence.append(context)
        if len(assessment.supporting_evidence) > self.evidence_cap:
            del assessment.supporting_evidence[: -self.evidence_cap]
        assessment.sample_count += 1
        assessment.confidence = min(assessment.sample_count * 1.5, 100.0)
        assessment.last_assessed = self.clock()
        logger.info(
            "Updated player value %s: Evidence %.2f, New Strength %.2f",
            PLAYER_VALUE_LABELS[resolved],
            evidence,
            assessment.strength,
        )
        return True

    def assess_all(self, actions: Iterable[VirtueActionRecord] | None = None) -> list[PlayerValueAssessment]:
        """Recompute strength, samples and confidence from recent actions.

        Values without supporting actions keep their current estimate. Calling
        this twice with no new actions in between changes nothing.
        """
        recent = list(self.window if actions is None else actions)
        before = self._strengths()
        now = self.clock()
        for value, assessment in self.assessments.items():
            evidence = [
                record.impact_magnitude * record.sign
                for record in recent
                if value in record.affected_values
            ]
            if evidence:
                positives = sum(1 for item in evidence if item > 0)
                assessment.strength = clamp(50.0 + (sum(evidence) / len(evidence)) * 10.0)
                assessment.sample_count = len(evidence)
                assessment.confidence = min(len(evidence) * 2.0, 100.0)
                assessment.consistency = 100.0 * max(positives, len(evidence) - positives) / len(evidence)
            assessment.last_assessed = now
        logger.info("Assessed player values from %d recent actions", len(recent))
        self._publish(before)
        return self.profile()

    def get(self, value: PlayerValue | str) -> PlayerValueAssessment | None:
        resolved = coerce_enum(PlayerValue, value)
        if resolved is None:
            return None
        return self.assessments[resolved].model_copy(deep=True)

    def strength(self, value: PlayerValue | str) -> float:
        assessment = self.get(value)
        return assessment.strength if assessment is not None else 50.0

    def profile(self) -> list[PlayerValueAssessment]:
        """All assessments, strongest first (ties keep declaration order)."""
        ordered = sorted(self.assessments.values(), key=lambda a: a.strength, reverse=True)
        return [assessment.model_copy(deep=True) for assessment in ordered]

    def dominant(self, count: int = 3) -> list[PlayerValue]:
        return [assessment.value for assessment in self.profile()[: max(count, 0)]]

    def mean_confidence(self) -> float:
        return sum(a.confidence for a in self.assessments.values()) / len(self.assessments)

    def _strengths(self) -> dict[PlayerValue, float]:
        return {value: assessment.strength for value, assessment in self.assessments.items()}

    def _publish(self, before: dict[PlayerValue, float]) -> None:
        changes: dict[str, Any] = {
            value.value: {"before": before[value], "after": assessment.strength}
            for value, assessment in self.assessments.items()
            if before[value] != assessment.strength
        }
        self.event_bus.emit(
            VALUES_UPDATED,
            {
                "changes": changes,
                "dominant": [value.value for value in self.dominant()],
            },
        )
