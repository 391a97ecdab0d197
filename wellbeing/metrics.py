"""Happiness snapshot model."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from core.clock import utc_now

OVERALL_WEIGHTS = {
    "life_satisfaction": 0.30,
    "positive_affect": 0.25,
    "inverted_negative_affect": 0.15,
    "eudaimonia": 0.20,
    "flow": 0.10,
}


class HappinessMetrics(BaseModel):
    """One wholesale well-being snapshot. Never mutated after it is built."""

    model_config = ConfigDict(frozen=True)

    overall: float = 50.0
    life_satisfaction: float = 50.0
    positive_affect: float = 50.0
    negative_affect: float = 50.0
    eudaimonia: float = 50.0
    flow: float = 50.0
    meaning: float = 50.0
    engagement: float = 50.0
    sample_size: int = 0
    last_assessment: datetime = Field(default_factory=utc_now)
    detailed_metrics: dict[str, float] = Field(default_factory=dict)
    recent_influences: list[str] = Field(default_factory=list)


def weighted_overall(
    life_satisfaction: float,
    positive_affect: float,
    negative_affect: float,
    eudaimonia: float,
    flow: float,
) -> float:
    return (
        OVERALL_WEIGHTS["life_satisfaction"] * life_satisfaction
        + OVERALL_WEIGHTS["positive_affect"] * positive_affect
        + OVERALL_WEIGHTS["inverted_negative_affect"] * (100.0 - negative_affect)
        + OVERALL_WEIGHTS["eudaimonia"] * eudaimonia
        + OVERALL_WEIGHTS["flow"] * flow
    )
