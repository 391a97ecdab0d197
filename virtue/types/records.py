"""Virtue ledger and value-inference models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.clock import utc_now
from core.coercion import clamp
from virtue.types.enums import DevelopmentState, PlayerValue, VirtueCategory


class VirtueActionRecord(BaseModel):
    """One weighted action in the ledger. Immutable once recorded."""

    model_config = ConfigDict(frozen=True)

    id: int
    category: VirtueCategory
    label: str
    description: str = ""
    impact_magnitude: float = 0.0
    is_positive: bool = True
    timestamp: datetime = Field(default_factory=utc_now)
    context_weight: float = 1.0
    affected_values: frozenset[PlayerValue] = frozenset()

    @field_validator("impact_magnitude")
    @classmethod
    def _clamp_impact(cls, value: float) -> float:
        return clamp(value, 0.0, 10.0)

    @property
    def sign(self) -> float:
        return 1.0 if self.is_positive else -1.0


class VirtueRecord(BaseModel):
    """Current standing of one virtue category."""

    category: VirtueCategory
    level: float = 50.0
    development_state: DevelopmentState = DevelopmentState.MODERATE
    experience: int = 0
    consistency: float = 50.0
    last_updated: datetime = Field(default_factory=utc_now)
    recent_actions: int = 0

    @field_validator("level", "consistency")
    @classmethod
    def _clamp_percent(cls, value: float) -> float:
        return clamp(value)


class PlayerValueAssessment(BaseModel):
    """Running estimate of one latent player value."""

    value: PlayerValue
    strength: float = 50.0
    consistency: float = 50.0
    recent_trend: float = 0.0
    confidence: float = 20.0
    sample_count: int = 0
    last_assessed: datetime = Field(default_factory=utc_now)
    supporting_evidence: list[str] = Field(default_factory=list)


class VirtueActionReport(BaseModel):
    """Inbound virtue-action report from gameplay or dialogue logic."""

    category: str
    action_label: str
    description: str = ""
    impact_magnitude: float = 1.0
    is_positive: bool = True
    context_weight: float = 1.0
    remember: bool = True
