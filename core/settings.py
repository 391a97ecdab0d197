"""Typed views over the merged YAML configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from core.coercion import coerce_enum
from memory.scoring import DEFAULT_TYPE_DECAY_MULTIPLIERS
from memory.types.enums import MemoryCategory


@dataclass
class MemorySettings:
    """Capacity, decay and retention tunables for the memory store."""

    max_memories: int = 1000
    base_decay_rate: float = 0.05
    emotional_retention_multiplier: float = 1.5
    decay_threshold: float = 0.1
    access_clarity_bonus: float = 5.0
    min_capacity: int = 10
    use_decay: bool = True
    auto_manage_capacity: bool = True
    type_decay_multipliers: dict[MemoryCategory, float] = field(
        default_factory=lambda: dict(DEFAULT_TYPE_DECAY_MULTIPLIERS)
    )

    @classmethod
    def from_config(cls, cfg: dict[str, Any] | None) -> MemorySettings:
        cfg = cfg or {}
        multipliers = dict(DEFAULT_TYPE_DECAY_MULTIPLIERS)
        for key, value in dict(cfg.get("type_decay_multipliers", {})).items():
            category = coerce_enum(MemoryCategory, key)
            if category is None:
                raise ValueError(f"Unknown memory category in type_decay_multipliers: {key}")
            multipliers[category] = float(value)
        return cls(
            max_memories=int(cfg.get("max_memories", 1000)),
            base_decay_rate=float(cfg.get("base_decay_rate", 0.05)),
            emotional_retention_multiplier=float(cfg.get("emotional_retention_multiplier", 1.5)),
            decay_threshold=float(cfg.get("decay_threshold", 0.1)),
            access_clarity_bonus=float(cfg.get("access_clarity_bonus", 5.0)),
            min_capacity=int(cfg.get("min_capacity", 10)),
            use_decay=bool(cfg.get("use_decay", True)),
            auto_manage_capacity=bool(cfg.get("auto_manage_capacity", True)),
            type_decay_multipliers=multipliers,
        )


@dataclass
class VirtueSettings:
    """Ledger and value-inference tunables."""

    decay_rate: float = 0.1
    impact_multiplier: float = 1.0
    max_action_history: int = 500
    consistency_window_days: float = 30.0
    consistency_requirement: float = 0.7
    min_consistency_samples: int = 3
    level_window: int = 50
    use_decay: bool = True
    track_player_values: bool = True
    evidence_cap: int = 10
    assessment_window: int = 100

    @classmethod
    def from_config(cls, cfg: dict[str, Any] | None) -> VirtueSettings:
        cfg = cfg or {}
        values_cfg = dict(cfg.get("values", {}))
        return cls(
            decay_rate=float(cfg.get("decay_rate", 0.1)),
            impact_multiplier=float(cfg.get("impact_multiplier", 1.0)),
            max_action_history=int(cfg.get("max_action_history", 500)),
            consistency_window_days=float(cfg.get("consistency_window_days", 30)),
            consistency_requirement=float(cfg.get("consistency_requirement", 0.7)),
            min_consistency_samples=int(cfg.get("min_consistency_samples", 3)),
            level_window=int(cfg.get("level_window", 50)),
            use_decay=bool(cfg.get("use_decay", True)),
            track_player_values=bool(cfg.get("track_player_values", True)),
            evidence_cap=int(values_cfg.get("evidence_cap", 10)),
            assessment_window=int(values_cfg.get("assessment_window", 100)),
        )


@dataclass
class CadenceSettings:
    """Host-driven tick intervals in seconds."""

    decay_interval_seconds: float = 60.0
    happiness_interval_seconds: float = 300.0

    @classmethod
    def from_config(cls, cfg: dict[str, Any] | None) -> CadenceSettings:
        cfg = cfg or {}
        return cls(
            decay_interval_seconds=float(cfg.get("decay_interval_seconds", 60)),
            happiness_interval_seconds=float(cfg.get("happiness_interval_seconds", 300)),
        )
