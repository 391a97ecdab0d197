"""Typed virtue and player-value models."""

from virtue.types.enums import (
    DEVELOPMENT_LABELS,
    PLAYER_VALUE_LABELS,
    VALUE_MAPPING,
    VIRTUE_LABELS,
    DevelopmentState,
    PlayerValue,
    VirtueCategory,
)
from virtue.types.records import (
    PlayerValueAssessment,
    VirtueActionRecord,
    VirtueActionReport,
    VirtueRecord,
)

__all__ = [
    "DevelopmentState",
    "PlayerValue",
    "VirtueCategory",
    "VirtueActionRecord",
    "VirtueActionReport",
    "VirtueRecord",
    "PlayerValueAssessment",
    "DEVELOPMENT_LABELS",
    "PLAYER_VALUE_LABELS",
    "VALUE_MAPPING",
    "VIRTUE_LABELS",
]
