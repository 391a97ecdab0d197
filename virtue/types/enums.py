"""Virtue categories, development states and latent player values."""

from __future__ import annotations

from enum import Enum


class VirtueCategory(str, Enum):
    """The four cardinal virtues tracked by the ledger."""

    PRACTICAL_WISDOM = "practical_wisdom"
    COURAGE = "courage"
    JUSTICE = "justice"
    TEMPERANCE = "temperance"


class DevelopmentState(str, Enum):
    DEFICIENT = "deficient"
    DEVELOPING = "developing"
    MODERATE = "moderate"
    STRONG = "strong"
    EXEMPLARY = "exemplary"
    EXCESSIVE = "excessive"


class PlayerValue(str, Enum):
    """Latent value dimensions inferred from recorded actions."""

    SECURITY = "security"
    ACHIEVEMENT = "achievement"
    SELF_DIRECTION = "self_direction"
    STIMULATION = "stimulation"
    HEDONISM = "hedonism"
    CONFORMITY = "conformity"
    TRADITION = "tradition"
    BENEVOLENCE = "benevolence"
    UNIVERSALISM = "universalism"
    POWER = "power"


VIRTUE_LABELS: dict[VirtueCategory, str] = {
    VirtueCategory.PRACTICAL_WISDOM: "Wisdom (Sophia)",
    VirtueCategory.COURAGE: "Courage (Andreia)",
    VirtueCategory.JUSTICE: "Justice (Dikaiosyne)",
    VirtueCategory.TEMPERANCE: "Temperance (Sophrosyne)",
}

DEVELOPMENT_LABELS: dict[DevelopmentState, str] = {
    DevelopmentState.DEFICIENT: "Deficient",
    DevelopmentState.DEVELOPING: "Developing",
    DevelopmentState.MODERATE: "Moderate",
    DevelopmentState.STRONG: "Strong",
    DevelopmentState.EXEMPLARY: "Exemplary",
    DevelopmentState.EXCESSIVE: "Excessive (Vice)",
}

PLAYER_VALUE_LABELS: dict[PlayerValue, str] = {
    PlayerValue.SECURITY: "Security",
    PlayerValue.ACHIEVEMENT: "Achievement",
    PlayerValue.SELF_DIRECTION: "Self-Direction",
    PlayerValue.STIMULATION: "Stimulation",
    PlayerValue.HEDONISM: "Hedonism",
    PlayerValue.CONFORMITY: "Conformity",
    PlayerValue.TRADITION: "Tradition",
    PlayerValue.BENEVOLENCE: "Benevolence",
    PlayerValue.UNIVERSALISM: "Universalism",
    PlayerValue.POWER: "Power",
}

VIRTUE_ALIASES: dict[str, VirtueCategory] = {
    "wisdom": VirtueCategory.PRACTICAL_WISDOM,
    "practical-wisdom": VirtueCategory.PRACTICAL_WISDOM,
}

# Contribution of each virtue category to the latent values it evidences.
VALUE_MAPPING: dict[VirtueCategory, tuple[tuple[PlayerValue, float], ...]] = {
    VirtueCategory.PRACTICAL_WISDOM: ((PlayerValue.SELF_DIRECTION, 1.0),),
    VirtueCategory.COURAGE: ((PlayerValue.ACHIEVEMENT, 1.0), (PlayerValue.STIMULATION, 0.5)),
    VirtueCategory.JUSTICE: ((PlayerValue.UNIVERSALISM, 1.0), (PlayerValue.BENEVOLENCE, 0.8)),
    VirtueCategory.TEMPERANCE: ((PlayerValue.SECURITY, 1.0), (PlayerValue.CONFORMITY, 0.6)),
}
