"""Input coercion helpers shared by the stores."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    """Clamp a number into [low, high]."""
    return max(low, min(high, float(value)))


def coerce_enum(enum_cls: type[E], value: object) -> E | None:
    """Resolve an enum member from a member, value or case-insensitive name.

    Returns None for anything that does not name a member; callers decide
    how to refuse.
    """
    if isinstance(value, enum_cls):
        return value
    # bool is an int subclass; True must not resolve to an IntEnum tier
    if isinstance(value, bool):
        return None
    try:
        return enum_cls(value)
    except (ValueError, TypeError):
        pass
    if isinstance(value, str):
        key = value.strip().replace("-", "_").replace(" ", "_").upper()
        member = enum_cls.__members__.get(key)
        if member is not None:
            return member
        lowered = value.strip().lower()
        for candidate in enum_cls:
            if str(candidate.value).lower() == lowered:
                return candidate
    return None


def round_half_up(value: float) -> int:
    """Round to nearest int with halves away from zero."""
    if value >= 0:
        return int(value + 0.5)
    return -int(-value + 0.5)
