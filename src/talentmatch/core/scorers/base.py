"""Shared scorer result type and tier/availability components."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ...schemas import Resource, tier_label

DEFAULT_TIER_POINTS: dict[int, float] = {1: 15.0, 2: 12.0, 3: 8.0, 4: 4.0}


@dataclass(slots=True)
class MatchScore:
    """Scored fit of one resource against one requirement or slot."""

    value: int
    reasons: list[str] = field(default_factory=list)
    components: dict[str, float] = field(default_factory=dict)


def round_half_up(value: float) -> int:
    """Round .5 upwards, unlike the built-in banker's rounding."""
    return int(math.floor(value + 0.5))


def tier_component(
    resource: Resource,
    tier_points: dict[int, float],
    reason_max_tier: int,
) -> tuple[float, str | None]:
    points = float(tier_points.get(resource.tier, 0.0))
    reason = None
    if resource.tier <= reason_max_tier:
        reason = f"Tier {resource.tier} - {tier_label(resource.tier)}"
    return points, reason


def availability_component(
    resource: Resource,
    *,
    cap: float,
    full_time_hours: float,
    reason_min_hours: float,
) -> tuple[float, str | None]:
    hours = resource.weekly_availability
    points = min(cap, cap * hours / full_time_hours)
    reason = None
    if hours >= reason_min_hours:
        reason = f"{_format_hours(hours)}h/week available"
    return points, reason


def _format_hours(hours: float) -> str:
    return str(int(hours)) if float(hours).is_integer() else f"{hours:g}"
