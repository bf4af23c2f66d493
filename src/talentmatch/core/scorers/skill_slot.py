"""Skill-slot scoring for the manual team builder."""

from __future__ import annotations

from dataclasses import dataclass, field

from ...schemas import Resource, SkillSlot, proficiency_label
from .base import (
    DEFAULT_TIER_POINTS,
    MatchScore,
    availability_component,
    round_half_up,
    tier_component,
)


@dataclass
class SkillSlotConfig:
    """Point values for slot-mode scoring."""

    skill_base: float = 40.0
    proficiency_bonus: float = 20.0
    proficiency_step_penalty: float = 5.0
    experience_bonus: float = 15.0
    # Minimum years on the skill, indexed by slot level 1 (expert) .. 5 (junior).
    level_years: tuple[float, ...] = (12.0, 8.0, 5.0, 3.0, 1.0)
    tier_points: dict[int, float] = field(default_factory=lambda: dict(DEFAULT_TIER_POINTS))
    availability_cap: float = 10.0
    full_time_hours: float = 40.0
    reason_max_tier: int = 2
    reason_min_hours: float = 30.0


class SkillSlotScorer:
    """Score a resource against a single skill at a target level."""

    method = "skill_slot"

    def __init__(self, *, config: SkillSlotConfig | None = None) -> None:
        self._config = config or SkillSlotConfig()

    def score(self, resource: Resource, slot: SkillSlot) -> MatchScore:
        config = self._config
        reasons: list[str] = []
        components = {"skill": 0.0, "proficiency": 0.0, "experience": 0.0}

        skill = resource.find_skill(slot.skill_name)
        if skill is not None:
            components["skill"] = config.skill_base
            reasons.append(f"Has {skill.name} ({proficiency_label(skill.proficiency)})")

            distance = abs(skill.proficiency - slot.target_proficiency)
            components["proficiency"] = max(
                0.0,
                config.proficiency_bonus - config.proficiency_step_penalty * distance,
            )

            required_years = config.level_years[slot.level - 1]
            if skill.years_experience >= required_years:
                components["experience"] = config.experience_bonus
                reasons.append(f"{_format_years(skill.years_experience)} years with {skill.name}")

        components["tier"], reason = tier_component(
            resource, config.tier_points, config.reason_max_tier
        )
        if reason:
            reasons.append(reason)

        components["availability"], reason = availability_component(
            resource,
            cap=config.availability_cap,
            full_time_hours=config.full_time_hours,
            reason_min_hours=config.reason_min_hours,
        )
        if reason:
            reasons.append(reason)

        return MatchScore(
            value=round_half_up(sum(components.values())),
            reasons=reasons,
            components=components,
        )


def _format_years(years: float) -> str:
    return str(int(years)) if float(years).is_integer() else f"{years:.1f}"
