"""Role-mode match scoring."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from ...schemas import Resource, RoleRequirement
from .base import (
    DEFAULT_TIER_POINTS,
    MatchScore,
    availability_component,
    round_half_up,
    tier_component,
)


@dataclass
class RoleMatchConfig:
    """Component caps and thresholds for role-mode scoring."""

    skill_cap: float = 40.0
    experience_cap: float = 20.0
    performance_cap: float = 15.0
    availability_cap: float = 10.0
    tier_points: dict[int, float] = field(default_factory=lambda: dict(DEFAULT_TIER_POINTS))
    level_years: dict[str, float] = field(
        default_factory=lambda: {"junior": 2.0, "mid": 5.0, "senior": 8.0, "expert": 12.0}
    )
    full_time_hours: float = 40.0
    max_rating: float = 5.0
    reason_skill_names: int = 3
    reason_max_tier: int = 2
    reason_min_rating: float = 4.0
    reason_min_hours: float = 30.0


class RoleMatchScorer:
    """Score a resource against a role requirement.

    Five additive components: skill overlap, experience depth, tier,
    performance history and availability. Each is clamped to its own cap;
    the total is the half-up rounded sum and is not clamped further.
    """

    method = "role_match"

    def __init__(self, *, config: RoleMatchConfig | None = None) -> None:
        self._config = config or RoleMatchConfig()
        self._logger = structlog.get_logger(__name__)

    def score(self, resource: Resource, requirement: RoleRequirement) -> MatchScore:
        reasons: list[str] = []
        components: dict[str, float] = {}

        components["skills"], reason = self._skill_overlap(resource, requirement)
        if reason:
            reasons.append(reason)

        components["experience"], reason = self._experience_depth(resource, requirement)
        if reason:
            reasons.append(reason)

        components["tier"], reason = tier_component(
            resource, self._config.tier_points, self._config.reason_max_tier
        )
        if reason:
            reasons.append(reason)

        components["performance"], reason = self._performance(resource)
        if reason:
            reasons.append(reason)

        components["availability"], reason = availability_component(
            resource,
            cap=self._config.availability_cap,
            full_time_hours=self._config.full_time_hours,
            reason_min_hours=self._config.reason_min_hours,
        )
        if reason:
            reasons.append(reason)

        return MatchScore(
            value=round_half_up(sum(components.values())),
            reasons=reasons,
            components=components,
        )

    def _skill_overlap(
        self,
        resource: Resource,
        requirement: RoleRequirement,
    ) -> tuple[float, str | None]:
        required = [name.lower() for name in requirement.required_skills if name.strip()]
        if not required:
            self._logger.debug(
                "scoring.no_required_skills",
                requirement_id=requirement.id,
                resource_id=resource.id,
            )
            return 0.0, None

        matching = [
            skill
            for skill in resource.skills
            if any(
                skill.name.lower() in wanted or wanted in skill.name.lower()
                for wanted in required
            )
        ]
        cap = self._config.skill_cap
        points = min(cap * len(matching) / len(required), cap)
        if not matching:
            return points, None
        names = ", ".join(skill.name for skill in matching[: self._config.reason_skill_names])
        return points, f"{len(matching)} matching skills: {names}"

    def _experience_depth(
        self,
        resource: Resource,
        requirement: RoleRequirement,
    ) -> tuple[float, str | None]:
        if not resource.skills:
            return 0.0, None
        average = sum(skill.years_experience for skill in resource.skills) / len(resource.skills)
        required_years = self._config.level_years[requirement.experience_level]
        cap = self._config.experience_cap
        points = min(cap * average / required_years, cap)
        if average >= required_years:
            return points, f"{round_half_up(average)} years average experience"
        return points, None

    def _performance(self, resource: Resource) -> tuple[float, str | None]:
        ratings = [entry.rating for entry in resource.feedback]
        average = sum(ratings) / max(len(ratings), 1)
        points = min(
            self._config.performance_cap * average / self._config.max_rating,
            self._config.performance_cap,
        )
        if average >= self._config.reason_min_rating:
            return points, f"{average:.1f}★ average rating"
        return points, None
