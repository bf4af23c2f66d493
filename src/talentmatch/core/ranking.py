"""Rank a resource pool against one requirement or slot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol

import structlog

from ..schemas import Resource, RoleRequirement, SkillSlot
from .scorers import MatchScore, RoleMatchScorer, SkillSlotScorer

DEFAULT_TOP_N = 5
DEFAULT_SLOT_MIN_SCORE = 20.0
DEFAULT_SLOT_PLACEHOLDER_DAYS = 30


class Scorer(Protocol):
    method: str

    def score(self, resource: Resource, requirement: Any) -> MatchScore:
        """Return the match score of ``resource`` for ``requirement``."""


@dataclass(frozen=True, slots=True)
class TeamMember:
    """A scored candidate for one requirement or slot."""

    resource_id: str
    resource: Resource
    role_name: str
    match_score: int
    match_reasons: tuple[str, ...]
    daily_rate: float
    billable_days: int
    total_cost: float
    selected: bool = False
    components: dict[str, float] = field(default_factory=dict, compare=False)

    def as_dict(self) -> dict[str, Any]:
        return {
            "resource_id": self.resource_id,
            "full_name": self.resource.full_name,
            "tier": self.resource.tier,
            "role_name": self.role_name,
            "match_score": self.match_score,
            "match_reasons": list(self.match_reasons),
            "daily_rate": self.daily_rate,
            "billable_days": self.billable_days,
            "total_cost": self.total_cost,
            "selected": self.selected,
        }


class RankingEngine:
    """Score every resource, sort descending, filter and truncate.

    Sorting is stable, so resources with equal scores keep their pool order.
    ``min_score`` drops candidates scoring at or below it before truncation.
    ``placeholder_days`` replaces the requirement's effort days when costing
    members (manual slots carry no effort estimate).
    """

    def __init__(
        self,
        scorer: Scorer,
        *,
        top_n: int = DEFAULT_TOP_N,
        min_score: float | None = None,
        placeholder_days: int | None = None,
    ) -> None:
        self._scorer = scorer
        self._top_n = top_n
        self._min_score = min_score
        self._placeholder_days = placeholder_days
        self._logger = structlog.get_logger(__name__)

    @property
    def top_n(self) -> int:
        return self._top_n

    @property
    def min_score(self) -> float | None:
        return self._min_score

    def rank(self, pool: Iterable[Resource], requirement: RoleRequirement | SkillSlot) -> list[TeamMember]:
        days = self._billable_days(requirement)
        scored = [
            self._build_member(resource, requirement, self._scorer.score(resource, requirement), days)
            for resource in pool
        ]
        scored.sort(key=lambda member: member.match_score, reverse=True)
        if self._min_score is not None:
            scored = [member for member in scored if member.match_score > self._min_score]
        ranked = scored[: self._top_n]

        self._logger.debug(
            "ranking.completed",
            method=self._scorer.method,
            requirement_id=requirement.id,
            candidates=len(ranked),
            top_score=ranked[0].match_score if ranked else None,
        )
        return ranked

    def _billable_days(self, requirement: RoleRequirement | SkillSlot) -> int:
        if self._placeholder_days is not None:
            return self._placeholder_days
        return int(getattr(requirement, "effort_days", 0))

    @staticmethod
    def _build_member(
        resource: Resource,
        requirement: RoleRequirement | SkillSlot,
        result: MatchScore,
        days: int,
    ) -> TeamMember:
        rate = resource.pricing.total_billable_rate
        return TeamMember(
            resource_id=resource.id,
            resource=resource,
            role_name=requirement.label,
            match_score=result.value,
            match_reasons=tuple(result.reasons),
            daily_rate=rate,
            billable_days=days,
            total_cost=rate * days,
            components=dict(result.components),
        )


def role_ranking_engine(*, top_n: int = DEFAULT_TOP_N) -> RankingEngine:
    return RankingEngine(RoleMatchScorer(), top_n=top_n)


def slot_ranking_engine(
    *,
    top_n: int = DEFAULT_TOP_N,
    min_score: float = DEFAULT_SLOT_MIN_SCORE,
    placeholder_days: int = DEFAULT_SLOT_PLACEHOLDER_DAYS,
) -> RankingEngine:
    return RankingEngine(
        SkillSlotScorer(),
        top_n=top_n,
        min_score=min_score,
        placeholder_days=placeholder_days,
    )


def rank_for_requirement(pool: Iterable[Resource], requirement: RoleRequirement) -> list[TeamMember]:
    """Top role-mode matches, no score threshold."""
    return role_ranking_engine().rank(pool, requirement)


def rank_for_slot(pool: Iterable[Resource], slot: SkillSlot) -> list[TeamMember]:
    """Top slot-mode matches scoring above the slot threshold."""
    return slot_ranking_engine().rank(pool, slot)
