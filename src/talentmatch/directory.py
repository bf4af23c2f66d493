"""Talent pool and opportunity browsing."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Literal, Sequence

import pendulum
import structlog
from rapidfuzz import fuzz

from .access import Capability, SessionContext
from .schemas import Applicant, Opportunity, Resource, tier_label

SortOption = Literal["name", "tier", "availability", "experience"]

AVAILABLE_HOURS_THRESHOLD = 20


@dataclass
class ResourceFilter:
    """Browse criteria for the resource directory.

    Empty collections mean "no constraint". ``query`` matches name,
    organization and location by substring, and skill names by substring or
    fuzzy similarity at or above ``min_similarity``.
    """

    query: str = ""
    tiers: set[int] = field(default_factory=set)
    skills: set[str] = field(default_factory=set)
    organizations: set[str] = field(default_factory=set)
    min_availability: float = 0.0
    sort_by: SortOption = "tier"
    min_similarity: float = 85.0

    @property
    def active_count(self) -> int:
        return sum(
            [
                bool(self.tiers),
                bool(self.skills),
                bool(self.organizations),
                self.min_availability > 0,
            ]
        )


def search_resources(pool: Iterable[Resource], criteria: ResourceFilter | None = None) -> list[Resource]:
    criteria = criteria or ResourceFilter()
    query = criteria.query.strip().lower()

    matches = [
        resource
        for resource in pool
        if (not query or _matches_query(resource, query, criteria.min_similarity))
        and (not criteria.tiers or resource.tier in criteria.tiers)
        and (not criteria.skills or any(skill.name in criteria.skills for skill in resource.skills))
        and (not criteria.organizations or resource.organization in criteria.organizations)
        and resource.weekly_availability >= criteria.min_availability
    ]
    matches.sort(key=_SORT_KEYS[criteria.sort_by])
    return matches


def _matches_query(resource: Resource, query: str, min_similarity: float) -> bool:
    location = f"{resource.location.city} {resource.location.country}".lower()
    if (
        query in resource.full_name.lower()
        or query in resource.organization.lower()
        or query in location
    ):
        return True
    for skill in resource.skills:
        name = skill.name.lower()
        if query in name or fuzz.ratio(query, name) >= min_similarity:
            return True
    return False


_SORT_KEYS = {
    "name": lambda resource: resource.full_name,
    "tier": lambda resource: resource.tier,
    "availability": lambda resource: -resource.weekly_availability,
    "experience": lambda resource: -resource.vgg_experience_years,
}


def all_skills(pool: Iterable[Resource]) -> list[str]:
    return sorted({skill.name for resource in pool for skill in resource.skills})


def all_organizations(pool: Iterable[Resource]) -> list[str]:
    return sorted({resource.organization for resource in pool})


def search_opportunities(
    opportunities: Iterable[Opportunity],
    *,
    query: str = "",
    status: str = "all",
) -> list[Opportunity]:
    needle = query.strip().lower()
    results: list[Opportunity] = []
    for opportunity in opportunities:
        if needle and not (
            needle in opportunity.title.lower()
            or needle in opportunity.client.lower()
            or any(needle in skill.lower() for skill in opportunity.required_skills)
        ):
            continue
        if status != "all" and opportunity.status != status:
            continue
        results.append(opportunity)
    return results


def express_interest(
    opportunity: Opportunity,
    session: SessionContext,
    resource_id: str,
) -> Opportunity:
    """Return a copy of ``opportunity`` with ``resource_id`` added as interested."""
    session.require(Capability.EXPRESS_INTEREST)
    if opportunity.status != "open":
        raise ValueError(f"Opportunity {opportunity.id!r} is not open ({opportunity.status})")
    if opportunity.has_applicant(resource_id):
        raise ValueError(f"Resource {resource_id!r} already applied to {opportunity.id!r}")

    applicant = Applicant(
        resource_id=resource_id,
        applied_at=pendulum.today().date(),
        status="interested",
    )
    structlog.get_logger(__name__).info(
        "opportunity.interest",
        opportunity_id=opportunity.id,
        resource_id=resource_id,
    )
    return opportunity.model_copy(update={"applicants": [*opportunity.applicants, applicant]})


@dataclass(frozen=True)
class PoolOverview:
    total_resources: int
    available_resources: int
    open_opportunities: int
    tier_distribution: dict[str, int]
    top_skills: list[tuple[str, int]]


def pool_overview(
    pool: Sequence[Resource],
    opportunities: Sequence[Opportunity] = (),
    *,
    top_skills: int = 5,
) -> PoolOverview:
    tiers = Counter(resource.tier for resource in pool)
    skills = Counter(skill.name for resource in pool for skill in resource.skills)
    return PoolOverview(
        total_resources=len(pool),
        available_resources=sum(
            1 for resource in pool if resource.weekly_availability > AVAILABLE_HOURS_THRESHOLD
        ),
        open_opportunities=sum(1 for item in opportunities if item.status == "open"),
        tier_distribution={
            f"Tier {tier} - {tier_label(tier)}": tiers.get(tier, 0) for tier in (1, 2, 3, 4)
        },
        top_skills=skills.most_common(top_skills),
    )
