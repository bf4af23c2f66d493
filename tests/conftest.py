from __future__ import annotations

from typing import Any, Callable, Sequence

import pytest

from talentmatch.schemas import Feedback, Pricing, Resource, Skill


def _build_resource(
    resource_id: str = "R-001",
    *,
    skills: Sequence[tuple[str, int, float]] = (),
    tier: int = 1,
    weekly_availability: float = 40,
    ratings: Sequence[int] = (),
    rate: float = 1000.0,
    margin: float = 0.0,
    **extra: Any,
) -> Resource:
    defaults: dict[str, Any] = {
        "id": resource_id,
        "full_name": f"Person {resource_id}",
        "organization": "GVTS",
        "tier": tier,
        "skills": [
            Skill(name=name, proficiency=proficiency, years_experience=years)
            for name, proficiency, years in skills
        ],
        "manager_feedback": [
            Feedback(id=f"fb-{resource_id}-{idx}", rating=rating)
            for idx, rating in enumerate(ratings)
        ],
        "weekly_availability": weekly_availability,
        "pricing": Pricing(
            individual_daily_rate=rate - margin,
            platform_margin=margin,
            total_billable_rate=rate,
        ),
    }
    defaults.update(extra)
    return Resource(**defaults)


@pytest.fixture
def make_resource() -> Callable[..., Resource]:
    return _build_resource
