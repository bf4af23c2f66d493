from __future__ import annotations

import pytest

from talentmatch.core import RoleMatchConfig, RoleMatchScorer
from talentmatch.schemas import Feedback, RoleRequirement


def build_requirement(**kwargs) -> RoleRequirement:
    defaults = {
        "id": "REQ-001",
        "role_name": "Data Analyst",
        "required_skills": ["Python"],
        "experience_level": "expert",
        "effort_days": 10,
    }
    defaults.update(kwargs)
    return RoleRequirement(**defaults)


def test_expert_python_scenario_scores_97(make_resource):
    resource = make_resource(skills=[("Python", 5, 10)], tier=1, weekly_availability=40, ratings=[5])

    result = RoleMatchScorer().score(resource, build_requirement())

    assert result.components["skills"] == pytest.approx(40.0)
    assert result.components["experience"] == pytest.approx(10 / 12 * 20)
    assert result.components["tier"] == 15.0
    assert result.components["performance"] == pytest.approx(15.0)
    assert result.components["availability"] == pytest.approx(10.0)
    assert result.value == 97
    assert result.reasons == [
        "1 matching skills: Python",
        "Tier 1 - Core",
        "5.0★ average rating",
        "40h/week available",
    ]


def test_components_respect_caps(make_resource):
    resource = make_resource(
        skills=[("Data Analysis", 4, 30), ("Data Visualization", 3, 30), ("SQL", 2, 30)],
        weekly_availability=60,
        ratings=[5, 5],
    )
    requirement = build_requirement(required_skills=["Data"], experience_level="junior")

    result = RoleMatchScorer().score(resource, requirement)

    caps = {"skills": 40, "experience": 20, "tier": 15, "performance": 15, "availability": 10}
    for name, cap in caps.items():
        assert 0 <= result.components[name] <= cap
    assert result.components["skills"] == 40.0
    assert result.components["availability"] == 10.0
    assert result.value == 100
    assert result.reasons[0] == "2 matching skills: Data Analysis, Data Visualization"
    assert result.reasons[1] == "30 years average experience"


def test_skill_match_is_substring_both_ways_and_case_insensitive(make_resource):
    resource = make_resource(skills=[("sql", 3, 2), ("Machine Learning", 3, 2), ("Go", 3, 2)])
    requirement = build_requirement(required_skills=["PostgreSQL", "learning", "Rust", "Java"])

    result = RoleMatchScorer().score(resource, requirement)

    assert result.components["skills"] == pytest.approx(40 * 2 / 4)
    assert result.reasons[0] == "2 matching skills: sql, Machine Learning"


def test_matching_skill_reason_lists_at_most_three_names(make_resource):
    resource = make_resource(skills=[("A1", 3, 1), ("A2", 3, 1), ("A3", 3, 1), ("A4", 3, 1)])

    result = RoleMatchScorer().score(resource, build_requirement(required_skills=["A"]))

    assert result.reasons[0] == "4 matching skills: A1, A2, A3"


def test_missing_data_degrades_to_zero(make_resource):
    resource = make_resource(skills=[], tier=3, weekly_availability=20, ratings=[])
    requirement = build_requirement(required_skills=[])

    result = RoleMatchScorer().score(resource, requirement)

    assert result.components["skills"] == 0.0
    assert result.components["experience"] == 0.0
    assert result.components["performance"] == 0.0
    assert result.components["tier"] == 8.0
    assert result.components["availability"] == pytest.approx(5.0)
    assert result.value == 13
    assert result.reasons == []


def test_feedback_is_pooled_across_manager_and_client(make_resource):
    resource = make_resource(
        ratings=[3],
        client_feedback=[Feedback(id="c-1", rating=5), Feedback(id="c-2", rating=4)],
    )

    result = RoleMatchScorer().score(resource, build_requirement())

    assert result.components["performance"] == pytest.approx(4 / 5 * 15)
    assert "4.0★ average rating" in result.reasons


def test_total_rounds_half_up(make_resource):
    resource = make_resource(tier=4, weekly_availability=2)

    result = RoleMatchScorer().score(resource, build_requirement(required_skills=["Cobol"]))

    assert sum(result.components.values()) == pytest.approx(4.5)
    assert result.value == 5


def test_experience_reason_only_when_threshold_met(make_resource):
    resource = make_resource(skills=[("Python", 4, 8), ("SQL", 4, 8)], tier=2, weekly_availability=10)

    senior = RoleMatchScorer().score(resource, build_requirement(experience_level="senior"))
    expert = RoleMatchScorer().score(resource, build_requirement(experience_level="expert"))

    assert "8 years average experience" in senior.reasons
    assert senior.components["experience"] == 20.0
    assert not any("average experience" in reason for reason in expert.reasons)
    assert "Tier 2 - Trusted" in senior.reasons


def test_config_overrides_tier_points(make_resource):
    scorer = RoleMatchScorer(config=RoleMatchConfig(tier_points={1: 5.0}))
    resource = make_resource(tier=2)

    result = scorer.score(resource, build_requirement())

    assert result.components["tier"] == 0.0


def test_blank_required_skill_entries_are_ignored(make_resource):
    resource = make_resource(skills=[("Python", 4, 5), ("SQL", 3, 5)])

    result = RoleMatchScorer().score(resource, build_requirement(required_skills=["Python", "", "  "]))

    assert result.components["skills"] == pytest.approx(40.0)
    assert result.reasons[0] == "1 matching skills: Python"
