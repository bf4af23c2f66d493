from __future__ import annotations

import pytest

from talentmatch.core import AggregationConfig, SelectionState, TeamAggregator, TeamMember, aggregate


def build_member(make_resource, resource_id: str, score: int, *, rate: float = 1000.0, margin: float = 0.0, days: int = 10) -> TeamMember:
    return TeamMember(
        resource_id=resource_id,
        resource=make_resource(resource_id, rate=rate, margin=margin),
        role_name="Analyst",
        match_score=score,
        match_reasons=(),
        daily_rate=rate,
        billable_days=days,
        total_cost=rate * days,
        selected=True,
    )


def test_average_rounds_half_up_and_sets_confidence(make_resource):
    members = [build_member(make_resource, "R-1", 80), build_member(make_resource, "R-2", 65)]

    summary = aggregate(members, requirement_count=2)

    assert summary.avg_match_score == 73
    assert summary.confidence == "high"
    assert summary.fill_ratio == 1.0
    assert summary.total_cost == 20_000.0


@pytest.mark.parametrize(
    ("score", "expected"),
    [(100, "high"), (70, "high"), (69, "medium"), (50, "medium"), (49, "low"), (0, "low")],
)
def test_confidence_boundaries(score, expected):
    assert TeamAggregator().confidence(score) == expected


def test_empty_selection_is_low_confidence_with_zero_cost():
    summary = aggregate([], requirement_count=3)

    assert summary.total_cost == 0
    assert summary.avg_match_score == 0
    assert summary.confidence == "low"
    assert summary.fill_ratio == 0.0
    assert summary.selected_count == 0


def test_fill_ratio_counts_unfilled_requirements(make_resource):
    state = SelectionState()
    state.select("REQ-1", build_member(make_resource, "R-1", 90))

    summary = TeamAggregator().aggregate(state, requirement_count=3)

    assert summary.fill_ratio == pytest.approx(1 / 3)
    assert summary.requirement_count == 3
    assert summary.selected_count == 1


def test_zero_requirements_gives_zero_fill_ratio():
    assert aggregate([], requirement_count=0).fill_ratio == 0.0


def test_aggregate_is_recomputed_from_selection(make_resource):
    state = SelectionState()
    aggregator = TeamAggregator()
    state.select("REQ-1", build_member(make_resource, "R-1", 90, rate=500.0))

    first = aggregator.aggregate(state, 1)
    assert first == aggregator.aggregate(state, 1)

    state.select("REQ-1", build_member(make_resource, "R-2", 40, rate=800.0))
    second = aggregator.aggregate(state, 1)

    assert second.total_cost == 8_000.0
    assert second.confidence == "low"


def test_estimated_margin_uses_platform_margin_and_days(make_resource):
    members = [
        build_member(make_resource, "R-1", 60, rate=1000.0, margin=300.0, days=10),
        build_member(make_resource, "R-2", 60, rate=500.0, margin=100.0, days=5),
    ]

    assert aggregate(members, 2).estimated_margin == pytest.approx(3500.0)


def test_custom_thresholds():
    aggregator = TeamAggregator(config=AggregationConfig(high_threshold=90, medium_threshold=80))

    assert aggregator.confidence(85) == "medium"
    assert aggregator.confidence(75) == "low"
