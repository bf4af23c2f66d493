"""Core matching engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .aggregation import AggregationConfig, TeamAggregator, TeamSummary, aggregate
from .ranking import (
    RankingEngine,
    Scorer,
    TeamMember,
    rank_for_requirement,
    rank_for_slot,
    role_ranking_engine,
    slot_ranking_engine,
)
from .scorers import (
    MatchScore,
    RoleMatchConfig,
    RoleMatchScorer,
    SkillSlotConfig,
    SkillSlotScorer,
)
from .selection import SelectionState

__all__ = [
    "AggregationConfig",
    "MatchScore",
    "RankingEngine",
    "RoleMatchConfig",
    "RoleMatchScorer",
    "Scorer",
    "SelectionState",
    "SkillSlotConfig",
    "SkillSlotScorer",
    "TeamAggregator",
    "TeamMember",
    "TeamSummary",
    "aggregate",
    "rank_for_requirement",
    "rank_for_slot",
    "role_ranking_engine",
    "slot_ranking_engine",
]
