"""Scorer implementations for the matching core."""

from .base import MatchScore, round_half_up
from .role_match import RoleMatchConfig, RoleMatchScorer
from .skill_slot import SkillSlotConfig, SkillSlotScorer

__all__ = [
    "MatchScore",
    "RoleMatchConfig",
    "RoleMatchScorer",
    "SkillSlotConfig",
    "SkillSlotScorer",
    "round_half_up",
]
