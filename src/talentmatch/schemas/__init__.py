"""Pydantic schema definitions for the talent pool and team demand."""

from __future__ import annotations

from .opportunity import Applicant, Opportunity, Proposal
from .requirement import (
    ExperienceLevel,
    RoleRequirement,
    SkillSlot,
    experience_level_label,
    new_id,
    slot_level_label,
)
from .resource import (
    BlackoutPeriod,
    Certification,
    Feedback,
    Location,
    Pricing,
    Resource,
    Skill,
    availability_band,
    proficiency_label,
    tier_description,
    tier_label,
)

__all__ = [
    "Applicant",
    "BlackoutPeriod",
    "Certification",
    "ExperienceLevel",
    "Feedback",
    "Location",
    "Opportunity",
    "Pricing",
    "Proposal",
    "Resource",
    "RoleRequirement",
    "Skill",
    "SkillSlot",
    "availability_band",
    "experience_level_label",
    "new_id",
    "proficiency_label",
    "slot_level_label",
    "tier_description",
    "tier_label",
]
