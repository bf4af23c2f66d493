"""Demand-side schemas: role requirements and manual skill slots."""

from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING, Literal

import pendulum
from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from .opportunity import Opportunity

ExperienceLevel = Literal["junior", "mid", "senior", "expert"]

EXPERIENCE_LEVEL_LABELS: dict[str, str] = {
    "junior": "Junior (1-3 years)",
    "mid": "Mid-level (3-6 years)",
    "senior": "Senior (6-10 years)",
    "expert": "Expert (10+ years)",
}

# Slot levels run the other way round from Skill.proficiency: 1 is expert.
SLOT_LEVEL_LABELS: dict[int, str] = {
    1: "Expert",
    2: "Advanced",
    3: "Proficient",
    4: "Intermediate",
    5: "Junior",
}


def new_id() -> str:
    """Short random identifier for records created during a session."""
    return uuid.uuid4().hex[:7]


def _today() -> date:
    return pendulum.today().date()


def _in_ninety_days() -> date:
    return pendulum.today().add(days=90).date()


class RoleRequirement(BaseModel):
    """A role to be filled on a project."""

    id: str = Field(default_factory=new_id)
    role_name: str = ""
    required_skills: list[str] = Field(default_factory=list)
    experience_level: ExperienceLevel = "mid"
    effort_days: int = Field(default=30, ge=0)
    start_date: date = Field(default_factory=_today)
    end_date: date = Field(default_factory=_in_ninety_days)

    model_config = ConfigDict(extra="forbid")

    @field_validator("required_skills", mode="before")
    @classmethod
    def _split_skills(cls, value: object) -> object:
        # Free-text entry arrives as "Python, SQL, Data Analysis".
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @property
    def label(self) -> str:
        return self.role_name

    @classmethod
    def from_opportunity(cls, opportunity: "Opportunity") -> "RoleRequirement":
        return cls(
            id=opportunity.id,
            role_name=opportunity.title,
            required_skills=list(opportunity.required_skills),
            experience_level=opportunity.experience_level,
            effort_days=opportunity.effort_days,
            start_date=opportunity.start_date,
            end_date=opportunity.end_date,
        )


class SkillSlot(BaseModel):
    """Manual-mode demand unit: one skill at a target level."""

    id: str = Field(default_factory=new_id)
    skill_name: str
    level: int = Field(default=3, ge=1, le=5)
    quantity: int = Field(default=1, ge=1)

    model_config = ConfigDict(extra="forbid")

    @property
    def label(self) -> str:
        return f"{self.skill_name} ({slot_level_label(self.level)})"

    @property
    def target_proficiency(self) -> int:
        return 6 - self.level


def experience_level_label(level: str) -> str:
    return EXPERIENCE_LEVEL_LABELS.get(level, level)


def slot_level_label(level: int) -> str:
    return SLOT_LEVEL_LABELS.get(level, "Unknown")
