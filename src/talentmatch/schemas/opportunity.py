"""Opportunity and proposal schemas."""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .requirement import ExperienceLevel, RoleRequirement

OpportunityStatus = Literal["draft", "open", "filled", "closed"]
ApplicantStatus = Literal["interested", "shortlisted", "selected", "rejected"]
Visibility = Literal["internal", "vgg-wide", "specific-teams"]
ProposalStatus = Literal["draft", "in_progress", "submitted", "won", "lost"]


class Applicant(BaseModel):
    resource_id: str
    applied_at: date
    status: ApplicantStatus = "interested"

    model_config = ConfigDict(extra="forbid", frozen=True)


class Opportunity(BaseModel):
    """A posted work opportunity professionals can apply to."""

    id: str
    title: str
    client: str = ""
    description: str = ""
    required_skills: list[str] = Field(default_factory=list)
    experience_level: ExperienceLevel = "mid"
    location: str = ""
    start_date: date
    end_date: date
    effort_days: int = Field(default=0, ge=0)
    daily_rate: float = Field(default=0.0, ge=0)
    status: OpportunityStatus = "draft"
    visibility: Visibility = "internal"
    created_by: str | None = None
    applicants: list[Applicant] = Field(default_factory=list)
    created_at: date | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    def has_applicant(self, resource_id: str) -> bool:
        return any(item.resource_id == resource_id for item in self.applicants)


class Proposal(BaseModel):
    """Proposal or terms of reference with the roles extracted from it."""

    id: str
    title: str
    client: str = ""
    description: str = ""
    extracted_requirements: list[RoleRequirement] = Field(default_factory=list)
    total_budget: float = Field(default=0.0, ge=0)
    status: ProposalStatus = "draft"
    created_at: date | None = None
    created_by: str | None = None

    model_config = ConfigDict(extra="forbid")
