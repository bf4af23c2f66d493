"""Talent pool resource schema."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Tier = Literal[1, 2, 3, 4]
ContractualStatus = Literal["permanent", "contract", "casual", "temp", "associate"]
AvailabilityBand = Literal["high", "medium", "low"]

TIER_LABELS: dict[int, str] = {
    1: "Core",
    2: "Trusted",
    3: "Proven",
    4: "Emerging",
}

TIER_DESCRIPTIONS: dict[int, str] = {
    1: "Core GVTS & VGG Staff",
    2: "Alumni & Trusted Associates",
    3: "Proven External Resources",
    4: "Known but Undeployed Talent",
}

PROFICIENCY_LABELS: dict[int, str] = {
    1: "Basic",
    2: "Intermediate",
    3: "Proficient",
    4: "Advanced",
    5: "Expert",
}


class Skill(BaseModel):
    """A named skill with self-reported depth."""

    name: str
    proficiency: int = Field(ge=1, le=5)
    years_experience: float = Field(default=0.0, ge=0)
    validated: bool = False
    validated_by: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class Feedback(BaseModel):
    """Manager or client feedback entry."""

    id: str
    date: str | None = None
    rating: int = Field(ge=1, le=5)
    comments: str = ""
    author_name: str | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class Pricing(BaseModel):
    """Rate card. Each field is gated separately for display."""

    individual_daily_rate: float = Field(ge=0)
    organization_release_fee: float = Field(default=0.0, ge=0)
    platform_margin: float = Field(default=0.0, ge=0)
    total_billable_rate: float = Field(ge=0)
    currency: str = "USD"

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_components(
        cls,
        individual_daily_rate: float,
        organization_release_fee: float,
        platform_margin: float,
        currency: str = "USD",
    ) -> "Pricing":
        return cls(
            individual_daily_rate=individual_daily_rate,
            organization_release_fee=organization_release_fee,
            platform_margin=platform_margin,
            total_billable_rate=individual_daily_rate + organization_release_fee + platform_margin,
            currency=currency,
        )


class Location(BaseModel):
    country: str = ""
    city: str = ""
    remote: bool = False

    model_config = ConfigDict(extra="forbid", frozen=True)


class Certification(BaseModel):
    name: str
    issuer: str = ""
    year: int | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class BlackoutPeriod(BaseModel):
    start: str
    end: str
    reason: str = ""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Resource(BaseModel):
    """Candidate professional in the talent pool.

    Resources are created once when the pool is generated or loaded and are
    treated as immutable for the rest of the session.
    """

    id: str
    full_name: str
    email: str | None = None
    organization: str = ""
    division: str | None = None
    title: str | None = None
    location: Location = Field(default_factory=Location)
    contractual_status: ContractualStatus | None = None
    tier: Tier
    skills: list[Skill] = Field(default_factory=list)
    vgg_experience_years: int = Field(default=0, ge=0)
    certifications: list[Certification] = Field(default_factory=list)
    manager_feedback: list[Feedback] = Field(default_factory=list)
    client_feedback: list[Feedback] = Field(default_factory=list)
    weekly_availability: float = Field(default=0.0, ge=0)
    monthly_availability: float = Field(default=0.0, ge=0)
    blackout_periods: list[BlackoutPeriod] = Field(default_factory=list)
    pricing: Pricing
    profile_completeness: int = Field(default=100, ge=0, le=100)

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def feedback(self) -> list[Feedback]:
        """Manager and client feedback pooled into one list."""
        return [*self.manager_feedback, *self.client_feedback]

    def find_skill(self, name: str) -> Skill | None:
        """Return the skill whose name equals ``name`` ignoring case."""
        wanted = name.strip().lower()
        for skill in self.skills:
            if skill.name.lower() == wanted:
                return skill
        return None


def tier_label(tier: int) -> str:
    return TIER_LABELS.get(tier, "Unknown")


def tier_description(tier: int) -> str:
    return TIER_DESCRIPTIONS.get(tier, "Unknown")


def proficiency_label(proficiency: int) -> str:
    return PROFICIENCY_LABELS.get(proficiency, "Unknown")


def availability_band(hours: float) -> AvailabilityBand:
    if hours >= 30:
        return "high"
    if hours >= 15:
        return "medium"
    return "low"
