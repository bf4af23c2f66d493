"""Synthetic talent pool, proposals and opportunities for demo sessions."""

from __future__ import annotations

import random
from datetime import date
from typing import Sequence

from .schemas import (
    Applicant,
    BlackoutPeriod,
    Certification,
    Feedback,
    Location,
    Opportunity,
    Pricing,
    Proposal,
    Resource,
    RoleRequirement,
    Skill,
    new_id,
)

ORGANIZATIONS = (
    "GVTS", "Riby", "VerifyMe", "Terragon", "SystemSpecs", "VGG Corporate",
    "Softcom", "Flutterwave Partners", "Paystack Partners", "Interswitch Partners",
)

DIVISIONS = (
    "Technology", "Strategy", "Operations", "Finance", "Product", "Design",
    "Data Science", "Research",
)

LOCATIONS: dict[str, tuple[str, ...]] = {
    "Nigeria": ("Lagos", "Abuja", "Port Harcourt", "Ibadan"),
    "Kenya": ("Nairobi", "Mombasa", "Kisumu"),
    "Ghana": ("Accra", "Kumasi"),
    "South Africa": ("Johannesburg", "Cape Town", "Durban"),
    "United Kingdom": ("London", "Manchester"),
    "Rwanda": ("Kigali",),
}

SKILLS = (
    "Python", "JavaScript", "TypeScript", "React", "Node.js", "Data Analysis",
    "Machine Learning", "Project Management", "Product Management", "UX Design",
    "UI Design", "Strategic Advisory", "Financial Modeling", "Business Development",
    "Agile/Scrum", "AWS", "Azure", "Google Cloud", "SQL", "PostgreSQL",
    "MongoDB", "Data Visualization", "Tableau", "Power BI", "Excel Advanced",
    "Stakeholder Management", "Team Leadership", "Public Policy", "Digital Transformation",
    "API Development", "Mobile Development", "Flutter", "React Native", "System Architecture",
    "DevOps", "CI/CD", "Docker", "Kubernetes", "Cybersecurity",
)

CERTIFICATIONS = (
    ("PMP", "PMI"),
    ("AWS Solutions Architect", "Amazon"),
    ("Google Cloud Professional", "Google"),
    ("Scrum Master", "Scrum Alliance"),
    ("CISSP", "ISC2"),
    ("CFA Level III", "CFA Institute"),
    ("Data Science Professional", "IBM"),
    ("Azure Administrator", "Microsoft"),
)

FIRST_NAMES = (
    "Adaeze", "Chidi", "Emeka", "Fatima", "Grace", "Hassan", "Ibrahim", "Jumoke",
    "Kofi", "Lola", "Mohammed", "Ngozi", "Oluwaseun", "Patience", "Rashid", "Sade",
    "Tunde", "Uche", "Victoria", "Wale", "Xavier", "Yemi", "Zainab", "Aisha",
)

LAST_NAMES = (
    "Adeyemi", "Balogun", "Chukwu", "Dlamini", "Eze", "Fashola", "Gambari", "Hussain",
    "Igwe", "Johnson", "Kamau", "Lawal", "Musa", "Nwachukwu", "Okafor", "Patel",
)

TITLES = (
    "Senior Software Engineer", "Data Scientist", "Product Manager", "UX Designer",
    "Project Manager", "Business Analyst", "Solutions Architect", "DevOps Engineer",
    "Technical Lead", "Strategy Consultant", "Financial Analyst", "Research Lead",
    "Data Engineer", "ML Engineer", "Cloud Architect", "Security Specialist",
)

# Base daily rate range per tier.
TIER_RATE_RANGES: dict[int, tuple[int, int]] = {
    1: (800, 1500),
    2: (500, 900),
    3: (300, 600),
    4: (150, 400),
}

RELEASE_FEE_RATIO = 0.15
MARGIN_RATIO = 0.35
DEFAULT_POOL_SIZE = 55


class PoolGenerator:
    """Generate a reproducible synthetic resource pool."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def generate(self, count: int = DEFAULT_POOL_SIZE) -> list[Resource]:
        return [self.resource(index) for index in range(count)]

    def resource(self, index: int) -> Resource:
        rng = self._rng
        first = rng.choice(FIRST_NAMES)
        last = rng.choice(LAST_NAMES)
        country = rng.choice(list(LOCATIONS))
        organization = rng.choice(ORGANIZATIONS)
        tier = rng.randint(1, 4)

        base_rate = rng.randint(*TIER_RATE_RANGES[tier])
        release_fee = round(base_rate * RELEASE_FEE_RATIO)
        margin = round((base_rate + release_fee) * MARGIN_RATIO)

        return Resource(
            id=f"res-{index:03d}-{rng.getrandbits(24):06x}",
            full_name=f"{first} {last}",
            email=f"{first.lower()}.{last.lower()}@{organization.lower().replace(' ', '')}.com",
            organization=organization,
            division=rng.choice(DIVISIONS),
            title=rng.choice(TITLES),
            location=Location(
                country=country,
                city=rng.choice(LOCATIONS[country]),
                remote=rng.random() > 0.6,
            ),
            contractual_status=rng.choice(("permanent", "contract", "casual", "temp", "associate")),
            tier=tier,
            skills=self._skills(),
            vgg_experience_years=rng.randint(0, 12),
            certifications=self._certifications(),
            manager_feedback=[self._feedback("2024-06-15", "Excellent team player with strong technical skills.")],
            client_feedback=[self._feedback("2024-08-20", "Delivered quality work on time.")],
            weekly_availability=rng.randint(0, 40),
            monthly_availability=rng.randint(0, 20),
            blackout_periods=(
                [BlackoutPeriod(start="2025-03-01", end="2025-03-15", reason="Annual leave")]
                if rng.random() > 0.7
                else []
            ),
            pricing=Pricing.from_components(base_rate, release_fee, margin),
            profile_completeness=rng.randint(60, 100),
        )

    def _skills(self) -> list[Skill]:
        rng = self._rng
        names = rng.sample(SKILLS, rng.randint(4, 10))
        return [
            Skill(
                name=name,
                proficiency=rng.randint(1, 5),
                years_experience=rng.randint(1, 15),
                validated=rng.random() > 0.3,
                validated_by=rng.choice(("Manager", "Client")),
            )
            for name in names
        ]

    def _certifications(self) -> list[Certification]:
        rng = self._rng
        if rng.random() <= 0.4:
            return []
        name, issuer = rng.choice(CERTIFICATIONS)
        return [Certification(name=name, issuer=issuer, year=rng.randint(2018, 2024))]

    def _feedback(self, when: str, comments: str) -> Feedback:
        rng = self._rng
        return Feedback(
            id=f"fb-{rng.getrandbits(28):07x}",
            date=when,
            rating=rng.randint(3, 5),
            comments=comments,
            author_name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
        )


def generate_pool(count: int = DEFAULT_POOL_SIZE, *, seed: int | None = None) -> list[Resource]:
    return PoolGenerator(seed).generate(count)


def _requirement(
    req_id: str,
    role_name: str,
    skills: Sequence[str],
    level: str,
    effort_days: int,
    start: date,
    end: date,
) -> RoleRequirement:
    return RoleRequirement(
        id=req_id,
        role_name=role_name,
        required_skills=list(skills),
        experience_level=level,
        effort_days=effort_days,
        start_date=start,
        end_date=end,
    )


def demo_proposals() -> list[Proposal]:
    march, august = date(2025, 3, 1), date(2025, 8, 31)
    april, june = date(2025, 4, 1), date(2025, 6, 30)
    return [
        Proposal(
            id="prop-1",
            title="Digital Financial Services Assessment - West Africa",
            client="World Bank",
            description="Assessment of the digital financial services landscape across 5 West African countries.",
            extracted_requirements=[
                _requirement("req-1", "Team Lead / Senior Consultant",
                             ["Strategic Advisory", "Financial Inclusion", "Stakeholder Management"],
                             "expert", 60, march, august),
                _requirement("req-2", "Data Analyst", ["Data Analysis", "Python", "SQL", "Tableau"],
                             "senior", 90, march, august),
                _requirement("req-3", "Research Associate", ["Research", "Data Collection", "Report Writing"],
                             "mid", 120, march, august),
            ],
            total_budget=350_000,
            status="in_progress",
            created_at=date(2025, 1, 10),
            created_by="admin-1",
        ),
        Proposal(
            id="prop-2",
            title="National ID System Technical Assessment",
            client="GIZ",
            description="Technical assessment and roadmap for national identity system modernization.",
            extracted_requirements=[
                _requirement("req-4", "Solutions Architect",
                             ["System Architecture", "Digital Transformation", "Identity Systems"],
                             "expert", 40, april, june),
                _requirement("req-5", "Security Specialist",
                             ["Cybersecurity", "Identity Management", "Risk Assessment"],
                             "senior", 30, april, june),
            ],
            total_budget=180_000,
            status="draft",
            created_at=date(2025, 1, 18),
            created_by="admin-1",
        ),
    ]


def stub_extracted_requirements(start: date, end: date) -> list[RoleRequirement]:
    """Fixed roles returned by the simulated proposal parser."""
    return [
        _requirement(new_id(), "Team Lead / Senior Consultant",
                     ["Strategic Advisory", "Project Management", "Stakeholder Management"],
                     "expert", 60, start, end),
        _requirement(new_id(), "Data Analyst", ["Data Analysis", "Python", "SQL", "Tableau"],
                     "senior", 90, start, end),
        _requirement(new_id(), "Research Associate", ["Research", "Data Collection", "Report Writing"],
                     "mid", 120, start, end),
    ]


def demo_opportunities(pool: Sequence[Resource]) -> list[Opportunity]:
    """Posted opportunities; applicants reference pool members by position."""

    def applicants(*entries: tuple[int, str, str]) -> list[Applicant]:
        return [
            Applicant(resource_id=pool[index].id, applied_at=date.fromisoformat(applied), status=status)
            for index, applied, status in entries
            if index < len(pool)
        ]

    return [
        Opportunity(
            id="opp-1",
            title="Senior Data Analyst for Financial Inclusion Project",
            client="World Bank",
            description="Support a financial inclusion assessment across West Africa.",
            required_skills=["Data Analysis", "Python", "SQL", "Financial Modeling", "Tableau"],
            experience_level="senior",
            location="Lagos, Nigeria (Hybrid)",
            start_date=date(2025, 3, 1),
            end_date=date(2025, 9, 30),
            effort_days=120,
            daily_rate=850,
            status="open",
            visibility="vgg-wide",
            created_by="admin-1",
            applicants=applicants((0, "2025-01-15", "shortlisted"), (3, "2025-01-16", "interested")),
            created_at=date(2025, 1, 10),
        ),
        Opportunity(
            id="opp-2",
            title="Project Manager - Digital ID Implementation",
            client="GIZ",
            description="Lead the implementation of a national digital ID pilot program.",
            required_skills=["Project Management", "Agile/Scrum", "Stakeholder Management", "Digital Transformation"],
            experience_level="expert",
            location="Nairobi, Kenya",
            start_date=date(2025, 4, 1),
            end_date=date(2025, 12, 31),
            effort_days=180,
            daily_rate=1200,
            status="open",
            visibility="internal",
            created_by="admin-1",
            created_at=date(2025, 1, 12),
        ),
        Opportunity(
            id="opp-3",
            title="UX Designer for Healthcare Platform",
            client="Bill & Melinda Gates Foundation",
            description="Design user experiences for a maternal health tracking application.",
            required_skills=["UX Design", "UI Design", "Mobile Development", "User Research"],
            experience_level="mid",
            location="Remote",
            start_date=date(2025, 2, 15),
            end_date=date(2025, 6, 30),
            effort_days=80,
            daily_rate=600,
            status="open",
            visibility="vgg-wide",
            created_by="admin-1",
            applicants=applicants((5, "2025-01-18", "selected")),
            created_at=date(2025, 1, 8),
        ),
        Opportunity(
            id="opp-4",
            title="Full Stack Developer - Payments Platform",
            client="Mastercard Foundation",
            description="Build payment integration modules for an SME lending platform.",
            required_skills=["React", "Node.js", "PostgreSQL", "API Development", "AWS"],
            experience_level="senior",
            location="Accra, Ghana",
            start_date=date(2025, 3, 15),
            end_date=date(2025, 9, 15),
            effort_days=130,
            daily_rate=750,
            status="open",
            visibility="vgg-wide",
            created_by="admin-1",
            applicants=applicants((8, "2025-01-20", "interested"), (12, "2025-01-21", "interested")),
            created_at=date(2025, 1, 14),
        ),
        Opportunity(
            id="opp-5",
            title="ML Engineer for Agricultural Analytics",
            client="USAID",
            description="Machine learning models for crop yield prediction and climate risk.",
            required_skills=["Machine Learning", "Python", "Data Science", "TensorFlow", "Data Visualization"],
            experience_level="senior",
            location="Kigali, Rwanda (Remote OK)",
            start_date=date(2025, 4, 1),
            end_date=date(2025, 10, 31),
            effort_days=140,
            daily_rate=900,
            status="draft",
            visibility="internal",
            created_by="admin-1",
            created_at=date(2025, 1, 22),
        ),
        Opportunity(
            id="opp-6",
            title="Business Analyst - Public Sector Digital Services",
            client="African Development Bank",
            description="Analyze business requirements for a citizen service delivery platform.",
            required_skills=["Business Analysis", "Requirements Gathering", "Public Policy", "Agile/Scrum"],
            experience_level="mid",
            location="Abuja, Nigeria",
            start_date=date(2025, 2, 1),
            end_date=date(2025, 5, 31),
            effort_days=80,
            daily_rate=550,
            status="filled",
            visibility="vgg-wide",
            created_by="admin-1",
            applicants=applicants((15, "2025-01-05", "selected")),
            created_at=date(2024, 12, 20),
        ),
    ]
