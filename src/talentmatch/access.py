"""Roles, capabilities and the explicit session context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

import structlog

from .schemas import Pricing


class UserRole(str, Enum):
    ADMIN = "gvts_admin"
    MANAGER = "vgg_manager"
    PROFESSIONAL = "professional"
    GUEST = "guest"


class PricingField(str, Enum):
    INDIVIDUAL = "individual"
    RELEASE = "release"
    MARGIN = "margin"
    TOTAL = "total"


class Capability(str, Enum):
    MANAGE_RESOURCES = "manage_resources"
    CREATE_OPPORTUNITIES = "create_opportunities"
    VIEW_ANALYTICS = "view_analytics"
    UPLOAD_PROPOSALS = "upload_proposals"
    EXPRESS_INTEREST = "express_interest"


PRICING_VISIBILITY: dict[UserRole, frozenset[PricingField]] = {
    UserRole.ADMIN: frozenset(PricingField),
    UserRole.MANAGER: frozenset({PricingField.INDIVIDUAL, PricingField.RELEASE}),
    UserRole.PROFESSIONAL: frozenset({PricingField.INDIVIDUAL}),
    UserRole.GUEST: frozenset(),
}

CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.ADMIN: frozenset(
        {
            Capability.MANAGE_RESOURCES,
            Capability.CREATE_OPPORTUNITIES,
            Capability.VIEW_ANALYTICS,
            Capability.UPLOAD_PROPOSALS,
        }
    ),
    UserRole.MANAGER: frozenset({Capability.VIEW_ANALYTICS}),
    UserRole.PROFESSIONAL: frozenset({Capability.EXPRESS_INTEREST}),
    UserRole.GUEST: frozenset(),
}

_PRICING_ATTRIBUTES: dict[PricingField, str] = {
    PricingField.INDIVIDUAL: "individual_daily_rate",
    PricingField.RELEASE: "organization_release_fee",
    PricingField.MARGIN: "platform_margin",
    PricingField.TOTAL: "total_billable_rate",
}


@dataclass(frozen=True)
class User:
    id: str
    email: str
    full_name: str
    role: UserRole
    organization: str


@dataclass(frozen=True)
class SessionContext:
    """Current viewer and the permissions resolved for their role.

    Built once at sign-in and passed to whatever needs an access decision.
    Scoring and ranking never take one.
    """

    user: User | None
    pricing_fields: frozenset[PricingField]
    capabilities: frozenset[Capability]

    @classmethod
    def for_user(cls, user: User | None) -> "SessionContext":
        role = user.role if user else UserRole.GUEST
        return cls(
            user=user,
            pricing_fields=PRICING_VISIBILITY[role],
            capabilities=CAPABILITIES[role],
        )

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls.for_user(None)

    @property
    def role(self) -> UserRole:
        return self.user.role if self.user else UserRole.GUEST

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def can_view_pricing(self, field: PricingField | str) -> bool:
        return PricingField(field) in self.pricing_fields

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def require(self, capability: Capability) -> None:
        if capability not in self.capabilities:
            raise PermissionError(
                f"Role {self.role.value!r} lacks capability {capability.value!r}"
            )

    def can_manage_resources(self) -> bool:
        return self.can(Capability.MANAGE_RESOURCES)

    def can_create_opportunities(self) -> bool:
        return self.can(Capability.CREATE_OPPORTUNITIES)

    def can_view_analytics(self) -> bool:
        return self.can(Capability.VIEW_ANALYTICS)

    def can_upload_proposals(self) -> bool:
        return self.can(Capability.UPLOAD_PROPOSALS)


def visible_pricing(pricing: Pricing, session: SessionContext) -> dict[str, Any]:
    """Return only the pricing fields the session may display."""
    visible: dict[str, Any] = {
        attribute: getattr(pricing, attribute)
        for field, attribute in _PRICING_ATTRIBUTES.items()
        if session.can_view_pricing(field)
    }
    if visible:
        visible["currency"] = pricing.currency
    return visible


# Plaintext demo credentials; there is no real authentication.
DEMO_USERS: tuple[User, ...] = (
    User("admin-1", "admin@gvts.com", "Sarah Adeyemi", UserRole.ADMIN, "GVTS"),
    User("manager-1", "manager@riby.com", "Chidi Okonkwo", UserRole.MANAGER, "Riby"),
    User("pro-1", "professional@vgg.com", "Fatima Hassan", UserRole.PROFESSIONAL, "SystemSpecs"),
)

DEMO_CREDENTIALS: dict[str, tuple[str, str]] = {
    "admin@gvts.com": ("admin123", "admin-1"),
    "manager@riby.com": ("manager123", "manager-1"),
    "professional@vgg.com": ("pro123", "pro-1"),
}


def authenticate(email: str, password: str) -> SessionContext | None:
    """Resolve demo credentials to a session, or ``None`` when they don't match."""
    logger = structlog.get_logger(__name__)
    entry = DEMO_CREDENTIALS.get(email.strip().lower())
    if entry is None or entry[0] != password:
        logger.info("auth.rejected", email=email)
        return None
    user = next((item for item in DEMO_USERS if item.id == entry[1]), None)
    if user is None:
        return None
    logger.info("auth.accepted", user_id=user.id, role=user.role.value)
    return SessionContext.for_user(user)


def session_for_role(role: UserRole | str) -> SessionContext:
    """Session for the first demo user holding ``role`` (guest if none)."""
    role = UserRole(role)
    user = next((item for item in DEMO_USERS if item.role is role), None)
    return SessionContext.for_user(user)
