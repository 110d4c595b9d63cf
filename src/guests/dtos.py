from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

from src.headcount.calculator import display_headcount
from src.models.base import as_utc

if TYPE_CHECKING:
    from src.guests.repository.orm_models import RSVP, Guest


class Side(str, Enum):
    GROOM = "groom"
    BRIDE = "bride"
    BOTH = "both"


class GuestRole(str, Enum):
    GROOM = "groom"
    BRIDE = "bride"
    PARENT = "parent"
    SIBLING = "sibling"
    UNCLE = "uncle"
    AUNT = "aunt"
    COUSIN = "cousin"
    GRANDPARENT = "grandparent"
    FRIEND = "friend"
    COLLEAGUE = "colleague"
    OTHER = "other"


class GuestStatus(str, Enum):
    INVITED = "invited"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    MAYBE = "maybe"
    PENDING = "pending"


class RSVPStatus(str, Enum):
    ATTENDING = "attending"
    NOT_ATTENDING = "not_attending"
    MAYBE = "maybe"
    PENDING = "pending"


# The invite form only offers these; "both" and the couple roles are stored
# values that only direct edits produce.
INVITABLE_SIDES = frozenset({Side.GROOM, Side.BRIDE})
INVITABLE_ROLES = frozenset(GuestRole) - {GuestRole.GROOM, GuestRole.BRIDE}
# Roles that get can_invite_others switched on when the caller leaves it unset.
DELEGATING_ROLES = frozenset({GuestRole.PARENT, GuestRole.SIBLING})

RESPONDED_STATUSES = frozenset({GuestStatus.ACCEPTED, GuestStatus.DECLINED, GuestStatus.MAYBE})
RSVP_TO_GUEST_STATUS: dict[RSVPStatus, GuestStatus] = {
    RSVPStatus.ATTENDING: GuestStatus.ACCEPTED,
    RSVPStatus.NOT_ATTENDING: GuestStatus.DECLINED,
    RSVPStatus.MAYBE: GuestStatus.MAYBE,
}


def parse_dietary_preferences(value: str | list[str] | None) -> list[str]:
    """Accept the form's comma separated string or a list; drop blanks."""
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [item.strip() for item in items if item and item.strip()]


@dataclass(frozen=True)
class InviteGuestDTO:
    """Details entered on the invite form."""

    full_name: str
    side: Side | str = Side.GROOM
    role: GuestRole | str = GuestRole.FRIEND
    email: str | None = None
    phone: str | None = None
    can_invite_others: bool | None = None
    plus_one_allowed: bool = False
    plus_one_name: str | None = None
    is_vip: bool = False
    under_18: bool = False
    age: int | None = None
    dietary_preferences: list[str] | str | None = None
    special_requirements: str | None = None
    user_id: UUID | None = None


@dataclass(frozen=True)
class GuestFilterDTO:
    side: Side | None = None
    role: GuestRole | None = None
    status: GuestStatus | None = None
    search: str | None = None


@dataclass(frozen=True)
class GuestDTO:
    """DTO for guest data."""

    id: UUID
    wedding_id: UUID
    full_name: str
    side: Side
    role: GuestRole
    status: GuestStatus
    email: str | None = None
    phone: str | None = None
    user_id: UUID | None = None
    invited_by: UUID | None = None
    can_invite_others: bool = False
    plus_one_allowed: bool = False
    plus_one_name: str | None = None
    is_vip: bool = False
    under_18: bool = False
    age: int | None = None
    dietary_preferences: list[str] = field(default_factory=list)
    special_requirements: str | None = None
    invitation_sent_at: datetime | None = None
    responded_at: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_guest(cls, guest: "Guest") -> "GuestDTO":
        return cls(
            id=guest.uuid,
            wedding_id=guest.wedding_id,
            full_name=guest.full_name,
            side=Side(guest.side),
            role=GuestRole(guest.role),
            status=GuestStatus(guest.status),
            email=guest.email,
            phone=guest.phone,
            user_id=guest.user_id,
            invited_by=guest.invited_by,
            can_invite_others=guest.can_invite_others,
            plus_one_allowed=guest.plus_one_allowed,
            plus_one_name=guest.plus_one_name,
            is_vip=guest.is_vip,
            under_18=guest.under_18,
            age=guest.age,
            dietary_preferences=list(guest.dietary_preferences or []),
            special_requirements=guest.special_requirements,
            invitation_sent_at=as_utc(guest.invitation_sent_at),
            responded_at=as_utc(guest.responded_at),
            created_at=as_utc(guest.created_at),
        )


@dataclass(frozen=True)
class RSVPExtrasDTO:
    """Optional free-form RSVP fields."""

    dietary_preferences: list[str] | str | None = None
    special_requirements: str | None = None
    rsvp_notes: str | None = None


@dataclass(frozen=True)
class RSVPDTO:
    id: UUID
    event_id: UUID
    guest_id: UUID
    wedding_id: UUID
    status: RSVPStatus
    adults_count: int
    teens_count: int
    children_count: int
    calculated_headcount: float
    dietary_preferences: list[str] = field(default_factory=list)
    special_requirements: str | None = None
    rsvp_notes: str | None = None
    submitted_at: datetime | None = None

    @property
    def display_headcount(self) -> float:
        return display_headcount(self.calculated_headcount)

    @classmethod
    def from_rsvp(cls, rsvp: "RSVP") -> "RSVPDTO":
        return cls(
            id=rsvp.uuid,
            event_id=rsvp.event_id,
            guest_id=rsvp.guest_id,
            wedding_id=rsvp.wedding_id,
            status=RSVPStatus(rsvp.status),
            adults_count=rsvp.adults_count,
            teens_count=rsvp.teens_count,
            children_count=rsvp.children_count,
            calculated_headcount=rsvp.calculated_headcount,
            dietary_preferences=list(rsvp.dietary_preferences or []),
            special_requirements=rsvp.special_requirements,
            rsvp_notes=rsvp.rsvp_notes,
            submitted_at=as_utc(rsvp.submitted_at),
        )


@dataclass(frozen=True)
class RSVPResponseDTO:
    """DTO for RSVP response."""

    message: str
    created: bool
    rsvp: RSVPDTO
