from dataclasses import dataclass, field
from datetime import date, time
from enum import Enum
from uuid import UUID


class CoupleStatus(str, Enum):
    ENGAGED = "engaged"
    MARRIED = "married"
    SEPARATED = "separated"
    DIVORCED = "divorced"


class WeddingMode(str, Enum):
    COMBINED = "combined"
    SEPARATE = "separate"


class WeddingStatus(str, Enum):
    PLANNING = "planning"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class EventType(str, Enum):
    ENGAGEMENT = "engagement"
    SAVE_THE_DATE = "save_the_date"
    HALDI = "haldi"
    MEHENDI = "mehendi"
    SANGEET = "sangeet"
    WEDDING = "wedding"
    RECEPTION = "reception"
    CUSTOM = "custom"


@dataclass(frozen=True)
class CanonicalEvent:
    event_type: EventType
    name: str
    days_from_wedding: int


# Created together with every wedding, in this order.
CANONICAL_EVENTS: tuple[CanonicalEvent, ...] = (
    CanonicalEvent(EventType.ENGAGEMENT, "Engagement", -90),
    CanonicalEvent(EventType.SAVE_THE_DATE, "Save the Date", -60),
    CanonicalEvent(EventType.HALDI, "Haldi", -2),
    CanonicalEvent(EventType.MEHENDI, "Mehendi", -2),
    CanonicalEvent(EventType.SANGEET, "Sangeet", -1),
    CanonicalEvent(EventType.WEDDING, "Wedding", 0),
    CanonicalEvent(EventType.RECEPTION, "Reception", 1),
)


@dataclass(frozen=True)
class CoupleDTO:
    id: UUID
    user1_id: UUID
    user2_id: UUID
    status: CoupleStatus
    engaged_date: date

    @classmethod
    def from_couple(cls, couple) -> "CoupleDTO":
        return cls(
            id=couple.uuid,
            user1_id=couple.user1_id,
            user2_id=couple.user2_id,
            status=CoupleStatus(couple.status),
            engaged_date=couple.engaged_date,
        )


@dataclass(frozen=True)
class WeddingDTO:
    id: UUID
    couple_id: UUID
    name: str
    date: date
    venue: str
    city: str
    mode: WeddingMode
    guest_limit: int
    status: WeddingStatus
    budget_limit: float | None = None

    @classmethod
    def from_wedding(cls, wedding) -> "WeddingDTO":
        return cls(
            id=wedding.uuid,
            couple_id=wedding.couple_id,
            name=wedding.name,
            date=wedding.date,
            venue=wedding.venue,
            city=wedding.city,
            mode=WeddingMode(wedding.mode),
            guest_limit=wedding.guest_limit,
            status=WeddingStatus(wedding.status),
            budget_limit=wedding.budget_limit,
        )


@dataclass(frozen=True)
class WeddingCreatedDTO:
    """Result of the composite wedding + canonical events creation."""

    success: bool
    events_created: int
    wedding_id: UUID | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class EventDTO:
    id: UUID
    wedding_id: UUID
    name: str
    event_type: EventType
    date: date
    venue: str
    city: str
    auto_generated: bool
    description: str | None = None
    start_time: time | None = None
    end_time: time | None = None
    dress_code: str | None = None
    rsvp_deadline: date | None = None
    created_by: UUID | None = None

    @classmethod
    def from_event(cls, event) -> "EventDTO":
        return cls(
            id=event.uuid,
            wedding_id=event.wedding_id,
            name=event.name,
            event_type=EventType(event.event_type),
            date=event.date,
            venue=event.venue,
            city=event.city,
            auto_generated=event.auto_generated,
            description=event.description,
            start_time=event.start_time,
            end_time=event.end_time,
            dress_code=event.dress_code,
            rsvp_deadline=event.rsvp_deadline,
            created_by=event.created_by,
        )


@dataclass(frozen=True)
class EventCreateDTO:
    name: str
    date: date
    venue: str
    city: str
    description: str | None = None
    start_time: time | None = None
    end_time: time | None = None
    dress_code: str | None = None
    rsvp_deadline: date | None = None


@dataclass(frozen=True)
class PartnerSummaryDTO:
    id: UUID
    full_name: str
    email: str


@dataclass(frozen=True)
class WeddingStatsDTO:
    total_events: int = 0
    total_guests: int = 0
    confirmed_vendors: int = 0
    total_vendors: int = 0


@dataclass(frozen=True)
class DashboardDTO:
    """Composite read model for an engaged user's dashboard."""

    couple: CoupleDTO
    user: PartnerSummaryDTO
    partner: PartnerSummaryDTO
    wedding: WeddingDTO | None = None
    days_until: int | None = None
    wedding_stats: WeddingStatsDTO = field(default_factory=WeddingStatsDTO)
