from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from src.guests.dtos import Side
from src.headcount.calculator import display_headcount
from src.models.base import as_utc

if TYPE_CHECKING:
    from src.headcount.repository.orm_models import HeadcountSnapshot


@dataclass(frozen=True)
class HeadcountSnapshotDTO:
    """Point-in-time rollup of RSVP state for one event, optionally one side."""

    id: UUID
    event_id: UUID
    wedding_id: UUID
    side: Side | None
    total_invited: int
    total_attending: int
    total_declined: int
    total_maybe: int
    total_pending: int
    adults_count: int
    teens_count: int
    children_count: int
    calculated_headcount: float
    vegetarian_count: int
    vegan_count: int
    halal_count: int
    snapshot_date: datetime

    @property
    def display_headcount(self) -> float:
        return display_headcount(self.calculated_headcount)

    @classmethod
    def from_snapshot(cls, snapshot: "HeadcountSnapshot") -> "HeadcountSnapshotDTO":
        return cls(
            id=snapshot.uuid,
            event_id=snapshot.event_id,
            wedding_id=snapshot.wedding_id,
            side=Side(snapshot.side) if snapshot.side else None,
            total_invited=snapshot.total_invited,
            total_attending=snapshot.total_attending,
            total_declined=snapshot.total_declined,
            total_maybe=snapshot.total_maybe,
            total_pending=snapshot.total_pending,
            adults_count=snapshot.adults_count,
            teens_count=snapshot.teens_count,
            children_count=snapshot.children_count,
            calculated_headcount=snapshot.calculated_headcount,
            vegetarian_count=snapshot.vegetarian_count,
            vegan_count=snapshot.vegan_count,
            halal_count=snapshot.halal_count,
            snapshot_date=as_utc(snapshot.snapshot_date),
        )


@dataclass(frozen=True)
class EventHeadcountDTO:
    event_id: UUID
    event_name: str
    snapshot: HeadcountSnapshotDTO | None = None


@dataclass(frozen=True)
class WeddingHeadcountDTO:
    """Latest whole-event snapshot per event plus totals across them."""

    wedding_id: UUID
    events: list[EventHeadcountDTO] = field(default_factory=list)
    total_headcount: float = 0.0
    total_attending: int = 0
    total_declined: int = 0
    total_maybe: int = 0
    total_pending: int = 0
