from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.guests.dtos import Side
from src.headcount.dtos import HeadcountSnapshotDTO, WeddingHeadcountDTO


class SnapshotResponse(BaseModel):
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
    display_headcount: float
    vegetarian_count: int
    vegan_count: int
    halal_count: int
    snapshot_date: datetime

    @classmethod
    def from_dto(cls, snapshot: HeadcountSnapshotDTO) -> "SnapshotResponse":
        return cls(
            id=snapshot.id,
            event_id=snapshot.event_id,
            wedding_id=snapshot.wedding_id,
            side=snapshot.side,
            total_invited=snapshot.total_invited,
            total_attending=snapshot.total_attending,
            total_declined=snapshot.total_declined,
            total_maybe=snapshot.total_maybe,
            total_pending=snapshot.total_pending,
            adults_count=snapshot.adults_count,
            teens_count=snapshot.teens_count,
            children_count=snapshot.children_count,
            calculated_headcount=snapshot.calculated_headcount,
            display_headcount=snapshot.display_headcount,
            vegetarian_count=snapshot.vegetarian_count,
            vegan_count=snapshot.vegan_count,
            halal_count=snapshot.halal_count,
            snapshot_date=snapshot.snapshot_date,
        )


class EventHeadcountResponse(BaseModel):
    event_id: UUID
    event_name: str
    snapshot: SnapshotResponse | None = None


class WeddingHeadcountResponse(BaseModel):
    wedding_id: UUID
    events: list[EventHeadcountResponse]
    total_headcount: float
    total_attending: int
    total_declined: int
    total_maybe: int
    total_pending: int

    @classmethod
    def from_dto(cls, overview: WeddingHeadcountDTO) -> "WeddingHeadcountResponse":
        return cls(
            wedding_id=overview.wedding_id,
            events=[
                EventHeadcountResponse(
                    event_id=item.event_id,
                    event_name=item.event_name,
                    snapshot=SnapshotResponse.from_dto(item.snapshot) if item.snapshot else None,
                )
                for item in overview.events
            ],
            total_headcount=round(overview.total_headcount, 2),
            total_attending=overview.total_attending,
            total_declined=overview.total_declined,
            total_maybe=overview.total_maybe,
            total_pending=overview.total_pending,
        )
