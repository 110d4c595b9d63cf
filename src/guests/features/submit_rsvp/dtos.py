from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.guests.dtos import RSVPDTO, RSVPStatus


class RSVPSubmit(BaseModel):
    guest_id: UUID
    wedding_id: UUID
    status: RSVPStatus
    adults_count: int = Field(default=0, ge=0)
    teens_count: int = Field(default=0, ge=0)
    children_count: int = Field(default=0, ge=0)
    dietary_preferences: list[str] | str | None = None
    special_requirements: str | None = None
    rsvp_notes: str | None = None


class RSVPBody(BaseModel):
    id: UUID
    event_id: UUID
    guest_id: UUID
    wedding_id: UUID
    status: RSVPStatus
    adults_count: int
    teens_count: int
    children_count: int
    calculated_headcount: float
    display_headcount: float
    dietary_preferences: list[str] = []
    special_requirements: str | None = None
    rsvp_notes: str | None = None
    submitted_at: datetime | None = None

    @classmethod
    def from_dto(cls, rsvp: RSVPDTO) -> "RSVPBody":
        return cls(
            id=rsvp.id,
            event_id=rsvp.event_id,
            guest_id=rsvp.guest_id,
            wedding_id=rsvp.wedding_id,
            status=rsvp.status,
            adults_count=rsvp.adults_count,
            teens_count=rsvp.teens_count,
            children_count=rsvp.children_count,
            calculated_headcount=rsvp.calculated_headcount,
            display_headcount=rsvp.display_headcount,
            dietary_preferences=rsvp.dietary_preferences,
            special_requirements=rsvp.special_requirements,
            rsvp_notes=rsvp.rsvp_notes,
            submitted_at=rsvp.submitted_at,
        )


class RSVPResponse(BaseModel):
    message: str
    created: bool
    rsvp: RSVPBody
