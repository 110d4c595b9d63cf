import datetime as dt
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from src.weddings.dtos import EventType


class CreateEventRequest(BaseModel):
    name: str
    date: dt.date
    venue: str
    city: str
    description: str | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    dress_code: str | None = None
    rsvp_deadline: dt.date | None = None


class UpdateEventRequest(BaseModel):
    """Only the fields present in the body are changed."""

    name: str | None = None
    date: dt.date | None = None
    venue: str | None = None
    city: str | None = None
    description: str | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    dress_code: str | None = None
    rsvp_deadline: dt.date | None = None


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    wedding_id: UUID
    name: str
    event_type: EventType
    date: dt.date
    venue: str
    city: str
    auto_generated: bool
    description: str | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    dress_code: str | None = None
    rsvp_deadline: dt.date | None = None
    created_by: UUID | None = None
