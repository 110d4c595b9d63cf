import logging
from abc import ABC, abstractmethod
from functools import partial
from typing import Any
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.errors import ConflictError, ValidationError
from src.guests.repository.orm_models import RSVP
from src.headcount.repository.orm_models import HeadcountSnapshot
from src.weddings.dtos import EventCreateDTO, EventDTO, EventType
from src.weddings.repository.lookups import get_event, get_wedding
from src.weddings.repository.orm_models import Event

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "date",
        "start_time",
        "end_time",
        "venue",
        "city",
        "dress_code",
        "rsvp_deadline",
    }
)
REQUIRED_FIELDS = frozenset({"name", "date", "venue", "city"})


def _check_times(start_time, end_time) -> None:
    if start_time is not None and end_time is not None and end_time <= start_time:
        raise ValidationError("Event must end after it starts")


class EventWriteModel(ABC):
    @abstractmethod
    async def create_event(
        self, wedding_id: UUID, details: EventCreateDTO, caller_id: UUID | None = None
    ) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_event(self, event_id: UUID, patch: dict[str, Any]) -> EventDTO:
        raise NotImplementedError

    @abstractmethod
    async def delete_event(self, event_id: UUID) -> None:
        raise NotImplementedError


class SqlEventWriteModel(EventWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(self, session_overwrite: AsyncSession | None = None) -> None:
        self.session_overwrite = session_overwrite

    async def create_event(
        self, wedding_id: UUID, details: EventCreateDTO, caller_id: UUID | None = None
    ) -> EventDTO:
        """Add a custom event. Custom events can later be deleted, canonical ones cannot."""
        name = (details.name or "").strip()
        if not name or not (details.venue or "").strip() or not (details.city or "").strip():
            raise ValidationError("Event name, venue and city are required")
        _check_times(details.start_time, details.end_time)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            await get_wedding(session, wedding_id)
            event = Event(
                wedding_id=wedding_id,
                name=name,
                description=details.description,
                event_type=EventType.CUSTOM,
                date=details.date,
                start_time=details.start_time,
                end_time=details.end_time,
                venue=details.venue.strip(),
                city=details.city.strip(),
                dress_code=details.dress_code,
                rsvp_deadline=details.rsvp_deadline,
                auto_generated=False,
                created_by=caller_id,
            )
            session.add(event)
            await session.flush()
            return EventDTO.from_event(event)

    async def update_event(self, event_id: UUID, patch: dict[str, Any]) -> EventDTO:
        unknown = set(patch) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        for key in REQUIRED_FIELDS & set(patch):
            value = patch[key]
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"{key} cannot be empty")

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await get_event(session, event_id)
            _check_times(
                patch.get("start_time", event.start_time), patch.get("end_time", event.end_time)
            )
            for key, value in patch.items():
                setattr(event, key, value.strip() if isinstance(value, str) else value)
            await session.flush()
            return EventDTO.from_event(event)

    async def delete_event(self, event_id: UUID) -> None:
        """Delete a custom event with its RSVPs and snapshots.

        Raises:
            ConflictError: the event is one of the auto-generated canonical events
        """
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await get_event(session, event_id)
            if event.auto_generated:
                raise ConflictError(
                    f"'{event.name}' is created with the wedding and cannot be deleted"
                )
            await session.execute(delete(RSVP).where(RSVP.event_id == event_id))
            await session.execute(
                delete(HeadcountSnapshot).where(HeadcountSnapshot.event_id == event_id)
            )
            await session.delete(event)
            await session.flush()
        logger.info("Event %s deleted", event_id)
