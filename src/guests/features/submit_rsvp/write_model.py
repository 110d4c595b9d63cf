"""Write model for RSVPs.

There is at most one RSVP per (event, guest). Submitting again overwrites the
previous answer in place; the database settles concurrent first submissions
through the unique constraint and ``ON CONFLICT DO UPDATE``.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from functools import partial
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.errors import AuthorizationError, DependencyError, NotFoundError, ValidationError
from src.guests.dtos import (
    RSVP_TO_GUEST_STATUS,
    RSVPDTO,
    RSVPExtrasDTO,
    RSVPResponseDTO,
    RSVPStatus,
    parse_dietary_preferences,
)
from src.guests.features.manage_guests.write_model import apply_guest_response, check_guest_caller
from src.guests.repository.orm_models import RSVP, Guest
from src.headcount.calculator import compute_headcount
from src.models.base import utcnow
from src.weddings.dtos import EventType
from src.weddings.repository.orm_models import Event

logger = logging.getLogger(__name__)

UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}

# Columns an RSVP resubmission replaces; identity and created_at stay put.
UPSERT_COLUMNS = (
    "status",
    "adults_count",
    "teens_count",
    "children_count",
    "calculated_headcount",
    "dietary_preferences",
    "special_requirements",
    "rsvp_notes",
    "submitted_at",
    "updated_at",
)

RSVP_CREATED_MESSAGE = "RSVP submitted successfully!"
RSVP_UPDATED_MESSAGE = "RSVP updated successfully!"


class RSVPWriteModel(ABC):
    @abstractmethod
    async def submit_or_update_rsvp(
        self,
        event_id: UUID,
        guest_id: UUID,
        wedding_id: UUID,
        status: RSVPStatus | str,
        adults: int,
        teens: int,
        children: int,
        extras: RSVPExtrasDTO | None = None,
        caller_id: UUID | None = None,
    ) -> RSVPResponseDTO:
        raise NotImplementedError


class SqlRSVPWriteModel(RSVPWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.clock = clock

    async def submit_or_update_rsvp(
        self,
        event_id: UUID,
        guest_id: UUID,
        wedding_id: UUID,
        status: RSVPStatus | str,
        adults: int,
        teens: int,
        children: int,
        extras: RSVPExtrasDTO | None = None,
        caller_id: UUID | None = None,
    ) -> RSVPResponseDTO:
        """Create the guest's RSVP for the event, or replace the existing one.

        A non-pending answer to the main wedding event also moves the guest's own
        status (attending to accepted, not attending to declined, maybe to maybe).
        Answers to the other events only touch their own RSVP row.

        Raises:
            ValidationError: negative count or unknown status
            NotFoundError: the event or guest does not exist
            AuthorizationError: guest, event and wedding don't belong together, or the
                caller is neither the guest's linked user nor one of the couple
        """
        try:
            status = RSVPStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid RSVP status '{status}'") from None
        for label, count in (("adults", adults), ("teens", teens), ("children", children)):
            if count is None or count < 0:
                raise ValidationError(f"Number of {label} cannot be negative")
        extras = extras or RSVPExtrasDTO()
        now = self.clock()

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await session.get(Guest, guest_id)
            if guest is None:
                raise NotFoundError("Guest", guest_id)
            event = await session.get(Event, event_id)
            if event is None:
                raise NotFoundError("Event", event_id)
            if guest.wedding_id != wedding_id or event.wedding_id != wedding_id:
                raise AuthorizationError("Guest and event do not belong to this wedding")
            await check_guest_caller(session, guest, caller_id)

            existing_id = await session.scalar(
                select(RSVP.uuid).where(RSVP.event_id == event_id, RSVP.guest_id == guest_id)
            )

            insert = self._insert_for(session)
            stmt = insert(RSVP).values(
                uuid=uuid4(),
                event_id=event_id,
                guest_id=guest_id,
                wedding_id=wedding_id,
                status=status,
                adults_count=adults,
                teens_count=teens,
                children_count=children,
                calculated_headcount=compute_headcount(adults, teens, children),
                dietary_preferences=parse_dietary_preferences(extras.dietary_preferences),
                special_requirements=extras.special_requirements,
                rsvp_notes=extras.rsvp_notes,
                submitted_at=now,
                created_at=now,
                updated_at=now,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["event_id", "guest_id"],
                set_={column: stmt.excluded[column] for column in UPSERT_COLUMNS},
            )
            await session.execute(stmt)

            if status != RSVPStatus.PENDING and event.event_type == EventType.WEDDING:
                apply_guest_response(guest, RSVP_TO_GUEST_STATUS[status], now)
                await session.flush()

            result = await session.execute(
                select(RSVP)
                .where(RSVP.event_id == event_id, RSVP.guest_id == guest_id)
                .execution_options(populate_existing=True)
            )
            rsvp = RSVPDTO.from_rsvp(result.scalar_one())

        created = existing_id is None
        logger.info(
            "RSVP %s for guest %s at event %s (%s)",
            "created" if created else "updated",
            guest_id,
            event_id,
            status.value,
        )
        return RSVPResponseDTO(
            message=RSVP_CREATED_MESSAGE if created else RSVP_UPDATED_MESSAGE,
            created=created,
            rsvp=rsvp,
        )

    def _insert_for(self, session):
        dialect = session.get_bind().dialect.name
        try:
            return UPSERT_INSERTS[dialect]
        except KeyError:
            raise DependencyError(f"RSVP upsert is not supported on {dialect}") from None
