import abc
from uuid import UUID

from sqlalchemy import func, or_, select

from src.config.database import async_session_manager, retry_read_once
from src.guests.dtos import RSVPDTO, GuestDTO, GuestFilterDTO
from src.guests.repository.orm_models import RSVP, Guest


class GuestReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_guests(
        self, wedding_id: UUID, filters: GuestFilterDTO | None = None
    ) -> list[GuestDTO]:
        """Guests of one wedding, newest first. Every filter given must match."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_guest_for_user(self, wedding_id: UUID, user_id: UUID) -> GuestDTO | None:
        """The guest record linked to a signed-in user, used by the RSVP page."""
        raise NotImplementedError


class SqlGuestReadModel(GuestReadModel):
    @retry_read_once
    async def list_guests(
        self, wedding_id: UUID, filters: GuestFilterDTO | None = None
    ) -> list[GuestDTO]:
        filters = filters or GuestFilterDTO()
        stmt = select(Guest).where(Guest.wedding_id == wedding_id)
        if filters.side is not None:
            stmt = stmt.where(Guest.side == filters.side)
        if filters.role is not None:
            stmt = stmt.where(Guest.role == filters.role)
        if filters.status is not None:
            stmt = stmt.where(Guest.status == filters.status)
        search = (filters.search or "").strip()
        if search:
            term = search.lower()
            stmt = stmt.where(
                or_(
                    func.lower(Guest.full_name).contains(term, autoescape=True),
                    func.lower(Guest.email).contains(term, autoescape=True),
                    Guest.phone.contains(search, autoescape=True),
                )
            )
        stmt = stmt.order_by(Guest.created_at.desc())

        async with async_session_manager() as session:
            result = await session.execute(stmt)
            return [GuestDTO.from_guest(guest) for guest in result.scalars().all()]

    @retry_read_once
    async def get_guest(self, guest_id: UUID) -> GuestDTO | None:
        async with async_session_manager() as session:
            guest = await session.get(Guest, guest_id)
            return GuestDTO.from_guest(guest) if guest else None

    @retry_read_once
    async def get_guest_for_user(self, wedding_id: UUID, user_id: UUID) -> GuestDTO | None:
        async with async_session_manager() as session:
            result = await session.execute(
                select(Guest)
                .where(Guest.wedding_id == wedding_id, Guest.user_id == user_id)
                .order_by(Guest.created_at)
            )
            guest = result.scalars().first()
            return GuestDTO.from_guest(guest) if guest else None


class RSVPReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_rsvp(self, event_id: UUID, guest_id: UUID) -> RSVPDTO | None:
        """The guest's current answer for an event, used to prefill the RSVP form."""
        raise NotImplementedError

    @abc.abstractmethod
    async def list_rsvps_for_event(self, event_id: UUID) -> list[RSVPDTO]:
        raise NotImplementedError


class SqlRSVPReadModel(RSVPReadModel):
    @retry_read_once
    async def get_rsvp(self, event_id: UUID, guest_id: UUID) -> RSVPDTO | None:
        async with async_session_manager() as session:
            result = await session.execute(
                select(RSVP).where(RSVP.event_id == event_id, RSVP.guest_id == guest_id)
            )
            rsvp = result.scalar_one_or_none()
            return RSVPDTO.from_rsvp(rsvp) if rsvp else None

    @retry_read_once
    async def list_rsvps_for_event(self, event_id: UUID) -> list[RSVPDTO]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(RSVP).where(RSVP.event_id == event_id).order_by(RSVP.submitted_at.desc())
            )
            return [RSVPDTO.from_rsvp(rsvp) for rsvp in result.scalars().all()]


def get_guest_read_model() -> GuestReadModel:
    return SqlGuestReadModel()


def get_rsvp_read_model() -> RSVPReadModel:
    return SqlRSVPReadModel()
