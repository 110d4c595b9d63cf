import abc
from collections.abc import Callable
from datetime import date
from uuid import UUID

from sqlalchemy import func, select

from src.config.database import async_session_manager, retry_read_once
from src.guests.repository.orm_models import Guest
from src.invitations.repository.orm_models import VendorInvitation
from src.invitations.state_machine import InvitationStatus
from src.models.base import utcnow
from src.models.user import User
from src.weddings.dtos import (
    CoupleDTO,
    DashboardDTO,
    EventDTO,
    PartnerSummaryDTO,
    WeddingDTO,
    WeddingStatsDTO,
)
from src.weddings.repository.lookups import get_active_couple
from src.weddings.repository.orm_models import Event, Wedding


class WeddingReadModel(abc.ABC):
    @abc.abstractmethod
    async def get_wedding(self, wedding_id: UUID) -> WeddingDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_events(self, wedding_id: UUID) -> list[EventDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def get_engaged_dashboard_data(self, user_id: UUID) -> DashboardDTO | None:
        """Couple, partner, wedding and stats for a user; None outside a couple."""
        raise NotImplementedError


class SqlWeddingReadModel(WeddingReadModel):
    def __init__(self, today: Callable[[], date] = lambda: utcnow().date()) -> None:
        self.today = today

    @retry_read_once
    async def get_wedding(self, wedding_id: UUID) -> WeddingDTO | None:
        async with async_session_manager() as session:
            wedding = await session.get(Wedding, wedding_id)
            return WeddingDTO.from_wedding(wedding) if wedding else None

    @retry_read_once
    async def list_events(self, wedding_id: UUID) -> list[EventDTO]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(Event)
                .where(Event.wedding_id == wedding_id)
                .order_by(Event.date, Event.start_time, Event.created_at)
            )
            return [EventDTO.from_event(event) for event in result.scalars().all()]

    @retry_read_once
    async def get_engaged_dashboard_data(self, user_id: UUID) -> DashboardDTO | None:
        async with async_session_manager() as session:
            couple = await get_active_couple(session, user_id)
            if couple is None:
                return None
            partner_id = couple.user2_id if couple.user1_id == user_id else couple.user1_id
            user = await session.get(User, user_id)
            partner = await session.get(User, partner_id)

            result = await session.execute(select(Wedding).where(Wedding.couple_id == couple.uuid))
            wedding = result.scalar_one_or_none()
            wedding_dto = WeddingDTO.from_wedding(wedding) if wedding else None
            days_until = None
            stats = WeddingStatsDTO()
            if wedding is not None:
                days_until = (wedding.date - self.today()).days
                stats = await self._wedding_stats(session, wedding.uuid)

            return DashboardDTO(
                couple=CoupleDTO.from_couple(couple),
                user=_summary(user),
                partner=_summary(partner),
                wedding=wedding_dto,
                days_until=days_until,
                wedding_stats=stats,
            )

    async def _wedding_stats(self, session, wedding_id: UUID) -> WeddingStatsDTO:
        total_events = await session.scalar(
            select(func.count()).select_from(Event).where(Event.wedding_id == wedding_id)
        )
        total_guests = await session.scalar(
            select(func.count()).select_from(Guest).where(Guest.wedding_id == wedding_id)
        )
        total_vendors = await session.scalar(
            select(func.count())
            .select_from(VendorInvitation)
            .where(VendorInvitation.wedding_id == wedding_id)
        )
        confirmed_vendors = await session.scalar(
            select(func.count())
            .select_from(VendorInvitation)
            .where(
                VendorInvitation.wedding_id == wedding_id,
                VendorInvitation.status == InvitationStatus.ACCEPTED,
            )
        )
        return WeddingStatsDTO(
            total_events=total_events or 0,
            total_guests=total_guests or 0,
            confirmed_vendors=confirmed_vendors or 0,
            total_vendors=total_vendors or 0,
        )


def _summary(user: User) -> PartnerSummaryDTO:
    return PartnerSummaryDTO(id=user.uuid, full_name=user.full_name, email=user.email)


def get_wedding_read_model() -> WeddingReadModel:
    return SqlWeddingReadModel()
