"""Lookups shared by write models that act on behalf of a couple."""

from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.errors import NotFoundError
from src.models.user import User
from src.weddings.dtos import CoupleStatus
from src.weddings.repository.orm_models import Couple, Event, Wedding

ACTIVE_COUPLE_STATUSES = (CoupleStatus.ENGAGED, CoupleStatus.MARRIED)


async def get_user(session: AsyncSession, user_id: UUID) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return user


async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(
        select(User).where(func.lower(User.email) == email.strip().lower())
    )
    return result.scalars().first()


async def get_wedding(session: AsyncSession, wedding_id: UUID) -> Wedding:
    wedding = await session.get(Wedding, wedding_id)
    if wedding is None:
        raise NotFoundError("Wedding", wedding_id)
    return wedding


async def get_event(session: AsyncSession, event_id: UUID) -> Event:
    event = await session.get(Event, event_id)
    if event is None:
        raise NotFoundError("Event", event_id)
    return event


async def get_active_couple(session: AsyncSession, user_id: UUID) -> Couple | None:
    """The engaged or married couple the user belongs to, if any."""
    result = await session.execute(
        select(Couple)
        .where(
            or_(Couple.user1_id == user_id, Couple.user2_id == user_id),
            Couple.status.in_(ACTIVE_COUPLE_STATUSES),
        )
        .order_by(Couple.created_at.desc())
    )
    return result.scalars().first()


async def is_couple_member(session: AsyncSession, wedding: Wedding, user_id: UUID) -> bool:
    couple = await session.get(Couple, wedding.couple_id)
    return couple is not None and user_id in (couple.user1_id, couple.user2_id)
