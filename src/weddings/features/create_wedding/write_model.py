"""Write model for creating a wedding together with its canonical events."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date, datetime, timedelta
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.config.settings import settings
from src.errors import ConflictError, ValidationError
from src.models.base import utcnow
from src.notifications.dtos import NotificationType
from src.notifications.sink import NotificationSink, notify_safely
from src.weddings.dtos import CANONICAL_EVENTS, WeddingCreatedDTO, WeddingMode, WeddingStatus
from src.weddings.repository.lookups import get_active_couple, get_user
from src.weddings.repository.orm_models import Event, Wedding

logger = logging.getLogger(__name__)


class WeddingCreateWriteModel(ABC):
    @abstractmethod
    async def create_wedding_with_events(
        self,
        user_id: UUID,
        name: str,
        date: date,
        venue: str,
        city: str,
        mode: WeddingMode | str = WeddingMode.COMBINED,
        budget_limit: float | None = None,
        guest_limit: int | None = None,
    ) -> WeddingCreatedDTO:
        raise NotImplementedError


class SqlWeddingCreateWriteModel(WeddingCreateWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        notification_sink: NotificationSink | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.notification_sink = notification_sink
        self.clock = clock

    async def create_wedding_with_events(
        self,
        user_id: UUID,
        name: str,
        date: date,
        venue: str,
        city: str,
        mode: WeddingMode | str = WeddingMode.COMBINED,
        budget_limit: float | None = None,
        guest_limit: int | None = None,
    ) -> WeddingCreatedDTO:
        """Create the couple's wedding and its 7 canonical events in one transaction.

        Raises:
            ValidationError: blank name/venue/city, unknown mode, non-positive guest limit
            ConflictError: the user is not in a couple, or the couple already has a wedding
        """
        name, venue, city = (name or "").strip(), (venue or "").strip(), (city or "").strip()
        if not name or not venue or not city:
            raise ValidationError("Wedding name, venue and city are required")
        try:
            mode = WeddingMode(mode)
        except ValueError:
            raise ValidationError(f"Invalid wedding mode '{mode}'") from None
        guest_limit = settings.DEFAULT_GUEST_LIMIT if guest_limit is None else guest_limit
        if guest_limit <= 0:
            raise ValidationError("Guest limit must be positive")
        if budget_limit is not None and budget_limit < 0:
            raise ValidationError("Budget limit cannot be negative")
        now = self.clock()

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await get_user(session, user_id)
            couple = await get_active_couple(session, user_id)
            if couple is None:
                raise ConflictError("You must be part of a couple to create a wedding")
            existing = await session.scalar(
                select(Wedding.uuid).where(Wedding.couple_id == couple.uuid)
            )
            if existing is not None:
                raise ConflictError("Your couple already has a wedding")

            wedding = Wedding(
                couple_id=couple.uuid,
                name=name,
                date=date,
                venue=venue,
                city=city,
                mode=mode,
                budget_limit=budget_limit,
                guest_limit=guest_limit,
                status=WeddingStatus.PLANNING,
                created_at=now,
                updated_at=now,
            )
            session.add(wedding)
            await session.flush()

            for canonical in CANONICAL_EVENTS:
                session.add(
                    Event(
                        wedding_id=wedding.uuid,
                        name=canonical.name,
                        event_type=canonical.event_type,
                        date=date + timedelta(days=canonical.days_from_wedding),
                        venue=venue,
                        city=city,
                        auto_generated=True,
                        created_by=user_id,
                    )
                )
            await session.flush()
            partner_id = couple.user2_id if couple.user1_id == user_id else couple.user1_id
            user_name = user.full_name or user.email

        logger.info("Wedding %s created with %d events", wedding.uuid, len(CANONICAL_EVENTS))
        await notify_safely(
            self.notification_sink,
            user_id=partner_id,
            type=NotificationType.WEDDING_CREATED,
            title="Wedding created",
            message=f"{user_name} created {name}",
            action_url=f"{settings.frontend_url}/weddings/{wedding.uuid}",
        )
        return WeddingCreatedDTO(
            success=True,
            events_created=len(CANONICAL_EVENTS),
            wedding_id=wedding.uuid,
        )
