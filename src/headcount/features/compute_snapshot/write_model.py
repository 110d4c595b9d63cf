"""Write model for headcount snapshots.

Snapshots are computed on demand and appended; an existing snapshot is never
changed. Each computation reads the guests and RSVPs in a single statement so
a guest whose answer changes mid-way is counted once.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import asdict
from datetime import datetime
from functools import partial
from uuid import UUID

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.errors import ValidationError
from src.guests.dtos import Side
from src.guests.repository.orm_models import RSVP, Guest
from src.headcount.aggregation import GuestRSVPRow, tally
from src.headcount.dtos import HeadcountSnapshotDTO
from src.headcount.repository.orm_models import HeadcountSnapshot
from src.models.base import utcnow
from src.weddings.repository.lookups import get_event, get_wedding
from src.weddings.repository.orm_models import Event

logger = logging.getLogger(__name__)

REFRESH_SIDES: tuple[Side | None, ...] = (None, Side.GROOM, Side.BRIDE)


class SnapshotWriteModel(ABC):
    @abstractmethod
    async def compute_snapshot(
        self, event_id: UUID, side: Side | str | None = None
    ) -> HeadcountSnapshotDTO:
        raise NotImplementedError

    @abstractmethod
    async def refresh_wedding_snapshots(self, wedding_id: UUID) -> list[HeadcountSnapshotDTO]:
        raise NotImplementedError


class SqlSnapshotWriteModel(SnapshotWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.clock = clock

    async def compute_snapshot(
        self, event_id: UUID, side: Side | str | None = None
    ) -> HeadcountSnapshotDTO:
        """Append a snapshot for the event, restricted to one side if given."""
        if side is not None:
            try:
                side = Side(side)
            except ValueError:
                raise ValidationError(f"Invalid side '{side}'") from None
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            event = await get_event(session, event_id)
            return await self._compute(session, event, side, self.clock())

    async def refresh_wedding_snapshots(self, wedding_id: UUID) -> list[HeadcountSnapshotDTO]:
        """Recompute every event of the wedding: whole event, groom side, bride side."""
        now = self.clock()
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            await get_wedding(session, wedding_id)
            result = await session.execute(
                select(Event).where(Event.wedding_id == wedding_id).order_by(Event.date)
            )
            snapshots = []
            for event in result.scalars().all():
                for side in REFRESH_SIDES:
                    snapshots.append(await self._compute(session, event, side, now))
        logger.info("Refreshed %d snapshots for wedding %s", len(snapshots), wedding_id)
        return snapshots

    async def _compute(
        self, session, event: Event, side: Side | None, now: datetime
    ) -> HeadcountSnapshotDTO:
        stmt = (
            select(
                Guest.status.label("guest_status"),
                Guest.dietary_preferences.label("guest_dietary_preferences"),
                RSVP.status.label("rsvp_status"),
                RSVP.adults_count,
                RSVP.teens_count,
                RSVP.children_count,
                RSVP.dietary_preferences.label("rsvp_dietary_preferences"),
            )
            .select_from(Guest)
            .outerjoin(RSVP, and_(RSVP.guest_id == Guest.uuid, RSVP.event_id == event.uuid))
            .where(Guest.wedding_id == event.wedding_id)
        )
        if side is not None:
            stmt = stmt.where(Guest.side == side)

        result = await session.execute(stmt)
        totals = tally(
            GuestRSVPRow(
                guest_status=row.guest_status,
                guest_dietary_preferences=row.guest_dietary_preferences or [],
                rsvp_status=row.rsvp_status,
                adults_count=row.adults_count or 0,
                teens_count=row.teens_count or 0,
                children_count=row.children_count or 0,
                rsvp_dietary_preferences=row.rsvp_dietary_preferences or [],
            )
            for row in result.all()
        )

        snapshot = HeadcountSnapshot(
            event_id=event.uuid,
            wedding_id=event.wedding_id,
            side=side,
            snapshot_date=now,
            **asdict(totals),
        )
        session.add(snapshot)
        await session.flush()
        logger.debug(
            "Snapshot for event %s side %s: %s attending, headcount %.2f",
            event.uuid,
            side.value if side else "all",
            totals.total_attending,
            totals.calculated_headcount,
        )
        return HeadcountSnapshotDTO.from_snapshot(snapshot)
