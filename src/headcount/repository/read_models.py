import abc
from uuid import UUID

from sqlalchemy import select

from src.config.database import async_session_manager, retry_read_once
from src.errors import NotFoundError, ValidationError
from src.guests.dtos import Side
from src.headcount.dtos import EventHeadcountDTO, HeadcountSnapshotDTO, WeddingHeadcountDTO
from src.headcount.repository.orm_models import HeadcountSnapshot
from src.weddings.repository.orm_models import Event, Wedding


class HeadcountReadModel(abc.ABC):
    @abc.abstractmethod
    async def latest_snapshot(
        self, event_id: UUID, side: Side | str | None = None
    ) -> HeadcountSnapshotDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def wedding_headcount_overview(self, wedding_id: UUID) -> WeddingHeadcountDTO:
        """Latest whole-event snapshot of each event. Never computes new snapshots."""
        raise NotImplementedError


class SqlHeadcountReadModel(HeadcountReadModel):
    @retry_read_once
    async def latest_snapshot(
        self, event_id: UUID, side: Side | str | None = None
    ) -> HeadcountSnapshotDTO | None:
        stmt = select(HeadcountSnapshot).where(HeadcountSnapshot.event_id == event_id)
        if side is None:
            stmt = stmt.where(HeadcountSnapshot.side.is_(None))
        else:
            try:
                side = Side(side)
            except ValueError:
                raise ValidationError(f"Invalid side '{side}'") from None
            stmt = stmt.where(HeadcountSnapshot.side == side)
        stmt = stmt.order_by(HeadcountSnapshot.snapshot_date.desc()).limit(1)

        async with async_session_manager() as session:
            result = await session.execute(stmt)
            snapshot = result.scalar_one_or_none()
            return HeadcountSnapshotDTO.from_snapshot(snapshot) if snapshot else None

    @retry_read_once
    async def wedding_headcount_overview(self, wedding_id: UUID) -> WeddingHeadcountDTO:
        async with async_session_manager() as session:
            if await session.get(Wedding, wedding_id) is None:
                raise NotFoundError("Wedding", wedding_id)
            events = (
                await session.execute(
                    select(Event).where(Event.wedding_id == wedding_id).order_by(Event.date)
                )
            ).scalars().all()
            snapshots = (
                await session.execute(
                    select(HeadcountSnapshot)
                    .where(
                        HeadcountSnapshot.wedding_id == wedding_id,
                        HeadcountSnapshot.side.is_(None),
                    )
                    .order_by(HeadcountSnapshot.snapshot_date.desc())
                )
            ).scalars().all()

            latest: dict[UUID, HeadcountSnapshotDTO] = {}
            for snapshot in snapshots:
                if snapshot.event_id not in latest:
                    latest[snapshot.event_id] = HeadcountSnapshotDTO.from_snapshot(snapshot)

            per_event = [
                EventHeadcountDTO(
                    event_id=event.uuid, event_name=event.name, snapshot=latest.get(event.uuid)
                )
                for event in events
            ]

        counted = [item.snapshot for item in per_event if item.snapshot is not None]
        return WeddingHeadcountDTO(
            wedding_id=wedding_id,
            events=per_event,
            total_headcount=sum(s.calculated_headcount for s in counted),
            total_attending=sum(s.total_attending for s in counted),
            total_declined=sum(s.total_declined for s in counted),
            total_maybe=sum(s.total_maybe for s in counted),
            total_pending=sum(s.total_pending for s in counted),
        )


def get_headcount_read_model() -> HeadcountReadModel:
    return SqlHeadcountReadModel()
