from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.errors import NotFoundError
from src.guests.dtos import Side
from src.headcount.features.compute_snapshot.dtos import SnapshotResponse, WeddingHeadcountResponse
from src.headcount.features.compute_snapshot.write_model import (
    SnapshotWriteModel,
    SqlSnapshotWriteModel,
)
from src.headcount.repository.read_models import HeadcountReadModel, get_headcount_read_model

router = APIRouter()

EVENT_SNAPSHOTS_URL = "/api/v1/events/{event_id}/headcount"
LATEST_SNAPSHOT_URL = "/api/v1/events/{event_id}/headcount/latest"
WEDDING_HEADCOUNT_URL = "/api/v1/weddings/{wedding_id}/headcount"
WEDDING_HEADCOUNT_REFRESH_URL = "/api/v1/weddings/{wedding_id}/headcount/refresh"


def get_snapshot_write_model() -> SnapshotWriteModel:
    return SqlSnapshotWriteModel()


@router.post(
    EVENT_SNAPSHOTS_URL,
    response_model=SnapshotResponse,
    status_code=status.HTTP_201_CREATED,
)
async def compute_snapshot(
    event_id: UUID,
    side: Side | None = None,
    write_model: SnapshotWriteModel = Depends(get_snapshot_write_model),
) -> SnapshotResponse:
    return SnapshotResponse.from_dto(await write_model.compute_snapshot(event_id, side=side))


@router.get(LATEST_SNAPSHOT_URL, response_model=SnapshotResponse)
async def latest_snapshot(
    event_id: UUID,
    side: Side | None = None,
    read_model: HeadcountReadModel = Depends(get_headcount_read_model),
) -> SnapshotResponse:
    snapshot = await read_model.latest_snapshot(event_id, side=side)
    if snapshot is None:
        raise NotFoundError("Headcount snapshot", event_id)
    return SnapshotResponse.from_dto(snapshot)


@router.get(WEDDING_HEADCOUNT_URL, response_model=WeddingHeadcountResponse)
async def wedding_headcount_overview(
    wedding_id: UUID,
    read_model: HeadcountReadModel = Depends(get_headcount_read_model),
) -> WeddingHeadcountResponse:
    return WeddingHeadcountResponse.from_dto(await read_model.wedding_headcount_overview(wedding_id))


@router.post(WEDDING_HEADCOUNT_REFRESH_URL, response_model=list[SnapshotResponse])
async def refresh_wedding_snapshots(
    wedding_id: UUID,
    write_model: SnapshotWriteModel = Depends(get_snapshot_write_model),
):
    return [
        SnapshotResponse.from_dto(snapshot)
        for snapshot in await write_model.refresh_wedding_snapshots(wedding_id)
    ]
