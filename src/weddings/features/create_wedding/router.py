from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.auth import get_caller_id
from src.notifications.sink import get_notification_sink
from src.weddings.features.create_wedding.dtos import CreateWeddingRequest, WeddingCreatedResponse
from src.weddings.features.create_wedding.write_model import (
    SqlWeddingCreateWriteModel,
    WeddingCreateWriteModel,
)

router = APIRouter()

WEDDINGS_URL = "/api/v1/weddings"


def get_wedding_create_write_model() -> WeddingCreateWriteModel:
    return SqlWeddingCreateWriteModel(notification_sink=get_notification_sink())


@router.post(
    WEDDINGS_URL, response_model=WeddingCreatedResponse, status_code=status.HTTP_201_CREATED
)
async def create_wedding(
    request: CreateWeddingRequest,
    caller_id: UUID = Depends(get_caller_id),
    write_model: WeddingCreateWriteModel = Depends(get_wedding_create_write_model),
):
    """Create the caller's wedding along with its engagement-to-reception events."""
    return await write_model.create_wedding_with_events(
        user_id=caller_id,
        name=request.name,
        date=request.date,
        venue=request.venue,
        city=request.city,
        mode=request.mode,
        budget_limit=request.budget_limit,
        guest_limit=request.guest_limit,
    )
