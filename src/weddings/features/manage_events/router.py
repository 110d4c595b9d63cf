from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from src.auth import get_caller_id
from src.weddings.dtos import EventCreateDTO
from src.weddings.features.manage_events.dtos import (
    CreateEventRequest,
    EventResponse,
    UpdateEventRequest,
)
from src.weddings.features.manage_events.write_model import EventWriteModel, SqlEventWriteModel
from src.weddings.repository.read_models import WeddingReadModel, get_wedding_read_model

router = APIRouter()

WEDDING_EVENTS_URL = "/api/v1/weddings/{wedding_id}/events"
EVENT_URL = "/api/v1/events/{event_id}"


def get_event_write_model() -> EventWriteModel:
    return SqlEventWriteModel()


@router.get(WEDDING_EVENTS_URL, response_model=list[EventResponse])
async def list_events(
    wedding_id: UUID,
    read_model: WeddingReadModel = Depends(get_wedding_read_model),
):
    return await read_model.list_events(wedding_id)


@router.post(WEDDING_EVENTS_URL, response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    wedding_id: UUID,
    request: CreateEventRequest,
    caller_id: UUID = Depends(get_caller_id),
    write_model: EventWriteModel = Depends(get_event_write_model),
):
    return await write_model.create_event(
        wedding_id, EventCreateDTO(**request.model_dump()), caller_id=caller_id
    )


@router.patch(EVENT_URL, response_model=EventResponse)
async def update_event(
    event_id: UUID,
    request: UpdateEventRequest,
    write_model: EventWriteModel = Depends(get_event_write_model),
):
    return await write_model.update_event(event_id, request.model_dump(exclude_unset=True))


@router.delete(EVENT_URL, status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: UUID,
    write_model: EventWriteModel = Depends(get_event_write_model),
):
    await write_model.delete_event(event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
