from uuid import UUID

from fastapi import APIRouter, Depends

from src.auth import get_caller_id
from src.errors import NotFoundError
from src.guests.dtos import RSVPExtrasDTO
from src.guests.features.submit_rsvp.dtos import RSVPBody, RSVPResponse, RSVPSubmit
from src.guests.features.submit_rsvp.write_model import RSVPWriteModel, SqlRSVPWriteModel
from src.guests.repository.read_models import RSVPReadModel, get_rsvp_read_model

router = APIRouter()

EVENT_RSVPS_URL = "/api/v1/events/{event_id}/rsvps"
GUEST_RSVP_URL = "/api/v1/events/{event_id}/rsvps/{guest_id}"


def get_rsvp_write_model() -> RSVPWriteModel:
    return SqlRSVPWriteModel()


@router.post(EVENT_RSVPS_URL, response_model=RSVPResponse)
async def submit_rsvp(
    event_id: UUID,
    request: RSVPSubmit,
    caller_id: UUID = Depends(get_caller_id),
    write_model: RSVPWriteModel = Depends(get_rsvp_write_model),
) -> RSVPResponse:
    """Submit a guest's RSVP for an event, replacing any earlier answer.

    The caller must be the guest's linked user or one of the couple.
    """
    result = await write_model.submit_or_update_rsvp(
        event_id=event_id,
        guest_id=request.guest_id,
        wedding_id=request.wedding_id,
        status=request.status,
        adults=request.adults_count,
        teens=request.teens_count,
        children=request.children_count,
        extras=RSVPExtrasDTO(
            dietary_preferences=request.dietary_preferences,
            special_requirements=request.special_requirements,
            rsvp_notes=request.rsvp_notes,
        ),
        caller_id=caller_id,
    )
    return RSVPResponse(
        message=result.message, created=result.created, rsvp=RSVPBody.from_dto(result.rsvp)
    )


@router.get(EVENT_RSVPS_URL, response_model=list[RSVPBody])
async def list_event_rsvps(
    event_id: UUID,
    read_model: RSVPReadModel = Depends(get_rsvp_read_model),
):
    return [RSVPBody.from_dto(rsvp) for rsvp in await read_model.list_rsvps_for_event(event_id)]


@router.get(GUEST_RSVP_URL, response_model=RSVPBody)
async def get_rsvp(
    event_id: UUID,
    guest_id: UUID,
    read_model: RSVPReadModel = Depends(get_rsvp_read_model),
):
    rsvp = await read_model.get_rsvp(event_id, guest_id)
    if rsvp is None:
        raise NotFoundError("RSVP", f"{event_id}/{guest_id}")
    return RSVPBody.from_dto(rsvp)
