from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from src.auth import get_caller_id
from src.errors import NotFoundError
from src.guests.dtos import GuestFilterDTO, GuestRole, GuestStatus, InviteGuestDTO, Side
from src.guests.features.manage_guests.dtos import (
    GuestResponse,
    GuestStatusRequest,
    InviteGuestRequest,
    UpdateGuestRequest,
)
from src.guests.features.manage_guests.write_model import (
    GuestRegistryWriteModel,
    SqlGuestRegistryWriteModel,
)
from src.guests.repository.read_models import GuestReadModel, get_guest_read_model

router = APIRouter()

WEDDING_GUESTS_URL = "/api/v1/weddings/{wedding_id}/guests"
MY_GUEST_URL = "/api/v1/weddings/{wedding_id}/guests/me"
GUEST_URL = "/api/v1/guests/{guest_id}"
GUEST_RESPONSE_URL = "/api/v1/guests/{guest_id}/response"


def get_guest_registry_write_model() -> GuestRegistryWriteModel:
    return SqlGuestRegistryWriteModel()


@router.post(WEDDING_GUESTS_URL, response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
async def invite_guest(
    wedding_id: UUID,
    request: InviteGuestRequest,
    caller_id: UUID = Depends(get_caller_id),
    write_model: GuestRegistryWriteModel = Depends(get_guest_registry_write_model),
):
    details = InviteGuestDTO(**request.model_dump(exclude={"send_invitation"}))
    if request.send_invitation:
        return await write_model.invite_guest(wedding_id, details, caller_id=caller_id)
    return await write_model.add_guest(wedding_id, details, caller_id=caller_id)


@router.get(WEDDING_GUESTS_URL, response_model=list[GuestResponse])
async def list_guests(
    wedding_id: UUID,
    side: Side | None = None,
    role: GuestRole | None = None,
    status: GuestStatus | None = None,
    search: str | None = None,
    read_model: GuestReadModel = Depends(get_guest_read_model),
):
    filters = GuestFilterDTO(side=side, role=role, status=status, search=search)
    return await read_model.list_guests(wedding_id, filters)


@router.get(MY_GUEST_URL, response_model=GuestResponse)
async def get_my_guest(
    wedding_id: UUID,
    caller_id: UUID = Depends(get_caller_id),
    read_model: GuestReadModel = Depends(get_guest_read_model),
):
    guest = await read_model.get_guest_for_user(wedding_id, caller_id)
    if guest is None:
        raise NotFoundError("Guest for user", caller_id)
    return guest


@router.get(GUEST_URL, response_model=GuestResponse)
async def get_guest(
    guest_id: UUID,
    read_model: GuestReadModel = Depends(get_guest_read_model),
):
    guest = await read_model.get_guest(guest_id)
    if guest is None:
        raise NotFoundError("Guest", guest_id)
    return guest


@router.patch(GUEST_URL, response_model=GuestResponse)
async def update_guest(
    guest_id: UUID,
    request: UpdateGuestRequest,
    caller_id: UUID = Depends(get_caller_id),
    write_model: GuestRegistryWriteModel = Depends(get_guest_registry_write_model),
):
    return await write_model.update_guest(
        guest_id, request.model_dump(exclude_unset=True), caller_id=caller_id
    )


@router.post(GUEST_RESPONSE_URL, response_model=GuestResponse)
async def record_guest_response(
    guest_id: UUID,
    request: GuestStatusRequest,
    caller_id: UUID = Depends(get_caller_id),
    write_model: GuestRegistryWriteModel = Depends(get_guest_registry_write_model),
):
    return await write_model.record_guest_response(guest_id, request.status, caller_id=caller_id)


@router.delete(GUEST_URL, status_code=status.HTTP_204_NO_CONTENT)
async def remove_guest(
    guest_id: UUID,
    caller_id: UUID = Depends(get_caller_id),
    write_model: GuestRegistryWriteModel = Depends(get_guest_registry_write_model),
):
    await write_model.remove_guest(guest_id, caller_id=caller_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
