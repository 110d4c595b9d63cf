from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.auth import get_caller_id
from src.guests.features.manage_guests.dtos import GuestResponse
from src.invitations.features.guest_invitation.dtos import (
    CreateGuestInvitationRequest,
    GuestInvitationResponse,
)
from src.invitations.features.guest_invitation.write_model import (
    GuestInvitationWriteModel,
    SqlGuestInvitationWriteModel,
)
from src.invitations.repository.read_models import (
    InvitationReadModel,
    get_invitation_read_model,
)
from src.notifications.sink import get_notification_sink

router = APIRouter()

GUEST_INVITATIONS_URL = "/api/v1/weddings/{wedding_id}/guest-invitations"
GUEST_INVITATION_ACCEPT_URL = "/api/v1/invitations/guest/{invitation_id}/accept"
GUEST_INVITATION_REJECT_URL = "/api/v1/invitations/guest/{invitation_id}/reject"


def get_guest_invitation_write_model() -> GuestInvitationWriteModel:
    return SqlGuestInvitationWriteModel(notification_sink=get_notification_sink())


@router.post(
    GUEST_INVITATIONS_URL,
    response_model=GuestInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_guest_invitation(
    wedding_id: UUID,
    request: CreateGuestInvitationRequest,
    caller_id: UUID = Depends(get_caller_id),
    write_model: GuestInvitationWriteModel = Depends(get_guest_invitation_write_model),
):
    return await write_model.create_guest_invitation(
        wedding_id=wedding_id,
        sender_id=caller_id,
        receiver_email=request.receiver_email,
        receiver_name=request.receiver_name,
        role=request.role,
        side=request.side,
        can_invite_others=request.can_invite_others,
        message=request.personal_message,
    )


@router.get(GUEST_INVITATIONS_URL, response_model=list[GuestInvitationResponse])
async def list_guest_invitations(
    wedding_id: UUID,
    read_model: InvitationReadModel = Depends(get_invitation_read_model),
):
    return await read_model.list_guest_invitations(wedding_id)


@router.post(GUEST_INVITATION_ACCEPT_URL, response_model=GuestResponse)
async def accept_guest_invitation(
    invitation_id: UUID,
    caller_id: UUID = Depends(get_caller_id),
    write_model: GuestInvitationWriteModel = Depends(get_guest_invitation_write_model),
):
    return await write_model.accept_guest_invitation(invitation_id=invitation_id, user_id=caller_id)


@router.post(GUEST_INVITATION_REJECT_URL, response_model=GuestInvitationResponse)
async def reject_guest_invitation(
    invitation_id: UUID,
    caller_id: UUID = Depends(get_caller_id),
    write_model: GuestInvitationWriteModel = Depends(get_guest_invitation_write_model),
):
    return await write_model.reject_guest_invitation(invitation_id=invitation_id, user_id=caller_id)
