from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.auth import get_caller_id
from src.invitations.features.partner_invitation.dtos import (
    CoupleResponse,
    CreatePartnerInvitationRequest,
    PartnerInvitationCreatedResponse,
    PartnerInvitationResponse,
    PartnerInvitationsResponse,
)
from src.invitations.features.partner_invitation.write_model import (
    PartnerInvitationWriteModel,
    SqlPartnerInvitationWriteModel,
)
from src.invitations.repository.read_models import (
    InvitationReadModel,
    get_invitation_read_model,
)
from src.notifications.sink import get_notification_sink

router = APIRouter()

PARTNER_INVITATIONS_URL = "/api/v1/invitations/partner"
PARTNER_INVITATION_ACCEPT_URL = PARTNER_INVITATIONS_URL + "/{code}/accept"
PARTNER_INVITATION_REJECT_URL = PARTNER_INVITATIONS_URL + "/{code}/reject"


def get_partner_invitation_write_model() -> PartnerInvitationWriteModel:
    return SqlPartnerInvitationWriteModel(notification_sink=get_notification_sink())


@router.post(
    PARTNER_INVITATIONS_URL,
    response_model=PartnerInvitationCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_partner_invitation(
    request: CreatePartnerInvitationRequest,
    caller_id: UUID = Depends(get_caller_id),
    write_model: PartnerInvitationWriteModel = Depends(get_partner_invitation_write_model),
):
    """Invite a partner by email. The returned code is what the partner enters to accept."""
    return await write_model.create_partner_invitation(
        sender_id=caller_id,
        receiver_email=request.receiver_email,
        message=request.message,
    )


@router.get(PARTNER_INVITATIONS_URL, response_model=PartnerInvitationsResponse)
async def list_partner_invitations(
    caller_id: UUID = Depends(get_caller_id),
    read_model: InvitationReadModel = Depends(get_invitation_read_model),
):
    return PartnerInvitationsResponse(
        sent=await read_model.list_sent_partner_invitations(caller_id),
        received=await read_model.list_received_partner_invitations(caller_id),
    )


@router.post(PARTNER_INVITATION_ACCEPT_URL, response_model=CoupleResponse)
async def accept_partner_invitation(
    code: str,
    caller_id: UUID = Depends(get_caller_id),
    write_model: PartnerInvitationWriteModel = Depends(get_partner_invitation_write_model),
):
    return await write_model.accept_partner_invitation(code=code, user_id=caller_id)


@router.post(PARTNER_INVITATION_REJECT_URL, response_model=PartnerInvitationResponse)
async def reject_partner_invitation(
    code: str,
    caller_id: UUID = Depends(get_caller_id),
    write_model: PartnerInvitationWriteModel = Depends(get_partner_invitation_write_model),
):
    return await write_model.reject_partner_invitation(code=code, user_id=caller_id)
