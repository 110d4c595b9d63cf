from uuid import UUID

from fastapi import APIRouter, Depends, status

from src.auth import get_caller_id
from src.invitations.features.vendor_invitation.dtos import (
    InviteVendorRequest,
    VendorInvitationResponse,
)
from src.invitations.features.vendor_invitation.write_model import (
    SqlVendorInvitationWriteModel,
    VendorInvitationWriteModel,
)
from src.invitations.repository.read_models import (
    InvitationReadModel,
    get_invitation_read_model,
)
from src.notifications.sink import get_notification_sink

router = APIRouter()

VENDOR_INVITATIONS_URL = "/api/v1/weddings/{wedding_id}/vendor-invitations"
MY_VENDOR_INVITATIONS_URL = "/api/v1/invitations/vendor"
VENDOR_INVITATION_ACCEPT_URL = "/api/v1/invitations/vendor/{invitation_id}/accept"
VENDOR_INVITATION_REJECT_URL = "/api/v1/invitations/vendor/{invitation_id}/reject"


def get_vendor_invitation_write_model() -> VendorInvitationWriteModel:
    return SqlVendorInvitationWriteModel(notification_sink=get_notification_sink())


@router.post(
    VENDOR_INVITATIONS_URL,
    response_model=VendorInvitationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def invite_vendor(
    wedding_id: UUID,
    request: InviteVendorRequest,
    caller_id: UUID = Depends(get_caller_id),
    write_model: VendorInvitationWriteModel = Depends(get_vendor_invitation_write_model),
):
    return await write_model.invite_vendor(
        wedding_id=wedding_id,
        inviter_id=caller_id,
        vendor_email=request.vendor_email,
        category=request.category,
        message=request.invitation_message,
    )


@router.get(VENDOR_INVITATIONS_URL, response_model=list[VendorInvitationResponse])
async def list_vendor_invitations(
    wedding_id: UUID,
    read_model: InvitationReadModel = Depends(get_invitation_read_model),
):
    return await read_model.list_vendor_invitations(wedding_id)


@router.get(MY_VENDOR_INVITATIONS_URL, response_model=list[VendorInvitationResponse])
async def list_my_vendor_invitations(
    caller_id: UUID = Depends(get_caller_id),
    read_model: InvitationReadModel = Depends(get_invitation_read_model),
):
    """Invitations received by the calling vendor."""
    return await read_model.list_invitations_for_vendor(caller_id)


@router.post(VENDOR_INVITATION_ACCEPT_URL, response_model=VendorInvitationResponse)
async def accept_vendor_invitation(
    invitation_id: UUID,
    caller_id: UUID = Depends(get_caller_id),
    write_model: VendorInvitationWriteModel = Depends(get_vendor_invitation_write_model),
):
    return await write_model.accept_vendor_invitation(invitation_id=invitation_id, user_id=caller_id)


@router.post(VENDOR_INVITATION_REJECT_URL, response_model=VendorInvitationResponse)
async def reject_vendor_invitation(
    invitation_id: UUID,
    caller_id: UUID = Depends(get_caller_id),
    write_model: VendorInvitationWriteModel = Depends(get_vendor_invitation_write_model),
):
    return await write_model.reject_vendor_invitation(invitation_id=invitation_id, user_id=caller_id)
