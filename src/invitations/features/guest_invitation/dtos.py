from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr

from src.guests.dtos import GuestRole, Side
from src.invitations.state_machine import InvitationStatus


class CreateGuestInvitationRequest(BaseModel):
    receiver_email: EmailStr
    receiver_name: str
    role: GuestRole
    side: Side
    can_invite_others: bool | None = None
    personal_message: str | None = None


class GuestInvitationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    wedding_id: UUID
    sender_id: UUID
    receiver_email: str
    receiver_name: str
    role: GuestRole
    side: Side
    can_invite_others: bool
    status: InvitationStatus
    expires_at: datetime
    personal_message: str | None = None
    responded_at: datetime | None = None
    created_at: datetime | None = None
