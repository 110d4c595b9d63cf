from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr

from src.invitations.state_machine import InvitationStatus


class InviteVendorRequest(BaseModel):
    vendor_email: EmailStr
    category: str
    invitation_message: str | None = None


class VendorInvitationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    wedding_id: UUID
    vendor_id: UUID
    invited_by: UUID
    category: str
    status: InvitationStatus
    sent_at: datetime
    expires_at: datetime
    invitation_message: str | None = None
    responded_at: datetime | None = None
