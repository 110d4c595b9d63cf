"""Request and response bodies for the partner invitation endpoints."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr

from src.invitations.state_machine import InvitationStatus
from src.weddings.dtos import CoupleStatus


class CreatePartnerInvitationRequest(BaseModel):
    receiver_email: EmailStr
    message: str | None = None


class PartnerInvitationCreatedResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    success: bool
    code: str | None = None
    invitation_id: UUID | None = None
    expires_at: datetime | None = None
    error_message: str | None = None


class PartnerInvitationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    sender_id: UUID
    receiver_email: str
    status: InvitationStatus
    rejection_count: int
    expires_at: datetime
    message: str | None = None
    responded_at: datetime | None = None
    created_at: datetime | None = None


class CoupleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user1_id: UUID
    user2_id: UUID
    status: CoupleStatus
    engaged_date: date


class PartnerInvitationsResponse(BaseModel):
    sent: list[PartnerInvitationResponse]
    received: list[PartnerInvitationResponse]
