"""Request and response bodies for the guest registry endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from src.guests.dtos import GuestRole, GuestStatus, Side


class InviteGuestRequest(BaseModel):
    full_name: str
    side: Side = Side.GROOM
    role: GuestRole = GuestRole.FRIEND
    email: EmailStr | None = None
    phone: str | None = None
    can_invite_others: bool | None = None
    plus_one_allowed: bool = False
    plus_one_name: str | None = None
    is_vip: bool = False
    under_18: bool = False
    age: int | None = Field(default=None, ge=0)
    dietary_preferences: list[str] | str | None = None
    special_requirements: str | None = None
    # False adds the guest without marking an invitation as sent
    send_invitation: bool = True


class UpdateGuestRequest(BaseModel):
    """Only the fields present in the body are changed."""

    full_name: str | None = None
    email: EmailStr | None = None
    phone: str | None = None
    side: Side | None = None
    role: GuestRole | None = None
    can_invite_others: bool | None = None
    plus_one_allowed: bool | None = None
    plus_one_name: str | None = None
    is_vip: bool | None = None
    under_18: bool | None = None
    age: int | None = Field(default=None, ge=0)
    dietary_preferences: list[str] | str | None = None
    special_requirements: str | None = None


class GuestStatusRequest(BaseModel):
    status: GuestStatus


class GuestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    wedding_id: UUID
    full_name: str
    side: Side
    role: GuestRole
    status: GuestStatus
    email: str | None = None
    phone: str | None = None
    user_id: UUID | None = None
    invited_by: UUID | None = None
    can_invite_others: bool = False
    plus_one_allowed: bool = False
    plus_one_name: str | None = None
    is_vip: bool = False
    under_18: bool = False
    age: int | None = None
    dietary_preferences: list[str] = []
    special_requirements: str | None = None
    invitation_sent_at: datetime | None = None
    responded_at: datetime | None = None
    created_at: datetime | None = None
