from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from src.guests.dtos import GuestRole, Side
from src.invitations.state_machine import InvitationStatus, effective_status
from src.models.base import as_utc

if TYPE_CHECKING:
    from src.invitations.repository.orm_models import (
        GuestInvitation,
        PartnerInvitation,
        VendorInvitation,
    )


@dataclass(frozen=True)
class PartnerInvitationDTO:
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

    @classmethod
    def from_invitation(cls, invitation: "PartnerInvitation", now: datetime) -> "PartnerInvitationDTO":
        return cls(
            id=invitation.uuid,
            code=invitation.code,
            sender_id=invitation.sender_id,
            receiver_email=invitation.receiver_email,
            status=effective_status(invitation.status, invitation.expires_at, now),
            rejection_count=invitation.rejection_count,
            expires_at=as_utc(invitation.expires_at),
            message=invitation.message,
            responded_at=as_utc(invitation.responded_at),
            created_at=as_utc(invitation.created_at),
        )


@dataclass(frozen=True)
class PartnerInvitationCreatedDTO:
    """Result of creating a partner invitation; the code is what gets shared."""

    success: bool
    code: str | None = None
    invitation_id: UUID | None = None
    expires_at: datetime | None = None
    error_message: str | None = None


@dataclass(frozen=True)
class GuestInvitationDTO:
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

    @classmethod
    def from_invitation(cls, invitation: "GuestInvitation", now: datetime) -> "GuestInvitationDTO":
        return cls(
            id=invitation.uuid,
            wedding_id=invitation.wedding_id,
            sender_id=invitation.sender_id,
            receiver_email=invitation.receiver_email,
            receiver_name=invitation.receiver_name,
            role=GuestRole(invitation.role),
            side=Side(invitation.side),
            can_invite_others=invitation.can_invite_others,
            status=effective_status(invitation.status, invitation.expires_at, now),
            expires_at=as_utc(invitation.expires_at),
            personal_message=invitation.personal_message,
            responded_at=as_utc(invitation.responded_at),
            created_at=as_utc(invitation.created_at),
        )


@dataclass(frozen=True)
class VendorInvitationDTO:
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

    @classmethod
    def from_invitation(cls, invitation: "VendorInvitation", now: datetime) -> "VendorInvitationDTO":
        return cls(
            id=invitation.uuid,
            wedding_id=invitation.wedding_id,
            vendor_id=invitation.vendor_id,
            invited_by=invitation.invited_by,
            category=invitation.category,
            status=effective_status(invitation.status, invitation.expires_at, now),
            sent_at=as_utc(invitation.sent_at),
            expires_at=as_utc(invitation.expires_at),
            invitation_message=invitation.invitation_message,
            responded_at=as_utc(invitation.responded_at),
        )
