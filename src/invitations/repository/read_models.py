import abc
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select

from src.config.database import async_session_manager, retry_read_once
from src.invitations.dtos import GuestInvitationDTO, PartnerInvitationDTO, VendorInvitationDTO
from src.invitations.repository.orm_models import (
    GuestInvitation,
    PartnerInvitation,
    VendorInvitation,
    VendorProfile,
)
from src.invitations.state_machine import normalize_code
from src.models.base import utcnow
from src.models.user import User


class InvitationReadModel(abc.ABC):
    """Invitation listings. Statuses are reported as of now, so stale pending rows read as expired."""

    @abc.abstractmethod
    async def get_partner_invitation(self, code: str) -> PartnerInvitationDTO | None:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_sent_partner_invitations(self, sender_id: UUID) -> list[PartnerInvitationDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_received_partner_invitations(self, user_id: UUID) -> list[PartnerInvitationDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_guest_invitations(self, wedding_id: UUID) -> list[GuestInvitationDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_vendor_invitations(self, wedding_id: UUID) -> list[VendorInvitationDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def list_invitations_for_vendor(self, user_id: UUID) -> list[VendorInvitationDTO]:
        raise NotImplementedError


class SqlInvitationReadModel(InvitationReadModel):
    def __init__(self, clock: Callable[[], datetime] = utcnow) -> None:
        self.clock = clock

    @retry_read_once
    async def get_partner_invitation(self, code: str) -> PartnerInvitationDTO | None:
        async with async_session_manager() as session:
            result = await session.execute(
                select(PartnerInvitation).where(PartnerInvitation.code == normalize_code(code))
            )
            invitation = result.scalar_one_or_none()
            if invitation is None:
                return None
            return PartnerInvitationDTO.from_invitation(invitation, self.clock())

    @retry_read_once
    async def list_sent_partner_invitations(self, sender_id: UUID) -> list[PartnerInvitationDTO]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(PartnerInvitation)
                .where(PartnerInvitation.sender_id == sender_id)
                .order_by(PartnerInvitation.created_at.desc())
            )
            now = self.clock()
            return [PartnerInvitationDTO.from_invitation(i, now) for i in result.scalars().all()]

    @retry_read_once
    async def list_received_partner_invitations(self, user_id: UUID) -> list[PartnerInvitationDTO]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(PartnerInvitation)
                .join(User, func.lower(User.email) == func.lower(PartnerInvitation.receiver_email))
                .where(User.uuid == user_id)
                .order_by(PartnerInvitation.created_at.desc())
            )
            now = self.clock()
            return [PartnerInvitationDTO.from_invitation(i, now) for i in result.scalars().all()]

    @retry_read_once
    async def list_guest_invitations(self, wedding_id: UUID) -> list[GuestInvitationDTO]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(GuestInvitation)
                .where(GuestInvitation.wedding_id == wedding_id)
                .order_by(GuestInvitation.created_at.desc())
            )
            now = self.clock()
            return [GuestInvitationDTO.from_invitation(i, now) for i in result.scalars().all()]

    @retry_read_once
    async def list_vendor_invitations(self, wedding_id: UUID) -> list[VendorInvitationDTO]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(VendorInvitation)
                .where(VendorInvitation.wedding_id == wedding_id)
                .order_by(VendorInvitation.sent_at.desc())
            )
            now = self.clock()
            return [VendorInvitationDTO.from_invitation(i, now) for i in result.scalars().all()]

    @retry_read_once
    async def list_invitations_for_vendor(self, user_id: UUID) -> list[VendorInvitationDTO]:
        async with async_session_manager() as session:
            result = await session.execute(
                select(VendorInvitation)
                .join(VendorProfile, VendorInvitation.vendor_id == VendorProfile.uuid)
                .where(VendorProfile.user_id == user_id)
                .order_by(VendorInvitation.sent_at.desc())
            )
            now = self.clock()
            return [VendorInvitationDTO.from_invitation(i, now) for i in result.scalars().all()]


def get_invitation_read_model() -> InvitationReadModel:
    return SqlInvitationReadModel()
