"""Write model for partner invitations.

A user shares a 6 character code with their partner. Accepting it creates the
couple; rejecting it counts the rejection and closes the code for good.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timedelta
from functools import partial
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.config.settings import settings
from src.errors import (
    ConflictError,
    InvalidInvitationCodeError,
    InvitationEmailMismatchError,
    ValidationError,
)
from src.invitations.dtos import PartnerInvitationCreatedDTO, PartnerInvitationDTO
from src.invitations.repository.orm_models import PartnerInvitation
from src.invitations.state_machine import (
    InvitationStatus,
    check_can_respond,
    generate_invitation_code,
    normalize_code,
    transition,
)
from src.models.base import utcnow
from src.notifications.dtos import NotificationType
from src.notifications.sink import NotificationSink, notify_safely
from src.weddings.dtos import CoupleDTO, CoupleStatus
from src.weddings.repository.lookups import get_active_couple, get_user, get_user_by_email
from src.weddings.repository.orm_models import Couple

logger = logging.getLogger(__name__)


class PartnerInvitationWriteModel(ABC):
    @abstractmethod
    async def create_partner_invitation(
        self,
        sender_id: UUID,
        receiver_email: str,
        message: str | None = None,
        ttl: timedelta | None = None,
    ) -> PartnerInvitationCreatedDTO:
        raise NotImplementedError

    @abstractmethod
    async def accept_partner_invitation(self, code: str, user_id: UUID) -> CoupleDTO:
        raise NotImplementedError

    @abstractmethod
    async def reject_partner_invitation(self, code: str, user_id: UUID) -> PartnerInvitationDTO:
        raise NotImplementedError


class SqlPartnerInvitationWriteModel(PartnerInvitationWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        notification_sink: NotificationSink | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.notification_sink = notification_sink
        self.clock = clock

    async def create_partner_invitation(
        self,
        sender_id: UUID,
        receiver_email: str,
        message: str | None = None,
        ttl: timedelta | None = None,
    ) -> PartnerInvitationCreatedDTO:
        """Persist a pending invitation under a fresh unique code.

        Raises:
            ValidationError: empty receiver email, or the sender invited themselves
            ConflictError: the sender is already in a couple, or no free code was found
        """
        receiver_email = (receiver_email or "").strip().lower()
        if not receiver_email:
            raise ValidationError("Partner email is required")
        now = self.clock()
        ttl = ttl or timedelta(hours=settings.PARTNER_INVITE_TTL_HOURS)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            sender = await get_user(session, sender_id)
            if sender.email.strip().lower() == receiver_email:
                raise ValidationError("You cannot invite yourself")
            if await get_active_couple(session, sender_id) is not None:
                raise ConflictError("You are already part of a couple")

            code = await self._unused_code(session)
            invitation = PartnerInvitation(
                code=code,
                sender_id=sender_id,
                receiver_email=receiver_email,
                status=InvitationStatus.PENDING,
                rejection_count=0,
                message=message,
                expires_at=now + ttl,
            )
            session.add(invitation)
            await session.flush()

            receiver = await get_user_by_email(session, receiver_email)
            sender_name = sender.full_name or sender.email

        logger.info("Partner invitation %s created by %s", code, sender_id)
        if receiver is not None:
            await notify_safely(
                self.notification_sink,
                user_id=receiver.uuid,
                type=NotificationType.INVITATION,
                title="Partner invitation",
                message=f"{sender_name} invited you to plan your wedding together",
                action_url=f"{settings.frontend_url}/partner/accept?code={code}",
            )
        return PartnerInvitationCreatedDTO(
            success=True,
            code=code,
            invitation_id=invitation.uuid,
            expires_at=now + ttl,
        )

    async def accept_partner_invitation(self, code: str, user_id: UUID) -> CoupleDTO:
        """Accept the invitation and create the couple in the same transaction."""
        code = normalize_code(code)
        now = self.clock()

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await get_user(session, user_id)
            invitation = await self._checked_invitation(session, code, user.email, now)
            if await get_active_couple(session, user_id) is not None:
                raise ConflictError("You are already part of a couple")
            if await get_active_couple(session, invitation.sender_id) is not None:
                raise ConflictError("The sender is already part of a couple")

            await transition(
                session,
                PartnerInvitation,
                invitation.uuid,
                InvitationStatus.ACCEPTED,
                now,
                identifier=code,
            )
            couple = Couple(
                user1_id=invitation.sender_id,
                user2_id=user_id,
                status=CoupleStatus.ENGAGED,
                engaged_date=now.date(),
            )
            session.add(couple)
            await session.flush()
            sender_id = invitation.sender_id
            user_name = user.full_name or user.email

        logger.info("Partner invitation %s accepted, couple %s created", code, couple.uuid)
        await notify_safely(
            self.notification_sink,
            user_id=sender_id,
            type=NotificationType.ACCEPTANCE,
            title="Partner invitation accepted",
            message=f"{user_name} accepted your partner invitation",
        )
        return CoupleDTO.from_couple(couple)

    async def reject_partner_invitation(self, code: str, user_id: UUID) -> PartnerInvitationDTO:
        code = normalize_code(code)
        now = self.clock()

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await get_user(session, user_id)
            invitation = await self._checked_invitation(session, code, user.email, now)
            await transition(
                session,
                PartnerInvitation,
                invitation.uuid,
                InvitationStatus.REJECTED,
                now,
                identifier=code,
                rejection_count=PartnerInvitation.rejection_count + 1,
            )
            await session.refresh(invitation)
            result = PartnerInvitationDTO.from_invitation(invitation, now)
            user_name = user.full_name or user.email

        logger.info("Partner invitation %s rejected", code)
        await notify_safely(
            self.notification_sink,
            user_id=result.sender_id,
            type=NotificationType.REJECTION,
            title="Partner invitation declined",
            message=f"{user_name} declined your partner invitation",
        )
        return result

    async def _unused_code(self, session) -> str:
        for _ in range(settings.INVITE_CODE_MAX_ATTEMPTS):
            code = generate_invitation_code()
            taken = await session.scalar(
                select(PartnerInvitation.uuid).where(PartnerInvitation.code == code)
            )
            if taken is None:
                return code
            logger.debug("Invitation code %s already taken, generating another", code)
        raise ConflictError("Could not generate a unique invitation code, please try again")

    async def _checked_invitation(
        self, session, code: str, email: str, now: datetime
    ) -> PartnerInvitation:
        result = await session.execute(
            select(PartnerInvitation).where(PartnerInvitation.code == code)
        )
        invitation = result.scalar_one_or_none()
        if invitation is None:
            raise InvalidInvitationCodeError(code)
        check_can_respond(code, invitation.status, invitation.expires_at, now)
        if invitation.receiver_email.strip().lower() != email.strip().lower():
            raise InvitationEmailMismatchError(code)
        return invitation
