"""Write model for guest invitations.

The couple, or a guest trusted to invite others, invites someone by email.
Accepting links the recipient's account to a guest record in the wedding.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime, timedelta
from functools import partial
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.config.settings import settings
from src.errors import (
    AuthorizationError,
    ConflictError,
    InvitationEmailMismatchError,
    NotFoundError,
    ValidationError,
)
from src.guests.dtos import DELEGATING_ROLES, GuestDTO, GuestRole, GuestStatus, Side
from src.guests.repository.orm_models import Guest
from src.guests.validation import clean_email, clean_full_name, parse_role, parse_side
from src.invitations.dtos import GuestInvitationDTO
from src.invitations.repository.orm_models import GuestInvitation
from src.invitations.state_machine import InvitationStatus, check_can_respond, transition
from src.models.base import utcnow
from src.notifications.dtos import NotificationType
from src.notifications.sink import NotificationSink, notify_safely
from src.weddings.repository.lookups import (
    get_user,
    get_user_by_email,
    get_wedding,
    is_couple_member,
)

logger = logging.getLogger(__name__)


class GuestInvitationWriteModel(ABC):
    @abstractmethod
    async def create_guest_invitation(
        self,
        wedding_id: UUID,
        sender_id: UUID,
        receiver_email: str,
        receiver_name: str,
        role: GuestRole | str,
        side: Side | str,
        can_invite_others: bool | None = None,
        message: str | None = None,
        ttl: timedelta | None = None,
    ) -> GuestInvitationDTO:
        raise NotImplementedError

    @abstractmethod
    async def accept_guest_invitation(self, invitation_id: UUID, user_id: UUID) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def reject_guest_invitation(
        self, invitation_id: UUID, user_id: UUID
    ) -> GuestInvitationDTO:
        raise NotImplementedError


class SqlGuestInvitationWriteModel(GuestInvitationWriteModel):
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

    async def create_guest_invitation(
        self,
        wedding_id: UUID,
        sender_id: UUID,
        receiver_email: str,
        receiver_name: str,
        role: GuestRole | str,
        side: Side | str,
        can_invite_others: bool | None = None,
        message: str | None = None,
        ttl: timedelta | None = None,
    ) -> GuestInvitationDTO:
        """Invite someone to the wedding by email.

        Raises:
            ValidationError: missing email, short name, or a side/role the form doesn't offer
            NotFoundError: the wedding does not exist
            AuthorizationError: the sender is neither in the couple nor allowed to invite others
            ConflictError: a live invitation for this email already exists
        """
        receiver_email = clean_email(receiver_email)
        if receiver_email is None:
            raise ValidationError("Guest email is required")
        receiver_name = clean_full_name(receiver_name)
        side = parse_side(side)
        role = parse_role(role)
        if can_invite_others is None:
            can_invite_others = role in DELEGATING_ROLES
        now = self.clock()
        ttl = ttl or timedelta(days=settings.GUEST_INVITE_TTL_DAYS)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            wedding = await get_wedding(session, wedding_id)
            if not await self._may_invite(session, wedding, sender_id):
                raise AuthorizationError("You are not allowed to invite guests to this wedding")

            existing = await session.scalar(
                select(GuestInvitation.uuid).where(
                    GuestInvitation.wedding_id == wedding_id,
                    func.lower(GuestInvitation.receiver_email) == receiver_email,
                    GuestInvitation.status == InvitationStatus.PENDING,
                    GuestInvitation.expires_at >= now,
                )
            )
            if existing is not None:
                raise ConflictError(f"{receiver_email} already has a pending invitation")

            invitation = GuestInvitation(
                wedding_id=wedding_id,
                sender_id=sender_id,
                receiver_email=receiver_email,
                receiver_name=receiver_name,
                role=role,
                side=side,
                can_invite_others=can_invite_others,
                personal_message=message,
                status=InvitationStatus.PENDING,
                expires_at=now + ttl,
            )
            session.add(invitation)
            await session.flush()
            result = GuestInvitationDTO.from_invitation(invitation, now)
            receiver = await get_user_by_email(session, receiver_email)
            wedding_name = wedding.name

        if receiver is not None:
            await notify_safely(
                self.notification_sink,
                user_id=receiver.uuid,
                type=NotificationType.INVITATION,
                title="You're invited",
                message=f"You have been invited to {wedding_name}",
                action_url=f"{settings.frontend_url}/invitations/guest/{result.id}",
            )
        return result

    async def accept_guest_invitation(self, invitation_id: UUID, user_id: UUID) -> GuestDTO:
        now = self.clock()
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await get_user(session, user_id)
            invitation = await self._checked_invitation(session, invitation_id, user.email, now)
            await transition(
                session, GuestInvitation, invitation.uuid, InvitationStatus.ACCEPTED, now
            )

            guest = await self._unlinked_guest(session, invitation.wedding_id, invitation.receiver_email)
            if guest is not None:
                guest.user_id = user_id
            else:
                guest = Guest(
                    wedding_id=invitation.wedding_id,
                    user_id=user_id,
                    full_name=invitation.receiver_name,
                    email=invitation.receiver_email,
                    side=invitation.side,
                    role=invitation.role,
                    invited_by=invitation.sender_id,
                    can_invite_others=invitation.can_invite_others,
                    dietary_preferences=[],
                    status=GuestStatus.INVITED,
                    invitation_sent_at=invitation.created_at,
                )
                session.add(guest)
            await session.flush()
            result = GuestDTO.from_guest(guest)
            sender_id = invitation.sender_id

        logger.info("Guest invitation %s accepted by %s", invitation_id, user_id)
        await notify_safely(
            self.notification_sink,
            user_id=sender_id,
            type=NotificationType.ACCEPTANCE,
            title="Invitation accepted",
            message=f"{result.full_name} accepted your invitation",
        )
        return result

    async def reject_guest_invitation(
        self, invitation_id: UUID, user_id: UUID
    ) -> GuestInvitationDTO:
        now = self.clock()
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            user = await get_user(session, user_id)
            invitation = await self._checked_invitation(session, invitation_id, user.email, now)
            await transition(
                session, GuestInvitation, invitation.uuid, InvitationStatus.REJECTED, now
            )
            await session.refresh(invitation)
            result = GuestInvitationDTO.from_invitation(invitation, now)

        logger.info("Guest invitation %s rejected by %s", invitation_id, user_id)
        await notify_safely(
            self.notification_sink,
            user_id=result.sender_id,
            type=NotificationType.REJECTION,
            title="Invitation declined",
            message=f"{result.receiver_name} declined your invitation",
        )
        return result

    async def _may_invite(self, session, wedding, sender_id: UUID) -> bool:
        if await is_couple_member(session, wedding, sender_id):
            return True
        delegate = await session.scalar(
            select(Guest.uuid).where(
                Guest.wedding_id == wedding.uuid,
                Guest.user_id == sender_id,
                Guest.can_invite_others.is_(True),
            )
        )
        return delegate is not None

    async def _checked_invitation(
        self, session, invitation_id: UUID, email: str, now: datetime
    ) -> GuestInvitation:
        invitation = await session.get(GuestInvitation, invitation_id)
        if invitation is None:
            raise NotFoundError("Guest invitation", invitation_id)
        check_can_respond(invitation_id, invitation.status, invitation.expires_at, now)
        if invitation.receiver_email.strip().lower() != email.strip().lower():
            raise InvitationEmailMismatchError(invitation_id)
        return invitation

    async def _unlinked_guest(self, session, wedding_id: UUID, email: str) -> Guest | None:
        result = await session.execute(
            select(Guest)
            .where(
                Guest.wedding_id == wedding_id,
                func.lower(Guest.email) == email.strip().lower(),
                Guest.user_id.is_(None),
            )
            .order_by(Guest.created_at)
        )
        return result.scalars().first()
