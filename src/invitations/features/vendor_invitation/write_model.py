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
from src.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from src.invitations.dtos import VendorInvitationDTO
from src.invitations.repository.orm_models import VendorInvitation, VendorProfile
from src.invitations.state_machine import InvitationStatus, check_can_respond, transition
from src.models.base import utcnow
from src.notifications.dtos import NotificationType
from src.notifications.sink import NotificationSink, notify_safely
from src.weddings.repository.lookups import get_user_by_email, get_wedding, is_couple_member

logger = logging.getLogger(__name__)


class VendorInvitationWriteModel(ABC):
    @abstractmethod
    async def invite_vendor(
        self,
        wedding_id: UUID,
        inviter_id: UUID,
        vendor_email: str,
        category: str,
        message: str | None = None,
        ttl: timedelta | None = None,
    ) -> VendorInvitationDTO:
        raise NotImplementedError

    @abstractmethod
    async def accept_vendor_invitation(
        self, invitation_id: UUID, user_id: UUID
    ) -> VendorInvitationDTO:
        raise NotImplementedError

    @abstractmethod
    async def reject_vendor_invitation(
        self, invitation_id: UUID, user_id: UUID
    ) -> VendorInvitationDTO:
        raise NotImplementedError


class SqlVendorInvitationWriteModel(VendorInvitationWriteModel):
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

    async def invite_vendor(
        self,
        wedding_id: UUID,
        inviter_id: UUID,
        vendor_email: str,
        category: str,
        message: str | None = None,
        ttl: timedelta | None = None,
    ) -> VendorInvitationDTO:
        """Invite a registered vendor to quote for one category of the wedding."""
        category = (category or "").strip().lower()
        if not category:
            raise ValidationError("Vendor category is required")
        now = self.clock()
        ttl = ttl or timedelta(days=settings.VENDOR_INVITE_TTL_DAYS)

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            wedding = await get_wedding(session, wedding_id)
            if not await is_couple_member(session, wedding, inviter_id):
                raise AuthorizationError("Only the couple can invite vendors to this wedding")

            vendor_user = await get_user_by_email(session, vendor_email or "")
            profile = None
            if vendor_user is not None:
                profile = await session.scalar(
                    select(VendorProfile).where(VendorProfile.user_id == vendor_user.uuid)
                )
            if profile is None:
                raise NotFoundError("Vendor", vendor_email)

            duplicate = await session.scalar(
                select(VendorInvitation.uuid).where(
                    VendorInvitation.wedding_id == wedding_id,
                    VendorInvitation.vendor_id == profile.uuid,
                    VendorInvitation.category == category,
                )
            )
            if duplicate is not None:
                raise ConflictError(
                    f"{profile.business_name} has already been invited for {category}"
                )

            invitation = VendorInvitation(
                wedding_id=wedding_id,
                vendor_id=profile.uuid,
                invited_by=inviter_id,
                category=category,
                status=InvitationStatus.PENDING,
                invitation_message=message,
                sent_at=now,
                expires_at=now + ttl,
            )
            session.add(invitation)
            await session.flush()
            result = VendorInvitationDTO.from_invitation(invitation, now)
            vendor_user_id = profile.user_id
            wedding_name = wedding.name

        logger.info("Vendor %s invited to wedding %s for %s", result.vendor_id, wedding_id, category)
        await notify_safely(
            self.notification_sink,
            user_id=vendor_user_id,
            type=NotificationType.INVITATION,
            title="New wedding invitation",
            message=f"You have been invited to provide {category} for {wedding_name}",
            action_url=f"{settings.frontend_url}/vendor/invitations/{result.id}",
        )
        return result

    async def accept_vendor_invitation(
        self, invitation_id: UUID, user_id: UUID
    ) -> VendorInvitationDTO:
        return await self._respond(invitation_id, user_id, InvitationStatus.ACCEPTED)

    async def reject_vendor_invitation(
        self, invitation_id: UUID, user_id: UUID
    ) -> VendorInvitationDTO:
        return await self._respond(invitation_id, user_id, InvitationStatus.REJECTED)

    async def _respond(
        self, invitation_id: UUID, user_id: UUID, new_status: InvitationStatus
    ) -> VendorInvitationDTO:
        now = self.clock()
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            invitation = await session.get(VendorInvitation, invitation_id)
            if invitation is None:
                raise NotFoundError("Vendor invitation", invitation_id)
            check_can_respond(invitation_id, invitation.status, invitation.expires_at, now)
            profile = await session.get(VendorProfile, invitation.vendor_id)
            if profile is None or profile.user_id != user_id:
                raise AuthorizationError("This invitation was sent to a different vendor")

            await transition(session, VendorInvitation, invitation.uuid, new_status, now)
            await session.refresh(invitation)
            result = VendorInvitationDTO.from_invitation(invitation, now)
            business_name = profile.business_name

        accepted = new_status == InvitationStatus.ACCEPTED
        logger.info("Vendor invitation %s %s", invitation_id, new_status.value)
        await notify_safely(
            self.notification_sink,
            user_id=result.invited_by,
            type=NotificationType.ACCEPTANCE if accepted else NotificationType.REJECTION,
            title="Vendor accepted" if accepted else "Vendor declined",
            message=(
                f"{business_name} {'accepted' if accepted else 'declined'} "
                f"your invitation for {result.category}"
            ),
        )
        return result
