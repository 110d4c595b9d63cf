"""Write model for the guest registry.

Guests are created by the couple (``invite_guest``/``add_guest``), edited
directly, and moved between invitation states by their responses.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from functools import partial
from typing import Any
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.database import async_session_manager
from src.errors import AuthorizationError, NotFoundError, ValidationError
from src.guests.dtos import (
    DELEGATING_ROLES,
    RESPONDED_STATUSES,
    GuestDTO,
    GuestRole,
    GuestStatus,
    InviteGuestDTO,
    Side,
    parse_dietary_preferences,
)
from src.guests.repository.orm_models import RSVP, Guest
from src.guests.validation import clean_email, clean_full_name, parse_role, parse_side
from src.models.base import utcnow
from src.weddings.repository.lookups import get_wedding, is_couple_member

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {
        "full_name",
        "email",
        "phone",
        "side",
        "role",
        "user_id",
        "can_invite_others",
        "plus_one_allowed",
        "plus_one_name",
        "is_vip",
        "under_18",
        "age",
        "dietary_preferences",
        "special_requirements",
    }
)


def apply_guest_response(guest: Guest, status: GuestStatus | str, now: datetime) -> None:
    """Move a guest to a responded state.

    Invited and pending guests may answer; guests who already answered may
    change their answer. Nobody goes back to invited or pending.
    """
    try:
        status = GuestStatus(status)
    except ValueError:
        raise ValidationError(f"Invalid guest status '{status}'") from None
    if status not in RESPONDED_STATUSES:
        raise ValidationError(
            f"Guest cannot move from {GuestStatus(guest.status).value} to {status.value}"
        )
    guest.status = status
    guest.responded_at = now


async def check_guest_caller(
    session, guest: Guest, caller_id: UUID | None, couple_only: bool = False
) -> None:
    """The couple may act on any of their guests; a linked user only on their own record.

    ``caller_id=None`` is an administrative call (CLI) and is not checked.
    """
    if caller_id is None:
        return
    if not couple_only and guest.user_id is not None and guest.user_id == caller_id:
        return
    wedding = await get_wedding(session, guest.wedding_id)
    if not await is_couple_member(session, wedding, caller_id):
        raise AuthorizationError(f"User {caller_id} cannot act on guest {guest.uuid}")


def _check_age(age: int | None) -> int | None:
    if age is not None and age < 0:
        raise ValidationError("Age cannot be negative")
    return age


class GuestRegistryWriteModel(ABC):
    @abstractmethod
    async def invite_guest(
        self, wedding_id: UUID, details: InviteGuestDTO, caller_id: UUID | None = None
    ) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def add_guest(
        self, wedding_id: UUID, details: InviteGuestDTO, caller_id: UUID | None = None
    ) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def update_guest(
        self, guest_id: UUID, patch: dict[str, Any], caller_id: UUID | None = None
    ) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def record_guest_response(
        self, guest_id: UUID, status: GuestStatus | str, caller_id: UUID | None = None
    ) -> GuestDTO:
        raise NotImplementedError

    @abstractmethod
    async def remove_guest(self, guest_id: UUID, caller_id: UUID | None = None) -> None:
        raise NotImplementedError


class SqlGuestRegistryWriteModel(GuestRegistryWriteModel):
    async_session_manager = staticmethod(partial(async_session_manager))

    def __init__(
        self,
        session_overwrite: AsyncSession | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.session_overwrite = session_overwrite
        self.clock = clock

    async def invite_guest(
        self, wedding_id: UUID, details: InviteGuestDTO, caller_id: UUID | None = None
    ) -> GuestDTO:
        """Add a guest who has been sent an invitation (status ``invited``).

        Raises:
            ValidationError: name shorter than 3 characters, or a side/role the form doesn't offer
            NotFoundError: the wedding does not exist
            AuthorizationError: the caller is not one of the couple
        """
        return await self._create(wedding_id, details, caller_id, invited=True)

    async def add_guest(
        self, wedding_id: UUID, details: InviteGuestDTO, caller_id: UUID | None = None
    ) -> GuestDTO:
        """Add a guest without sending anything (status ``pending``)."""
        return await self._create(wedding_id, details, caller_id, invited=False)

    async def update_guest(
        self, guest_id: UUID, patch: dict[str, Any], caller_id: UUID | None = None
    ) -> GuestDTO:
        unknown = set(patch) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(sorted(unknown))}")

        values = dict(patch)
        if "full_name" in values:
            values["full_name"] = clean_full_name(values["full_name"])
        if "side" in values:
            values["side"] = parse_side(values["side"], allowed=frozenset(Side))
        if "role" in values:
            values["role"] = parse_role(values["role"], allowed=frozenset(GuestRole))
        if "email" in values:
            values["email"] = clean_email(values["email"])
        if "dietary_preferences" in values:
            values["dietary_preferences"] = parse_dietary_preferences(values["dietary_preferences"])
        if "age" in values:
            _check_age(values["age"])
        for flag in ("can_invite_others", "plus_one_allowed", "is_vip", "under_18"):
            if flag in values and values[flag] is None:
                raise ValidationError(f"{flag} cannot be empty")

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await self._get_guest(session, guest_id)
            await check_guest_caller(session, guest, caller_id, couple_only=True)
            for key, value in values.items():
                setattr(guest, key, value)
            await session.flush()
            return GuestDTO.from_guest(guest)

    async def record_guest_response(
        self, guest_id: UUID, status: GuestStatus | str, caller_id: UUID | None = None
    ) -> GuestDTO:
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await self._get_guest(session, guest_id)
            await check_guest_caller(session, guest, caller_id)
            apply_guest_response(guest, status, self.clock())
            await session.flush()
            return GuestDTO.from_guest(guest)

    async def remove_guest(self, guest_id: UUID, caller_id: UUID | None = None) -> None:
        """Delete the guest and every RSVP they submitted."""
        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            guest = await self._get_guest(session, guest_id)
            await check_guest_caller(session, guest, caller_id, couple_only=True)
            await session.execute(delete(RSVP).where(RSVP.guest_id == guest_id))
            await session.delete(guest)
            await session.flush()
        logger.info("Guest %s removed", guest_id)

    async def _create(
        self,
        wedding_id: UUID,
        details: InviteGuestDTO,
        caller_id: UUID | None,
        invited: bool,
    ) -> GuestDTO:
        full_name = clean_full_name(details.full_name)
        side = parse_side(details.side)
        role = parse_role(details.role)
        can_invite_others = details.can_invite_others
        if can_invite_others is None:
            can_invite_others = role in DELEGATING_ROLES
        now = self.clock()

        async with self.async_session_manager(session_overwrite=self.session_overwrite) as session:
            wedding = await get_wedding(session, wedding_id)
            if caller_id is not None and not await is_couple_member(session, wedding, caller_id):
                raise AuthorizationError("Only the couple can add guests to this wedding")
            guest = Guest(
                wedding_id=wedding_id,
                user_id=details.user_id,
                full_name=full_name,
                email=clean_email(details.email),
                phone=(details.phone or "").strip() or None,
                side=side,
                role=role,
                invited_by=caller_id,
                can_invite_others=can_invite_others,
                plus_one_allowed=details.plus_one_allowed,
                plus_one_name=details.plus_one_name if details.plus_one_allowed else None,
                is_vip=details.is_vip,
                under_18=details.under_18,
                age=_check_age(details.age),
                dietary_preferences=parse_dietary_preferences(details.dietary_preferences),
                special_requirements=details.special_requirements,
                status=GuestStatus.INVITED if invited else GuestStatus.PENDING,
                invitation_sent_at=now if invited else None,
                created_at=now,
                updated_at=now,
            )
            session.add(guest)
            await session.flush()
            return GuestDTO.from_guest(guest)

    async def _get_guest(self, session, guest_id: UUID) -> Guest:
        guest = await session.get(Guest, guest_id)
        if guest is None:
            raise NotFoundError("Guest", guest_id)
        return guest
