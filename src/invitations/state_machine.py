"""Lifecycle shared by partner, guest and vendor invitations.

``pending`` moves to ``accepted`` or ``rejected`` exactly once. ``expired`` is
never stored: a pending invitation whose ``expires_at`` has passed is reported
as expired when read, and cannot be answered any more.
"""

import secrets
import string
from datetime import datetime
from enum import Enum

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.errors import InvitationAlreadyRespondedError, InvitationExpiredError
from src.models.base import as_utc

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_LENGTH = 6


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


def generate_invitation_code() -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def normalize_code(code: str) -> str:
    """Codes are shared by hand, so match them ignoring case and stray spaces."""
    return code.strip().upper()


def is_expired(expires_at: datetime, now: datetime) -> bool:
    return now > as_utc(expires_at)


def effective_status(
    status: InvitationStatus | str, expires_at: datetime, now: datetime
) -> InvitationStatus:
    status = InvitationStatus(status)
    if status == InvitationStatus.PENDING and is_expired(expires_at, now):
        return InvitationStatus.EXPIRED
    return status


def check_can_respond(
    identifier: object,
    status: InvitationStatus | str,
    expires_at: datetime,
    now: datetime,
) -> None:
    """Raise unless the invitation can still be accepted or rejected.

    Expiry is checked first and wins whatever the stored status says.
    """
    status = InvitationStatus(status)
    if status == InvitationStatus.EXPIRED or is_expired(expires_at, now):
        raise InvitationExpiredError(identifier)
    if status != InvitationStatus.PENDING:
        raise InvitationAlreadyRespondedError(identifier, status.value)


async def transition(
    session: AsyncSession,
    model,
    invitation_id,
    new_status: InvitationStatus,
    now: datetime,
    identifier: object = None,
    **values,
) -> None:
    """Move a pending invitation to ``new_status`` with a conditional update.

    Only one of several concurrent responders can match ``status = 'pending'``;
    the others see no affected row and get InvitationAlreadyRespondedError.
    """
    result = await session.execute(
        update(model)
        .where(model.uuid == invitation_id, model.status == InvitationStatus.PENDING)
        .values(status=new_status, responded_at=now, updated_at=now, **values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        current = await session.scalar(select(model.status).where(model.uuid == invitation_id))
        raise InvitationAlreadyRespondedError(
            identifier if identifier is not None else invitation_id,
            InvitationStatus(current).value if current is not None else "removed",
        )
