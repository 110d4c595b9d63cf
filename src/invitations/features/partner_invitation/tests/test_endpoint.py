"""Tests for the partner invitation endpoints."""

from datetime import UTC, date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from src.errors import (
    InvalidInvitationCodeError,
    InvitationAlreadyRespondedError,
    InvitationEmailMismatchError,
    InvitationExpiredError,
)
from src.invitations.dtos import PartnerInvitationCreatedDTO, PartnerInvitationDTO
from src.invitations.features.partner_invitation.router import (
    PARTNER_INVITATION_ACCEPT_URL,
    PARTNER_INVITATION_REJECT_URL,
    PARTNER_INVITATIONS_URL,
    get_partner_invitation_write_model,
)
from src.invitations.features.partner_invitation.write_model import PartnerInvitationWriteModel
from src.invitations.state_machine import InvitationStatus
from src.weddings.dtos import CoupleDTO, CoupleStatus

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


class InMemoryPartnerInvitationWriteModel(PartnerInvitationWriteModel):
    """In-memory write model for testing."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple] = []

    async def create_partner_invitation(self, sender_id, receiver_email, message=None, ttl=None):
        self.calls.append(("create", sender_id, receiver_email, message))
        return PartnerInvitationCreatedDTO(
            success=True, code="AB12CD", invitation_id=uuid4(), expires_at=NOW + timedelta(hours=48)
        )

    async def accept_partner_invitation(self, code: str, user_id: UUID) -> CoupleDTO:
        self.calls.append(("accept", code, user_id))
        if self.error:
            raise self.error
        return CoupleDTO(
            id=uuid4(),
            user1_id=uuid4(),
            user2_id=user_id,
            status=CoupleStatus.ENGAGED,
            engaged_date=date(2026, 6, 1),
        )

    async def reject_partner_invitation(self, code: str, user_id: UUID) -> PartnerInvitationDTO:
        self.calls.append(("reject", code, user_id))
        if self.error:
            raise self.error
        return PartnerInvitationDTO(
            id=uuid4(),
            code=code,
            sender_id=uuid4(),
            receiver_email="arjun@example.com",
            status=InvitationStatus.REJECTED,
            rejection_count=1,
            expires_at=NOW + timedelta(hours=48),
            responded_at=NOW,
        )


@pytest.mark.asyncio
async def test_create_partner_invitation(client_factory):
    write_model = InMemoryPartnerInvitationWriteModel()
    caller_id = uuid4()

    async with client_factory({get_partner_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            PARTNER_INVITATIONS_URL,
            json={"receiver_email": "arjun@example.com", "message": "Hi!"},
            headers={"X-User-Id": str(caller_id)},
        )

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["code"] == "AB12CD"
    assert write_model.calls == [("create", caller_id, "arjun@example.com", "Hi!")]


@pytest.mark.asyncio
async def test_create_partner_invitation_requires_caller(client_factory):
    write_model = InMemoryPartnerInvitationWriteModel()

    async with client_factory({get_partner_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            PARTNER_INVITATIONS_URL, json={"receiver_email": "arjun@example.com"}
        )

    assert response.status_code == 422
    assert write_model.calls == []


@pytest.mark.asyncio
async def test_create_partner_invitation_rejects_bad_email(client_factory):
    write_model = InMemoryPartnerInvitationWriteModel()

    async with client_factory({get_partner_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            PARTNER_INVITATIONS_URL,
            json={"receiver_email": "not-an-email"},
            headers={"X-User-Id": str(uuid4())},
        )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_accept_partner_invitation(client_factory):
    write_model = InMemoryPartnerInvitationWriteModel()
    caller_id = uuid4()

    async with client_factory({get_partner_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            PARTNER_INVITATION_ACCEPT_URL.format(code="AB12CD"),
            headers={"X-User-Id": str(caller_id)},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["user2_id"] == str(caller_id)
    assert data["status"] == "engaged"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, status_code",
    [
        (InvalidInvitationCodeError("AB12CD"), 404),
        (InvitationExpiredError("AB12CD"), 410),
        (InvitationAlreadyRespondedError("AB12CD", "accepted"), 409),
        (InvitationEmailMismatchError("AB12CD"), 403),
    ],
)
async def test_accept_partner_invitation_errors(client_factory, error, status_code):
    write_model = InMemoryPartnerInvitationWriteModel(error=error)

    async with client_factory({get_partner_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            PARTNER_INVITATION_ACCEPT_URL.format(code="AB12CD"),
            headers={"X-User-Id": str(uuid4())},
        )

    assert response.status_code == status_code
    assert response.json()["detail"] == error.message
    assert response.json()["error"] == type(error).__name__


@pytest.mark.asyncio
async def test_reject_partner_invitation(client_factory):
    write_model = InMemoryPartnerInvitationWriteModel()

    async with client_factory({get_partner_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            PARTNER_INVITATION_REJECT_URL.format(code="AB12CD"),
            headers={"X-User-Id": str(uuid4())},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "rejected"
    assert data["rejection_count"] == 1
