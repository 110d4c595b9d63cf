"""Tests for the guest invitation endpoints."""

from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from src.errors import AuthorizationError, ConflictError
from src.guests.dtos import GuestDTO, GuestRole, GuestStatus, Side
from src.invitations.dtos import GuestInvitationDTO
from src.invitations.features.guest_invitation.router import (
    GUEST_INVITATION_ACCEPT_URL,
    GUEST_INVITATION_REJECT_URL,
    GUEST_INVITATIONS_URL,
    get_guest_invitation_write_model,
)
from src.invitations.features.guest_invitation.write_model import (
    GuestInvitationWriteModel,
    SqlGuestInvitationWriteModel,
)
from src.invitations.state_machine import InvitationStatus

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


def build_invitation(wedding_id: UUID, sender_id: UUID, status=InvitationStatus.PENDING, **fields):
    values = dict(
        id=uuid4(),
        wedding_id=wedding_id,
        sender_id=sender_id,
        receiver_email="kavya@example.com",
        receiver_name="Kavya Rao",
        role=GuestRole.FRIEND,
        side=Side.BRIDE,
        can_invite_others=False,
        status=status,
        expires_at=NOW + timedelta(days=7),
    )
    values.update(fields)
    return GuestInvitationDTO(**values)


class InMemoryGuestInvitationWriteModel(GuestInvitationWriteModel):
    """In-memory write model for testing."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple] = []

    async def create_guest_invitation(
        self,
        wedding_id,
        sender_id,
        receiver_email,
        receiver_name,
        role,
        side,
        can_invite_others=None,
        message=None,
        ttl=None,
    ):
        self.calls.append(("create", wedding_id, sender_id, receiver_email, role, side))
        if self.error:
            raise self.error
        return build_invitation(
            wedding_id,
            sender_id,
            receiver_email=receiver_email,
            receiver_name=receiver_name,
            role=role,
            side=side,
            can_invite_others=bool(can_invite_others),
            personal_message=message,
        )

    async def accept_guest_invitation(self, invitation_id, user_id):
        self.calls.append(("accept", invitation_id, user_id))
        if self.error:
            raise self.error
        return GuestDTO(
            id=uuid4(),
            wedding_id=uuid4(),
            full_name="Kavya Rao",
            side=Side.BRIDE,
            role=GuestRole.FRIEND,
            status=GuestStatus.INVITED,
            email="kavya@example.com",
            user_id=user_id,
        )

    async def reject_guest_invitation(self, invitation_id, user_id):
        self.calls.append(("reject", invitation_id, user_id))
        if self.error:
            raise self.error
        return build_invitation(
            uuid4(), uuid4(), status=InvitationStatus.REJECTED, id=invitation_id, responded_at=NOW
        )


@pytest.mark.asyncio
async def test_create_guest_invitation(client_factory):
    write_model = InMemoryGuestInvitationWriteModel()
    wedding_id, caller_id = uuid4(), uuid4()

    async with client_factory({get_guest_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            GUEST_INVITATIONS_URL.format(wedding_id=wedding_id),
            json={
                "receiver_email": "kavya@example.com",
                "receiver_name": "Kavya Rao",
                "role": "cousin",
                "side": "bride",
                "personal_message": "Please come!",
            },
            headers={"X-User-Id": str(caller_id)},
        )

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["role"] == "cousin"
    assert data["personal_message"] == "Please come!"
    assert write_model.calls == [
        ("create", wedding_id, caller_id, "kavya@example.com", GuestRole.COUSIN, Side.BRIDE)
    ]


@pytest.mark.asyncio
async def test_create_guest_invitation_rejects_unknown_role(client_factory):
    write_model = InMemoryGuestInvitationWriteModel()

    async with client_factory({get_guest_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            GUEST_INVITATIONS_URL.format(wedding_id=uuid4()),
            json={
                "receiver_email": "kavya@example.com",
                "receiver_name": "Kavya Rao",
                "role": "neighbour",
                "side": "bride",
            },
            headers={"X-User-Id": str(uuid4())},
        )

    assert response.status_code == 422
    assert write_model.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error, status_code",
    [
        (AuthorizationError("You are not allowed to invite guests to this wedding"), 403),
        (ConflictError("kavya@example.com already has a pending invitation"), 409),
    ],
)
async def test_create_guest_invitation_errors(client_factory, error, status_code):
    write_model = InMemoryGuestInvitationWriteModel(error=error)

    async with client_factory({get_guest_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            GUEST_INVITATIONS_URL.format(wedding_id=uuid4()),
            json={
                "receiver_email": "kavya@example.com",
                "receiver_name": "Kavya Rao",
                "role": "friend",
                "side": "groom",
            },
            headers={"X-User-Id": str(uuid4())},
        )

    assert response.status_code == status_code
    assert response.json()["detail"] == error.message


@pytest.mark.asyncio
async def test_accept_guest_invitation(client_factory):
    write_model = InMemoryGuestInvitationWriteModel()
    invitation_id, caller_id = uuid4(), uuid4()

    async with client_factory({get_guest_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            GUEST_INVITATION_ACCEPT_URL.format(invitation_id=invitation_id),
            headers={"X-User-Id": str(caller_id)},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["user_id"] == str(caller_id)
    assert data["status"] == "invited"
    assert write_model.calls == [("accept", invitation_id, caller_id)]


@pytest.mark.asyncio
async def test_reject_guest_invitation(client_factory):
    write_model = InMemoryGuestInvitationWriteModel()
    invitation_id = uuid4()

    async with client_factory({get_guest_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            GUEST_INVITATION_REJECT_URL.format(invitation_id=invitation_id),
            headers={"X-User-Id": str(uuid4())},
        )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(invitation_id)
    assert data["status"] == "rejected"


@pytest.mark.asyncio
async def test_list_guest_invitations(client, make_wedding):
    wedding = await make_wedding()
    await SqlGuestInvitationWriteModel().create_guest_invitation(
        wedding_id=wedding.wedding_id,
        sender_id=wedding.user1_id,
        receiver_email="kavya@example.com",
        receiver_name="Kavya Rao",
        role=GuestRole.FRIEND,
        side=Side.BRIDE,
    )

    response = await client.get(GUEST_INVITATIONS_URL.format(wedding_id=wedding.wedding_id))

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["receiver_email"] == "kavya@example.com"
    assert data[0]["status"] == "pending"
