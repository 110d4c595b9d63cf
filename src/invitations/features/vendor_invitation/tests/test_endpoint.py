"""Tests for the vendor invitation endpoints."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from src.errors import NotFoundError
from src.invitations.dtos import VendorInvitationDTO
from src.invitations.features.vendor_invitation.router import (
    VENDOR_INVITATION_ACCEPT_URL,
    VENDOR_INVITATION_REJECT_URL,
    VENDOR_INVITATIONS_URL,
    get_vendor_invitation_write_model,
)
from src.invitations.features.vendor_invitation.write_model import VendorInvitationWriteModel
from src.invitations.state_machine import InvitationStatus

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=UTC)


class InMemoryVendorInvitationWriteModel(VendorInvitationWriteModel):
    """In-memory write model for testing."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[tuple] = []

    def _invitation(self, status=InvitationStatus.PENDING, **fields):
        values = dict(
            id=uuid4(),
            wedding_id=uuid4(),
            vendor_id=uuid4(),
            invited_by=uuid4(),
            category="florist",
            status=status,
            sent_at=NOW,
            expires_at=NOW + timedelta(days=30),
        )
        values.update(fields)
        return VendorInvitationDTO(**values)

    async def invite_vendor(self, wedding_id, inviter_id, vendor_email, category, message=None, ttl=None):
        self.calls.append(("invite", wedding_id, inviter_id, vendor_email, category))
        if self.error:
            raise self.error
        return self._invitation(
            wedding_id=wedding_id, invited_by=inviter_id, category=category, invitation_message=message
        )

    async def accept_vendor_invitation(self, invitation_id, user_id):
        self.calls.append(("accept", invitation_id, user_id))
        return self._invitation(InvitationStatus.ACCEPTED, id=invitation_id, responded_at=NOW)

    async def reject_vendor_invitation(self, invitation_id, user_id):
        self.calls.append(("reject", invitation_id, user_id))
        return self._invitation(InvitationStatus.REJECTED, id=invitation_id, responded_at=NOW)


@pytest.mark.asyncio
async def test_invite_vendor(client_factory):
    write_model = InMemoryVendorInvitationWriteModel()
    wedding_id, caller_id = uuid4(), uuid4()

    async with client_factory({get_vendor_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            VENDOR_INVITATIONS_URL.format(wedding_id=wedding_id),
            json={"vendor_email": "bloom@example.com", "category": "florist"},
            headers={"X-User-Id": str(caller_id)},
        )

    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    assert write_model.calls == [("invite", wedding_id, caller_id, "bloom@example.com", "florist")]


@pytest.mark.asyncio
async def test_invite_unknown_vendor(client_factory):
    write_model = InMemoryVendorInvitationWriteModel(error=NotFoundError("Vendor", "x@example.com"))

    async with client_factory({get_vendor_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            VENDOR_INVITATIONS_URL.format(wedding_id=uuid4()),
            json={"vendor_email": "x@example.com", "category": "florist"},
            headers={"X-User-Id": str(uuid4())},
        )

    assert response.status_code == 404
    assert response.json()["detail"] == "Vendor 'x@example.com' not found"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "url, expected",
    [(VENDOR_INVITATION_ACCEPT_URL, "accepted"), (VENDOR_INVITATION_REJECT_URL, "rejected")],
)
async def test_vendor_responds(client_factory, url, expected):
    write_model = InMemoryVendorInvitationWriteModel()
    invitation_id, caller_id = uuid4(), uuid4()

    async with client_factory({get_vendor_invitation_write_model: lambda: write_model}) as client:
        response = await client.post(
            url.format(invitation_id=invitation_id), headers={"X-User-Id": str(caller_id)}
        )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == str(invitation_id)
    assert data["status"] == expected
    assert write_model.calls[0][1:] == (invitation_id, caller_id)
