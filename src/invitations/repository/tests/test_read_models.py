import pytest

from src.invitations.features.guest_invitation.write_model import SqlGuestInvitationWriteModel
from src.invitations.features.partner_invitation.write_model import (
    SqlPartnerInvitationWriteModel,
)
from src.invitations.repository.read_models import SqlInvitationReadModel
from src.invitations.state_machine import InvitationStatus


@pytest.fixture
def read_model(clock):
    return SqlInvitationReadModel(clock=clock)


async def test_partner_invitation_by_code(read_model, make_user, clock):
    sender_id = await make_user(email="priya@example.com")
    created = await SqlPartnerInvitationWriteModel(clock=clock).create_partner_invitation(
        sender_id, "arjun@example.com"
    )

    invitation = await read_model.get_partner_invitation(f" {created.code.lower()} ")

    assert invitation.id == created.invitation_id
    assert invitation.status == InvitationStatus.PENDING
    assert await read_model.get_partner_invitation("ZZZZZZ") is None


async def test_pending_invitation_reads_as_expired(read_model, make_user, clock):
    sender_id = await make_user(email="priya@example.com")
    await SqlPartnerInvitationWriteModel(clock=clock).create_partner_invitation(
        sender_id, "arjun@example.com"
    )
    clock.advance(hours=49)

    [invitation] = await read_model.list_sent_partner_invitations(sender_id)

    assert invitation.status == InvitationStatus.EXPIRED


async def test_received_partner_invitations_match_email_case_insensitively(
    read_model, make_user, clock
):
    sender_id = await make_user(email="priya@example.com")
    receiver_id = await make_user(email="Arjun@Example.com")
    other_id = await make_user(email="arjun_x@example.com")
    await SqlPartnerInvitationWriteModel(clock=clock).create_partner_invitation(
        sender_id, "arjun@example.com"
    )

    received = await read_model.list_received_partner_invitations(receiver_id)

    assert [i.sender_id for i in received] == [sender_id]
    assert await read_model.list_received_partner_invitations(other_id) == []


async def test_guest_invitations_are_scoped_to_wedding(read_model, make_wedding, clock):
    wedding = await make_wedding()
    other = await make_wedding()
    write_model = SqlGuestInvitationWriteModel(clock=clock)
    await write_model.create_guest_invitation(
        wedding.wedding_id, wedding.user1_id, "first@example.com", "First Guest", "friend", "groom"
    )
    await write_model.create_guest_invitation(
        other.wedding_id, other.user1_id, "second@example.com", "Second Guest", "friend", "groom"
    )

    invitations = await read_model.list_guest_invitations(wedding.wedding_id)

    assert [i.receiver_email for i in invitations] == ["first@example.com"]
