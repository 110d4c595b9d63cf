"""Tests for SqlGuestRegistryWriteModel."""

from uuid import uuid4

import pytest
from sqlalchemy import func, select

from src.config.database import async_session_maker
from src.errors import AuthorizationError, NotFoundError, ValidationError
from src.guests.dtos import GuestRole, GuestStatus, InviteGuestDTO, RSVPStatus, Side
from src.guests.features.manage_guests.write_model import SqlGuestRegistryWriteModel
from src.guests.repository.orm_models import RSVP, Guest


@pytest.fixture
def write_model(clock):
    return SqlGuestRegistryWriteModel(clock=clock)


async def count_rows(model, *where):
    async with async_session_maker() as session:
        return await session.scalar(select(func.count()).select_from(model).where(*where))


async def test_invite_guest(write_model, make_wedding, clock):
    wedding = await make_wedding()

    guest = await write_model.invite_guest(
        wedding.wedding_id,
        InviteGuestDTO(
            full_name="  Rohan Gupta ",
            side=Side.BRIDE,
            role=GuestRole.COUSIN,
            email="Rohan@Example.com",
            dietary_preferences="vegetarian, , jain",
        ),
        caller_id=wedding.user1_id,
    )

    assert guest.full_name == "Rohan Gupta"
    assert guest.email == "rohan@example.com"
    assert guest.status == GuestStatus.INVITED
    assert guest.invitation_sent_at == clock.now
    assert guest.invited_by == wedding.user1_id
    assert guest.dietary_preferences == ["vegetarian", "jain"]
    assert guest.can_invite_others is False


async def test_add_guest_without_invitation(write_model, make_wedding):
    wedding = await make_wedding()

    guest = await write_model.add_guest(wedding.wedding_id, InviteGuestDTO(full_name="Rohan Gupta"))

    assert guest.status == GuestStatus.PENDING
    assert guest.invitation_sent_at is None
    assert guest.side == Side.GROOM
    assert guest.role == GuestRole.FRIEND


@pytest.mark.parametrize(
    "role, expected",
    [(GuestRole.PARENT, True), (GuestRole.SIBLING, True), (GuestRole.UNCLE, False)],
)
async def test_can_invite_others_defaults_by_role(write_model, make_wedding, role, expected):
    wedding = await make_wedding()

    guest = await write_model.invite_guest(
        wedding.wedding_id, InviteGuestDTO(full_name="Family Member", role=role)
    )

    assert guest.can_invite_others is expected


async def test_explicit_can_invite_others_wins(write_model, make_wedding):
    wedding = await make_wedding()

    guest = await write_model.invite_guest(
        wedding.wedding_id,
        InviteGuestDTO(full_name="Anil Sharma", role=GuestRole.PARENT, can_invite_others=False),
    )

    assert guest.can_invite_others is False


@pytest.mark.parametrize(
    "details",
    [
        InviteGuestDTO(full_name="Al"),
        InviteGuestDTO(full_name="   "),
        InviteGuestDTO(full_name="Rohan Gupta", side=Side.BOTH),
        InviteGuestDTO(full_name="Rohan Gupta", role=GuestRole.BRIDE),
        InviteGuestDTO(full_name="Rohan Gupta", side="aunt"),
        InviteGuestDTO(full_name="Rohan Gupta", age=-1),
    ],
)
async def test_invalid_guest_details(write_model, make_wedding, details):
    wedding = await make_wedding()

    with pytest.raises(ValidationError):
        await write_model.invite_guest(wedding.wedding_id, details)

    assert await count_rows(Guest) == 0


async def test_invite_to_unknown_wedding(write_model):
    with pytest.raises(NotFoundError):
        await write_model.invite_guest(uuid4(), InviteGuestDTO(full_name="Rohan Gupta"))


async def test_update_guest_fields(write_model, make_wedding, make_guest):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id)

    guest = await write_model.update_guest(
        guest_id,
        {"side": "both", "role": "groom", "is_vip": True, "dietary_preferences": ["vegan"]},
    )

    assert guest.side == Side.BOTH
    assert guest.role == GuestRole.GROOM
    assert guest.is_vip is True
    assert guest.dietary_preferences == ["vegan"]
    assert guest.full_name == "Meera Kapoor"


@pytest.mark.parametrize(
    "patch",
    [
        {"status": "accepted"},
        {"wedding_id": str(uuid4())},
        {"full_name": "Mi"},
        {"is_vip": None},
        {"role": "neighbour"},
    ],
)
async def test_update_guest_rejects_bad_patch(write_model, make_wedding, make_guest, patch):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id)

    with pytest.raises(ValidationError):
        await write_model.update_guest(guest_id, patch)


async def test_update_unknown_guest(write_model):
    with pytest.raises(NotFoundError):
        await write_model.update_guest(uuid4(), {"phone": "555"})


@pytest.mark.parametrize("start", [GuestStatus.INVITED, GuestStatus.PENDING, GuestStatus.DECLINED])
async def test_record_guest_response(write_model, make_wedding, make_guest, clock, start):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id, status=start)

    guest = await write_model.record_guest_response(guest_id, GuestStatus.ACCEPTED)

    assert guest.status == GuestStatus.ACCEPTED
    assert guest.responded_at == clock.now


@pytest.mark.parametrize("status", [GuestStatus.INVITED, GuestStatus.PENDING, "dunno"])
async def test_record_guest_response_cannot_reset(write_model, make_wedding, make_guest, status):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id, status=GuestStatus.MAYBE)

    with pytest.raises(ValidationError):
        await write_model.record_guest_response(guest_id, status)


async def test_remove_guest_deletes_their_rsvps(write_model, make_wedding, make_guest):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id)
    other_id = await make_guest(wedding.wedding_id, full_name="Kabir Singh")
    async with async_session_maker() as session:
        for gid in (guest_id, other_id):
            session.add(
                RSVP(
                    event_id=wedding.event_id,
                    guest_id=gid,
                    wedding_id=wedding.wedding_id,
                    status=RSVPStatus.ATTENDING,
                    adults_count=1,
                    calculated_headcount=1.0,
                )
            )
        await session.commit()

    await write_model.remove_guest(guest_id)

    assert await count_rows(Guest, Guest.uuid == guest_id) == 0
    assert await count_rows(RSVP, RSVP.guest_id == guest_id) == 0
    assert await count_rows(RSVP, RSVP.guest_id == other_id) == 1


async def test_remove_unknown_guest(write_model):
    with pytest.raises(NotFoundError):
        await write_model.remove_guest(uuid4())


async def test_couple_edits_and_removes_guests(write_model, make_wedding, make_guest):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id)

    guest = await write_model.update_guest(guest_id, {"is_vip": True}, caller_id=wedding.user2_id)
    await write_model.remove_guest(guest_id, caller_id=wedding.user1_id)

    assert guest.is_vip is True
    assert await count_rows(Guest, Guest.uuid == guest_id) == 0


async def test_linked_guest_cannot_edit_or_remove_themselves(
    write_model, make_wedding, make_guest, make_user
):
    wedding = await make_wedding()
    user_id = await make_user(full_name="Kabir Singh")
    guest_id = await make_guest(wedding.wedding_id, full_name="Kabir Singh", user_id=user_id)

    with pytest.raises(AuthorizationError):
        await write_model.update_guest(guest_id, {"is_vip": True}, caller_id=user_id)
    with pytest.raises(AuthorizationError):
        await write_model.remove_guest(guest_id, caller_id=user_id)

    assert await count_rows(Guest, Guest.uuid == guest_id) == 1


async def test_guest_response_by_caller(write_model, make_wedding, make_guest, make_user):
    wedding = await make_wedding()
    user_id = await make_user(full_name="Kabir Singh")
    own_id = await make_guest(wedding.wedding_id, full_name="Kabir Singh", user_id=user_id)
    other_id = await make_guest(wedding.wedding_id)

    own = await write_model.record_guest_response(own_id, GuestStatus.MAYBE, caller_id=user_id)
    by_couple = await write_model.record_guest_response(
        other_id, GuestStatus.ACCEPTED, caller_id=wedding.user1_id
    )

    assert own.status == GuestStatus.MAYBE
    assert by_couple.status == GuestStatus.ACCEPTED
    with pytest.raises(AuthorizationError):
        await write_model.record_guest_response(other_id, GuestStatus.DECLINED, caller_id=user_id)


async def test_other_wedding_couple_cannot_add_guests(write_model, make_wedding):
    wedding = await make_wedding()
    other = await make_wedding()

    with pytest.raises(AuthorizationError):
        await write_model.invite_guest(
            wedding.wedding_id, InviteGuestDTO(full_name="Rohan Gupta"), caller_id=other.user1_id
        )

    assert await count_rows(Guest) == 0
