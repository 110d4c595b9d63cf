"""Tests for the RSVP endpoints."""

from uuid import uuid4

import pytest

from src.guests.features.submit_rsvp.router import EVENT_RSVPS_URL, GUEST_RSVP_URL
from src.guests.features.submit_rsvp.write_model import RSVP_CREATED_MESSAGE, RSVP_UPDATED_MESSAGE


def rsvp_body(wedding, guest_id, **fields):
    body = {
        "guest_id": str(guest_id),
        "wedding_id": str(wedding.wedding_id),
        "status": "attending",
        "adults_count": 2,
        "teens_count": 1,
        "children_count": 2,
    }
    body.update(fields)
    return body


def as_user(user_id):
    return {"X-User-Id": str(user_id)}


@pytest.mark.asyncio
async def test_submit_then_update_rsvp(client, make_wedding, make_guest):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id)
    url = EVENT_RSVPS_URL.format(event_id=wedding.event_id)

    created = await client.post(
        url, json=rsvp_body(wedding, guest_id), headers=as_user(wedding.user1_id)
    )
    updated = await client.post(
        url, json=rsvp_body(wedding, guest_id, adults_count=1), headers=as_user(wedding.user2_id)
    )

    assert created.status_code == 200
    assert created.json()["message"] == RSVP_CREATED_MESSAGE
    assert created.json()["rsvp"]["calculated_headcount"] == pytest.approx(3.35)
    assert updated.json()["message"] == RSVP_UPDATED_MESSAGE
    assert updated.json()["created"] is False
    assert updated.json()["rsvp"]["display_headcount"] == 2.35


@pytest.mark.asyncio
async def test_linked_guest_answers_for_themselves(client, make_wedding, make_guest, make_user):
    wedding = await make_wedding()
    user_id = await make_user(full_name="Kabir Singh")
    guest_id = await make_guest(wedding.wedding_id, user_id=user_id)

    response = await client.post(
        EVENT_RSVPS_URL.format(event_id=wedding.event_id),
        json=rsvp_body(wedding, guest_id, adults_count=1, teens_count=0, children_count=0),
        headers=as_user(user_id),
    )

    assert response.status_code == 200
    assert response.json()["rsvp"]["guest_id"] == str(guest_id)


@pytest.mark.asyncio
async def test_rsvp_for_someone_else_is_forbidden(client, make_wedding, make_guest, make_user):
    wedding = await make_wedding()
    kabir_id = await make_user(full_name="Kabir Singh")
    await make_guest(wedding.wedding_id, full_name="Kabir Singh", user_id=kabir_id)
    meera_id = await make_guest(wedding.wedding_id)
    url = EVENT_RSVPS_URL.format(event_id=wedding.event_id)

    by_other_guest = await client.post(
        url, json=rsvp_body(wedding, meera_id), headers=as_user(kabir_id)
    )
    by_stranger = await client.post(url, json=rsvp_body(wedding, meera_id), headers=as_user(uuid4()))
    stored = await client.get(GUEST_RSVP_URL.format(event_id=wedding.event_id, guest_id=meera_id))

    assert by_other_guest.status_code == 403
    assert by_other_guest.json()["error"] == "AuthorizationError"
    assert by_stranger.status_code == 403
    assert stored.status_code == 404


@pytest.mark.asyncio
async def test_rsvp_without_caller_is_rejected(client, make_wedding, make_guest):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id)

    response = await client.post(
        EVENT_RSVPS_URL.format(event_id=wedding.event_id), json=rsvp_body(wedding, guest_id)
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_negative_count_is_rejected(client, make_wedding, make_guest):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id)

    response = await client.post(
        EVENT_RSVPS_URL.format(event_id=wedding.event_id),
        json=rsvp_body(wedding, guest_id, children_count=-1),
        headers=as_user(wedding.user1_id),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_rsvp_for_other_wedding_is_forbidden(client, make_wedding, make_guest):
    wedding = await make_wedding()
    other = await make_wedding()
    guest_id = await make_guest(other.wedding_id)

    response = await client.post(
        EVENT_RSVPS_URL.format(event_id=wedding.event_id),
        json=rsvp_body(other, guest_id),
        headers=as_user(other.user1_id),
    )

    assert response.status_code == 403
    assert response.json()["error"] == "AuthorizationError"


@pytest.mark.asyncio
async def test_read_rsvps(client, make_wedding, make_guest):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id)
    await client.post(
        EVENT_RSVPS_URL.format(event_id=wedding.event_id),
        json=rsvp_body(wedding, guest_id, dietary_preferences="vegan, halal"),
        headers=as_user(wedding.user1_id),
    )

    listed = await client.get(EVENT_RSVPS_URL.format(event_id=wedding.event_id))
    single = await client.get(GUEST_RSVP_URL.format(event_id=wedding.event_id, guest_id=guest_id))
    missing = await client.get(GUEST_RSVP_URL.format(event_id=wedding.event_id, guest_id=uuid4()))

    assert [r["guest_id"] for r in listed.json()] == [str(guest_id)]
    assert single.json()["dietary_preferences"] == ["vegan", "halal"]
    assert missing.status_code == 404
