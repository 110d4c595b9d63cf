"""Tests for the headcount endpoints."""

from uuid import uuid4

import pytest

from src.guests.dtos import Side
from src.headcount.features.compute_snapshot.router import (
    EVENT_SNAPSHOTS_URL,
    LATEST_SNAPSHOT_URL,
    WEDDING_HEADCOUNT_REFRESH_URL,
    WEDDING_HEADCOUNT_URL,
)


@pytest.mark.asyncio
async def test_compute_then_read_latest(client, make_wedding, make_guest):
    wedding = await make_wedding()
    await make_guest(wedding.wedding_id, side=Side.BRIDE)

    computed = await client.post(EVENT_SNAPSHOTS_URL.format(event_id=wedding.event_id))
    latest = await client.get(LATEST_SNAPSHOT_URL.format(event_id=wedding.event_id))
    latest_bride = await client.get(
        LATEST_SNAPSHOT_URL.format(event_id=wedding.event_id), params={"side": "bride"}
    )

    assert computed.status_code == 201
    assert computed.json()["total_pending"] == 1
    assert latest.json()["id"] == computed.json()["id"]
    assert latest_bride.status_code == 404


@pytest.mark.asyncio
async def test_compute_for_unknown_event(client):
    response = await client.post(EVENT_SNAPSHOTS_URL.format(event_id=uuid4()))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_refresh_and_overview(client, make_wedding, make_event):
    wedding = await make_wedding()
    await make_event(wedding.wedding_id)

    refreshed = await client.post(
        WEDDING_HEADCOUNT_REFRESH_URL.format(wedding_id=wedding.wedding_id)
    )
    overview = await client.get(WEDDING_HEADCOUNT_URL.format(wedding_id=wedding.wedding_id))

    assert refreshed.status_code == 200
    assert len(refreshed.json()) == 6
    data = overview.json()
    assert len(data["events"]) == 2
    assert all(item["snapshot"]["side"] is None for item in data["events"])
    assert data["total_headcount"] == 0
