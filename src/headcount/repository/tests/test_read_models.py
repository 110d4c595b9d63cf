from uuid import uuid4

import pytest

from src.errors import NotFoundError, ValidationError
from src.guests.dtos import RSVPStatus, Side
from src.guests.features.submit_rsvp.write_model import SqlRSVPWriteModel
from src.headcount.features.compute_snapshot.write_model import SqlSnapshotWriteModel
from src.headcount.repository.read_models import SqlHeadcountReadModel


@pytest.fixture
def read_model():
    return SqlHeadcountReadModel()


async def test_latest_snapshot_per_side(read_model, make_wedding, make_guest, clock):
    wedding = await make_wedding()
    guest_id = await make_guest(wedding.wedding_id, side=Side.GROOM)
    write_model = SqlSnapshotWriteModel(clock=clock)
    await write_model.compute_snapshot(wedding.event_id)
    groom = await write_model.compute_snapshot(wedding.event_id, side=Side.GROOM)
    clock.advance(hours=1)
    await SqlRSVPWriteModel(clock=clock).submit_or_update_rsvp(
        wedding.event_id, guest_id, wedding.wedding_id, RSVPStatus.ATTENDING, 2, 0, 0
    )
    newest = await write_model.compute_snapshot(wedding.event_id)

    latest = await read_model.latest_snapshot(wedding.event_id)
    latest_groom = await read_model.latest_snapshot(wedding.event_id, Side.GROOM)

    assert latest.id == newest.id
    assert latest.calculated_headcount == 2.0
    assert latest_groom.id == groom.id
    assert latest_groom.total_pending == 1
    assert await read_model.latest_snapshot(wedding.event_id, Side.BRIDE) is None


async def test_overview_sums_latest_whole_event_snapshots(
    read_model, make_wedding, make_guest, make_event, clock
):
    wedding = await make_wedding()
    sangeet_id = await make_event(wedding.wedding_id)
    guest_id = await make_guest(wedding.wedding_id)
    snapshots = SqlSnapshotWriteModel(clock=clock)
    rsvps = SqlRSVPWriteModel(clock=clock)
    await rsvps.submit_or_update_rsvp(
        wedding.event_id, guest_id, wedding.wedding_id, RSVPStatus.ATTENDING, 1, 1, 0
    )
    await snapshots.compute_snapshot(wedding.event_id)
    clock.advance(minutes=5)
    await rsvps.submit_or_update_rsvp(
        wedding.event_id, guest_id, wedding.wedding_id, RSVPStatus.ATTENDING, 2, 1, 0
    )
    await snapshots.compute_snapshot(wedding.event_id)
    await snapshots.compute_snapshot(wedding.event_id, side=Side.GROOM)

    overview = await read_model.wedding_headcount_overview(wedding.wedding_id)

    by_event = {item.event_id: item.snapshot for item in overview.events}
    assert by_event[sangeet_id] is None
    assert by_event[wedding.event_id].calculated_headcount == 2.75
    assert overview.total_headcount == 2.75
    assert overview.total_attending == 1


async def test_overview_of_unknown_wedding(read_model):
    with pytest.raises(NotFoundError):
        await read_model.wedding_headcount_overview(uuid4())


async def test_latest_snapshot_for_unknown_side(read_model, make_wedding):
    wedding = await make_wedding()

    with pytest.raises(ValidationError):
        await read_model.latest_snapshot(wedding.event_id, "neighbours")
