from contextlib import asynccontextmanager
from datetime import UTC, date, datetime, timedelta
from types import SimpleNamespace
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from src.config.database import async_session_manager, engine
from src.guests.dtos import GuestRole, GuestStatus, Side
from src.guests.repository.orm_models import Guest
from src.main import app
from src.models.registry import metadata
from src.models.user import User
from src.notifications.tests.inmemory_sink import InMemoryNotificationSink
from src.weddings.dtos import CoupleStatus, EventType
from src.weddings.repository.orm_models import Couple, Event, Wedding

WEDDING_DATE = date(2027, 2, 14)


class FrozenClock:
    """A clock for write models that only moves when a test advances it."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
async def database():
    """Fresh schema on the test database for every test."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def client_factory():
    @asynccontextmanager
    async def factory(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                yield ac
        finally:
            app.dependency_overrides.clear()

    return factory


@pytest.fixture
async def client(client_factory):
    async with client_factory() as ac:
        yield ac


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(datetime(2026, 6, 1, 12, 0, tzinfo=UTC))


@pytest.fixture
def notification_sink() -> InMemoryNotificationSink:
    return InMemoryNotificationSink()


@pytest.fixture
def make_user():
    async def _make_user(email: str | None = None, full_name: str = "Test User"):
        async with async_session_manager() as session:
            user = User(email=email or f"user-{uuid4().hex[:8]}@example.com", full_name=full_name)
            session.add(user)
            await session.flush()
            return user.uuid

    return _make_user


@pytest.fixture
def make_couple(make_user):
    async def _make_couple(user1_id=None, user2_id=None):
        user1_id = user1_id or await make_user(full_name="Priya Sharma")
        user2_id = user2_id or await make_user(full_name="Arjun Mehta")
        async with async_session_manager() as session:
            couple = Couple(
                user1_id=user1_id,
                user2_id=user2_id,
                status=CoupleStatus.ENGAGED,
                engaged_date=WEDDING_DATE - timedelta(days=200),
            )
            session.add(couple)
            await session.flush()
            return SimpleNamespace(couple_id=couple.uuid, user1_id=user1_id, user2_id=user2_id)

    return _make_couple


@pytest.fixture
def make_event():
    async def _make_event(
        wedding_id,
        name: str = "Sangeet Night",
        event_date: date = WEDDING_DATE,
        auto_generated: bool = False,
        event_type: EventType = EventType.CUSTOM,
    ):
        async with async_session_manager() as session:
            event = Event(
                wedding_id=wedding_id,
                name=name,
                event_type=event_type,
                date=event_date,
                venue="Lakeview Palace",
                city="Udaipur",
                auto_generated=auto_generated,
            )
            session.add(event)
            await session.flush()
            return event.uuid

    return _make_event


@pytest.fixture
def make_wedding(make_couple, make_event):
    """A couple, their wedding and its main (auto-generated) wedding event."""

    async def _make_wedding():
        couple = await make_couple()
        async with async_session_manager() as session:
            wedding = Wedding(
                couple_id=couple.couple_id,
                name="Priya & Arjun",
                date=WEDDING_DATE,
                venue="Lakeview Palace",
                city="Udaipur",
            )
            session.add(wedding)
            await session.flush()
            wedding_id = wedding.uuid
        event_id = await make_event(
            wedding_id, name="Wedding", auto_generated=True, event_type=EventType.WEDDING
        )
        return SimpleNamespace(
            wedding_id=wedding_id,
            event_id=event_id,
            couple_id=couple.couple_id,
            user1_id=couple.user1_id,
            user2_id=couple.user2_id,
        )

    return _make_wedding


@pytest.fixture
def make_guest():
    async def _make_guest(
        wedding_id,
        full_name: str = "Meera Kapoor",
        side: Side = Side.GROOM,
        role: GuestRole = GuestRole.FRIEND,
        status: GuestStatus = GuestStatus.INVITED,
        **fields,
    ):
        async with async_session_manager() as session:
            guest = Guest(
                wedding_id=wedding_id,
                full_name=full_name,
                side=side,
                role=role,
                status=status,
                **fields,
            )
            session.add(guest)
            await session.flush()
            return guest.uuid

    return _make_guest
