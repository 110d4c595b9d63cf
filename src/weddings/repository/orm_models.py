import datetime as dt
from uuid import UUID

from sqlalchemy import Boolean, Date, Enum, Float, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.models.base import Base, TimeStamp
from src.weddings.dtos import CoupleStatus, EventType, WeddingMode, WeddingStatus


def _enum(enum_cls, name: str) -> Enum:
    return Enum(enum_cls, name=name, values_callable=lambda x: [e.value for e in x])


class Couple(Base, TimeStamp):
    __tablename__ = TableNames.COUPLES.value

    user1_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user2_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[CoupleStatus] = mapped_column(
        _enum(CoupleStatus, "couple_status_enum"),
        default=CoupleStatus.ENGAGED,
        nullable=False,
    )
    engaged_date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    married_date: Mapped[dt.date | None] = mapped_column(Date, nullable=True)

    def __repr__(self) -> str:
        return f"<Couple {self.user1_id} & {self.user2_id} - {self.status}>"


class Wedding(Base, TimeStamp):
    __tablename__ = TableNames.WEDDINGS.value

    couple_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.COUPLES.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    venue: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    mode: Mapped[WeddingMode] = mapped_column(
        _enum(WeddingMode, "wedding_mode_enum"),
        default=WeddingMode.COMBINED,
        nullable=False,
    )
    budget_limit: Mapped[float | None] = mapped_column(Float, nullable=True)
    guest_limit: Mapped[int] = mapped_column(Integer, nullable=False, default=500)
    status: Mapped[WeddingStatus] = mapped_column(
        _enum(WeddingStatus, "wedding_status_enum"),
        default=WeddingStatus.PLANNING,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Wedding {self.name} on {self.date}>"


class Event(Base, TimeStamp):
    __tablename__ = TableNames.EVENTS.value

    wedding_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDINGS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    event_type: Mapped[EventType] = mapped_column(
        _enum(EventType, "event_type_enum"),
        default=EventType.CUSTOM,
        nullable=False,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[dt.time | None] = mapped_column(Time, nullable=True)
    end_time: Mapped[dt.time | None] = mapped_column(Time, nullable=True)
    venue: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    dress_code: Mapped[str | None] = mapped_column(String(255), nullable=True)
    rsvp_deadline: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    auto_generated: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_by: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Event {self.name} on {self.date}>"
