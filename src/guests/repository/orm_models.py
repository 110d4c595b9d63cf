from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.guests.dtos import GuestRole, GuestStatus, RSVPStatus, Side
from src.models.base import Base, TimeStamp


class Guest(Base, TimeStamp):
    __tablename__ = TableNames.GUESTS.value

    wedding_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDINGS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Set once the guest has an account; the RSVP page looks guests up by it
    user_id: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    side: Mapped[Side] = mapped_column(
        Enum(Side, name="guest_side_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    role: Mapped[GuestRole] = mapped_column(
        Enum(GuestRole, name="guest_role_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    invited_by: Mapped[UUID | None] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="SET NULL"),
        nullable=True,
    )

    # Permission flags
    can_invite_others: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    plus_one_allowed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    plus_one_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_vip: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    under_18: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)

    dietary_preferences: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    special_requirements: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[GuestStatus] = mapped_column(
        Enum(GuestStatus, name="guest_status_enum", values_callable=lambda x: [e.value for e in x]),
        default=GuestStatus.PENDING,
        nullable=False,
    )
    invitation_sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )
    responded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, default=None
    )

    def __repr__(self) -> str:
        return f"<Guest {self.full_name} - {self.status}>"


class RSVP(Base, TimeStamp):
    __tablename__ = TableNames.RSVPS.value
    __table_args__ = (UniqueConstraint("event_id", "guest_id", name="uq_rsvps_event_guest"),)

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    guest_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.GUESTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    wedding_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDINGS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    status: Mapped[RSVPStatus] = mapped_column(
        Enum(RSVPStatus, name="rsvp_status_enum", values_callable=lambda x: [e.value for e in x]),
        default=RSVPStatus.PENDING,
        nullable=False,
    )
    adults_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    teens_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    children_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    # Derived from the three counts on every write, never set directly
    calculated_headcount: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    dietary_preferences: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    special_requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    rsvp_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<RSVP event={self.event_id} guest={self.guest_id} {self.status}>"
