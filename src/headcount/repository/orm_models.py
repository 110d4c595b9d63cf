from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, Float, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.guests.dtos import Side
from src.models.base import Base, TimeStamp


class HeadcountSnapshot(Base, TimeStamp):
    """Append-only: each recomputation inserts a row, none is ever updated."""

    __tablename__ = TableNames.HEADCOUNT_SNAPSHOTS.value

    event_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.EVENTS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    wedding_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDINGS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # None means the snapshot covers every side
    side: Mapped[Side | None] = mapped_column(
        Enum(Side, name="snapshot_side_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=True,
    )

    total_invited: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_attending: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_declined: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_maybe: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_pending: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    adults_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    teens_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    children_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    calculated_headcount: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)

    vegetarian_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    vegan_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    halal_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    snapshot_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<HeadcountSnapshot event={self.event_id} side={self.side} at {self.snapshot_date}>"
