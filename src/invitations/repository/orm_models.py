from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.config.table_names import TableNames
from src.guests.dtos import GuestRole, Side
from src.invitations.state_machine import InvitationStatus
from src.models.base import Base, TimeStamp


def _status_column(name: str):
    return mapped_column(
        Enum(InvitationStatus, name=name, values_callable=lambda x: [e.value for e in x]),
        default=InvitationStatus.PENDING,
        nullable=False,
        index=True,
    )


class PartnerInvitation(Base, TimeStamp):
    __tablename__ = TableNames.PARTNER_INVITATIONS.value

    code: Mapped[str] = mapped_column(String(6), unique=True, nullable=False, index=True)
    sender_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    receiver_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[InvitationStatus] = _status_column("partner_invitation_status_enum")
    rejection_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<PartnerInvitation {self.code} -> {self.receiver_email} - {self.status}>"


class GuestInvitation(Base, TimeStamp):
    __tablename__ = TableNames.GUEST_INVITATIONS.value

    wedding_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDINGS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    receiver_name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[GuestRole] = mapped_column(
        Enum(GuestRole, name="guest_invitation_role_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    side: Mapped[Side] = mapped_column(
        Enum(Side, name="guest_invitation_side_enum", values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    can_invite_others: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    personal_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[InvitationStatus] = _status_column("guest_invitation_status_enum")
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<GuestInvitation {self.receiver_email} - {self.status}>"


class VendorProfile(Base, TimeStamp):
    __tablename__ = TableNames.VENDOR_PROFILES.value

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    city: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<VendorProfile {self.business_name} ({self.category})>"


class VendorInvitation(Base, TimeStamp):
    __tablename__ = TableNames.VENDOR_INVITATIONS.value
    __table_args__ = (
        UniqueConstraint(
            "wedding_id", "vendor_id", "category", name="uq_vendor_invitations_wedding_vendor_category"
        ),
    )

    wedding_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.WEDDINGS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    vendor_id: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.VENDOR_PROFILES.value}.uuid", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    invited_by: Mapped[UUID] = mapped_column(
        ForeignKey(f"{TableNames.USERS.value}.uuid", ondelete="CASCADE"),
        nullable=False,
    )
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[InvitationStatus] = _status_column("vendor_invitation_status_enum")
    invitation_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<VendorInvitation {self.vendor_id} for {self.wedding_id} - {self.status}>"
