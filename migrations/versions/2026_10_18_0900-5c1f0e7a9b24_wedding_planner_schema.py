"""wedding_planner_schema

Revision ID: 5c1f0e7a9b24
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy_utils import UUIDType

# revision identifiers, used by Alembic.
revision: str = "5c1f0e7a9b24"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

SIDES = ("groom", "bride", "both")
ROLES = (
    "groom",
    "bride",
    "parent",
    "sibling",
    "uncle",
    "aunt",
    "cousin",
    "grandparent",
    "friend",
    "colleague",
    "other",
)
INVITATION_STATUSES = ("pending", "accepted", "rejected", "expired")

# Dropped in reverse on downgrade
TABLES = [
    "users",
    "couples",
    "weddings",
    "events",
    "guests",
    "rsvps",
    "headcount_snapshots",
    "partner_invitations",
    "guest_invitations",
    "vendor_profiles",
    "vendor_invitations",
    "notifications",
]
ENUMS = [
    "couple_status_enum",
    "wedding_mode_enum",
    "wedding_status_enum",
    "event_type_enum",
    "guest_side_enum",
    "guest_role_enum",
    "guest_status_enum",
    "rsvp_status_enum",
    "snapshot_side_enum",
    "partner_invitation_status_enum",
    "guest_invitation_role_enum",
    "guest_invitation_side_enum",
    "guest_invitation_status_enum",
    "vendor_invitation_status_enum",
    "notification_type_enum",
]


def _columns():
    return [
        sa.Column("uuid", UUIDType(), primary_key=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
    ]


def _fk(column, target, ondelete="CASCADE", nullable=False):
    return sa.Column(
        column,
        UUIDType(),
        sa.ForeignKey(f"{target}.uuid", ondelete=ondelete),
        nullable=nullable,
    )


def _index(table, column, unique=False):
    op.create_index(op.f(f"ix_{table}_{column}"), table, [column], unique=unique)


def upgrade() -> None:
    op.create_table(
        "users",
        *_columns(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=True),
    )
    _index("users", "email", unique=True)

    op.create_table(
        "couples",
        *_columns(),
        _fk("user1_id", "users"),
        _fk("user2_id", "users"),
        sa.Column(
            "status",
            sa.Enum("engaged", "married", "separated", "divorced", name="couple_status_enum"),
            nullable=False,
        ),
        sa.Column("engaged_date", sa.Date, nullable=False),
        sa.Column("married_date", sa.Date, nullable=True),
    )
    _index("couples", "user1_id")
    _index("couples", "user2_id")

    op.create_table(
        "weddings",
        *_columns(),
        _fk("couple_id", "couples"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("venue", sa.String(255), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column(
            "mode", sa.Enum("combined", "separate", name="wedding_mode_enum"), nullable=False
        ),
        sa.Column("budget_limit", sa.Float, nullable=True),
        sa.Column("guest_limit", sa.Integer, nullable=False),
        sa.Column(
            "status",
            sa.Enum(
                "planning", "confirmed", "completed", "cancelled", name="wedding_status_enum"
            ),
            nullable=False,
        ),
    )
    _index("weddings", "couple_id", unique=True)

    op.create_table(
        "events",
        *_columns(),
        _fk("wedding_id", "weddings"),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column(
            "event_type",
            sa.Enum(
                "engagement",
                "save_the_date",
                "haldi",
                "mehendi",
                "sangeet",
                "wedding",
                "reception",
                "custom",
                name="event_type_enum",
            ),
            nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("start_time", sa.Time, nullable=True),
        sa.Column("end_time", sa.Time, nullable=True),
        sa.Column("venue", sa.String(255), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("dress_code", sa.String(255), nullable=True),
        sa.Column("rsvp_deadline", sa.Date, nullable=True),
        sa.Column("auto_generated", sa.Boolean, nullable=False),
        _fk("created_by", "users", ondelete="SET NULL", nullable=True),
    )
    _index("events", "wedding_id")

    op.create_table(
        "guests",
        *_columns(),
        _fk("wedding_id", "weddings"),
        _fk("user_id", "users", ondelete="SET NULL", nullable=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("side", sa.Enum(*SIDES, name="guest_side_enum"), nullable=False),
        sa.Column("role", sa.Enum(*ROLES, name="guest_role_enum"), nullable=False),
        _fk("invited_by", "users", ondelete="SET NULL", nullable=True),
        sa.Column("can_invite_others", sa.Boolean, nullable=False),
        sa.Column("plus_one_allowed", sa.Boolean, nullable=False),
        sa.Column("plus_one_name", sa.String(255), nullable=True),
        sa.Column("is_vip", sa.Boolean, nullable=False),
        sa.Column("under_18", sa.Boolean, nullable=False),
        sa.Column("age", sa.Integer, nullable=True),
        sa.Column("dietary_preferences", sa.JSON, nullable=True),
        sa.Column("special_requirements", sa.Text, nullable=True),
        sa.Column(
            "status",
            sa.Enum(
                "invited", "accepted", "declined", "maybe", "pending", name="guest_status_enum"
            ),
            nullable=False,
        ),
        sa.Column("invitation_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
    )
    for column in ("wedding_id", "user_id", "full_name", "email"):
        _index("guests", column)

    op.create_table(
        "rsvps",
        *_columns(),
        _fk("event_id", "events"),
        _fk("guest_id", "guests"),
        _fk("wedding_id", "weddings"),
        sa.Column(
            "status",
            sa.Enum("attending", "not_attending", "maybe", "pending", name="rsvp_status_enum"),
            nullable=False,
        ),
        sa.Column("adults_count", sa.Integer, nullable=False),
        sa.Column("teens_count", sa.Integer, nullable=False),
        sa.Column("children_count", sa.Integer, nullable=False),
        sa.Column("calculated_headcount", sa.Float, nullable=False),
        sa.Column("dietary_preferences", sa.JSON, nullable=True),
        sa.Column("special_requirements", sa.Text, nullable=True),
        sa.Column("rsvp_notes", sa.Text, nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("event_id", "guest_id", name="uq_rsvps_event_guest"),
    )
    for column in ("event_id", "guest_id", "wedding_id"):
        _index("rsvps", column)

    op.create_table(
        "headcount_snapshots",
        *_columns(),
        _fk("event_id", "events"),
        _fk("wedding_id", "weddings"),
        sa.Column("side", sa.Enum(*SIDES, name="snapshot_side_enum"), nullable=True),
        *[
            sa.Column(column, sa.Integer, nullable=False)
            for column in (
                "total_invited",
                "total_attending",
                "total_declined",
                "total_maybe",
                "total_pending",
                "adults_count",
                "teens_count",
                "children_count",
            )
        ],
        sa.Column("calculated_headcount", sa.Float, nullable=False),
        sa.Column("vegetarian_count", sa.Integer, nullable=False),
        sa.Column("vegan_count", sa.Integer, nullable=False),
        sa.Column("halal_count", sa.Integer, nullable=False),
        sa.Column("snapshot_date", sa.DateTime(timezone=True), nullable=False),
    )
    for column in ("event_id", "wedding_id", "snapshot_date"):
        _index("headcount_snapshots", column)

    op.create_table(
        "partner_invitations",
        *_columns(),
        sa.Column("code", sa.String(6), nullable=False),
        _fk("sender_id", "users"),
        sa.Column("receiver_email", sa.String(255), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*INVITATION_STATUSES, name="partner_invitation_status_enum"),
            nullable=False,
        ),
        sa.Column("rejection_count", sa.Integer, nullable=False),
        sa.Column("message", sa.Text, nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
    )
    _index("partner_invitations", "code", unique=True)
    for column in ("sender_id", "receiver_email", "status"):
        _index("partner_invitations", column)

    op.create_table(
        "guest_invitations",
        *_columns(),
        _fk("wedding_id", "weddings"),
        _fk("sender_id", "users"),
        sa.Column("receiver_email", sa.String(255), nullable=False),
        sa.Column("receiver_name", sa.String(255), nullable=False),
        sa.Column("role", sa.Enum(*ROLES, name="guest_invitation_role_enum"), nullable=False),
        sa.Column("side", sa.Enum(*SIDES, name="guest_invitation_side_enum"), nullable=False),
        sa.Column("can_invite_others", sa.Boolean, nullable=False),
        sa.Column("personal_message", sa.Text, nullable=True),
        sa.Column(
            "status",
            sa.Enum(*INVITATION_STATUSES, name="guest_invitation_status_enum"),
            nullable=False,
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
    )
    for column in ("wedding_id", "receiver_email", "status"):
        _index("guest_invitations", column)

    op.create_table(
        "vendor_profiles",
        *_columns(),
        _fk("user_id", "users"),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column("city", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
    )
    _index("vendor_profiles", "user_id", unique=True)

    op.create_table(
        "vendor_invitations",
        *_columns(),
        _fk("wedding_id", "weddings"),
        _fk("vendor_id", "vendor_profiles"),
        _fk("invited_by", "users"),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column(
            "status",
            sa.Enum(*INVITATION_STATUSES, name="vendor_invitation_status_enum"),
            nullable=False,
        ),
        sa.Column("invitation_message", sa.Text, nullable=True),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "wedding_id",
            "vendor_id",
            "category",
            name="uq_vendor_invitations_wedding_vendor_category",
        ),
    )
    for column in ("wedding_id", "vendor_id", "status"):
        _index("vendor_invitations", column)

    op.create_table(
        "notifications",
        *_columns(),
        _fk("user_id", "users"),
        sa.Column(
            "type",
            sa.Enum(
                "invitation",
                "rejection",
                "acceptance",
                "wedding_created",
                "wedding_cancelled",
                name="notification_type_enum",
            ),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("read", sa.Boolean, nullable=False),
        sa.Column("action_url", sa.String(500), nullable=True),
    )
    _index("notifications", "user_id")


def downgrade() -> None:
    for table in reversed(TABLES):
        op.drop_table(table)
    bind = op.get_bind()
    for name in ENUMS:
        sa.Enum(name=name).drop(bind, checkfirst=True)
