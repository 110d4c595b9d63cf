from enum import Enum


class TableNames(str, Enum):
    USERS = "users"
    COUPLES = "couples"
    WEDDINGS = "weddings"
    EVENTS = "events"
    GUESTS = "guests"
    RSVPS = "rsvps"
    HEADCOUNT_SNAPSHOTS = "headcount_snapshots"
    PARTNER_INVITATIONS = "partner_invitations"
    GUEST_INVITATIONS = "guest_invitations"
    VENDOR_PROFILES = "vendor_profiles"
    VENDOR_INVITATIONS = "vendor_invitations"
    NOTIFICATIONS = "notifications"
