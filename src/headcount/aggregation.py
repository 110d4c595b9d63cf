"""Roll a wedding's guests and their RSVPs for one event into snapshot totals."""

from dataclasses import dataclass, field

from src.guests.dtos import GuestStatus, RSVPStatus
from src.headcount.calculator import compute_headcount

DIETARY_TAGS = ("vegetarian", "vegan", "halal")


@dataclass(frozen=True)
class GuestRSVPRow:
    """One guest of the wedding, with their RSVP for the event if they sent one."""

    guest_status: GuestStatus
    guest_dietary_preferences: list[str] = field(default_factory=list)
    rsvp_status: RSVPStatus | None = None
    adults_count: int = 0
    teens_count: int = 0
    children_count: int = 0
    rsvp_dietary_preferences: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class HeadcountTotals:
    total_invited: int = 0
    total_attending: int = 0
    total_declined: int = 0
    total_maybe: int = 0
    total_pending: int = 0
    adults_count: int = 0
    teens_count: int = 0
    children_count: int = 0
    calculated_headcount: float = 0.0
    vegetarian_count: int = 0
    vegan_count: int = 0
    halal_count: int = 0


def answer_for(row: GuestRSVPRow) -> RSVPStatus:
    """The answer a guest counts under.

    No RSVP means pending. A guest who declined the wedding counts as not
    attending whatever their RSVP says.
    """
    if row.rsvp_status is None:
        return RSVPStatus.PENDING
    status = RSVPStatus(row.rsvp_status)
    if status == RSVPStatus.ATTENDING and GuestStatus(row.guest_status) == GuestStatus.DECLINED:
        return RSVPStatus.NOT_ATTENDING
    return status


def dietary_tags(row: GuestRSVPRow) -> set[str]:
    preferences = row.rsvp_dietary_preferences or row.guest_dietary_preferences or []
    return {tag.strip().lower() for tag in preferences if tag and tag.strip()}


def tally(rows) -> HeadcountTotals:
    by_status = {status: 0 for status in RSVPStatus}
    adults = teens = children = 0
    headcount = 0.0
    dietary = {tag: 0 for tag in DIETARY_TAGS}
    invited = 0

    for row in rows:
        invited += 1
        answer = answer_for(row)
        by_status[answer] += 1
        if answer != RSVPStatus.ATTENDING:
            continue
        adults += row.adults_count
        teens += row.teens_count
        children += row.children_count
        headcount += compute_headcount(row.adults_count, row.teens_count, row.children_count)
        tags = dietary_tags(row)
        for tag in DIETARY_TAGS:
            if tag in tags:
                dietary[tag] += 1

    return HeadcountTotals(
        total_invited=invited,
        total_attending=by_status[RSVPStatus.ATTENDING],
        total_declined=by_status[RSVPStatus.NOT_ATTENDING],
        total_maybe=by_status[RSVPStatus.MAYBE],
        total_pending=by_status[RSVPStatus.PENDING],
        adults_count=adults,
        teens_count=teens,
        children_count=children,
        calculated_headcount=headcount,
        vegetarian_count=dietary["vegetarian"],
        vegan_count=dietary["vegan"],
        halal_count=dietary["halal"],
    )
