"""Every ORM model, imported in one place so ``metadata`` lists all tables.

Alembic's env.py and the test setup create the schema from this metadata.
"""

from src.guests.repository.orm_models import RSVP, Guest
from src.headcount.repository.orm_models import HeadcountSnapshot
from src.invitations.repository.orm_models import (
    GuestInvitation,
    PartnerInvitation,
    VendorInvitation,
    VendorProfile,
)
from src.models.base import BaseModel
from src.models.user import User
from src.notifications.repository.orm_models import Notification
from src.weddings.repository.orm_models import Couple, Event, Wedding

metadata = BaseModel.metadata

__all__ = [
    "metadata",
    "User",
    "Couple",
    "Wedding",
    "Event",
    "Guest",
    "RSVP",
    "HeadcountSnapshot",
    "PartnerInvitation",
    "GuestInvitation",
    "VendorProfile",
    "VendorInvitation",
    "Notification",
]
