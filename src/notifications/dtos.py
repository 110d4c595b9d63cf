from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class NotificationType(str, Enum):
    INVITATION = "invitation"
    REJECTION = "rejection"
    ACCEPTANCE = "acceptance"
    WEDDING_CREATED = "wedding_created"
    WEDDING_CANCELLED = "wedding_cancelled"


@dataclass(frozen=True)
class NotificationDTO:
    id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    read: bool
    action_url: str | None = None
    created_at: datetime | None = None
