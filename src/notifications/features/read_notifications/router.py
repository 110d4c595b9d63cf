from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from src.auth import get_caller_id
from src.errors import NotFoundError
from src.notifications.dtos import NotificationType
from src.notifications.repository.read_models import (
    NotificationReadModel,
    SqlNotificationReadModel,
)

router = APIRouter()

NOTIFICATIONS_URL = "/api/v1/notifications"
NOTIFICATION_READ_URL = "/api/v1/notifications/{notification_id}/read"


class NotificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    type: NotificationType
    title: str
    message: str
    read: bool
    action_url: str | None = None
    created_at: datetime | None = None


def get_notification_read_model() -> NotificationReadModel:
    return SqlNotificationReadModel()


@router.get(NOTIFICATIONS_URL, response_model=list[NotificationResponse])
async def list_notifications(
    unread_only: bool = False,
    caller_id: UUID = Depends(get_caller_id),
    read_model: NotificationReadModel = Depends(get_notification_read_model),
):
    return await read_model.list_notifications(caller_id, unread_only=unread_only)


@router.post(NOTIFICATION_READ_URL, status_code=204)
async def mark_read(
    notification_id: UUID,
    caller_id: UUID = Depends(get_caller_id),
    read_model: NotificationReadModel = Depends(get_notification_read_model),
) -> None:
    if not await read_model.mark_read(caller_id, notification_id):
        raise NotFoundError("Notification", notification_id)
