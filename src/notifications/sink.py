"""Fire-and-forget notification delivery.

Notifications are written after the triggering transaction has committed and
in a transaction of their own, so a failure here never undoes or fails the
operation that caused it.
"""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from src.config.database import async_session_manager
from src.notifications.dtos import NotificationType
from src.notifications.repository.orm_models import Notification

logger = logging.getLogger(__name__)


class NotificationSink(ABC):
    @abstractmethod
    async def notify(
        self,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        action_url: str | None = None,
    ) -> None:
        raise NotImplementedError


class SqlNotificationSink(NotificationSink):
    """Stores notifications in the notifications table."""

    async def notify(
        self,
        user_id: UUID,
        type: NotificationType,
        title: str,
        message: str,
        action_url: str | None = None,
    ) -> None:
        async with async_session_manager() as session:
            session.add(
                Notification(
                    user_id=user_id,
                    type=type,
                    title=title,
                    message=message,
                    read=False,
                    action_url=action_url,
                )
            )


async def notify_safely(
    sink: NotificationSink | None,
    user_id: UUID,
    type: NotificationType,
    title: str,
    message: str,
    action_url: str | None = None,
) -> bool:
    """Deliver a notification, logging and swallowing any failure.

    Returns whether the notification was delivered.
    """
    if sink is None:
        return False
    try:
        await sink.notify(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            action_url=action_url,
        )
    except Exception:
        logger.exception("Failed to deliver %s notification to user %s", type.value, user_id)
        return False
    return True


def get_notification_sink() -> NotificationSink:
    return SqlNotificationSink()
