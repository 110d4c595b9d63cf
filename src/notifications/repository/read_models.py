import abc
from uuid import UUID

from sqlalchemy import select, update

from src.config.database import async_session_manager, retry_read_once
from src.models.base import as_utc
from src.notifications.dtos import NotificationDTO, NotificationType
from src.notifications.repository.orm_models import Notification


class NotificationReadModel(abc.ABC):
    @abc.abstractmethod
    async def list_notifications(
        self, user_id: UUID, unread_only: bool = False
    ) -> list[NotificationDTO]:
        raise NotImplementedError

    @abc.abstractmethod
    async def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        raise NotImplementedError


class SqlNotificationReadModel(NotificationReadModel):
    @retry_read_once
    async def list_notifications(
        self, user_id: UUID, unread_only: bool = False
    ) -> list[NotificationDTO]:
        async with async_session_manager() as session:
            stmt = (
                select(Notification)
                .where(Notification.user_id == user_id)
                .order_by(Notification.created_at.desc())
            )
            if unread_only:
                stmt = stmt.where(Notification.read.is_(False))
            result = await session.execute(stmt)
            return [
                NotificationDTO(
                    id=notification.uuid,
                    user_id=notification.user_id,
                    type=NotificationType(notification.type),
                    title=notification.title,
                    message=notification.message,
                    read=notification.read,
                    action_url=notification.action_url,
                    created_at=as_utc(notification.created_at),
                )
                for notification in result.scalars().all()
            ]

    async def mark_read(self, user_id: UUID, notification_id: UUID) -> bool:
        """Mark one of the user's notifications as read. Returns False if it isn't theirs."""
        async with async_session_manager() as session:
            result = await session.execute(
                update(Notification)
                .where(Notification.uuid == notification_id, Notification.user_id == user_id)
                .values(read=True)
            )
            return result.rowcount == 1
