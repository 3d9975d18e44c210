"""Mark notifications as read"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.notification_repository import NotificationRepository
from .dtos import NotificationDTO, MarkAllReadResponseDTO
from .list_notifications import to_notification_dto

logger = logging.getLogger(__name__)


class MarkNotificationRead:
    """Use Case: Set the read flag on one notification"""

    def __init__(self, uow: UnitOfWork, notification_repo: NotificationRepository):
        self.uow = uow
        self.notification_repo = notification_repo

    async def execute(self, notification_id: str) -> Result[NotificationDTO]:
        try:
            notification = await self.notification_repo.mark_read(notification_id)
            if not notification:
                return Return.err(
                    Error(
                        code="NOTIFICATION_NOT_FOUND",
                        message=f"Notification {notification_id} not found",
                    )
                )

            await self.uow.commit()
            return Return.ok(to_notification_dto(notification))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to mark notification {notification_id} as read: {e}")
            return Return.err(
                Error(
                    code="MARK_READ_FAILED",
                    message="Failed to mark notification as read",
                    reason=str(e),
                )
            )


class MarkAllNotificationsRead:
    """Use Case: Set the read flag on every unread notification"""

    def __init__(self, uow: UnitOfWork, notification_repo: NotificationRepository):
        self.uow = uow
        self.notification_repo = notification_repo

    async def execute(self) -> Result[MarkAllReadResponseDTO]:
        try:
            updated = await self.notification_repo.mark_all_read()
            await self.uow.commit()
            return Return.ok(MarkAllReadResponseDTO(updated=updated))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to mark all notifications as read: {e}")
            return Return.err(
                Error(
                    code="MARK_READ_FAILED",
                    message="Failed to mark notifications as read",
                    reason=str(e),
                )
            )
