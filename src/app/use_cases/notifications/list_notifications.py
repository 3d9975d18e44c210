"""ListNotifications Use Case

Reads the stored notifications for the dashboard. Never generates any.
"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.notification import Notification
from .dtos import NotificationDTO, ListNotificationsResponseDTO

MAX_LIMIT = 200


class ListNotifications:
    """
    Use Case: List notifications newest first

    Business Rules:
    1. Search matches title or message, case-insensitively
    2. unread_count covers all notifications, not just the current page
    3. limit is capped at MAX_LIMIT
    """

    def __init__(self, notification_repo: NotificationRepository):
        self.notification_repo = notification_repo

    async def execute(
        self,
        search: Optional[str] = None,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> Result[ListNotificationsResponseDTO]:
        if limit < 1 or offset < 0:
            return Return.err(
                Error(
                    code="VALIDATION_ERROR",
                    message="limit must be >= 1 and offset must be >= 0",
                    reason=f"limit={limit}, offset={offset}",
                )
            )
        limit = min(limit, MAX_LIMIT)
        search = (search or "").strip() or None

        try:
            notifications, total = await self.notification_repo.get_paginated(
                search=search,
                unread_only=unread_only,
                limit=limit,
                offset=offset,
            )
            unread_count = await self.notification_repo.count_unread()

            return Return.ok(
                ListNotificationsResponseDTO(
                    notifications=[to_notification_dto(n) for n in notifications],
                    total=total,
                    unread_count=unread_count,
                    limit=limit,
                    offset=offset,
                )
            )

        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_NOTIFICATIONS_FAILED",
                    message="Failed to list notifications",
                    reason=str(e),
                )
            )


def to_notification_dto(notification: Notification) -> NotificationDTO:
    """Convert Notification entity to DTO"""
    kind = notification.type
    return NotificationDTO(
        id=notification.id,
        type=kind.value if hasattr(kind, "value") else kind,
        title=notification.title,
        message=notification.message,
        date=notification.date,
        read=notification.read,
        related_id=notification.related_id,
        created_at=notification.created_at,
    )
