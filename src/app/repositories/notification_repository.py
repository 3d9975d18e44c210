"""Notification Repository Interface

Defines the contract for notification persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.notification import Notification


class NotificationRepository(ABC):
    """
    Repository interface for Notification persistence

    Implementations must enforce uniqueness of (type, related_id) in the
    store itself. Sync passes are not serialised against each other, so an
    engine-side duplicate check alone can race.
    """

    @abstractmethod
    async def get_all(self) -> List[Notification]:
        """
        Retrieve every notification

        Used as the deduplication snapshot of a sync pass.

        Returns:
            List of all notifications
        """
        pass

    @abstractmethod
    async def get_by_id(self, notification_id: str) -> Optional[Notification]:
        """
        Retrieve notification by ID

        Args:
            notification_id: Notification ID

        Returns:
            Notification if found, None otherwise
        """
        pass

    @abstractmethod
    async def create_many_ignore_duplicates(self, notifications: List[Notification]) -> int:
        """
        Insert notifications, skipping any whose (type, related_id) exists

        A duplicate is not an error: it means another pass got there first.

        Args:
            notifications: Notifications to insert

        Returns:
            Number of notifications actually inserted
        """
        pass

    @abstractmethod
    async def get_paginated(
        self,
        search: Optional[str] = None,
        unread_only: bool = False,
        limit: int = 50,
        offset: int = 0,
    ) -> tuple[list[Notification], int]:
        """
        Retrieve notifications newest first, with pagination

        Args:
            search: Case-insensitive substring matched against title or message
            unread_only: Only return unread notifications
            limit: Maximum number of notifications to return
            offset: Number of notifications to skip

        Returns:
            Tuple of (list of Notification, total count matching the filters)
        """
        pass

    @abstractmethod
    async def count_unread(self) -> int:
        pass

    @abstractmethod
    async def mark_read(self, notification_id: str) -> Optional[Notification]:
        """
        Set the read flag on one notification

        Args:
            notification_id: Notification ID

        Returns:
            Updated Notification if found, None otherwise
        """
        pass

    @abstractmethod
    async def mark_all_read(self) -> int:
        """
        Set the read flag on every unread notification

        Returns:
            Number of notifications updated
        """
        pass
