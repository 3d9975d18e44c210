"""Unit tests for MarkNotificationRead and MarkAllNotificationsRead use cases"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.notifications.mark_notification_read import (
    MarkNotificationRead,
    MarkAllNotificationsRead,
)
from src.domain.notification import Notification, NotificationType


@pytest.fixture
def mock_notification_repo():
    return MagicMock()


@pytest.fixture
def read_notification():
    return Notification(
        id="n1",
        type=NotificationType.EXPIRING_SOON,
        title="Subscription Expiring Soon",
        message="Priya Sharma's Amazon Prime subscription expires on 03/20/2024",
        date=datetime(2024, 3, 15, 12, 0, 0),
        read=True,
        related_id="s1",
        created_at=datetime(2024, 3, 15, 12, 0, 0),
    )


@pytest.mark.asyncio
class TestMarkNotificationRead:
    """Test marking one notification as read"""

    async def test_marks_notification(
        self, mock_uow, mock_notification_repo, read_notification
    ):
        mock_notification_repo.mark_read = AsyncMock(return_value=read_notification)
        use_case = MarkNotificationRead(mock_uow, mock_notification_repo)

        result = await use_case.execute("n1")

        assert result.is_ok()
        assert result.value.id == "n1"
        assert result.value.read is True
        mock_notification_repo.mark_read.assert_called_once_with("n1")
        mock_uow.commit.assert_called_once()

    async def test_unknown_notification(self, mock_uow, mock_notification_repo):
        mock_notification_repo.mark_read = AsyncMock(return_value=None)
        use_case = MarkNotificationRead(mock_uow, mock_notification_repo)

        result = await use_case.execute("missing")

        assert result.is_err()
        assert result.error.code == "NOTIFICATION_NOT_FOUND"
        mock_uow.commit.assert_not_called()

    async def test_store_failure_rolls_back(self, mock_uow, mock_notification_repo):
        mock_notification_repo.mark_read = AsyncMock(side_effect=Exception("db down"))
        use_case = MarkNotificationRead(mock_uow, mock_notification_repo)

        result = await use_case.execute("n1")

        assert result.is_err()
        assert result.error.code == "MARK_READ_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestMarkAllNotificationsRead:
    """Test marking every notification as read"""

    async def test_returns_updated_count(self, mock_uow, mock_notification_repo):
        mock_notification_repo.mark_all_read = AsyncMock(return_value=5)
        use_case = MarkAllNotificationsRead(mock_uow, mock_notification_repo)

        result = await use_case.execute()

        assert result.is_ok()
        assert result.value.updated == 5
        mock_uow.commit.assert_called_once()

    async def test_store_failure_rolls_back(self, mock_uow, mock_notification_repo):
        mock_notification_repo.mark_all_read = AsyncMock(side_effect=Exception("db down"))
        use_case = MarkAllNotificationsRead(mock_uow, mock_notification_repo)

        result = await use_case.execute()

        assert result.is_err()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()
