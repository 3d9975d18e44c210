"""Unit tests for GenerateNotifications use case

Tests cover:
- Snapshot reads and rule evaluation
- Notification insert and status update batches
- Duplicate inserts rejected by the store
- Missing reference reporting
- Error handling
"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.notifications.generate_notifications import GenerateNotifications
from src.domain.notification import Notification, NotificationType
from src.domain.notification_rules import NotificationRuleEngine


@pytest.fixture
def mock_subscription_repo():
    repo = MagicMock()
    repo.get_active_subscriptions = AsyncMock(return_value=[])
    repo.mark_expired = AsyncMock(side_effect=lambda ids: len(list(ids)))
    return repo


@pytest.fixture
def mock_customer_repo(customer):
    repo = MagicMock()
    repo.get_by_ids = AsyncMock(return_value={customer.id: customer})
    return repo


@pytest.fixture
def mock_platform_repo(platform):
    repo = MagicMock()
    repo.get_by_ids = AsyncMock(return_value={platform.id: platform})
    return repo


@pytest.fixture
def mock_notification_repo():
    repo = MagicMock()
    repo.get_all = AsyncMock(return_value=[])
    repo.create_many_ignore_duplicates = AsyncMock(
        side_effect=lambda notifications: len(notifications)
    )
    return repo


@pytest.fixture
def generate_use_case(
    mock_uow, mock_subscription_repo, mock_customer_repo, mock_platform_repo, mock_notification_repo
):
    """GenerateNotifications use case instance with mocked dependencies"""
    return GenerateNotifications(
        uow=mock_uow,
        subscription_repo=mock_subscription_repo,
        customer_repo=mock_customer_repo,
        platform_repo=mock_platform_repo,
        notification_repo=mock_notification_repo,
        rule_engine=NotificationRuleEngine(),
    )


@pytest.mark.asyncio
class TestGenerateNotificationsSuccess:
    """Test successful sync passes"""

    async def test_creates_notifications_and_expires_subscriptions(
        self,
        generate_use_case,
        mock_subscription_repo,
        mock_notification_repo,
        mock_uow,
        make_subscription,
        now,
    ):
        """
        Given: One subscription expiring in 5 days and one expired 10 days ago
        When: Sync pass runs
        Then: Two notifications inserted and one subscription expired
        """
        # Arrange
        mock_subscription_repo.get_active_subscriptions = AsyncMock(
            return_value=[
                make_subscription("s1", timedelta(days=5)),
                make_subscription("s2", -timedelta(days=10)),
            ]
        )

        # Act
        result = await generate_use_case.execute(now=now)

        # Assert
        assert result.is_ok()
        response = result.value
        assert response.success is True
        assert response.notifications_created == 2
        assert response.subscriptions_updated == 1
        assert response.subscriptions_skipped == 0
        assert response.evaluated_at == now

        inserted = mock_notification_repo.create_many_ignore_duplicates.call_args.args[0]
        assert {(n.type, n.related_id) for n in inserted} == {
            (NotificationType.EXPIRING_SOON, "s1"),
            (NotificationType.EXPIRED, "s2"),
        }
        mock_subscription_repo.mark_expired.assert_called_once_with(["s2"])
        assert mock_uow.commit.call_count == 2
        mock_uow.rollback.assert_not_called()

    async def test_looks_up_referenced_customers_and_platforms(
        self,
        generate_use_case,
        mock_subscription_repo,
        mock_customer_repo,
        mock_platform_repo,
        make_subscription,
        now,
    ):
        mock_subscription_repo.get_active_subscriptions = AsyncMock(
            return_value=[make_subscription("s1", timedelta(days=5))]
        )

        await generate_use_case.execute(now=now)

        assert list(mock_customer_repo.get_by_ids.call_args.args[0]) == ["c1"]
        assert list(mock_platform_repo.get_by_ids.call_args.args[0]) == ["p1"]

    async def test_nothing_to_do(
        self, generate_use_case, mock_subscription_repo, mock_notification_repo, now
    ):
        """
        Given: No active subscriptions
        When: Sync pass runs
        Then: Zero counts, empty batches
        """
        result = await generate_use_case.execute(now=now)

        assert result.is_ok()
        assert result.value.notifications_created == 0
        assert result.value.subscriptions_updated == 0
        mock_notification_repo.create_many_ignore_duplicates.assert_called_once_with([])
        mock_subscription_repo.mark_expired.assert_called_once_with([])

    async def test_existing_notifications_are_deduplicated(
        self,
        generate_use_case,
        mock_subscription_repo,
        mock_notification_repo,
        make_subscription,
        now,
    ):
        """
        Given: expiring_soon notification already stored for s1
        When: Sync pass runs again
        Then: Nothing is inserted
        """
        mock_subscription_repo.get_active_subscriptions = AsyncMock(
            return_value=[make_subscription("s1", timedelta(days=5))]
        )
        mock_notification_repo.get_all = AsyncMock(
            return_value=[
                Notification(
                    type=NotificationType.EXPIRING_SOON,
                    title="Subscription Expiring Soon",
                    message="...",
                    date=now - timedelta(days=1),
                    related_id="s1",
                )
            ]
        )

        result = await generate_use_case.execute(now=now)

        assert result.value.notifications_created == 0
        mock_notification_repo.create_many_ignore_duplicates.assert_called_once_with([])

    async def test_store_side_duplicates_are_not_counted(
        self,
        generate_use_case,
        mock_subscription_repo,
        mock_notification_repo,
        make_subscription,
        now,
    ):
        """
        Given: A concurrent pass inserted the same notification after our snapshot
        When: The store skips the duplicate
        Then: The pass succeeds and reports only what it inserted
        """
        mock_subscription_repo.get_active_subscriptions = AsyncMock(
            return_value=[make_subscription("s2", -timedelta(days=10))]
        )
        mock_notification_repo.create_many_ignore_duplicates = AsyncMock(return_value=0)
        mock_subscription_repo.mark_expired = AsyncMock(return_value=0)

        result = await generate_use_case.execute(now=now)

        assert result.is_ok()
        assert result.value.notifications_created == 0
        assert result.value.subscriptions_updated == 0

    async def test_reports_skipped_subscriptions(
        self,
        generate_use_case,
        mock_subscription_repo,
        mock_customer_repo,
        make_subscription,
        now,
    ):
        mock_subscription_repo.get_active_subscriptions = AsyncMock(
            return_value=[
                make_subscription("s1", timedelta(days=5), customer_id="missing"),
                make_subscription("s2", timedelta(days=5)),
            ]
        )

        result = await generate_use_case.execute(now=now)

        assert result.value.subscriptions_skipped == 1
        assert result.value.notifications_created == 1

    async def test_defaults_to_current_time(self, generate_use_case):
        result = await generate_use_case.execute()

        assert result.is_ok()
        assert result.value.evaluated_at.tzinfo is None


@pytest.mark.asyncio
class TestGenerateNotificationsErrors:
    """Test error handling"""

    async def test_read_failure_rolls_back(
        self, generate_use_case, mock_subscription_repo, mock_uow, now
    ):
        mock_subscription_repo.get_active_subscriptions = AsyncMock(
            side_effect=Exception("Database connection lost")
        )

        result = await generate_use_case.execute(now=now)

        assert result.is_err()
        assert result.error.code == "NOTIFICATION_SYNC_FAILED"
        assert result.error.message == "Failed to generate notifications"
        assert "Database connection lost" in result.error.reason
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_status_update_failure_keeps_inserted_notifications(
        self,
        generate_use_case,
        mock_subscription_repo,
        mock_notification_repo,
        mock_uow,
        make_subscription,
        now,
    ):
        """
        Given: Notification batch commits, status batch fails
        When: Sync pass runs
        Then: Pass fails, first commit stands, second batch rolled back
        """
        mock_subscription_repo.get_active_subscriptions = AsyncMock(
            return_value=[make_subscription("s2", -timedelta(days=10))]
        )
        mock_subscription_repo.mark_expired = AsyncMock(side_effect=Exception("timeout"))

        result = await generate_use_case.execute(now=now)

        assert result.is_err()
        mock_notification_repo.create_many_ignore_duplicates.assert_called_once()
        mock_uow.commit.assert_called_once()
        mock_uow.rollback.assert_called_once()
