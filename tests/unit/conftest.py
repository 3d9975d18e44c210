import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

from src.domain.customer import Customer
from src.domain.platform import Platform, PlatformType
from src.domain.subscription import Subscription, SubscriptionStatus

NOW = datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def now():
    """Fixed reference time for rule evaluation"""
    return NOW


@pytest.fixture
def customer():
    return Customer(id="c1", name="Rahul Shah", email="rahul.shah@example.com")


@pytest.fixture
def platform():
    return Platform(id="p1", name="Netflix", type=PlatformType.SUBSCRIPTION)


@pytest.fixture
def make_subscription():
    """Factory for active subscriptions expiring relative to NOW"""

    def _make(
        subscription_id: str,
        expires_in: timedelta,
        status: SubscriptionStatus = SubscriptionStatus.ACTIVE,
        customer_id: str = "c1",
        platform_id: str = "p1",
    ) -> Subscription:
        return Subscription(
            id=subscription_id,
            customer_id=customer_id,
            platform_id=platform_id,
            plan_type="Monthly",
            start_date=NOW - timedelta(days=30),
            expiry_date=NOW + expires_in,
            status=status,
        )

    return _make
