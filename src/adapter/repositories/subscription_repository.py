"""SQLAlchemy Subscription Repository Implementation

Implements subscription persistence using SQLAlchemy async session.
"""

from typing import Iterable, List, Optional
from sqlmodel import select, col
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.subscription import Subscription, SubscriptionStatus


class SqlAlchemySubscriptionRepository(SubscriptionRepository):
    """
    SQLAlchemy implementation of SubscriptionRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_active_subscriptions(self) -> List[Subscription]:
        """
        Retrieve all active subscriptions

        Returns:
            List of active subscriptions
        """
        statement = select(Subscription).where(
            Subscription.status == SubscriptionStatus.ACTIVE
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_by_id(self, subscription_id: str) -> Optional[Subscription]:
        statement = select(Subscription).where(Subscription.id == subscription_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_customer_id(self, customer_id: str) -> List[Subscription]:
        statement = select(Subscription).where(Subscription.customer_id == customer_id)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create(self, subscription: Subscription) -> Subscription:
        """
        Create a new subscription

        Args:
            subscription: Subscription entity to persist

        Returns:
            Created Subscription
        """
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def mark_expired(self, subscription_ids: Iterable[str]) -> int:
        """
        Move subscriptions from active to expired

        Re-reads the rows with the active filter so a subscription cancelled
        since the snapshot was taken stays cancelled.

        Args:
            subscription_ids: Subscriptions to expire

        Returns:
            Number of subscriptions actually updated
        """
        ids = set(subscription_ids)
        if not ids:
            return 0

        statement = select(Subscription).where(
            col(Subscription.id).in_(ids),
            Subscription.status == SubscriptionStatus.ACTIVE,
        )
        result = await self.session.execute(statement)
        subscriptions = list(result.scalars().all())

        for subscription in subscriptions:
            subscription.status = SubscriptionStatus.EXPIRED

        await self.session.flush()
        return len(subscriptions)
