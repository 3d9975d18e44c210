"""Subscription Repository Interface

Defines the contract for subscription persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional
from src.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """
    Repository interface for Subscription persistence

    Provides the active-subscription snapshot and the expiry transition
    used by the notification sync.
    """

    @abstractmethod
    async def get_active_subscriptions(self) -> List[Subscription]:
        """
        Retrieve all active subscriptions

        Returns:
            List of active subscriptions
        """
        pass

    @abstractmethod
    async def get_by_id(self, subscription_id: str) -> Optional[Subscription]:
        """
        Retrieve subscription by ID

        Args:
            subscription_id: Subscription ID

        Returns:
            Subscription if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_customer_id(self, customer_id: str) -> List[Subscription]:
        """
        Retrieve all subscriptions of a customer

        Args:
            customer_id: Customer ID

        Returns:
            List of subscriptions, any status
        """
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """
        Create a new subscription

        Args:
            subscription: Subscription entity to persist

        Returns:
            Created Subscription
        """
        pass

    @abstractmethod
    async def mark_expired(self, subscription_ids: Iterable[str]) -> int:
        """
        Move subscriptions from active to expired

        Rows that are no longer active (cancelled or already expired in the
        meantime) are left untouched.

        Args:
            subscription_ids: Subscriptions to expire

        Returns:
            Number of subscriptions actually updated
        """
        pass
