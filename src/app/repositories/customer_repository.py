"""Customer Repository Interface

Defines the contract for customer persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from src.domain.customer import Customer


class CustomerRepository(ABC):
    """Repository interface for Customer persistence"""

    @abstractmethod
    async def get_by_id(self, customer_id: str) -> Optional[Customer]:
        """
        Retrieve customer by ID

        Args:
            customer_id: Customer ID

        Returns:
            Customer if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_ids(self, customer_ids: Iterable[str]) -> dict[str, Customer]:
        """
        Retrieve several customers at once

        Ids with no matching row are simply absent from the result.

        Args:
            customer_ids: Customer IDs to look up

        Returns:
            Mapping of customer ID to Customer
        """
        pass

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """
        Create a new customer

        Args:
            customer: Customer entity to persist

        Returns:
            Created Customer
        """
        pass
