"""Platform Repository Interface

Defines the contract for platform persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
from src.domain.platform import Platform


class PlatformRepository(ABC):
    """Repository interface for Platform persistence"""

    @abstractmethod
    async def get_by_id(self, platform_id: str) -> Optional[Platform]:
        pass

    @abstractmethod
    async def get_by_ids(self, platform_ids: Iterable[str]) -> dict[str, Platform]:
        """
        Retrieve several platforms at once

        Args:
            platform_ids: Platform IDs to look up

        Returns:
            Mapping of platform ID to Platform (missing ids are absent)
        """
        pass

    @abstractmethod
    async def create(self, platform: Platform) -> Platform:
        pass
