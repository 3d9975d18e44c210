"""SQLAlchemy Platform Repository Implementation"""

from typing import Iterable, Optional
from sqlmodel import select, col
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.platform_repository import PlatformRepository
from src.domain.platform import Platform


class SqlAlchemyPlatformRepository(PlatformRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, platform_id: str) -> Optional[Platform]:
        statement = select(Platform).where(Platform.id == platform_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(self, platform_ids: Iterable[str]) -> dict[str, Platform]:
        ids = set(platform_ids)
        if not ids:
            return {}

        statement = select(Platform).where(col(Platform.id).in_(ids))
        result = await self.session.execute(statement)
        return {platform.id: platform for platform in result.scalars().all()}

    async def create(self, platform: Platform) -> Platform:
        self.session.add(platform)
        await self.session.flush()
        await self.session.refresh(platform)
        return platform
