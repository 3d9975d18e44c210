"""SQLAlchemy implementation of NotificationRepository

Provides persistence for Notification entities. Duplicate alerts are kept out
by the uq_notifications_type_related_id constraint; inserts skip rows that
would violate it instead of failing the whole batch.
"""

import logging
from typing import List, Optional
from sqlalchemy import or_
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlmodel import select, func, col
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.notification import Notification

logger = logging.getLogger(__name__)

DEDUP_CONSTRAINT = "uq_notifications_type_related_id"


class SqlAlchemyNotificationRepository(NotificationRepository):
    """
    SQLAlchemy implementation of NotificationRepository

    Features:
    - INSERT ... ON CONFLICT DO NOTHING on PostgreSQL and SQLite
    - Savepoint per row on other backends, treating IntegrityError as a skip
    - Search and pagination for the dashboard list
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> List[Notification]:
        stmt = select(Notification)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, notification_id: str) -> Optional[Notification]:
        stmt = select(Notification).where(Notification.id == notification_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_many_ignore_duplicates(self, notifications: List[Notification]) -> int:
        """
        Insert notifications, skipping (type, related_id) duplicates

        Args:
            notifications: Notifications to insert

        Returns:
            Number of notifications actually inserted
        """
        if not notifications:
            return 0

        dialect = self.session.bind.dialect.name
        if dialect in ("postgresql", "sqlite"):
            inserted = await self._insert_on_conflict_do_nothing(dialect, notifications)
        else:
            inserted = await self._insert_with_savepoints(notifications)

        skipped = len(notifications) - inserted
        if skipped:
            logger.info(f"Skipped {skipped} notifications already stored by another pass")
        return inserted

    async def _insert_on_conflict_do_nothing(
        self, dialect: str, notifications: List[Notification]
    ) -> int:
        inserted = 0
        for notification in notifications:
            values = notification.model_dump()
            if dialect == "postgresql":
                stmt = postgresql_insert(Notification.__table__).values(**values).on_conflict_do_nothing(
                    constraint=DEDUP_CONSTRAINT
                )
            else:
                stmt = sqlite_insert(Notification.__table__).values(**values).on_conflict_do_nothing()
            result = await self.session.execute(stmt)
            inserted += result.rowcount
        return inserted

    async def _insert_with_savepoints(self, notifications: List[Notification]) -> int:
        inserted = 0
        for notification in notifications:
            try:
                async with self.session.begin_nested():
                    self.session.add(notification)
                inserted += 1
            except IntegrityError:
                logger.debug(
                    f"Duplicate notification {notification.dedup_key} ignored"
                )
        return inserted

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
            Tuple of (list of Notification, total count)
        """
        filters = []
        if search:
            filters.append(
                or_(
                    col(Notification.title).icontains(search, autoescape=True),
                    col(Notification.message).icontains(search, autoescape=True),
                )
            )
        if unread_only:
            filters.append(col(Notification.read).is_(False))

        count_stmt = select(func.count()).select_from(Notification).where(*filters)
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar()

        stmt = (
            select(Notification)
            .where(*filters)
            .order_by(col(Notification.date).desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        notifications = list(result.scalars().all())

        return notifications, total

    async def count_unread(self) -> int:
        stmt = select(func.count()).select_from(Notification).where(
            col(Notification.read).is_(False)
        )
        result = await self.session.execute(stmt)
        return result.scalar()

    async def mark_read(self, notification_id: str) -> Optional[Notification]:
        notification = await self.get_by_id(notification_id)
        if not notification:
            return None

        notification.read = True

        await self.session.flush()
        await self.session.refresh(notification)
        return notification

    async def mark_all_read(self) -> int:
        stmt = select(Notification).where(col(Notification.read).is_(False))
        result = await self.session.execute(stmt)
        unread = list(result.scalars().all())

        for notification in unread:
            notification.read = True

        await self.session.flush()
        return len(unread)
