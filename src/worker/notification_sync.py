"""Notification Sync Background Worker

Periodically runs the notification sync pass.
Can be run as a standalone script or integrated with a scheduler.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.platform_repository import SqlAlchemyPlatformRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.repositories.notification_repository import SqlAlchemyNotificationRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.notifications import GenerateNotifications
from src.domain.notification_rules import NotificationRuleEngine

logger = logging.getLogger(__name__)


class NotificationSyncWorker:
    """
    Background worker for generating subscription notifications

    Features:
    - Runs hourly by default
    - Rule settings from ApplicationConfig
    - Can run once or continuously

    The API's POST /notifications/sync runs the same pass without
    coordinating with this worker; the unique (type, related_id) constraint
    on notifications keeps the two from storing the same alert twice.

    Usage:
        # Run once
        worker = NotificationSyncWorker()
        await worker.run_once()

        # Run continuously
        worker = NotificationSyncWorker()
        await worker.run_forever(interval_seconds=3600)
    """

    def __init__(
        self,
        db_uri: Optional[str] = None,
        expiring_soon_days: Optional[int] = None,
        expired_window_days: Optional[int] = None,
    ):
        """
        Initialize the worker

        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            expiring_soon_days: Expiring soon look-ahead (defaults to config)
            expired_window_days: Expired notification window (defaults to config)
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.expiring_soon_days = (
            expiring_soon_days
            if expiring_soon_days is not None
            else ApplicationConfig.NOTIFICATION_EXPIRING_SOON_DAYS
        )
        self.expired_window_days = (
            expired_window_days
            if expired_window_days is not None
            else ApplicationConfig.NOTIFICATION_EXPIRED_WINDOW_DAYS
        )

        self.rule_engine = NotificationRuleEngine(
            expiring_soon_days=self.expiring_soon_days,
            expired_window_days=self.expired_window_days,
            date_format=ApplicationConfig.NOTIFICATION_DATE_FORMAT,
        )

        # Create engine and session factory
        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info(
            f"NotificationSyncWorker initialized with "
            f"expiring_soon_days={self.expiring_soon_days}, "
            f"expired_window_days={self.expired_window_days}"
        )

    async def run_once(self, now: Optional[datetime] = None) -> int:
        """
        Run one sync pass

        Args:
            now: Reference time (default: current UTC time)

        Returns:
            Number of notifications created
        """
        if not ApplicationConfig.NOTIFICATION_SYNC_ENABLED:
            logger.info("Notification sync is disabled, skipping")
            return 0

        async with self.async_session_factory() as session:
            use_case = GenerateNotifications(
                uow=SqlAlchemyUnitOfWork(session),
                subscription_repo=SqlAlchemySubscriptionRepository(session),
                customer_repo=SqlAlchemyCustomerRepository(session),
                platform_repo=SqlAlchemyPlatformRepository(session),
                notification_repo=SqlAlchemyNotificationRepository(session),
                rule_engine=self.rule_engine,
            )

            result = await use_case.execute(now=now)

            if result.is_err():
                logger.error(f"Notification sync failed: {result.error.message}")
                return 0

            return result.value.notifications_created

    async def run_forever(self, interval_seconds: Optional[int] = None):
        """
        Run the sync continuously at the given interval

        Args:
            interval_seconds: Seconds between passes (default: config value)
        """
        interval_seconds = interval_seconds or ApplicationConfig.NOTIFICATION_SYNC_INTERVAL_SECONDS
        logger.info(
            f"Starting continuous notification sync with {interval_seconds}s interval"
        )

        while True:
            try:
                count = await self.run_once()
                logger.info(f"Sync cycle complete. Created {count} notifications")
            except Exception as e:
                logger.error(f"Sync cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        """Cleanup resources"""
        await self.engine.dispose()
        logger.info("NotificationSyncWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.notification_sync [--once]
    """
    import sys

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    worker = NotificationSyncWorker()

    if "--once" in sys.argv:
        count = await worker.run_once()
        print(f"Notification sync complete. Created {count} notifications.")
        await worker.shutdown()
    else:
        try:
            await worker.run_forever()
        except KeyboardInterrupt:
            logger.info("Received shutdown signal")
        finally:
            await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
