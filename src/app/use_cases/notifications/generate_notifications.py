"""GenerateNotifications Use Case

Runs one notification sync pass: snapshot, evaluate rules, persist.
"""

import logging
from datetime import datetime
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.platform_repository import PlatformRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.repositories.notification_repository import NotificationRepository
from src.domain.notification_rules import NotificationRuleEngine, to_naive_utc
from src.domain.subscription import SubscriptionStatus
from .dtos import NotificationSyncResultDTO

logger = logging.getLogger(__name__)


class GenerateNotifications:
    """
    Use Case: Generate subscription expiry notifications

    Business Rules:
    1. Only active subscriptions are evaluated
    2. At most one notification per (type, subscription), ever
    3. A subscription past its expiry date moves active -> expired
    4. Re-running with no change in time or data writes nothing

    Flow:
    1. Read the snapshot: active subscriptions, all notifications, and the
       customers and platforms they reference
    2. Evaluate the rules against the snapshot
    3. Insert new notifications (duplicates skipped by the store), commit
    4. Apply status updates, commit
    5. Return pass summary

    The two commits are independent. If the pass dies between them, the next
    pass picks up the remaining status updates: the notifications are then
    deduplicated but the expiry transition is still scheduled.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        subscription_repo: SubscriptionRepository,
        customer_repo: CustomerRepository,
        platform_repo: PlatformRepository,
        notification_repo: NotificationRepository,
        rule_engine: NotificationRuleEngine,
    ):
        self.uow = uow
        self.subscription_repo = subscription_repo
        self.customer_repo = customer_repo
        self.platform_repo = platform_repo
        self.notification_repo = notification_repo
        self.rule_engine = rule_engine

    async def execute(self, now: Optional[datetime] = None) -> Result[NotificationSyncResultDTO]:
        """
        Execute a notification sync pass

        Args:
            now: Reference time (default: current UTC time)

        Returns:
            Result[NotificationSyncResultDTO]: Pass summary or error
        """
        try:
            now = to_naive_utc(now) if now is not None else datetime.utcnow()
            logger.info(f"Running notification sync at {now.isoformat()}")

            # Step 1: Snapshot
            subscriptions = await self.subscription_repo.get_active_subscriptions()
            existing_notifications = await self.notification_repo.get_all()
            customers = await self.customer_repo.get_by_ids(
                s.customer_id for s in subscriptions
            )
            platforms = await self.platform_repo.get_by_ids(
                s.platform_id for s in subscriptions
            )

            logger.info(
                f"Evaluating {len(subscriptions)} active subscriptions against "
                f"{len(existing_notifications)} existing notifications"
            )

            # Step 2: Evaluate rules
            evaluation = self.rule_engine.evaluate(
                active_subscriptions=subscriptions,
                customers=customers,
                platforms=platforms,
                existing_notifications=existing_notifications,
                now=now,
            )

            # Step 3: Insert notifications
            created = await self.notification_repo.create_many_ignore_duplicates(
                evaluation.new_notifications
            )
            await self.uow.commit()

            # Step 4: Apply status updates
            expired_ids = [
                update.subscription_id
                for update in evaluation.status_updates
                if update.new_status == SubscriptionStatus.EXPIRED
            ]
            updated = await self.subscription_repo.mark_expired(expired_ids)
            await self.uow.commit()

            skipped = len(evaluation.skipped_subscription_ids)
            if skipped:
                logger.warning(
                    f"{skipped} subscriptions skipped for missing customer or platform: "
                    f"{', '.join(evaluation.skipped_subscription_ids)}"
                )

            logger.info(
                f"Notification sync complete. Created {created} notifications, "
                f"expired {updated} subscriptions"
            )

            return Return.ok(
                NotificationSyncResultDTO(
                    notifications_created=created,
                    subscriptions_updated=updated,
                    subscriptions_skipped=skipped,
                    evaluated_at=now,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Notification sync failed: {e}")
            return Return.err(
                Error(
                    code="NOTIFICATION_SYNC_FAILED",
                    message="Failed to generate notifications",
                    reason=str(e),
                )
            )
