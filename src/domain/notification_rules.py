"""Notification Rule Engine

Decides which subscription alerts to emit and which subscriptions have
lapsed. Pure: takes a snapshot and a clock reading, returns what to write.
Reading the snapshot and persisting the outcome is GenerateNotifications'
job.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional

from src.domain.customer import Customer
from src.domain.notification import Notification, NotificationType
from src.domain.platform import Platform
from src.domain.subscription import Subscription, SubscriptionStatus

logger = logging.getLogger(__name__)

DEFAULT_EXPIRING_SOON_DAYS = 7
DEFAULT_DATE_FORMAT = "%m/%d/%Y"

EXPIRING_SOON_TITLE = "Subscription Expiring Soon"
EXPIRED_TITLE = "Subscription Expired"


@dataclass(frozen=True)
class StatusUpdate:
    """A subscription status transition decided by the engine"""
    subscription_id: str
    new_status: SubscriptionStatus


@dataclass
class RuleEvaluation:
    """Outcome of one evaluation pass"""
    new_notifications: list[Notification] = field(default_factory=list)
    status_updates: list[StatusUpdate] = field(default_factory=list)
    skipped_subscription_ids: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.new_notifications and not self.status_updates


def to_naive_utc(value: datetime) -> datetime:
    """Drop tzinfo after converting to UTC; naive values are taken as UTC"""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def days_until(expiry: datetime, now: datetime) -> int:
    """
    Whole days from now until expiry, floored toward the earlier day

    12 hours past expiry is -1, 12 hours before it is 0.
    """
    # timedelta normalises so that .days is the floor of the fractional day count
    return (to_naive_utc(expiry) - to_naive_utc(now)).days


class NotificationRuleEngine:
    """
    Rule engine for subscription expiry alerts

    Rules (per active subscription, days = days_until(expiry_date, now)):
    1. Expiring soon: 0 <= days <= expiring_soon_days and no
       (expiring_soon, subscription.id) notification exists yet
       -> emit expiring_soon dated now
    2. Expired: days < 0
       -> schedule active -> expired
       -> emit expired dated at expiry_date, unless (expired, subscription.id)
          already exists or the expiry is older than expired_window_days

    The two day ranges are disjoint, so one pass emits at most one
    notification per subscription. Deduplication looks at every existing
    notification, not just the ones from this pass.

    Subscriptions referencing a missing customer or platform are skipped and
    reported in skipped_subscription_ids.
    """

    def __init__(
        self,
        expiring_soon_days: int = DEFAULT_EXPIRING_SOON_DAYS,
        expired_window_days: Optional[int] = None,
        date_format: str = DEFAULT_DATE_FORMAT,
    ):
        """
        Args:
            expiring_soon_days: Look-ahead for the expiring soon rule
            expired_window_days: Suppress expired notifications for
                subscriptions that lapsed this many days ago or earlier.
                None means no limit.
            date_format: strftime format for dates in messages
        """
        if expiring_soon_days < 0:
            raise ValueError("expiring_soon_days must be >= 0")
        if expired_window_days is not None and expired_window_days <= 0:
            raise ValueError("expired_window_days must be > 0 when set")

        self.expiring_soon_days = expiring_soon_days
        self.expired_window_days = expired_window_days
        self.date_format = date_format

    def evaluate(
        self,
        active_subscriptions: Iterable[Subscription],
        customers: Mapping[str, Customer],
        platforms: Mapping[str, Platform],
        existing_notifications: Iterable[Notification],
        now: datetime,
    ) -> RuleEvaluation:
        """
        Run one pass over a snapshot

        Args:
            active_subscriptions: Subscriptions to examine; anything not
                active is ignored
            customers: Customers keyed by id
            platforms: Platforms keyed by id
            existing_notifications: Every notification already stored
            now: Reference time for the pass

        Returns:
            RuleEvaluation with notifications to insert and status updates
        """
        now = to_naive_utc(now)
        seen = {n.dedup_key for n in existing_notifications}
        evaluation = RuleEvaluation()

        for subscription in active_subscriptions:
            if subscription.status != SubscriptionStatus.ACTIVE:
                logger.debug(
                    f"Ignoring subscription {subscription.id} with status {subscription.status}"
                )
                continue

            customer = customers.get(subscription.customer_id)
            platform = platforms.get(subscription.platform_id)
            if customer is None or platform is None:
                missing = []
                if customer is None:
                    missing.append(f"customer {subscription.customer_id}")
                if platform is None:
                    missing.append(f"platform {subscription.platform_id}")
                logger.warning(
                    f"Skipping subscription {subscription.id}: missing {', '.join(missing)}"
                )
                evaluation.skipped_subscription_ids.append(subscription.id)
                continue

            days = days_until(subscription.expiry_date, now)

            if 0 <= days <= self.expiring_soon_days:
                key = (NotificationType.EXPIRING_SOON.value, subscription.id)
                if key not in seen:
                    evaluation.new_notifications.append(
                        self._expiring_soon(subscription, customer, platform, now)
                    )
                    seen.add(key)

            elif days < 0:
                evaluation.status_updates.append(
                    StatusUpdate(subscription.id, SubscriptionStatus.EXPIRED)
                )

                key = (NotificationType.EXPIRED.value, subscription.id)
                if key in seen:
                    continue
                if self.expired_window_days is not None and days <= -self.expired_window_days:
                    logger.debug(
                        f"Subscription {subscription.id} expired {-days} days ago, "
                        f"outside the {self.expired_window_days}-day window"
                    )
                    continue

                evaluation.new_notifications.append(
                    self._expired(subscription, customer, platform)
                )
                seen.add(key)

        return evaluation

    def _expiring_soon(
        self, subscription: Subscription, customer: Customer, platform: Platform, now: datetime
    ) -> Notification:
        return Notification(
            type=NotificationType.EXPIRING_SOON,
            title=EXPIRING_SOON_TITLE,
            message=(
                f"{customer.name}'s {platform.name} subscription expires on "
                f"{self._format_date(subscription.expiry_date)}"
            ),
            date=now,
            read=False,
            related_id=subscription.id,
        )

    def _expired(
        self, subscription: Subscription, customer: Customer, platform: Platform
    ) -> Notification:
        return Notification(
            type=NotificationType.EXPIRED,
            title=EXPIRED_TITLE,
            message=(
                f"{customer.name}'s {platform.name} subscription has expired on "
                f"{self._format_date(subscription.expiry_date)}"
            ),
            date=to_naive_utc(subscription.expiry_date),
            read=False,
            related_id=subscription.id,
        )

    def _format_date(self, value: datetime) -> str:
        return to_naive_utc(value).strftime(self.date_format)
