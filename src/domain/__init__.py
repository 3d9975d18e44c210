from .base import BaseModel, generate_uuid
from .customer import Customer
from .platform import Platform, PlatformType
from .subscription import Subscription, SubscriptionStatus
from .notification import Notification, NotificationType
from .notification_rules import NotificationRuleEngine, RuleEvaluation, StatusUpdate

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Customer",
    "Platform",
    "PlatformType",
    "Subscription",
    "SubscriptionStatus",
    "Notification",
    "NotificationType",
    "NotificationRuleEngine",
    "RuleEvaluation",
    "StatusUpdate",
]
