from .customer_repository import CustomerRepository
from .platform_repository import PlatformRepository
from .subscription_repository import SubscriptionRepository
from .notification_repository import NotificationRepository

__all__ = [
    "CustomerRepository",
    "PlatformRepository",
    "SubscriptionRepository",
    "NotificationRepository",
]
