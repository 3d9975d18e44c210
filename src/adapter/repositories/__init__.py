from .customer_repository import SqlAlchemyCustomerRepository
from .platform_repository import SqlAlchemyPlatformRepository
from .subscription_repository import SqlAlchemySubscriptionRepository
from .notification_repository import SqlAlchemyNotificationRepository

__all__ = [
    "SqlAlchemyCustomerRepository",
    "SqlAlchemyPlatformRepository",
    "SqlAlchemySubscriptionRepository",
    "SqlAlchemyNotificationRepository",
]
