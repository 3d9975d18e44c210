"""Background workers for the notification service"""
from .notification_sync import NotificationSyncWorker

__all__ = ["NotificationSyncWorker"]
