"""Notification use cases"""
from .generate_notifications import GenerateNotifications
from .list_notifications import ListNotifications
from .mark_notification_read import MarkNotificationRead, MarkAllNotificationsRead
from .dtos import (
    NotificationSyncResultDTO,
    NotificationDTO,
    ListNotificationsResponseDTO,
    MarkAllReadResponseDTO,
)

__all__ = [
    "GenerateNotifications",
    "ListNotifications",
    "MarkNotificationRead",
    "MarkAllNotificationsRead",
    "NotificationSyncResultDTO",
    "NotificationDTO",
    "ListNotificationsResponseDTO",
    "MarkAllReadResponseDTO",
]
