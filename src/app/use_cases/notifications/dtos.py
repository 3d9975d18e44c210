"""Data Transfer Objects for Notification Use Cases

Pydantic models for use case outputs.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class NotificationSyncResultDTO(BaseModel):
    """
    Summary of one notification sync pass

    Returned by GenerateNotifications. Serialised with camelCase keys for the
    sync endpoint.
    """

    success: bool = Field(
        default=True,
        description="Whether the pass completed"
    )

    notifications_created: int = Field(
        ...,
        ge=0,
        serialization_alias="notificationsCreated",
        description="Notifications inserted by this pass"
    )

    subscriptions_updated: int = Field(
        ...,
        ge=0,
        serialization_alias="subscriptionsUpdated",
        description="Subscriptions moved from active to expired"
    )

    subscriptions_skipped: int = Field(
        default=0,
        ge=0,
        serialization_alias="subscriptionsSkipped",
        description="Active subscriptions skipped for a missing customer or platform"
    )

    evaluated_at: datetime = Field(
        ...,
        serialization_alias="evaluatedAt",
        description="Reference time the rules were evaluated against"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "notificationsCreated": 3,
                "subscriptionsUpdated": 1,
                "subscriptionsSkipped": 0,
                "evaluatedAt": "2024-01-27T09:00:00"
            }
        }


class NotificationDTO(BaseModel):
    """Notification as shown on the dashboard"""

    id: str = Field(..., description="Notification ID")
    type: str = Field(..., description="expiring_soon, expired or payment_due")
    title: str = Field(..., description="Short headline")
    message: str = Field(..., description="Human-readable body")
    date: datetime = Field(..., description="When the notification is relevant")
    read: bool = Field(..., description="Read flag")
    related_id: Optional[str] = Field(default=None, description="Related subscription ID")
    created_at: datetime = Field(..., description="Creation timestamp")


class ListNotificationsResponseDTO(BaseModel):
    """
    Response DTO for listing notifications

    Returned by ListNotifications use case.
    """

    notifications: list[NotificationDTO] = Field(
        default_factory=list,
        description="Page of notifications, newest first"
    )

    total: int = Field(
        ...,
        description="Notifications matching the filters"
    )

    unread_count: int = Field(
        ...,
        description="Unread notifications overall, ignoring filters"
    )

    limit: int = Field(..., description="Page size")
    offset: int = Field(..., description="Page offset")


class MarkAllReadResponseDTO(BaseModel):
    updated: int = Field(..., description="Notifications marked as read")
