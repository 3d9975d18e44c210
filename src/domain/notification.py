"""Notification Domain Entity

Alerts about subscriptions that are about to expire or have expired.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Boolean, String, Text, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class NotificationType(str, Enum):
    """Notification kinds"""
    EXPIRING_SOON = "expiring_soon"
    EXPIRED = "expired"
    PAYMENT_DUE = "payment_due"


class Notification(BaseModel, table=True):
    """
    Notification - A dashboard alert, optionally tied to a subscription

    Domain Rules:
    - (type, related_id) is unique: one alert of each kind per subscription,
      for the whole lifetime of the subscription
    - date marks when the alert is relevant, not when the row was written
    - Only the read flag changes after creation

    Concurrency:
    - Sync passes started from the API and from the worker are not
      serialised. Both may read the same snapshot and try to insert the
      same alert; uq_notifications_type_related_id is what keeps the
      second insert out.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        UniqueConstraint('type', 'related_id', name='uq_notifications_type_related_id'),
        Index('ix_notifications_read', 'read'),
        Index('ix_notifications_date', 'date'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique notification identifier (UUID)"
    )

    type: NotificationType = Field(
        description="Notification type (expiring_soon, expired, payment_due)"
    )

    title: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Short headline"
    )

    message: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Human-readable body"
    )

    date: datetime = Field(
        description="When the notification is relevant"
    )

    read: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Whether an operator has read the notification"
    )

    related_id: Optional[str] = Field(
        default=None,
        foreign_key="subscriptions.id",
        description="Subscription the notification is about"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Notification creation timestamp"
    )

    @property
    def dedup_key(self) -> tuple[str, Optional[str]]:
        """(type, related_id) pair that must be unique"""
        kind = self.type.value if isinstance(self.type, NotificationType) else str(self.type)
        return kind, self.related_id

    class Config:
        json_schema_extra = {
            "example": {
                "id": "5b9e2f1c-0d3a-4c7b-8e6f-1a2b3c4d5e6f",
                "type": "expiring_soon",
                "title": "Subscription Expiring Soon",
                "message": "Rahul Shah's Netflix subscription expires on 02/01/2024",
                "date": "2024-01-27T09:00:00Z",
                "read": False,
                "related_id": "a4d1c0a2-2c3e-4b8e-9d0f-6f2d9d5e7b01",
                "created_at": "2024-01-27T09:00:00Z"
            }
        }
