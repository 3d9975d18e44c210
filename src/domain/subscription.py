"""Subscription Domain Entity

Tracks a customer's paid access to a platform and its expiry.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import Numeric, String, Text
from src.domain.base import BaseModel, generate_uuid


class SubscriptionStatus(str, Enum):
    """Subscription status types"""
    ACTIVE = "active"
    EXPIRED = "expired"
    PENDING = "pending"
    CANCELLED = "cancelled"


class Subscription(BaseModel, table=True):
    """
    Subscription - A customer's plan on a platform

    Domain Rules:
    - cost is non-negative
    - expiry_date is not required to be after start_date
    - Only the notification sync moves a subscription active -> expired;
      every other transition is a manual edit
    - expired and cancelled are terminal for the notification sync
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        Index('ix_subscriptions_status', 'status'),
        Index('ix_subscriptions_customer_id', 'customer_id'),
        Index('ix_subscriptions_platform_id', 'platform_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique subscription identifier (UUID)"
    )

    customer_id: str = Field(
        foreign_key="customers.id",
        description="Owning customer"
    )

    platform_id: str = Field(
        foreign_key="platforms.id",
        description="Platform the subscription is for"
    )

    plan_type: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Free-text plan type (e.g. Monthly, Annual)"
    )

    start_date: datetime = Field(
        description="Subscription start timestamp"
    )

    expiry_date: datetime = Field(
        description="Subscription expiry timestamp"
    )

    cost: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Amount charged (non-negative)"
    )

    status: SubscriptionStatus = Field(
        default=SubscriptionStatus.PENDING,
        description="Subscription status (active, expired, pending, cancelled)"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Subscription creation timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "a4d1c0a2-2c3e-4b8e-9d0f-6f2d9d5e7b01",
                "customer_id": "3f6c1a52-8f0e-4d55-9a53-0c2f1f8f9a11",
                "platform_id": "8c0b2d7e-1a4f-4e3b-a2c5-7d9e0f1a2b3c",
                "plan_type": "Monthly",
                "start_date": "2024-01-01T00:00:00Z",
                "expiry_date": "2024-02-01T00:00:00Z",
                "cost": "1499.00",
                "status": "active",
                "notes": "Premium plan",
                "created_at": "2024-01-01T00:00:00Z"
            }
        }
