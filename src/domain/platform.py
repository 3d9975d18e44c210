"""Platform Domain Entity

Services (streaming, gift cards, ...) that subscriptions are sold for.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel, generate_uuid


class PlatformType(str, Enum):
    """Kinds of platform"""
    SUBSCRIPTION = "subscription"
    GIFT_CARD = "gift_card"


class Platform(BaseModel, table=True):
    """Platform - A service that subscriptions are sold for"""

    __tablename__ = "platforms"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique platform identifier (UUID)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Platform display name"
    )

    type: PlatformType = Field(
        default=PlatformType.SUBSCRIPTION,
        description="Platform type (subscription, gift_card)"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
    )

    logo_url: Optional[str] = Field(
        default=None,
        sa_column=Column(String(1024), nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Platform creation timestamp"
    )
