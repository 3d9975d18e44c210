"""Customer Domain Entity

People who hold subscriptions.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import String, Text
from src.domain.base import BaseModel, generate_uuid


class Customer(BaseModel, table=True):
    """
    Customer - Holder of one or more subscriptions

    Domain Rules:
    - A customer with subscriptions cannot be deleted (enforced by the CRUD layer)
    """

    __tablename__ = "customers"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Unique customer identifier (UUID)"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Customer display name"
    )

    email: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Contact email"
    )

    phone: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Contact phone number"
    )

    address: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Postal address"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Customer creation timestamp"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "id": "3f6c1a52-8f0e-4d55-9a53-0c2f1f8f9a11",
                "name": "Rahul Shah",
                "email": "rahul.shah@example.com",
                "phone": "+977-9801234567",
                "address": "Kathmandu, Nepal",
                "created_at": "2024-01-01T00:00:00Z"
            }
        }
