"""Request schemas for Notification API

Pydantic models for validating query parameters.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator


class ListNotificationsQuerySchema(BaseModel):
    """
    Query schema for listing notifications

    Used for GET /notifications endpoint.
    """

    search: Optional[str] = Field(
        default=None,
        max_length=200,
        description="Case-insensitive text matched against title or message"
    )

    unread_only: bool = Field(
        default=False,
        description="Only return unread notifications"
    )

    limit: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Page size (1-200)"
    )

    offset: int = Field(
        default=0,
        ge=0,
        description="Number of notifications to skip"
    )

    @field_validator('search')
    @classmethod
    def blank_search_is_none(cls, v):
        """Treat an empty search box as no filter"""
        if v is not None and not v.strip():
            return None
        return v
