"""
Notification preference entity models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from ..base import Base, utc_now


class NotificationPreferences(Base, table=True):
    """Per-artist email switches, created with defaults at registration.

    Table: notification_preferences
    """

    __tablename__ = "notification_preferences"

    id: Optional[int] = Field(default=None, primary_key=True)
    artist_id: int = Field(foreign_key="artists.id", unique=True, index=True)

    email_notifications: bool = Field(default=True)
    order_notifications: bool = Field(default=True)
    exhibition_notifications: bool = Field(default=True)
    marketing_emails: bool = Field(default=False)

    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})
