"""
Notification preference I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class NotificationPreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    artist_id: int
    email_notifications: bool
    order_notifications: bool
    exhibition_notifications: bool
    marketing_emails: bool
    updated_at: datetime


class NotificationPreferencesUpdate(BaseModel):
    email_notifications: Optional[bool] = None
    order_notifications: Optional[bool] = None
    exhibition_notifications: Optional[bool] = None
    marketing_emails: Optional[bool] = None
