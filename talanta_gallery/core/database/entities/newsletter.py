"""
Newsletter subscriber entity models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from ..base import Base, utc_now


class NewsletterSubscriber(Base, table=True):
    """Table: newsletter_subscribers"""

    __tablename__ = "newsletter_subscribers"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    subscribed_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
