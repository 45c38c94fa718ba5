"""
Exhibition entity models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class Exhibition(Base, table=True):
    """Gallery exhibition. At most one is flagged ``current`` at a time.

    Table: exhibitions
    """

    __tablename__ = "exhibitions"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    description: str = Field(default="", sa_type=Text)
    image_url: Optional[str] = Field(default=None, max_length=1024)

    start_date: datetime = Field(sa_type=DateTime)
    end_date: datetime = Field(sa_type=DateTime)
    opening_reception: Optional[str] = Field(default=None, max_length=255)
    current: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def __repr__(self) -> str:
        return f"Exhibition(id={self.id}, title={self.title}, current={self.current})"
