"""
Artist entity models.

An artist row is created in the pending state (``approved=False``) at
registration. Approval sets ``approved`` and ``approved_at``; rejection
deletes the row together with its user.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class Artist(Base, table=True):
    """Artist profile.

    Table: artists
    """

    __tablename__ = "artists"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True, unique=True)

    name: str = Field(max_length=255)
    slug: str = Field(max_length=255, unique=True, index=True)
    bio: str = Field(default="", sa_type=Text)
    specialty: str = Field(default="", max_length=255)
    image_url: Optional[str] = Field(default=None, max_length=1024)
    featured: bool = Field(default=False, index=True)

    # Approval workflow
    approved: bool = Field(default=False, index=True)
    approved_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    is_active: bool = Field(default=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    @property
    def status(self) -> str:
        """Approval state as exposed to admins: ``pending`` or ``approved``."""
        return "approved" if self.approved else "pending"

    def __repr__(self) -> str:
        return f"Artist(id={self.id}, slug={self.slug}, approved={self.approved})"
