"""
Artwork entity models.

This module contains the database entity for pieces listed in the storefront.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class Artwork(Base, table=True):
    """Artwork owned by exactly one artist.

    ``availability`` moves between available, reserved and sold as orders
    are paid, completed or cancelled.

    Table: artworks
    """

    __tablename__ = "artworks"

    id: Optional[int] = Field(default=None, primary_key=True)
    artist_id: int = Field(foreign_key="artists.id", index=True)

    title: str = Field(max_length=255)
    description: str = Field(default="", sa_type=Text)
    medium: str = Field(default="", max_length=255)
    dimensions: str = Field(default="", max_length=255)
    price: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    image_url: Optional[str] = Field(default=None, max_length=1024)

    category: str = Field(default="painting", max_length=32, index=True)
    availability: str = Field(default="available", max_length=16, index=True)
    featured: bool = Field(default=False, index=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Artwork(id={self.id}, title={self.title}, availability={self.availability})"
