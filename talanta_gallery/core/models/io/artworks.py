"""
Artwork I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from talanta_gallery.core.models.domain import ArtworkAvailability, ArtworkCategory

from .common import reject_null


class ArtworkFields(BaseModel):
    """Descriptive fields an artist controls."""

    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    medium: str = ""
    dimensions: str = ""
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = None
    category: ArtworkCategory = ArtworkCategory.painting


class ArtworkCreate(ArtworkFields):
    """Schema for creating an artwork from the back-office."""

    artist_id: int
    availability: ArtworkAvailability = ArtworkAvailability.available
    featured: bool = False


class ArtistArtworkCreate(ArtworkFields):
    """Schema for an artist adding an artwork to their own portfolio.

    New artworks start available and unfeatured; any ``availability`` or
    ``featured`` in the body is ignored.
    """


class ArtistArtworkUpdate(BaseModel):
    """Schema for an artist editing one of their artworks; only provided fields change.

    Availability follows the order workflow and featuring is an admin
    decision, so any ``availability`` or ``featured`` in the body is ignored.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    medium: Optional[str] = None
    dimensions: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    image_url: Optional[str] = None
    category: Optional[ArtworkCategory] = None

    @field_validator("title", "description", "medium", "dimensions", "price", "category")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)


class ArtworkUpdate(ArtistArtworkUpdate):
    """Schema for updating an artwork from the back-office."""

    availability: Optional[ArtworkAvailability] = None
    featured: Optional[bool] = None

    @field_validator("availability", "featured")
    @classmethod
    def _flags_not_null(cls, value):
        return reject_null(value)


class ArtworkRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    artist_id: int
    title: str
    description: str
    medium: str
    dimensions: str
    price: Decimal
    image_url: Optional[str] = None
    category: str
    availability: str
    featured: bool
    created_at: datetime
    updated_at: datetime


class ArtistSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class ArtworkWithArtist(ArtworkRead):
    """Artwork joined with the artist that owns it."""

    artist: ArtistSummary


def artwork_with_artist(artwork, artist) -> ArtworkWithArtist:
    """Build the joined shape from an ``(Artwork, Artist)`` row."""
    data = ArtworkRead.model_validate(artwork).model_dump()
    return ArtworkWithArtist(**data, artist=ArtistSummary.model_validate(artist))
