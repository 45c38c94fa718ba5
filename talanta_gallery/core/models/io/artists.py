"""
Artist I/O models for API requests and responses.

This module contains the registration payload, the public artist shape served
by the storefront and the admin view that exposes the approval state.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import reject_null
from .users import UserCredentials


class ArtistProfileFields(BaseModel):
    """Profile fields an artist provides at registration."""

    name: str = Field(min_length=1, max_length=255)
    bio: str = Field(default="", max_length=10000)
    specialty: str = Field(default="", max_length=255)
    image_url: Optional[str] = Field(default=None, max_length=1024)


class ArtistRegistrationRequest(BaseModel):
    """Body of ``POST /api/artists/register``."""

    user: UserCredentials
    artist: ArtistProfileFields


class ArtistRead(BaseModel):
    """Public artist profile."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    bio: str
    specialty: str
    image_url: Optional[str] = None
    featured: bool
    created_at: datetime


class ArtistAdminRead(ArtistRead):
    """Artist as seen by admins and by the artist themself."""

    user_id: Optional[int] = None
    approved: bool
    approved_at: Optional[datetime] = None
    is_active: bool
    status: str = Field(description="pending or approved")
    updated_at: datetime


class ArtistRegistrationResponse(BaseModel):
    message: str
    artist: ArtistAdminRead
    email_sent: bool = Field(description="Whether the confirmation email was delivered")


class ArtistCreate(BaseModel):
    """Schema for creating an artist from the back-office (approved immediately)."""

    name: str = Field(min_length=1, max_length=255)
    bio: str = ""
    specialty: str = ""
    image_url: Optional[str] = None
    featured: bool = False
    slug: Optional[str] = Field(default=None, max_length=255, description="Derived from the name when omitted")


class ArtistUpdate(BaseModel):
    """Schema for updating an artist from the back-office."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    bio: Optional[str] = None
    specialty: Optional[str] = None
    image_url: Optional[str] = None
    featured: Optional[bool] = None
    is_active: Optional[bool] = None

    @field_validator("name", "bio", "specialty", "featured", "is_active")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)


class ArtistProfileUpdate(BaseModel):
    """Schema for an artist editing their own profile."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    bio: Optional[str] = None
    specialty: Optional[str] = None
    image_url: Optional[str] = None

    @field_validator("name", "bio", "specialty")
    @classmethod
    def _not_null(cls, value):
        return reject_null(value)


class PendingArtistRead(ArtistAdminRead):
    """Pending registration with the login details the admin needs to decide."""

    username: Optional[str] = None
    email: Optional[str] = None


class ArtistDecisionResponse(BaseModel):
    """Outcome of an approve / reject call."""

    artist_id: int
    status: str = Field(description="approved or rejected")
    email_sent: bool
    message: str


def pending_artist(artist, user) -> PendingArtistRead:
    data = ArtistAdminRead.model_validate(artist).model_dump()
    return PendingArtistRead(
        **data,
        username=user.username if user is not None else None,
        email=user.email if user is not None else None,
    )
