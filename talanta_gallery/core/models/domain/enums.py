"""Domain enums for the gallery."""

from __future__ import annotations

from enum import Enum


class ArtworkCategory(str, Enum):
    painting = "painting"
    sculpture = "sculpture"
    photography = "photography"
    mixed_media = "mixed-media"
    digital = "digital"
    other = "other"


class ArtworkAvailability(str, Enum):
    """
    Sale state of an artwork.

    Paying an order reserves its artworks; completing it sells them and
    cancelling it makes reserved artworks available again.
    """

    available = "available"
    reserved = "reserved"
    sold = "sold"


class OrderStatus(str, Enum):
    """Lifecycle status of an order."""

    pending = "pending"
    processing = "processing"
    completed = "completed"
    cancelled = "cancelled"


class MediaType(str, Enum):
    """Coarse type of an uploaded file, derived from its MIME type."""

    image = "image"
    video = "video"
    document = "document"


class BlogSharePlatform(str, Enum):
    facebook = "facebook"
    twitter = "twitter"
    linkedin = "linkedin"
    copy = "copy"


class TokenRole(str, Enum):
    """Role claim carried by access tokens."""

    admin = "admin"
    artist = "artist"


class ArtistDecision(str, Enum):
    """Admin decision on a pending artist registration."""

    approved = "approved"
    rejected = "rejected"
