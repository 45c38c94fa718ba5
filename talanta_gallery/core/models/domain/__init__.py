"""Domain enums shared between entities, services and the API layer."""

from .enums import (
    ArtistDecision,
    ArtworkAvailability,
    ArtworkCategory,
    BlogSharePlatform,
    MediaType,
    OrderStatus,
    TokenRole,
)

__all__ = [
    "ArtistDecision",
    "ArtworkAvailability",
    "ArtworkCategory",
    "BlogSharePlatform",
    "MediaType",
    "OrderStatus",
    "TokenRole",
]
