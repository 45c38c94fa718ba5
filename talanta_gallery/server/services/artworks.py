"""
Artwork Service.

Create / update / delete of artworks, shared by the back-office and the
artist portal. Enum fields are stored by value.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict

from talanta_gallery.core.database.entities import Artwork
from talanta_gallery.core.database.repositories import RepoBundle
from talanta_gallery.core.errors import ValidationFailedError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.io.artworks import ArtistArtworkUpdate, ArtworkFields

logger = get_logger(__name__)


def _column_values(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value.value if isinstance(value, Enum) else value for key, value in data.items()}


class ArtworkService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def create(self, artist_id: int, fields: ArtworkFields) -> Artwork:
        """Add an artwork to an artist's portfolio.

        Raises:
            ValidationFailedError: The artist does not exist
        """
        if await self.repos.artists.get_by_id(artist_id) is None:
            raise ValidationFailedError(f"Artist {artist_id} not found")
        values = _column_values(fields.model_dump(exclude={"artist_id"}))
        artwork = await self.repos.artworks.create(Artwork(artist_id=artist_id, **values))
        logger.info(f"Artwork {artwork.id} created for artist {artist_id}")
        return artwork

    async def update(self, artwork: Artwork, payload: ArtistArtworkUpdate) -> Artwork:
        """Apply the fields present in ``payload``; back-office payloads may also change availability."""
        for key, value in _column_values(payload.model_dump(exclude_unset=True)).items():
            setattr(artwork, key, value)
        return await self.repos.artworks.update(artwork)

    async def delete(self, artwork: Artwork) -> None:
        await self.repos.artworks.delete(artwork.id)
        logger.info(f"Artwork {artwork.id} deleted")
