"""
Artist Service.

Slug generation, back-office artist management and the multi-table purge used
both when a registration is rejected and when an admin deletes an artist.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional

from talanta_gallery.core.database import utc_now
from talanta_gallery.core.database.entities import Artist
from talanta_gallery.core.database.repositories import ArtistRepository, RepoBundle
from talanta_gallery.core.errors import ConflictError, NotFoundError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.io.artists import ArtistCreate, ArtistUpdate

logger = get_logger(__name__)

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """``"Amani Wanjiru-Kamau"`` -> ``"amani-wanjiru-kamau"``."""
    normalized = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_CHARS.sub("-", normalized.lower()).strip("-")
    return slug or "artist"


async def unique_slug(artists: ArtistRepository, name: str, requested: Optional[str] = None) -> str:
    """Slug for ``requested`` (or the name), suffixed with -2, -3, ... on conflict."""
    base = slugify(requested or name)
    candidate = base
    suffix = 2
    while await artists.slug_exists(candidate):
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


@dataclass
class PurgeResult:
    artworks_deleted: int
    media_deleted: int
    media_paths: List[str]


async def purge_artist(repos: RepoBundle, artist: Artist, delete_user: bool = True) -> PurgeResult:
    """Stage the deletion of an artist and everything it owns.

    Deletes artworks, media rows, notification preferences, the artist row and
    (when ``delete_user``) its user with outstanding reset tokens. Nothing is
    committed; the caller commits or rolls back the whole set. Returned media
    paths are for the caller to remove from disk after the commit.
    """
    media_paths = await repos.media.paths_for_artist(artist.id)
    artworks_deleted = await repos.artworks.delete_by_artist(artist.id)
    media_deleted = await repos.media.delete_by_artist(artist.id)
    await repos.notification_preferences.delete_by_artist(artist.id)
    user_id = artist.user_id
    await repos.artists.delete_by_id(artist.id)
    if delete_user and user_id is not None:
        await repos.reset_tokens.delete_for_user(user_id)
        await repos.users.delete(user_id, commit=False)
    return PurgeResult(artworks_deleted=artworks_deleted, media_deleted=media_deleted, media_paths=media_paths)


class ArtistAdminService:
    """Back-office management of artist profiles."""

    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def get(self, artist_id: int) -> Artist:
        artist = await self.repos.artists.get_by_id(artist_id)
        if artist is None:
            raise NotFoundError("Artist", artist_id)
        return artist

    async def create(self, payload: ArtistCreate) -> Artist:
        """Create an artist without a login; admin-created artists are approved immediately."""
        if payload.slug and await self.repos.artists.slug_exists(slugify(payload.slug)):
            raise ConflictError(f"Slug '{slugify(payload.slug)}' is already in use")
        now = utc_now()
        artist = Artist(
            name=payload.name,
            slug=await unique_slug(self.repos.artists, payload.name, payload.slug),
            bio=payload.bio,
            specialty=payload.specialty,
            image_url=payload.image_url,
            featured=payload.featured,
            approved=True,
            approved_at=now,
        )
        artist = await self.repos.artists.create(artist)
        logger.info(f"Admin created artist {artist.id} ({artist.slug})")
        return artist

    async def update(self, artist_id: int, payload: ArtistUpdate) -> Artist:
        artist = await self.get(artist_id)
        changes = payload.model_dump(exclude_unset=True)
        if "name" in changes and changes["name"] != artist.name:
            artist.slug = await unique_slug(self.repos.artists, changes["name"])
        for key, value in changes.items():
            setattr(artist, key, value)
        return await self.repos.artists.update(artist)

    async def delete(self, artist_id: int) -> PurgeResult:
        artist = await self.get(artist_id)
        try:
            result = await purge_artist(self.repos, artist)
            await self.repos.commit()
        except Exception:
            await self.repos.rollback()
            raise
        logger.info(
            f"Admin deleted artist {artist_id}: {result.artworks_deleted} artworks, {result.media_deleted} media files"
        )
        return result
