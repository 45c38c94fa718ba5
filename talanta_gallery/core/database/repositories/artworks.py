"""
Artwork repository implementation.

This module provides data access operations for artworks: storefront
filtering and search, per-artist listings and bulk availability changes used
by the order workflow.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete as sa_delete
from sqlalchemy import or_, update
from sqlmodel import select

from ..base import utc_now
from ..entities.artists import Artist
from ..entities.artworks import Artwork
from .base import BaseRepository, QueryBuilder


class ArtworkRepository(BaseRepository[Artwork]):
    """Repository for artwork data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Artwork)

    @staticmethod
    def _with_public_artist(stmt):
        return stmt.join(Artist, Artist.id == Artwork.artist_id).where(
            Artist.approved == True, Artist.is_active == True  # noqa: E712
        )

    async def search(
        self,
        category: Optional[str] = None,
        artist_id: Optional[int] = None,
        search: Optional[str] = None,
        availability: Optional[str] = None,
        featured: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Tuple[Artwork, Artist]]:
        """Storefront listing of artworks by approved, active artists.

        Args:
            category: Exact category
            artist_id: Owning artist
            search: Case-insensitive substring of title, description or artist name
            availability: Exact availability state
            featured: Restrict to featured artworks when True
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            ``(artwork, artist)`` pairs, newest first
        """
        stmt = self._with_public_artist(select(Artwork, Artist)).order_by(Artwork.created_at.desc(), Artwork.id.desc())  # type: ignore
        stmt = QueryBuilder.apply_filters(
            stmt, Artwork, {"category": category, "artist_id": artist_id, "availability": availability}
        )
        if featured:
            stmt = stmt.where(Artwork.featured == True)  # noqa: E712
        if search:
            stmt = stmt.where(
                or_(
                    QueryBuilder.contains(Artwork.title, search),
                    QueryBuilder.contains(Artwork.description, search),
                    QueryBuilder.contains(Artist.name, search),
                )
            )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return [(artwork, artist) for artwork, artist in result.all()]

    async def get_with_artist(self, artwork_id: int, public_only: bool = True) -> Optional[Tuple[Artwork, Artist]]:
        stmt = select(Artwork, Artist).join(Artist, Artist.id == Artwork.artist_id).where(Artwork.id == artwork_id)
        if public_only:
            stmt = stmt.where(Artist.approved == True, Artist.is_active == True)  # noqa: E712
        result = await self.session.execute(stmt)
        row = result.first()
        return (row[0], row[1]) if row else None

    async def list_by_artist(
        self, artist_id: int, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Artwork]:
        stmt = select(Artwork).where(Artwork.artist_id == artist_id).order_by(Artwork.created_at.desc())  # type: ignore
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_artist(self, artwork_id: int, artist_id: int) -> Optional[Artwork]:
        """Get an artwork only if it belongs to the given artist."""
        stmt = select(Artwork).where(Artwork.id == artwork_id, Artwork.artist_id == artist_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, artwork_ids: Sequence[int], public_only: bool = False) -> dict[int, Artwork]:
        """Fetch artworks by id; with ``public_only`` only those the storefront shows."""
        if not artwork_ids:
            return {}
        stmt = select(Artwork).where(Artwork.id.in_(list(artwork_ids)))  # type: ignore
        if public_only:
            stmt = self._with_public_artist(stmt)
        result = await self.session.execute(stmt)
        return {artwork.id: artwork for artwork in result.scalars().all()}

    async def set_availability(
        self, artwork_ids: Sequence[int], availability: str, only_from: Optional[str] = None
    ) -> int:
        """Bulk-update availability; ``only_from`` restricts the change to rows in that state.

        Does not commit: the order workflow commits it with the status change.

        Returns:
            Number of rows changed
        """
        if not artwork_ids:
            return 0
        stmt = (
            update(Artwork)
            .where(Artwork.id.in_(list(artwork_ids)))  # type: ignore
            .values(availability=availability, updated_at=utc_now())
        )
        if only_from is not None:
            stmt = stmt.where(Artwork.availability == only_from)
        result = await self.session.execute(stmt)
        return result.rowcount or 0

    async def artwork_ids_for_artist(self, artist_id: int) -> List[int]:
        stmt = select(Artwork.id).where(Artwork.artist_id == artist_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_artist(self, artist_id: int) -> int:
        """Delete every artwork of an artist without committing. Returns the row count."""
        result = await self.session.execute(sa_delete(Artwork).where(Artwork.artist_id == artist_id))
        return result.rowcount or 0
