"""
Artist repository implementation.

This module provides data access operations for artist profiles, including
the public (approved and active) listings and the pending-approval queue.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete as sa_delete
from sqlalchemy import func
from sqlmodel import select

from ..entities.artists import Artist
from .base import BaseRepository, QueryBuilder


class ArtistRepository(BaseRepository[Artist]):
    """Repository for artist data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Artist)

    @staticmethod
    def _public(stmt):
        return stmt.where(Artist.approved == True, Artist.is_active == True)  # noqa: E712

    async def get_by_slug(self, slug: str) -> Optional[Artist]:
        stmt = select(Artist).where(Artist.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: int) -> Optional[Artist]:
        stmt = select(Artist).where(Artist.user_id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        stmt = select(Artist.id).where(Artist.slug == slug).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def list_public(
        self,
        featured: Optional[bool] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Artist]:
        """List approved, active artists ordered by name.

        Args:
            featured: Restrict to featured artists when True
            search: Case-insensitive substring of the name or specialty
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            List of Artist instances
        """
        stmt = self._public(select(Artist)).order_by(Artist.name)
        if featured:
            stmt = stmt.where(Artist.featured == True)  # noqa: E712
        if search:
            stmt = stmt.where(
                QueryBuilder.contains(Artist.name, search) | QueryBuilder.contains(Artist.specialty, search)
            )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_public(self, artist_id: int) -> Optional[Artist]:
        stmt = self._public(select(Artist)).where(Artist.id == artist_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_public_by_slug(self, slug: str) -> Optional[Artist]:
        stmt = self._public(select(Artist)).where(Artist.slug == slug)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_pending(self) -> List[Artist]:
        """Get all registrations awaiting an admin decision, oldest first."""
        stmt = select(Artist).where(Artist.approved == False).order_by(Artist.created_at.asc())  # noqa: E712
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_all(
        self, approved: Optional[bool] = None, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Artist]:
        stmt = select(Artist).order_by(Artist.created_at.desc())  # type: ignore
        if approved is not None:
            stmt = stmt.where(Artist.approved == approved)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_approval(self) -> dict[str, int]:
        """Count artists grouped into ``approved`` and ``pending``."""
        stmt = select(Artist.approved, func.count()).group_by(Artist.approved)
        result = await self.session.execute(stmt)
        counts = {"approved": 0, "pending": 0}
        for approved, count in result.all():
            counts["approved" if approved else "pending"] = int(count)
        return counts

    async def names_by_id(self, artist_ids: List[int]) -> dict[int, str]:
        if not artist_ids:
            return {}
        stmt = select(Artist.id, Artist.name).where(Artist.id.in_(artist_ids))  # type: ignore
        result = await self.session.execute(stmt)
        return {artist_id: name for artist_id, name in result.all()}

    async def delete_by_id(self, artist_id: int) -> None:
        """Delete the row without loading it first; used inside multi-table deletes."""
        await self.session.execute(sa_delete(Artist).where(Artist.id == artist_id))
