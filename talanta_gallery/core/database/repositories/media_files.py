"""
Media file repository implementation.

This module provides data access operations for uploaded files, with
server-side search and paging for the media library.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete as sa_delete
from sqlalchemy import func, or_
from sqlmodel import select

from ..entities.media_files import MediaFile
from .base import BaseRepository, QueryBuilder


class MediaFileRepository(BaseRepository[MediaFile]):
    """Repository for media file data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, MediaFile)

    def _search_stmt(self, stmt, artist_id: Optional[int], search: Optional[str], media_type: Optional[str]):
        stmt = QueryBuilder.apply_filters(stmt, MediaFile, {"artist_id": artist_id, "media_type": media_type})
        if search:
            stmt = stmt.where(
                or_(
                    QueryBuilder.contains(MediaFile.original_name, search),
                    QueryBuilder.contains(MediaFile.description, search),
                    QueryBuilder.contains(MediaFile.alt_text, search),
                    QueryBuilder.contains(MediaFile.tags, search),
                )
            )
        return stmt

    async def search(
        self,
        artist_id: Optional[int] = None,
        search: Optional[str] = None,
        media_type: Optional[str] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[MediaFile]:
        """List media files, newest first, filtered by owner, text and type.

        Args:
            artist_id: Owning artist; None lists every file
            search: Substring of the original name, description, alt text or tags
            media_type: image, video or document
            limit: Maximum records to return
            offset: Records to skip

        Returns:
            List of MediaFile instances
        """
        stmt = select(MediaFile).order_by(MediaFile.created_at.desc(), MediaFile.id.desc())  # type: ignore
        stmt = self._search_stmt(stmt, artist_id, search, media_type)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_matching(
        self, artist_id: Optional[int] = None, search: Optional[str] = None, media_type: Optional[str] = None
    ) -> int:
        stmt = self._search_stmt(select(func.count()).select_from(MediaFile), artist_id, search, media_type)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def get_for_artist(self, media_id: int, artist_id: int) -> Optional[MediaFile]:
        stmt = select(MediaFile).where(MediaFile.id == media_id, MediaFile.artist_id == artist_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def paths_for_artist(self, artist_id: int) -> List[str]:
        stmt = select(MediaFile.path).where(MediaFile.artist_id == artist_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_by_artist(self, artist_id: int) -> int:
        """Delete every media row of an artist without committing. Returns the row count."""
        result = await self.session.execute(sa_delete(MediaFile).where(MediaFile.artist_id == artist_id))
        return result.rowcount or 0
