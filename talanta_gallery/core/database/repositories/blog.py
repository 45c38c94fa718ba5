"""
Blog repository implementation.

This module provides data access operations for blog posts and the social
share events recorded against them.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlmodel import select

from ..entities.blog import BlogPost, BlogShare
from .base import BaseRepository, QueryBuilder


class BlogPostRepository(BaseRepository[BlogPost]):
    def __init__(self, session) -> None:
        super().__init__(session, BlogPost)

    async def list_posts(
        self, published_only: bool = True, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[BlogPost]:
        stmt = select(BlogPost).order_by(BlogPost.created_at.desc(), BlogPost.id.desc())  # type: ignore
        if published_only:
            stmt = stmt.where(BlogPost.published == True)  # noqa: E712
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


class BlogShareRepository(BaseRepository[BlogShare]):
    def __init__(self, session) -> None:
        super().__init__(session, BlogShare)

    async def list_with_posts(
        self, limit: Optional[int] = None, offset: Optional[int] = None
    ) -> List[Tuple[BlogShare, str]]:
        """Share events newest first, paired with the post title."""
        stmt = (
            select(BlogShare, BlogPost.title)
            .join(BlogPost, BlogPost.id == BlogShare.blog_post_id)
            .order_by(BlogShare.created_at.desc(), BlogShare.id.desc())  # type: ignore
        )
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return [(share, title) for share, title in result.all()]

    async def counts_by_platform(self) -> dict[str, int]:
        stmt = select(BlogShare.platform, func.count()).group_by(BlogShare.platform)
        result = await self.session.execute(stmt)
        return {platform: int(count) for platform, count in result.all()}
