"""
Exhibition repository implementation.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import update
from sqlmodel import select

from ..entities.exhibitions import Exhibition
from .base import BaseRepository, QueryBuilder


class ExhibitionRepository(BaseRepository[Exhibition]):
    """Repository for exhibitions using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, Exhibition)

    async def list_exhibitions(self, limit: Optional[int] = None, offset: Optional[int] = None) -> List[Exhibition]:
        stmt = select(Exhibition).order_by(Exhibition.start_date.desc())  # type: ignore
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_current(self) -> Optional[Exhibition]:
        stmt = (
            select(Exhibition)
            .where(Exhibition.current == True)  # noqa: E712
            .order_by(Exhibition.start_date.desc())  # type: ignore
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def clear_current(self, except_id: Optional[int] = None) -> None:
        """Unflag every current exhibition other than ``except_id``, without committing."""
        stmt = update(Exhibition).where(Exhibition.current == True).values(current=False)  # noqa: E712
        if except_id is not None:
            stmt = stmt.where(Exhibition.id != except_id)
        await self.session.execute(stmt)
