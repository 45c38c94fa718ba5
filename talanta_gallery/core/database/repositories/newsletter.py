"""
Newsletter subscriber repository implementation.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import select

from ..entities.newsletter import NewsletterSubscriber
from .base import BaseRepository


class NewsletterRepository(BaseRepository[NewsletterSubscriber]):
    def __init__(self, session) -> None:
        super().__init__(session, NewsletterSubscriber)

    async def get_by_email(self, email: str) -> Optional[NewsletterSubscriber]:
        stmt = select(NewsletterSubscriber).where(NewsletterSubscriber.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
