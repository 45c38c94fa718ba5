"""
Notification preference repository implementation.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import delete as sa_delete
from sqlmodel import select

from ..entities.notification_preferences import NotificationPreferences
from .base import BaseRepository


class NotificationPreferencesRepository(BaseRepository[NotificationPreferences]):
    """Repository for per-artist notification preferences."""

    def __init__(self, session) -> None:
        super().__init__(session, NotificationPreferences)

    async def get_by_artist(self, artist_id: int) -> Optional[NotificationPreferences]:
        stmt = select(NotificationPreferences).where(NotificationPreferences.artist_id == artist_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(self, artist_id: int) -> NotificationPreferences:
        """Get the artist's preferences, creating the defaults on first access."""
        preferences = await self.get_by_artist(artist_id)
        if preferences is None:
            preferences = await self.create(NotificationPreferences(artist_id=artist_id))
        return preferences

    async def delete_by_artist(self, artist_id: int) -> None:
        await self.session.execute(
            sa_delete(NotificationPreferences).where(NotificationPreferences.artist_id == artist_id)
        )
