"""
Password reset token repository implementation.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import delete as sa_delete
from sqlalchemy import update
from sqlmodel import select

from ..base import utc_now
from ..entities.password_reset_tokens import PasswordResetToken
from .base import BaseRepository


class PasswordResetTokenRepository(BaseRepository[PasswordResetToken]):
    """Repository for password reset tokens."""

    def __init__(self, session) -> None:
        super().__init__(session, PasswordResetToken)

    async def get_by_hash(self, token_hash: str) -> Optional[PasswordResetToken]:
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def invalidate_for_user(self, user_id: int) -> None:
        """Mark every outstanding token of a user as used, without committing."""
        stmt = (
            update(PasswordResetToken)
            .where(PasswordResetToken.user_id == user_id, PasswordResetToken.used == False)  # noqa: E712
            .values(used=True, used_at=utc_now())
        )
        await self.session.execute(stmt)

    async def consume(self, token_id: int, now: datetime) -> bool:
        """Mark a token used if it is still unused and unexpired, without committing.

        Returns:
            True if this call consumed the token
        """
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.id == token_id,
                PasswordResetToken.used == False,  # noqa: E712
                PasswordResetToken.expires_at > now,
            )
            .values(used=True, used_at=now)
        )
        result = await self.session.execute(stmt)
        return result.rowcount == 1

    async def delete_for_user(self, user_id: int) -> None:
        await self.session.execute(sa_delete(PasswordResetToken).where(PasswordResetToken.user_id == user_id))
