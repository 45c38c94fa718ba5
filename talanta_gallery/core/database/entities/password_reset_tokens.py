"""
Password reset token entity models.

Only the SHA-256 digest of the emailed token is stored. A token is valid while
``used`` is false and ``expires_at`` lies in the future.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field

from ..base import Base, utc_now


class PasswordResetToken(Base, table=True):
    """Single-use, time-boxed password reset token.

    Table: password_reset_tokens
    """

    __tablename__ = "password_reset_tokens"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True)
    token_hash: str = Field(max_length=64, unique=True, index=True)
    expires_at: datetime = Field(sa_type=DateTime)
    used: bool = Field(default=False)
    used_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)

    def is_usable(self, now: datetime) -> bool:
        return not self.used and self.expires_at > now

    def __repr__(self) -> str:
        return f"PasswordResetToken(id={self.id}, user_id={self.user_id}, used={self.used})"
