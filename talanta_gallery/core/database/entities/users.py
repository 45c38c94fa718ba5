"""
User entity models.

This module contains the database entity for login accounts. Admins and
artists share this table; ``is_admin`` separates back-office accounts from
artist accounts, which are linked through ``Artist.user_id``.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import List, Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class User(Base, table=True):
    """Login account.

    Table: users
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(max_length=64, unique=True, index=True)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=128)

    is_admin: bool = Field(default=False)
    is_active: bool = Field(default=True)

    # Two-factor authentication
    two_factor_secret: Optional[str] = Field(default=None, max_length=64)
    two_factor_enabled: bool = Field(default=False)
    backup_codes: str = Field(default="[]", sa_type=Text, description="JSON array of bcrypt-hashed backup codes")

    last_login_at: Optional[datetime] = Field(default=None, sa_type=DateTime)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    def get_backup_codes_list(self) -> List[str]:
        """Get hashed backup codes as a list."""
        try:
            return json.loads(self.backup_codes) if self.backup_codes else []
        except (json.JSONDecodeError, TypeError):
            return []

    def set_backup_codes_list(self, codes: List[str]) -> None:
        """Set hashed backup codes from a list."""
        self.backup_codes = json.dumps(codes)

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username}, is_admin={self.is_admin})"
