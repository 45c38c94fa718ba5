"""
User repository implementation.

This module provides data access operations for login accounts, including
lookups by username or email used by the auth endpoints.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import or_
from sqlmodel import select

from ..entities.users import User
from .base import BaseRepository, QueryBuilder


class UserRepository(BaseRepository[User]):
    """Repository for user data access operations using SQLModel."""

    def __init__(self, session) -> None:
        super().__init__(session, User)

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get a user by exact username."""
        stmt = select(User).where(User.username == username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, ignoring case."""
        stmt = select(User).where(User.email == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_conflict(self, username: str, email: str) -> Optional[User]:
        """Return an existing user holding either the username or the email."""
        stmt = select(User).where(or_(User.username == username, User.email == email.strip().lower())).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def has_admin(self) -> bool:
        stmt = select(User.id).where(User.is_admin == True).limit(1)  # noqa: E712
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def search(
        self,
        search: Optional[str] = None,
        is_admin: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[User]:
        """List users, optionally filtered by a username/email substring and role."""
        stmt = select(User).order_by(User.created_at.desc())  # type: ignore
        if search:
            stmt = stmt.where(or_(QueryBuilder.contains(User.username, search), QueryBuilder.contains(User.email, search)))
        if is_admin is not None:
            stmt = stmt.where(User.is_admin == is_admin)
        stmt = QueryBuilder.apply_pagination(stmt, limit, offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
