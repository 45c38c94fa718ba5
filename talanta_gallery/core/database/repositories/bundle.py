"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances sharing
one session, so a service can change several tables in a single transaction.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .artists import ArtistRepository
from .artworks import ArtworkRepository
from .blog import BlogPostRepository, BlogShareRepository
from .exhibitions import ExhibitionRepository
from .media_files import MediaFileRepository
from .newsletter import NewsletterRepository
from .notification_preferences import NotificationPreferencesRepository
from .orders import OrderRepository
from .password_reset_tokens import PasswordResetTokenRepository
from .users import UserRepository


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all SQL repositories for dependency injection."""

    session: AsyncSession
    users: UserRepository
    artists: ArtistRepository
    artworks: ArtworkRepository
    exhibitions: ExhibitionRepository
    orders: OrderRepository
    media: MediaFileRepository
    notification_preferences: NotificationPreferencesRepository
    reset_tokens: PasswordResetTokenRepository
    newsletter: NewsletterRepository
    blog_posts: BlogPostRepository
    blog_shares: BlogShareRepository

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def build_repos_from_session(*, session: AsyncSession) -> RepoBundle:
    """Build a RepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        session=session,
        users=UserRepository(session),
        artists=ArtistRepository(session),
        artworks=ArtworkRepository(session),
        exhibitions=ExhibitionRepository(session),
        orders=OrderRepository(session),
        media=MediaFileRepository(session),
        notification_preferences=NotificationPreferencesRepository(session),
        reset_tokens=PasswordResetTokenRepository(session),
        newsletter=NewsletterRepository(session),
        blog_posts=BlogPostRepository(session),
        blog_shares=BlogShareRepository(session),
    )
