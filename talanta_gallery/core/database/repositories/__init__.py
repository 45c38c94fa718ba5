"""
Data access layer.

One repository class per entity group, all built on ``BaseRepository`` and
bundled by ``build_repos_from_session`` for dependency injection.
"""

from .artists import ArtistRepository
from .artworks import ArtworkRepository
from .base import BaseRepository, QueryBuilder
from .blog import BlogPostRepository, BlogShareRepository
from .bundle import RepoBundle, build_repos_from_session
from .exhibitions import ExhibitionRepository
from .media_files import MediaFileRepository
from .newsletter import NewsletterRepository
from .notification_preferences import NotificationPreferencesRepository
from .orders import OrderRepository
from .password_reset_tokens import PasswordResetTokenRepository
from .users import UserRepository

__all__ = [
    "ArtistRepository",
    "ArtworkRepository",
    "BaseRepository",
    "BlogPostRepository",
    "BlogShareRepository",
    "ExhibitionRepository",
    "MediaFileRepository",
    "NewsletterRepository",
    "NotificationPreferencesRepository",
    "OrderRepository",
    "PasswordResetTokenRepository",
    "QueryBuilder",
    "RepoBundle",
    "UserRepository",
    "build_repos_from_session",
]
