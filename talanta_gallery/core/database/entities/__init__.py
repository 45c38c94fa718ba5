"""
Database entity models.

Importing this package registers every table on ``Base.metadata``.
"""

from .artists import Artist
from .artworks import Artwork
from .blog import BlogPost, BlogShare
from .exhibitions import Exhibition
from .media_files import MediaFile
from .newsletter import NewsletterSubscriber
from .notification_preferences import NotificationPreferences
from .orders import Order, OrderItem
from .password_reset_tokens import PasswordResetToken
from .users import User

__all__ = [
    "Artist",
    "Artwork",
    "BlogPost",
    "BlogShare",
    "Exhibition",
    "MediaFile",
    "NewsletterSubscriber",
    "NotificationPreferences",
    "Order",
    "OrderItem",
    "PasswordResetToken",
    "User",
]
