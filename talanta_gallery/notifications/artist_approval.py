"""
Artist registration and approval emails.

The rejection notice is sent after the artist and user rows are deleted, so
every function here takes plain contact details rather than entities that may
no longer exist.
"""

from __future__ import annotations

from talanta_gallery.core.database.entities import Artist
from talanta_gallery.core.logging_config import get_logger

from .mailer import Mailer

logger = get_logger(__name__)


async def send_registration_confirmation(mailer: Mailer, artist_name: str, email: str) -> bool:
    """Tell a newly registered artist that the application is pending review."""
    return await mailer.send(
        to=email,
        subject="Welcome to Talanta Art Gallery - Registration Received",
        template="artist_registration",
        context={"artist_name": artist_name},
    )


async def send_admin_approval_request(mailer: Mailer, artist: Artist, username: str, email: str) -> bool:
    """Ask the gallery admin to review a new registration."""
    return await mailer.send(
        to=mailer.admin_email,
        subject=f"New Artist Registration - Approval Required: {artist.name}",
        template="admin_approval_request",
        context={
            "artist": artist,
            "username": username,
            "email": email,
            "review_url": f"{mailer.site_url}/admin/artists",
        },
    )


async def send_approval_notice(mailer: Mailer, artist_name: str, email: str) -> bool:
    return await mailer.send(
        to=email,
        subject="Welcome to Talanta Art Gallery - Your Account is Approved!",
        template="artist_approved",
        context={"artist_name": artist_name, "login_url": f"{mailer.site_url}/artist/login"},
    )


async def send_rejection_notice(mailer: Mailer, artist_name: str, email: str) -> bool:
    return await mailer.send(
        to=email,
        subject="Talanta Art Gallery Registration Update",
        template="artist_rejected",
        context={"artist_name": artist_name},
    )
