"""
Password reset emails.
"""

from __future__ import annotations

from urllib.parse import urlencode

from talanta_gallery.server.core.constant import RESET_TOKEN_TTL_MINUTES

from .mailer import Mailer


def build_reset_url(site_url: str, token: str) -> str:
    """Link to the portal page that accepts the reset token."""
    return f"{site_url.rstrip('/')}/artist/reset-password?{urlencode({'token': token})}"


async def send_password_reset(mailer: Mailer, name: str, email: str, token: str) -> bool:
    """Email a single-use reset link. ``token`` is the plain token, never stored."""
    return await mailer.send(
        to=email,
        subject="Reset Your Talanta Art Gallery Password",
        template="password_reset",
        context={
            "name": name,
            "reset_url": build_reset_url(mailer.site_url, token),
            "expires_minutes": RESET_TOKEN_TTL_MINUTES,
        },
    )
