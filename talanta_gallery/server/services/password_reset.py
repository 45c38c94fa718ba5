"""
Password Reset Service.

The emailed token is random and only its SHA-256 digest is stored. Consuming a
token is a conditional update (``used = false AND expires_at > now``) committed
together with the new password hash, so a token works at most once and never
after it expires.
"""

from __future__ import annotations

from datetime import timedelta

from talanta_gallery.core.database import utc_now
from talanta_gallery.core.database.entities import PasswordResetToken
from talanta_gallery.core.database.repositories import RepoBundle
from talanta_gallery.core.errors import ValidationFailedError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.security import generate_reset_token, hash_password, hash_reset_token
from talanta_gallery.notifications.mailer import Mailer
from talanta_gallery.notifications.password_reset import send_password_reset
from talanta_gallery.server.core.constant import RESET_TOKEN_TTL_MINUTES

logger = get_logger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid or expired reset token"


class PasswordResetService:
    def __init__(self, repos: RepoBundle, mailer: Mailer, ttl_minutes: int = RESET_TOKEN_TTL_MINUTES) -> None:
        self.repos = repos
        self.mailer = mailer
        self.ttl = timedelta(minutes=ttl_minutes)

    async def request_reset(self, email: str) -> bool:
        """Issue and email a reset token for an artist account.

        Unknown or inactive accounts are ignored so the endpoint does not reveal
        which emails are registered.

        Returns:
            True if an email was sent
        """
        user = await self.repos.users.get_by_email(email)
        if user is None or not user.is_active:
            logger.info("Password reset requested for an unknown or inactive account")
            return False
        artist = await self.repos.artists.get_by_user_id(user.id)
        if artist is None:
            logger.info(f"Password reset requested for user {user.id} without an artist profile")
            return False

        token = generate_reset_token()
        await self.repos.reset_tokens.invalidate_for_user(user.id)
        await self.repos.reset_tokens.create(
            PasswordResetToken(
                user_id=user.id,
                token_hash=hash_reset_token(token),
                expires_at=utc_now() + self.ttl,
            ),
            commit=False,
        )
        await self.repos.commit()
        logger.info(f"Password reset token issued for user {user.id}")

        return await send_password_reset(self.mailer, artist.name, user.email, token)

    async def is_valid(self, token: str) -> bool:
        row = await self.repos.reset_tokens.get_by_hash(hash_reset_token(token))
        return row is not None and row.is_usable(utc_now())

    async def reset_password(self, token: str, new_password: str) -> None:
        """Set a new password with a reset token.

        Raises:
            ValidationFailedError: Token unknown, already used or expired
        """
        row = await self.repos.reset_tokens.get_by_hash(hash_reset_token(token))
        if row is None:
            raise ValidationFailedError(INVALID_TOKEN_MESSAGE)
        user = await self.repos.users.get_by_id(row.user_id)
        if user is None:
            raise ValidationFailedError(INVALID_TOKEN_MESSAGE)

        try:
            consumed = await self.repos.reset_tokens.consume(row.id, utc_now())
            if not consumed:
                raise ValidationFailedError(INVALID_TOKEN_MESSAGE)
            user.password_hash = hash_password(new_password)
            await self.repos.users.update(user, commit=False)
            await self.repos.commit()
        except Exception:
            await self.repos.rollback()
            raise
        logger.info(f"Password reset completed for user {user.id}")
