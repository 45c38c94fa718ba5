"""
Account Service.

Login for admins and artists, admin bootstrap at startup and the artist's own
password / account management.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from talanta_gallery.core.database import utc_now
from talanta_gallery.core.database.entities import Artist, User
from talanta_gallery.core.database.repositories import RepoBundle
from talanta_gallery.core.errors import (
    AuthenticationError,
    PermissionDeniedError,
    TwoFactorRequiredError,
    ValidationFailedError,
)
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.domain import TokenRole
from talanta_gallery.core.models.io.auth import ChangePasswordRequest, CloseAccountRequest
from talanta_gallery.core.security import create_access_token, hash_password, verify_password
from talanta_gallery.server.core.config import AdminBootstrapConfig
from talanta_gallery.server.services.two_factor import TwoFactorService

logger = get_logger(__name__)


@dataclass
class ArtistSession:
    token: str
    user: User
    artist: Artist


async def bootstrap_admin(repos: RepoBundle, config: AdminBootstrapConfig) -> Optional[User]:
    """Create the initial admin account if no admin exists yet.

    Returns:
        The created admin, or None when one already exists or no password is configured
    """
    if await repos.users.has_admin():
        return None
    if not config.password:
        logger.warning("No admin account exists and ADMIN_PASSWORD is not set; admin bootstrap skipped")
        return None
    existing = await repos.users.find_conflict(config.username, config.email)
    if existing is not None:
        logger.warning(f"Cannot bootstrap admin '{config.username}': username or email already taken")
        return None
    admin = await repos.users.create(
        User(
            username=config.username,
            email=config.email.lower(),
            password_hash=hash_password(config.password),
            is_admin=True,
        )
    )
    logger.info(f"Bootstrapped admin account '{admin.username}'")
    return admin


class AccountService:
    def __init__(self, repos: RepoBundle) -> None:
        self.repos = repos

    async def _record_login(self, user: User) -> None:
        user.last_login_at = utc_now()
        await self.repos.users.update(user)

    async def admin_login(self, username: str, password: str) -> str:
        user = await self.repos.users.get_by_username(username.strip())
        if user is None or not user.is_admin or not verify_password(password, user.password_hash):
            logger.info(f"Failed admin login for '{username}'")
            raise AuthenticationError("Invalid credentials")
        if not user.is_active:
            raise PermissionDeniedError("Account is deactivated")
        await self._record_login(user)
        return create_access_token(user.id, TokenRole.admin.value)

    async def artist_login(self, email: str, password: str, code: Optional[str] = None) -> ArtistSession:
        """Authenticate an artist.

        Only approved artists with active accounts receive a token. When
        two-factor authentication is on, ``code`` must be a current TOTP code
        or an unused backup code.

        Raises:
            AuthenticationError: Bad credentials or bad two-factor code
            TwoFactorRequiredError: Two-factor is on and no code was sent
            PermissionDeniedError: Registration pending or account deactivated
        """
        user = await self.repos.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        artist = await self.repos.artists.get_by_user_id(user.id)
        if artist is None:
            raise AuthenticationError("Invalid email or password")
        if not artist.approved:
            raise PermissionDeniedError("Account pending approval")
        if not user.is_active or not artist.is_active:
            raise PermissionDeniedError("Account is deactivated")

        if user.two_factor_enabled:
            if not code:
                raise TwoFactorRequiredError()
            if not await TwoFactorService(self.repos).verify_login_code(user, code):
                raise AuthenticationError("Invalid two-factor authentication code")

        await self._record_login(user)
        token = create_access_token(user.id, TokenRole.artist.value, extra={"artist_id": artist.id})
        logger.info(f"Artist {artist.id} signed in")
        return ArtistSession(token=token, user=user, artist=artist)

    async def change_password(self, user: User, payload: ChangePasswordRequest) -> None:
        if not verify_password(payload.current_password, user.password_hash):
            raise ValidationFailedError("Current password is incorrect")
        if payload.current_password == payload.new_password:
            raise ValidationFailedError("New password must differ from the current password")
        user.password_hash = hash_password(payload.new_password)
        await self.repos.users.update(user)
        logger.info(f"User {user.id} changed their password")

    async def close_account(self, user: User, artist: Artist, payload: CloseAccountRequest) -> None:
        """Deactivate the artist and its login; rows are kept."""
        if payload.confirm_email.lower() != user.email.lower():
            raise ValidationFailedError("Email confirmation does not match the account email")
        if not verify_password(payload.password, user.password_hash):
            raise ValidationFailedError("Password is incorrect")

        user.is_active = False
        artist.is_active = False
        await self.repos.users.update(user, commit=False)
        await self.repos.artists.update(artist, commit=False)
        await self.repos.commit()
        logger.info(f"Artist {artist.id} closed their account: {payload.reason}")
