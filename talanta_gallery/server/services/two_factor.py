"""
Two-Factor Authentication Service.

TOTP (RFC 6238) for artist accounts:

1. ``setup`` stores a fresh secret and returns it with an otpauth URL and QR code.
2. ``enable`` checks a first code from the authenticator app, turns 2FA on
   and returns one-time backup codes (only their bcrypt hashes are stored).
3. ``verify_login_code`` accepts a current TOTP code or an unused backup code;
   a backup code is removed once used.
"""

from __future__ import annotations

import base64
import io
import secrets
from dataclasses import dataclass
from typing import List

import pyotp
import qrcode
import qrcode.image.svg

from talanta_gallery.core.database.entities import User
from talanta_gallery.core.database.repositories import RepoBundle
from talanta_gallery.core.errors import ConflictError, ValidationFailedError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.security import hash_password, verify_password
from talanta_gallery.server.core.constant import BACKUP_CODE_COUNT, PROJECT_NAME

logger = get_logger(__name__)


def generate_backup_codes(count: int = BACKUP_CODE_COUNT) -> List[str]:
    return [secrets.token_hex(4).upper() for _ in range(count)]


def normalize_code(code: str) -> str:
    return code.replace(" ", "").replace("-", "").strip().upper()


def qr_code_data_url(data: str) -> str:
    """Render ``data`` as an SVG QR code embedded in a data URL."""
    image = qrcode.make(data, image_factory=qrcode.image.svg.SvgPathImage)
    buffer = io.BytesIO()
    image.save(buffer)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


@dataclass
class TwoFactorSetup:
    secret: str
    otpauth_url: str
    qr_code: str


class TwoFactorService:
    def __init__(self, repos: RepoBundle, issuer: str = PROJECT_NAME) -> None:
        self.repos = repos
        self.issuer = issuer

    async def setup(self, user: User) -> TwoFactorSetup:
        if user.two_factor_enabled:
            raise ConflictError("Two-factor authentication is already enabled")
        secret = pyotp.random_base32()
        user.two_factor_secret = secret
        await self.repos.users.update(user)
        otpauth_url = pyotp.TOTP(secret).provisioning_uri(name=user.email, issuer_name=self.issuer)
        logger.info(f"Two-factor setup started for user {user.id}")
        return TwoFactorSetup(secret=secret, otpauth_url=otpauth_url, qr_code=qr_code_data_url(otpauth_url))

    async def enable(self, user: User, code: str) -> List[str]:
        """Confirm the setup with a TOTP code and return the plain backup codes."""
        if user.two_factor_enabled:
            raise ConflictError("Two-factor authentication is already enabled")
        if not user.two_factor_secret:
            raise ValidationFailedError("Two-factor setup has not been started")
        if not pyotp.TOTP(user.two_factor_secret).verify(normalize_code(code), valid_window=1):
            raise ValidationFailedError("Invalid verification code")

        codes = generate_backup_codes()
        user.two_factor_enabled = True
        user.set_backup_codes_list([hash_password(c) for c in codes])
        await self.repos.users.update(user)
        logger.info(f"Two-factor authentication enabled for user {user.id}")
        return codes

    async def disable(self, user: User, password: str) -> None:
        if not verify_password(password, user.password_hash):
            raise ValidationFailedError("Password is incorrect")
        user.two_factor_enabled = False
        user.two_factor_secret = None
        user.set_backup_codes_list([])
        await self.repos.users.update(user)
        logger.info(f"Two-factor authentication disabled for user {user.id}")

    async def verify_login_code(self, user: User, code: str) -> bool:
        if not user.two_factor_enabled or not user.two_factor_secret:
            return False
        code = normalize_code(code)
        if pyotp.TOTP(user.two_factor_secret).verify(code, valid_window=1):
            return True

        hashes = user.get_backup_codes_list()
        for stored in hashes:
            if verify_password(code, stored):
                hashes.remove(stored)
                user.set_backup_codes_list(hashes)
                await self.repos.users.update(user)
                logger.info(f"User {user.id} signed in with a backup code; {len(hashes)} left")
                return True
        return False

    @staticmethod
    def backup_codes_remaining(user: User) -> int:
        return len(user.get_backup_codes_list()) if user.two_factor_enabled else 0
