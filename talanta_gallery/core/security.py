"""
Password hashing and access-token helpers.

Passwords and two-factor backup codes are hashed with bcrypt. Access tokens are
HS256 JWTs carrying the user id in ``sub``, a ``role`` (``admin`` or ``artist``)
and, for artists, the ``artist_id``.
"""

from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
import jwt

from talanta_gallery.core.errors import PermissionDeniedError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.server.core.config import settings

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """Hash a plaintext password with a fresh bcrypt salt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_access_token(
    subject: int | str,
    role: str,
    extra: Optional[dict[str, Any]] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """Create a signed access token.

    Args:
        subject: The user id the token is issued for
        role: ``admin`` or ``artist``
        extra: Additional claims (e.g. ``artist_id``)
        expires_minutes: Lifetime override; defaults to ``JWT_EXPIRE_MINUTES``

    Returns:
        The encoded JWT
    """
    auth = settings.auth
    lifetime = expires_minutes if expires_minutes is not None else auth.jwt_expire_minutes
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(subject),
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=lifetime),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, auth.jwt_secret, algorithm=auth.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode and verify an access token.

    Raises:
        PermissionDeniedError: If the token is malformed, tampered with or expired
    """
    auth = settings.auth
    try:
        return jwt.decode(token, auth.jwt_secret, algorithms=[auth.jwt_algorithm])
    except jwt.PyJWTError as e:
        logger.debug(f"Rejected access token: {e}")
        raise PermissionDeniedError("Invalid or expired token") from e


def generate_reset_token() -> str:
    """Generate the URL-safe token emailed for a password reset."""
    return secrets.token_urlsafe(32)


def hash_reset_token(token: str) -> str:
    """Digest stored in place of the emailed reset token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
