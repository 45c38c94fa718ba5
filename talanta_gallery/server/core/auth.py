"""
Authentication Dependencies.

Bearer-token dependencies resolving the caller of admin and artist routes:

- no token -> 401 ``Access token required``
- malformed, tampered or expired token -> 403 ``Invalid or expired token``
- token of the wrong role, or an account that is gone, unapproved or
  deactivated -> 403
"""

from dataclasses import dataclass
from typing import Annotated, Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from talanta_gallery.core.database.entities import Artist, User
from talanta_gallery.core.errors import AuthenticationError, PermissionDeniedError
from talanta_gallery.core.models.domain import TokenRole
from talanta_gallery.core.security import decode_access_token
from talanta_gallery.server.services.deps import ReposDep

bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_payload(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> dict[str, Any]:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return decode_access_token(credentials.credentials)


TokenPayload = Annotated[dict[str, Any], Depends(get_token_payload)]


def _subject(payload: dict[str, Any]) -> int:
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise PermissionDeniedError("Invalid or expired token")


async def get_current_admin(payload: TokenPayload, repos: ReposDep) -> User:
    if payload.get("role") != TokenRole.admin.value:
        raise PermissionDeniedError("Admin access required")
    user = await repos.users.get_by_id(_subject(payload))
    if user is None or not user.is_admin or not user.is_active:
        raise PermissionDeniedError("Invalid or expired token")
    return user


@dataclass
class ArtistPrincipal:
    """The signed-in artist and its login account."""

    user: User
    artist: Artist


async def get_current_artist(payload: TokenPayload, repos: ReposDep) -> ArtistPrincipal:
    """Resolve the artist behind a token, re-checking approval and activity on every call."""
    if payload.get("role") != TokenRole.artist.value:
        raise PermissionDeniedError("Artist access required")
    user = await repos.users.get_by_id(_subject(payload))
    if user is None:
        raise PermissionDeniedError("Invalid or expired token")
    artist = await repos.artists.get_by_user_id(user.id)
    if artist is None:
        raise PermissionDeniedError("Artist account not found")
    if not artist.approved:
        raise PermissionDeniedError("Account pending approval")
    if not user.is_active or not artist.is_active:
        raise PermissionDeniedError("Account is deactivated")
    return ArtistPrincipal(user=user, artist=artist)


CurrentAdmin = Annotated[User, Depends(get_current_admin)]
CurrentArtist = Annotated[ArtistPrincipal, Depends(get_current_artist)]
