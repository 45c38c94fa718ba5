"""
Artists API Endpoints.

Public artist directory, artist self-registration and login, and the admin
create / update / delete operations. Only approved, active artists appear in
the public listings.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from talanta_gallery.core.errors import NotFoundError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.io.artists import (
    ArtistAdminRead,
    ArtistCreate,
    ArtistRead,
    ArtistRegistrationRequest,
    ArtistRegistrationResponse,
    ArtistUpdate,
)
from talanta_gallery.core.models.io.auth import ArtistLoginRequest, ArtistLoginResponse
from talanta_gallery.core.models.io.common import MessageResponse
from talanta_gallery.server.core.auth import CurrentAdmin
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.accounts import AccountService
from talanta_gallery.server.services.artist_approval import ArtistApprovalService
from talanta_gallery.server.services.artists import ArtistAdminService
from talanta_gallery.server.services.deps import MailerDep, ReposDep, StorageDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=List[ArtistRead],
    summary="List Artists",
    description="Approved, active artists ordered by name. `search` matches name or specialty.",
)
async def list_artists(
    repos: ReposDep,
    search: Optional[str] = Query(default=None, max_length=255),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[ArtistRead]:
    artists = await repos.artists.list_public(search=search, limit=limit, offset=offset)
    return [ArtistRead.model_validate(a) for a in artists]


@router.get("/featured", response_model=List[ArtistRead], summary="Featured Artists")
async def featured_artists(
    repos: ReposDep, limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
) -> List[ArtistRead]:
    artists = await repos.artists.list_public(featured=True, limit=limit)
    return [ArtistRead.model_validate(a) for a in artists]


@router.get(
    "/slug/{slug}",
    response_model=ArtistRead,
    summary="Get Artist by Slug",
    responses={404: {"description": "Artist not found"}},
)
async def get_artist_by_slug(slug: str, repos: ReposDep) -> ArtistRead:
    artist = await repos.artists.get_public_by_slug(slug)
    if artist is None:
        raise NotFoundError("Artist", slug)
    return ArtistRead.model_validate(artist)


@router.post(
    "/register",
    response_model=ArtistRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register as Artist",
    description="""
    Create an artist account awaiting admin approval.

    The artist receives a confirmation email and the gallery admin an approval
    request. No token is issued: the account can sign in once approved.
    """,
    responses={400: {"description": "Username or email already exists"}},
)
async def register_artist(
    payload: ArtistRegistrationRequest, repos: ReposDep, mailer: MailerDep
) -> ArtistRegistrationResponse:
    result = await ArtistApprovalService(repos, mailer).register(payload)
    return ArtistRegistrationResponse(
        message="Registration submitted. Your account is pending admin approval.",
        artist=ArtistAdminRead.model_validate(result.artist),
        email_sent=result.email_sent,
    )


@router.post(
    "/login",
    response_model=ArtistLoginResponse,
    summary="Artist Login",
    description="Sign in with email and password. Send `token` with a TOTP or backup code when two-factor is on.",
    responses={
        401: {"description": "Invalid credentials, or a two-factor code is required"},
        403: {"description": "Account pending approval or deactivated"},
    },
)
async def login_artist(payload: ArtistLoginRequest, repos: ReposDep) -> ArtistLoginResponse:
    session = await AccountService(repos).artist_login(payload.email, payload.password, payload.token)
    return ArtistLoginResponse(
        token=session.token,
        message="Login successful",
        artist=ArtistAdminRead.model_validate(session.artist),
    )


@router.get(
    "/{artist_id}",
    response_model=ArtistRead,
    summary="Get Artist",
    responses={404: {"description": "Artist not found"}},
)
async def get_artist(artist_id: int, repos: ReposDep) -> ArtistRead:
    artist = await repos.artists.get_public(artist_id)
    if artist is None:
        raise NotFoundError("Artist", artist_id)
    return ArtistRead.model_validate(artist)


@router.post(
    "",
    response_model=ArtistAdminRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Artist",
    description="Create an artist profile without a login. Admin-created artists are approved immediately.",
)
async def create_artist(payload: ArtistCreate, _: CurrentAdmin, repos: ReposDep) -> ArtistAdminRead:
    artist = await ArtistAdminService(repos).create(payload)
    return ArtistAdminRead.model_validate(artist)


@router.put(
    "/{artist_id}",
    response_model=ArtistAdminRead,
    summary="Update Artist",
    responses={404: {"description": "Artist not found"}},
)
async def update_artist(
    artist_id: int, payload: ArtistUpdate, _: CurrentAdmin, repos: ReposDep
) -> ArtistAdminRead:
    artist = await ArtistAdminService(repos).update(artist_id, payload)
    return ArtistAdminRead.model_validate(artist)


@router.delete(
    "/{artist_id}",
    response_model=MessageResponse,
    summary="Delete Artist",
    description="Delete an artist with its artworks, media files and login account.",
    responses={404: {"description": "Artist not found"}},
)
async def delete_artist(
    artist_id: int, admin: CurrentAdmin, repos: ReposDep, storage: StorageDep
) -> MessageResponse:
    result = await ArtistAdminService(repos).delete(artist_id)
    for path in result.media_paths:
        storage.delete(path)
    logger.info(f"Admin {admin.username} deleted artist {artist_id}")
    return MessageResponse(message="Artist deleted")
