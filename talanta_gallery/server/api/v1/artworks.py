"""
Artworks API Endpoints.

Storefront catalogue of artworks by approved, active artists, and the admin
create / update / delete operations.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status

from talanta_gallery.core.errors import NotFoundError
from talanta_gallery.core.models.domain import ArtworkAvailability, ArtworkCategory
from talanta_gallery.core.models.io.artworks import (
    ArtworkCreate,
    ArtworkRead,
    ArtworkUpdate,
    ArtworkWithArtist,
    artwork_with_artist,
)
from talanta_gallery.core.models.io.common import MessageResponse
from talanta_gallery.server.core.auth import CurrentAdmin
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.artworks import ArtworkService
from talanta_gallery.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "",
    response_model=List[ArtworkWithArtist],
    summary="List Artworks",
    description="""
    Browse the catalogue, newest first.

    Filters combine: `category`, `artist` (artist id), `availability` and a
    case-insensitive `search` over title, description and artist name.
    """,
)
async def list_artworks(
    repos: ReposDep,
    category: Optional[ArtworkCategory] = Query(default=None),
    artist: Optional[int] = Query(default=None, description="Artist id"),
    availability: Optional[ArtworkAvailability] = Query(default=None),
    search: Optional[str] = Query(default=None, max_length=255),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[ArtworkWithArtist]:
    rows = await repos.artworks.search(
        category=category.value if category else None,
        artist_id=artist,
        search=search,
        availability=availability.value if availability else None,
        limit=limit,
        offset=offset,
    )
    return [artwork_with_artist(artwork, owner) for artwork, owner in rows]


@router.get("/featured", response_model=List[ArtworkWithArtist], summary="Featured Artworks")
async def featured_artworks(
    repos: ReposDep, limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
) -> List[ArtworkWithArtist]:
    rows = await repos.artworks.search(featured=True, limit=limit)
    return [artwork_with_artist(artwork, owner) for artwork, owner in rows]


@router.get(
    "/{artwork_id}",
    response_model=ArtworkWithArtist,
    summary="Get Artwork",
    responses={404: {"description": "Artwork not found"}},
)
async def get_artwork(artwork_id: int, repos: ReposDep) -> ArtworkWithArtist:
    row = await repos.artworks.get_with_artist(artwork_id)
    if row is None:
        raise NotFoundError("Artwork", artwork_id)
    return artwork_with_artist(*row)


@router.post(
    "",
    response_model=ArtworkRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Artwork",
    responses={400: {"description": "Artist not found"}},
)
async def create_artwork(payload: ArtworkCreate, _: CurrentAdmin, repos: ReposDep) -> ArtworkRead:
    artwork = await ArtworkService(repos).create(payload.artist_id, payload)
    return ArtworkRead.model_validate(artwork)


@router.put(
    "/{artwork_id}",
    response_model=ArtworkRead,
    summary="Update Artwork",
    responses={404: {"description": "Artwork not found"}},
)
async def update_artwork(
    artwork_id: int, payload: ArtworkUpdate, _: CurrentAdmin, repos: ReposDep
) -> ArtworkRead:
    artwork = await repos.artworks.get_by_id(artwork_id)
    if artwork is None:
        raise NotFoundError("Artwork", artwork_id)
    artwork = await ArtworkService(repos).update(artwork, payload)
    return ArtworkRead.model_validate(artwork)


@router.delete(
    "/{artwork_id}",
    response_model=MessageResponse,
    summary="Delete Artwork",
    responses={404: {"description": "Artwork not found"}},
)
async def delete_artwork(artwork_id: int, _: CurrentAdmin, repos: ReposDep) -> MessageResponse:
    artwork = await repos.artworks.get_by_id(artwork_id)
    if artwork is None:
        raise NotFoundError("Artwork", artwork_id)
    await ArtworkService(repos).delete(artwork)
    return MessageResponse(message="Artwork deleted")
