"""
Artist Portal Endpoints.

Routes for a signed-in, approved artist: their profile, their artworks,
their media library and the orders that include their work. Every lookup is
scoped to the caller's artist id; another artist's rows answer 404.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from talanta_gallery.core.errors import NotFoundError
from talanta_gallery.core.models.io.artists import ArtistAdminRead, ArtistProfileUpdate
from talanta_gallery.core.models.io.artworks import ArtistArtworkCreate, ArtistArtworkUpdate, ArtworkRead
from talanta_gallery.core.models.io.common import MessageResponse, Page
from talanta_gallery.core.models.io.media import MediaFileRead
from talanta_gallery.core.models.io.orders import OrderDetail, order_detail
from talanta_gallery.server.core.auth import CurrentArtist
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.artists import unique_slug
from talanta_gallery.server.services.artworks import ArtworkService
from talanta_gallery.server.services.deps import ReposDep, StorageDep
from talanta_gallery.server.services.media_storage import MediaService

router = APIRouter()


# Profile


@router.get("/profile", response_model=ArtistAdminRead, summary="Get Own Profile")
async def get_profile(principal: CurrentArtist) -> ArtistAdminRead:
    return ArtistAdminRead.model_validate(principal.artist)


@router.put("/profile", response_model=ArtistAdminRead, summary="Update Own Profile")
async def update_profile(
    payload: ArtistProfileUpdate, principal: CurrentArtist, repos: ReposDep
) -> ArtistAdminRead:
    artist = principal.artist
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] != artist.name:
        artist.slug = await unique_slug(repos.artists, changes["name"])
    for key, value in changes.items():
        setattr(artist, key, value)
    artist = await repos.artists.update(artist)
    return ArtistAdminRead.model_validate(artist)


# Artworks


@router.get("/artworks", response_model=List[ArtworkRead], summary="List Own Artworks")
async def list_own_artworks(
    principal: CurrentArtist,
    repos: ReposDep,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[ArtworkRead]:
    artworks = await repos.artworks.list_by_artist(principal.artist.id, limit=limit, offset=offset)
    return [ArtworkRead.model_validate(a) for a in artworks]


@router.post(
    "/artworks",
    response_model=ArtworkRead,
    status_code=status.HTTP_201_CREATED,
    summary="Add Artwork",
)
async def create_own_artwork(
    payload: ArtistArtworkCreate, principal: CurrentArtist, repos: ReposDep
) -> ArtworkRead:
    artwork = await ArtworkService(repos).create(principal.artist.id, payload)
    return ArtworkRead.model_validate(artwork)


@router.put(
    "/artworks/{artwork_id}",
    response_model=ArtworkRead,
    summary="Update Own Artwork",
    responses={404: {"description": "Artwork not found"}},
)
async def update_own_artwork(
    artwork_id: int, payload: ArtistArtworkUpdate, principal: CurrentArtist, repos: ReposDep
) -> ArtworkRead:
    artwork = await repos.artworks.get_for_artist(artwork_id, principal.artist.id)
    if artwork is None:
        raise NotFoundError("Artwork", artwork_id)
    artwork = await ArtworkService(repos).update(artwork, payload)
    return ArtworkRead.model_validate(artwork)


@router.delete(
    "/artworks/{artwork_id}",
    response_model=MessageResponse,
    summary="Delete Own Artwork",
    responses={404: {"description": "Artwork not found"}},
)
async def delete_own_artwork(artwork_id: int, principal: CurrentArtist, repos: ReposDep) -> MessageResponse:
    artwork = await repos.artworks.get_for_artist(artwork_id, principal.artist.id)
    if artwork is None:
        raise NotFoundError("Artwork", artwork_id)
    await ArtworkService(repos).delete(artwork)
    return MessageResponse(message="Artwork deleted")


# Media


@router.get("/media", response_model=Page[MediaFileRead], summary="List Own Media")
async def list_own_media(
    principal: CurrentArtist,
    repos: ReposDep,
    search: Optional[str] = Query(default=None, max_length=255),
    media_type: Optional[str] = Query(default=None, pattern="^(image|video|document)$"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> Page[MediaFileRead]:
    artist_id = principal.artist.id
    items = await repos.media.search(
        artist_id=artist_id, search=search, media_type=media_type, limit=limit, offset=offset
    )
    total = await repos.media.count_matching(artist_id=artist_id, search=search, media_type=media_type)
    return Page[MediaFileRead](
        items=[MediaFileRead.model_validate(m) for m in items], total=total, limit=limit, offset=offset
    )


@router.post(
    "/media",
    response_model=MediaFileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Media",
    responses={400: {"description": "Unsupported file type, empty file or file too large"}},
)
async def upload_own_media(
    principal: CurrentArtist,
    repos: ReposDep,
    storage: StorageDep,
    file: UploadFile = File(...),
    description: Optional[str] = Form(default=None),
    alt_text: Optional[str] = Form(default=None),
    tags: Optional[str] = Form(default=None, description="Comma separated"),
) -> MediaFileRead:
    media = await MediaService(repos, storage).upload(
        file, artist_id=principal.artist.id, description=description, alt_text=alt_text, tags=tags
    )
    return MediaFileRead.model_validate(media)


@router.delete(
    "/media/{media_id}",
    response_model=MessageResponse,
    summary="Delete Own Media",
    responses={404: {"description": "Media file not found"}},
)
async def delete_own_media(
    media_id: int, principal: CurrentArtist, repos: ReposDep, storage: StorageDep
) -> MessageResponse:
    media = await repos.media.get_for_artist(media_id, principal.artist.id)
    if media is None:
        raise NotFoundError("Media file", media_id)
    await MediaService(repos, storage).delete(media)
    return MessageResponse(message="Media file deleted")


# Orders


@router.get(
    "/orders",
    response_model=List[OrderDetail],
    summary="Orders Including Own Work",
    description="Orders with at least one of the artist's artworks, newest first.",
)
async def list_own_orders(
    principal: CurrentArtist,
    repos: ReposDep,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[OrderDetail]:
    orders = await repos.orders.list_for_artist(principal.artist.id, limit=limit, offset=offset)
    return [order_detail(order, await repos.orders.get_items_with_artworks(order.id)) for order in orders]
