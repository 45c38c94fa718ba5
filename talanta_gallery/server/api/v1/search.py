"""
Search API Endpoint.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from talanta_gallery.core.errors import ValidationFailedError
from talanta_gallery.core.models.io.artworks import ArtworkWithArtist, artwork_with_artist
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.deps import ReposDep

router = APIRouter()


@router.get(
    "",
    response_model=List[ArtworkWithArtist],
    summary="Search Artworks",
    description="Case-insensitive match of `query` against artwork title, description and artist name.",
    responses={400: {"description": "Search query is required"}},
)
async def search_artworks(
    repos: ReposDep,
    query: Optional[str] = Query(default=None, max_length=255),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[ArtworkWithArtist]:
    if query is None or not query.strip():
        raise ValidationFailedError("Search query is required")
    rows = await repos.artworks.search(search=query.strip(), limit=limit, offset=offset)
    return [artwork_with_artist(artwork, artist) for artwork, artist in rows]
