"""
Media Library API Endpoints.

Back-office upload and management of gallery media. Files are written under
the upload directory with a random name and served from ``/uploads``;
deleting a record removes its file too.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, Form, Query, UploadFile, status

from talanta_gallery.core.errors import NotFoundError
from talanta_gallery.core.models.domain import MediaType
from talanta_gallery.core.models.io.common import MessageResponse, Page
from talanta_gallery.core.models.io.media import MediaFileRead, MediaFileUpdate
from talanta_gallery.server.core.auth import CurrentAdmin
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.deps import ReposDep, StorageDep
from talanta_gallery.server.services.media_storage import MediaService

router = APIRouter()


@router.post(
    "",
    response_model=MediaFileRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload Media",
    description="""
    Upload an image, video, PDF or office document as multipart form data.

    `tags` is a comma separated list. Files over the configured size limit,
    empty files and other types are rejected with 400.
    """,
    responses={400: {"description": "Unsupported file type, empty file or file too large"}},
)
async def upload_media(
    _: CurrentAdmin,
    repos: ReposDep,
    storage: StorageDep,
    file: UploadFile = File(...),
    description: Optional[str] = Form(default=None),
    alt_text: Optional[str] = Form(default=None),
    tags: Optional[str] = Form(default=None),
) -> MediaFileRead:
    media = await MediaService(repos, storage).upload(file, description=description, alt_text=alt_text, tags=tags)
    return MediaFileRead.model_validate(media)


@router.get("", response_model=Page[MediaFileRead], summary="List Media")
async def list_media(
    _: CurrentAdmin,
    repos: ReposDep,
    search: Optional[str] = Query(default=None, max_length=255),
    media_type: Optional[MediaType] = Query(default=None),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> Page[MediaFileRead]:
    type_value = media_type.value if media_type else None
    items = await repos.media.search(search=search, media_type=type_value, limit=limit, offset=offset)
    total = await repos.media.count_matching(search=search, media_type=type_value)
    return Page[MediaFileRead](
        items=[MediaFileRead.model_validate(m) for m in items], total=total, limit=limit, offset=offset
    )


@router.get(
    "/{media_id}",
    response_model=MediaFileRead,
    summary="Get Media File",
    responses={404: {"description": "Media file not found"}},
)
async def get_media(media_id: int, _: CurrentAdmin, repos: ReposDep) -> MediaFileRead:
    media = await repos.media.get_by_id(media_id)
    if media is None:
        raise NotFoundError("Media file", media_id)
    return MediaFileRead.model_validate(media)


@router.put(
    "/{media_id}",
    response_model=MediaFileRead,
    summary="Update Media Metadata",
    responses={404: {"description": "Media file not found"}},
)
async def update_media(
    media_id: int, payload: MediaFileUpdate, _: CurrentAdmin, repos: ReposDep, storage: StorageDep
) -> MediaFileRead:
    media = await repos.media.get_by_id(media_id)
    if media is None:
        raise NotFoundError("Media file", media_id)
    media = await MediaService(repos, storage).update(media, payload)
    return MediaFileRead.model_validate(media)


@router.delete(
    "/{media_id}",
    response_model=MessageResponse,
    summary="Delete Media File",
    responses={404: {"description": "Media file not found"}},
)
async def delete_media(media_id: int, _: CurrentAdmin, repos: ReposDep, storage: StorageDep) -> MessageResponse:
    media = await repos.media.get_by_id(media_id)
    if media is None:
        raise NotFoundError("Media file", media_id)
    await MediaService(repos, storage).delete(media)
    return MessageResponse(message="Media file deleted")
