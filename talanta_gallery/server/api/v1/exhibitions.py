"""
Exhibitions API Endpoints.

At most one exhibition is flagged ``current``: flagging one unflags the rest
in the same transaction.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, status

from talanta_gallery.core.database.entities import Exhibition
from talanta_gallery.core.errors import NotFoundError, ValidationFailedError
from talanta_gallery.core.models.io.common import MessageResponse
from talanta_gallery.core.models.io.exhibitions import ExhibitionCreate, ExhibitionRead, ExhibitionUpdate
from talanta_gallery.server.core.auth import CurrentAdmin
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.deps import ReposDep

router = APIRouter()


@router.get("", response_model=List[ExhibitionRead], summary="List Exhibitions")
async def list_exhibitions(
    repos: ReposDep,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[ExhibitionRead]:
    exhibitions = await repos.exhibitions.list_exhibitions(limit=limit, offset=offset)
    return [ExhibitionRead.model_validate(e) for e in exhibitions]


@router.get(
    "/current",
    response_model=ExhibitionRead,
    summary="Current Exhibition",
    responses={404: {"description": "No current exhibition"}},
)
async def current_exhibition(repos: ReposDep) -> ExhibitionRead:
    exhibition = await repos.exhibitions.get_current()
    if exhibition is None:
        raise NotFoundError("Exhibition", "current")
    return ExhibitionRead.model_validate(exhibition)


@router.get(
    "/{exhibition_id}",
    response_model=ExhibitionRead,
    summary="Get Exhibition",
    responses={404: {"description": "Exhibition not found"}},
)
async def get_exhibition(exhibition_id: int, repos: ReposDep) -> ExhibitionRead:
    exhibition = await repos.exhibitions.get_by_id(exhibition_id)
    if exhibition is None:
        raise NotFoundError("Exhibition", exhibition_id)
    return ExhibitionRead.model_validate(exhibition)


@router.post(
    "",
    response_model=ExhibitionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Exhibition",
)
async def create_exhibition(payload: ExhibitionCreate, _: CurrentAdmin, repos: ReposDep) -> ExhibitionRead:
    if payload.current:
        await repos.exhibitions.clear_current()
    exhibition = await repos.exhibitions.create(Exhibition(**payload.model_dump()))
    return ExhibitionRead.model_validate(exhibition)


@router.put(
    "/{exhibition_id}",
    response_model=ExhibitionRead,
    summary="Update Exhibition",
    responses={404: {"description": "Exhibition not found"}},
)
async def update_exhibition(
    exhibition_id: int, payload: ExhibitionUpdate, _: CurrentAdmin, repos: ReposDep
) -> ExhibitionRead:
    exhibition = await repos.exhibitions.get_by_id(exhibition_id)
    if exhibition is None:
        raise NotFoundError("Exhibition", exhibition_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    start = changes.get("start_date", exhibition.start_date)
    end = changes.get("end_date", exhibition.end_date)
    if end < start:
        raise ValidationFailedError("end_date must not be before start_date")
    if changes.get("current"):
        await repos.exhibitions.clear_current(except_id=exhibition_id)
    for key, value in changes.items():
        setattr(exhibition, key, value)
    exhibition = await repos.exhibitions.update(exhibition)
    return ExhibitionRead.model_validate(exhibition)


@router.delete(
    "/{exhibition_id}",
    response_model=MessageResponse,
    summary="Delete Exhibition",
    responses={404: {"description": "Exhibition not found"}},
)
async def delete_exhibition(exhibition_id: int, _: CurrentAdmin, repos: ReposDep) -> MessageResponse:
    if not await repos.exhibitions.delete(exhibition_id):
        raise NotFoundError("Exhibition", exhibition_id)
    return MessageResponse(message="Exhibition deleted")
