"""
User Accounts API Endpoints.

Back-office management of login accounts. Deleting an account that belongs to
an artist removes the artist profile and everything it owns as well.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query

from talanta_gallery.core.errors import NotFoundError, ValidationFailedError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.io.common import MessageResponse
from talanta_gallery.core.models.io.users import UserAccountUpdate, UserRead
from talanta_gallery.server.core.auth import CurrentAdmin
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.artists import purge_artist
from talanta_gallery.server.services.deps import ReposDep, StorageDep

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=List[UserRead], summary="List User Accounts")
async def list_users(
    _: CurrentAdmin,
    repos: ReposDep,
    search: Optional[str] = Query(default=None, max_length=255),
    is_admin: Optional[bool] = Query(default=None),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[UserRead]:
    users = await repos.users.search(search=search, is_admin=is_admin, limit=limit, offset=offset)
    return [UserRead.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get User Account",
    responses={404: {"description": "User not found"}},
)
async def get_user(user_id: int, _: CurrentAdmin, repos: ReposDep) -> UserRead:
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    return UserRead.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update User Account",
    description="Toggle `is_active` and `is_admin`. Admins cannot change their own flags.",
    responses={
        400: {"description": "Cannot change your own account flags"},
        404: {"description": "User not found"},
    },
)
async def update_user(user_id: int, payload: UserAccountUpdate, admin: CurrentAdmin, repos: ReposDep) -> UserRead:
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if user.id == admin.id and changes:
        raise ValidationFailedError("Cannot change your own account flags")
    for key, value in changes.items():
        setattr(user, key, value)
    user = await repos.users.update(user)
    logger.info(f"Admin {admin.username} updated user {user_id}: {changes}")
    return UserRead.model_validate(user)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete User Account",
    responses={
        400: {"description": "Cannot delete your own account"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: int, admin: CurrentAdmin, repos: ReposDep, storage: StorageDep
) -> MessageResponse:
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    if user.id == admin.id:
        raise ValidationFailedError("Cannot delete your own account")

    media_paths: List[str] = []
    try:
        artist = await repos.artists.get_by_user_id(user_id)
        if artist is not None:
            media_paths = (await purge_artist(repos, artist)).media_paths
        else:
            await repos.reset_tokens.delete_for_user(user_id)
            await repos.users.delete(user_id, commit=False)
        await repos.commit()
    except Exception:
        await repos.rollback()
        raise

    for path in media_paths:
        storage.delete(path)
    logger.info(f"Admin {admin.username} deleted user {user_id}")
    return MessageResponse(message="User deleted")
