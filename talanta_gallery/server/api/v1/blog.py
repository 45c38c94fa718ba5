"""
Blog API Endpoints.

Published posts are public; drafts are visible to admins only. Share events
are recorded per platform for the back-office analytics.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query, Request, status

from talanta_gallery.core.database.entities import BlogPost, BlogShare
from talanta_gallery.core.errors import NotFoundError
from talanta_gallery.core.models.io.blog import (
    BlogPostCreate,
    BlogPostRead,
    BlogPostUpdate,
    BlogShareCreate,
    BlogShareRead,
)
from talanta_gallery.core.models.io.common import MessageResponse
from talanta_gallery.server.core.auth import CurrentAdmin
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.deps import ReposDep

router = APIRouter()


async def _published_post(repos, post_id: int) -> BlogPost:
    post = await repos.blog_posts.get_by_id(post_id)
    if post is None or not post.published:
        raise NotFoundError("Blog post", post_id)
    return post


@router.get("", response_model=List[BlogPostRead], summary="List Published Posts")
async def list_posts(
    repos: ReposDep,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[BlogPostRead]:
    posts = await repos.blog_posts.list_posts(published_only=True, limit=limit, offset=offset)
    return [BlogPostRead.model_validate(p) for p in posts]


@router.get("/all", response_model=List[BlogPostRead], summary="List All Posts", description="Drafts included.")
async def list_all_posts(
    _: CurrentAdmin,
    repos: ReposDep,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[BlogPostRead]:
    posts = await repos.blog_posts.list_posts(published_only=False, limit=limit, offset=offset)
    return [BlogPostRead.model_validate(p) for p in posts]


@router.get(
    "/{post_id}",
    response_model=BlogPostRead,
    summary="Get Post",
    responses={404: {"description": "Blog post not found"}},
)
async def get_post(post_id: int, repos: ReposDep) -> BlogPostRead:
    return BlogPostRead.model_validate(await _published_post(repos, post_id))


@router.post(
    "/{post_id}/share",
    response_model=BlogShareRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record Share",
    responses={404: {"description": "Blog post not found"}},
)
async def share_post(post_id: int, payload: BlogShareCreate, request: Request, repos: ReposDep) -> BlogShareRead:
    post = await _published_post(repos, post_id)
    share = await repos.blog_shares.create(
        BlogShare(
            blog_post_id=post.id,
            platform=payload.platform.value,
            user_agent=(request.headers.get("user-agent") or "")[:512] or None,
            ip_address=request.client.host if request.client else None,
        )
    )
    return BlogShareRead.model_validate(share).model_copy(update={"post_title": post.title})


@router.post("", response_model=BlogPostRead, status_code=status.HTTP_201_CREATED, summary="Create Post")
async def create_post(payload: BlogPostCreate, _: CurrentAdmin, repos: ReposDep) -> BlogPostRead:
    post = await repos.blog_posts.create(BlogPost(**payload.model_dump()))
    return BlogPostRead.model_validate(post)


@router.put(
    "/{post_id}",
    response_model=BlogPostRead,
    summary="Update Post",
    responses={404: {"description": "Blog post not found"}},
)
async def update_post(post_id: int, payload: BlogPostUpdate, _: CurrentAdmin, repos: ReposDep) -> BlogPostRead:
    post = await repos.blog_posts.get_by_id(post_id)
    if post is None:
        raise NotFoundError("Blog post", post_id)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(post, key, value)
    post = await repos.blog_posts.update(post)
    return BlogPostRead.model_validate(post)


@router.delete(
    "/{post_id}",
    response_model=MessageResponse,
    summary="Delete Post",
    responses={404: {"description": "Blog post not found"}},
)
async def delete_post(post_id: int, _: CurrentAdmin, repos: ReposDep) -> MessageResponse:
    if not await repos.blog_posts.delete(post_id):
        raise NotFoundError("Blog post", post_id)
    return MessageResponse(message="Blog post deleted")
