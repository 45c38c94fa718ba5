"""
Blog I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from talanta_gallery.core.models.domain import BlogSharePlatform


class BlogPostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    excerpt: Optional[str] = None
    image_url: Optional[str] = None
    published: bool = False


class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    image_url: Optional[str] = None
    published: Optional[bool] = None


class BlogPostRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    excerpt: Optional[str] = None
    image_url: Optional[str] = None
    published: bool
    created_at: datetime


class BlogShareCreate(BaseModel):
    platform: BlogSharePlatform


class BlogShareRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    blog_post_id: int
    post_title: Optional[str] = None
    platform: str
    user_agent: Optional[str] = None
    ip_address: Optional[str] = None
    created_at: datetime


class BlogShareReport(BaseModel):
    """Share analytics for the back-office."""

    total: int
    by_platform: Dict[str, int]
    shares: List[BlogShareRead]
