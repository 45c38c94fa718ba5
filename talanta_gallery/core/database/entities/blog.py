"""
Blog entity models.

This module contains blog posts and the share events recorded when a visitor
shares a post to a social platform.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class BlogPost(Base, table=True):
    """Table: blog_posts"""

    __tablename__ = "blog_posts"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(max_length=255)
    content: str = Field(sa_type=Text)
    excerpt: Optional[str] = Field(default=None, sa_type=Text)
    image_url: Optional[str] = Field(default=None, max_length=1024)
    published: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)

    def __repr__(self) -> str:
        return f"BlogPost(id={self.id}, title={self.title}, published={self.published})"


class BlogShare(Base, table=True):
    """Table: blog_shares"""

    __tablename__ = "blog_shares"

    id: Optional[int] = Field(default=None, primary_key=True)
    blog_post_id: int = Field(foreign_key="blog_posts.id", index=True, ondelete="CASCADE")
    platform: str = Field(max_length=16, index=True)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime)
