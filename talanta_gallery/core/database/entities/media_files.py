"""
Media file entity models.

This module contains the database entity for uploaded assets. The file itself
lives on disk under the upload directory; ``path`` points at it and ``url`` is
the public ``/uploads/...`` address.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import List, Optional

from sqlmodel import DateTime, Field, Text

from ..base import Base, utc_now


class MediaFile(Base, table=True):
    """Uploaded image, video or document, optionally owned by an artist.

    Table: media_files
    """

    __tablename__ = "media_files"

    id: Optional[int] = Field(default=None, primary_key=True)
    artist_id: Optional[int] = Field(default=None, foreign_key="artists.id", index=True)

    filename: str = Field(max_length=255, unique=True)
    original_name: str = Field(max_length=255)
    mime_type: str = Field(max_length=128)
    media_type: str = Field(max_length=16, index=True)
    size: int
    url: str = Field(max_length=1024)
    path: str = Field(max_length=1024)

    description: Optional[str] = Field(default=None, sa_type=Text)
    alt_text: Optional[str] = Field(default=None, max_length=255)
    tags: str = Field(default="[]", sa_type=Text, description="JSON array of tags")

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime, sa_column_kwargs={"onupdate": utc_now})

    def get_tags_list(self) -> List[str]:
        """Get tags as a list."""
        try:
            return json.loads(self.tags) if self.tags else []
        except (json.JSONDecodeError, TypeError):
            return []

    def set_tags_list(self, tags: List[str]) -> None:
        """Set tags from a list."""
        self.tags = json.dumps(tags)

    def __repr__(self) -> str:
        return f"MediaFile(id={self.id}, filename={self.filename}, media_type={self.media_type})"
