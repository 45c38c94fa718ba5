"""
Media file I/O models for API requests and responses.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class MediaFileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    artist_id: Optional[int] = None
    filename: str
    original_name: str
    mime_type: str
    media_type: str
    size: int
    url: str
    description: Optional[str] = None
    alt_text: Optional[str] = None
    tags: List[str]
    created_at: datetime
    updated_at: datetime

    @field_validator("tags", mode="before")
    @classmethod
    def _parse_tags(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return json.loads(value) if value else []
            except json.JSONDecodeError:
                return []
        return value


class MediaFileUpdate(BaseModel):
    description: Optional[str] = None
    alt_text: Optional[str] = None
    tags: Optional[List[str]] = None


def parse_tags(raw: Optional[str]) -> List[str]:
    """Split a comma separated form value into trimmed, non-empty tags."""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]
