"""
Exhibition I/O models for API requests and responses.

Dates are stored as naive UTC; offset-aware input is converted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ExhibitionCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    subtitle: Optional[str] = None
    description: str = ""
    image_url: Optional[str] = None
    start_date: datetime
    end_date: datetime
    opening_reception: Optional[str] = None
    current: bool = False

    @field_validator("start_date", "end_date")
    @classmethod
    def _normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _naive_utc(value)

    @model_validator(mode="after")
    def _check_dates(self) -> "ExhibitionCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class ExhibitionUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    subtitle: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    opening_reception: Optional[str] = None
    current: Optional[bool] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _normalize_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _naive_utc(value)


class ExhibitionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    subtitle: Optional[str] = None
    description: str
    image_url: Optional[str] = None
    start_date: datetime
    end_date: datetime
    opening_reception: Optional[str] = None
    current: bool
    created_at: datetime
