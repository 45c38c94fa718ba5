"""
User account I/O models for API requests and responses.

Password hashes, two-factor secrets and backup codes never leave the server;
``UserRead`` exposes only the public account fields.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from talanta_gallery.server.core.constant import PASSWORD_MIN_LENGTH


class UserCredentials(BaseModel):
    """Login details supplied at artist registration."""

    username: str = Field(min_length=3, max_length=64)
    email: EmailStr
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)

    @field_validator("username")
    @classmethod
    def _strip_username(cls, value: str) -> str:
        return value.strip()

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class UserRead(BaseModel):
    """Schema for reading a user account from API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    is_admin: bool
    is_active: bool
    two_factor_enabled: bool
    last_login_at: Optional[datetime] = None
    created_at: datetime


class UserAccountUpdate(BaseModel):
    """Schema for toggling account flags from the back-office."""

    is_active: Optional[bool] = None
    is_admin: Optional[bool] = None
