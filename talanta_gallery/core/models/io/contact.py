"""
Contact form I/O models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class ContactRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=64)
    subject: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1, max_length=10000)


class ContactResponse(BaseModel):
    message: str
    email_sent: bool
