"""
Authentication I/O models.

This module contains the login, password-management and two-factor payloads
for admins and artists.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from talanta_gallery.server.core.constant import CLOSE_ACCOUNT_REASON_MIN_LENGTH, PASSWORD_MIN_LENGTH

from .artists import ArtistAdminRead


class AdminLoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TokenResponse(BaseModel):
    token: str
    message: str = "Login successful"


class ArtistLoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)
    token: Optional[str] = Field(default=None, description="TOTP or backup code when two-factor is enabled")

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class ArtistLoginResponse(TokenResponse):
    artist: ArtistAdminRead


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)


class CloseAccountRequest(BaseModel):
    reason: str = Field(min_length=CLOSE_ACCOUNT_REASON_MIN_LENGTH, max_length=2000)
    confirm_email: EmailStr
    password: str = Field(min_length=1)


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()


class ResetPasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    password: str = Field(min_length=PASSWORD_MIN_LENGTH, max_length=128)


class ResetTokenStatus(BaseModel):
    valid: bool


class TwoFactorStatus(BaseModel):
    enabled: bool
    backup_codes_remaining: int


class TwoFactorSetupResponse(BaseModel):
    secret: str = Field(description="Base32 TOTP secret for manual entry")
    otpauth_url: str
    qr_code: str = Field(description="QR code of the otpauth URL as a data URL")


class TwoFactorVerifyRequest(BaseModel):
    token: str = Field(min_length=6, max_length=8)


class TwoFactorEnabledResponse(BaseModel):
    enabled: bool
    backup_codes: List[str] = Field(description="One-time backup codes, shown only once")
    message: str


class TwoFactorDisableRequest(BaseModel):
    password: str = Field(min_length=1)
