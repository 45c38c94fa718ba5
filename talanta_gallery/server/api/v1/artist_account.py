"""
Artist Account Endpoints.

Account security for artists: two-factor authentication, notification
preferences, password change, account closure and the forgot / reset password
flow. The password reset routes are public; everything else needs an artist
token.
"""

from __future__ import annotations

from fastapi import APIRouter

from talanta_gallery.core.models.io.auth import (
    ChangePasswordRequest,
    CloseAccountRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ResetTokenStatus,
    TwoFactorDisableRequest,
    TwoFactorEnabledResponse,
    TwoFactorSetupResponse,
    TwoFactorStatus,
    TwoFactorVerifyRequest,
)
from talanta_gallery.core.models.io.common import MessageResponse
from talanta_gallery.core.models.io.notifications import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
)
from talanta_gallery.server.core.auth import CurrentArtist
from talanta_gallery.server.services.accounts import AccountService
from talanta_gallery.server.services.deps import MailerDep, ReposDep
from talanta_gallery.server.services.password_reset import PasswordResetService
from talanta_gallery.server.services.two_factor import TwoFactorService

router = APIRouter()

FORGOT_PASSWORD_MESSAGE = "If an account exists for that email, a password reset link has been sent."


# Two-factor authentication


@router.get("/2fa/status", response_model=TwoFactorStatus, summary="Two-factor Status")
async def two_factor_status(principal: CurrentArtist) -> TwoFactorStatus:
    user = principal.user
    return TwoFactorStatus(
        enabled=user.two_factor_enabled,
        backup_codes_remaining=TwoFactorService.backup_codes_remaining(user),
    )


@router.post(
    "/2fa/setup",
    response_model=TwoFactorSetupResponse,
    summary="Start Two-factor Setup",
    description="Generate a new TOTP secret. Scan the QR code, then confirm with `/2fa/verify`.",
    responses={400: {"description": "Two-factor authentication is already enabled"}},
)
async def two_factor_setup(principal: CurrentArtist, repos: ReposDep) -> TwoFactorSetupResponse:
    setup = await TwoFactorService(repos).setup(principal.user)
    return TwoFactorSetupResponse(secret=setup.secret, otpauth_url=setup.otpauth_url, qr_code=setup.qr_code)


@router.post(
    "/2fa/verify",
    response_model=TwoFactorEnabledResponse,
    summary="Enable Two-factor",
    description="Confirm the setup with a current TOTP code. The returned backup codes are shown only once.",
    responses={400: {"description": "Setup not started or invalid code"}},
)
async def two_factor_verify(
    payload: TwoFactorVerifyRequest, principal: CurrentArtist, repos: ReposDep
) -> TwoFactorEnabledResponse:
    codes = await TwoFactorService(repos).enable(principal.user, payload.token)
    return TwoFactorEnabledResponse(
        enabled=True,
        backup_codes=codes,
        message="Two-factor authentication enabled. Store your backup codes somewhere safe.",
    )


@router.post(
    "/2fa/disable",
    response_model=MessageResponse,
    summary="Disable Two-factor",
    responses={400: {"description": "Password is incorrect"}},
)
async def two_factor_disable(
    payload: TwoFactorDisableRequest, principal: CurrentArtist, repos: ReposDep
) -> MessageResponse:
    await TwoFactorService(repos).disable(principal.user, payload.password)
    return MessageResponse(message="Two-factor authentication disabled")


# Notification preferences


@router.get("/notifications", response_model=NotificationPreferencesRead, summary="Get Notification Preferences")
async def get_notifications(principal: CurrentArtist, repos: ReposDep) -> NotificationPreferencesRead:
    preferences = await repos.notification_preferences.get_or_create(principal.artist.id)
    return NotificationPreferencesRead.model_validate(preferences)


@router.put("/notifications", response_model=NotificationPreferencesRead, summary="Update Notification Preferences")
async def update_notifications(
    payload: NotificationPreferencesUpdate, principal: CurrentArtist, repos: ReposDep
) -> NotificationPreferencesRead:
    preferences = await repos.notification_preferences.get_or_create(principal.artist.id)
    for key, value in payload.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(preferences, key, value)
    preferences = await repos.notification_preferences.update(preferences)
    return NotificationPreferencesRead.model_validate(preferences)


# Password and account


@router.post(
    "/change-password",
    response_model=MessageResponse,
    summary="Change Password",
    responses={400: {"description": "Current password is incorrect"}},
)
async def change_password(
    payload: ChangePasswordRequest, principal: CurrentArtist, repos: ReposDep
) -> MessageResponse:
    await AccountService(repos).change_password(principal.user, payload)
    return MessageResponse(message="Password changed successfully")


@router.post(
    "/close-account",
    response_model=MessageResponse,
    summary="Close Account",
    description="Deactivate the artist profile and its login. The account's data is kept.",
    responses={400: {"description": "Email confirmation or password does not match"}},
)
async def close_account(
    payload: CloseAccountRequest, principal: CurrentArtist, repos: ReposDep
) -> MessageResponse:
    await AccountService(repos).close_account(principal.user, principal.artist, payload)
    return MessageResponse(message="Account closed")


# Password reset


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    summary="Request Password Reset",
    description="Email a reset link valid for one hour. Always answers 200, whether or not the email is registered.",
)
async def forgot_password(payload: ForgotPasswordRequest, repos: ReposDep, mailer: MailerDep) -> MessageResponse:
    await PasswordResetService(repos, mailer).request_reset(payload.email)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.get("/verify-reset-token/{token}", response_model=ResetTokenStatus, summary="Check Reset Token")
async def verify_reset_token(token: str, repos: ReposDep, mailer: MailerDep) -> ResetTokenStatus:
    return ResetTokenStatus(valid=await PasswordResetService(repos, mailer).is_valid(token))


@router.post(
    "/reset-password",
    response_model=MessageResponse,
    summary="Reset Password",
    responses={400: {"description": "Invalid or expired reset token"}},
)
async def reset_password(payload: ResetPasswordRequest, repos: ReposDep, mailer: MailerDep) -> MessageResponse:
    await PasswordResetService(repos, mailer).reset_password(payload.token, payload.password)
    return MessageResponse(message="Password has been reset. You can now sign in.")
