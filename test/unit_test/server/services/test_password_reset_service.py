"""Unit tests for the password reset token lifecycle."""

import re
from datetime import timedelta

import pytest

from talanta_gallery.core.database import utc_now
from talanta_gallery.core.errors import ValidationFailedError
from talanta_gallery.core.security import hash_reset_token, verify_password
from talanta_gallery.server.services.password_reset import INVALID_TOKEN_MESSAGE, PasswordResetService

pytestmark = pytest.mark.asyncio

TOKEN_RE = re.compile(r"token=([A-Za-z0-9_\-]+)")


def _token_from(mail_transport, address: str) -> str:
    return TOKEN_RE.search(mail_transport.to(address)[-1].text).group(1)


class TestRequestReset:
    async def test_stores_only_the_digest(self, repos, mailer, mail_transport, artist):
        user = await repos.users.get_by_id(artist.user_id)

        assert await PasswordResetService(repos, mailer).request_reset(user.email) is True

        token = _token_from(mail_transport, user.email)
        row = await repos.reset_tokens.get_by_hash(hash_reset_token(token))
        assert row is not None
        assert row.token_hash != token
        assert row.expires_at - utc_now() <= timedelta(minutes=60)

    async def test_custom_ttl(self, repos, mailer, mail_transport, artist):
        user = await repos.users.get_by_id(artist.user_id)

        await PasswordResetService(repos, mailer, ttl_minutes=5).request_reset(user.email)

        row = await repos.reset_tokens.get_by_hash(hash_reset_token(_token_from(mail_transport, user.email)))
        assert row.expires_at - utc_now() <= timedelta(minutes=5)

    async def test_admin_accounts_are_ignored(self, repos, mailer, mail_transport, admin_user):
        assert await PasswordResetService(repos, mailer).request_reset(admin_user.email) is False
        assert mail_transport.sent == []

    async def test_inactive_accounts_are_ignored(self, repos, mailer, mail_transport, artist):
        user = await repos.users.get_by_id(artist.user_id)
        user.is_active = False
        await repos.users.update(user)

        assert await PasswordResetService(repos, mailer).request_reset(user.email) is False
        assert mail_transport.sent == []

    async def test_delivery_failure_is_reported(self, repos, mailer, mail_transport, artist):
        user = await repos.users.get_by_id(artist.user_id)
        mail_transport.fail = True

        assert await PasswordResetService(repos, mailer).request_reset(user.email) is False


class TestResetPassword:
    @pytest.fixture
    async def issued(self, repos, mailer, mail_transport, artist):
        user = await repos.users.get_by_id(artist.user_id)
        service = PasswordResetService(repos, mailer)
        await service.request_reset(user.email)
        return service, user, _token_from(mail_transport, user.email)

    async def test_reset_updates_hash_and_consumes_token(self, repos, issued):
        service, user, token = issued
        assert await service.is_valid(token) is True

        await service.reset_password(token, "a-brand-new-secret")

        assert verify_password("a-brand-new-secret", (await repos.users.get_by_id(user.id)).password_hash)
        assert await service.is_valid(token) is False
        with pytest.raises(ValidationFailedError, match=INVALID_TOKEN_MESSAGE):
            await service.reset_password(token, "yet-another-secret")

    async def test_expired_token(self, repos, issued):
        service, _, token = issued
        row = await repos.reset_tokens.get_by_hash(hash_reset_token(token))
        row.expires_at = utc_now() - timedelta(seconds=1)
        await repos.reset_tokens.update(row)

        assert await service.is_valid(token) is False
        with pytest.raises(ValidationFailedError):
            await service.reset_password(token, "a-brand-new-secret")

    async def test_unknown_token(self, repos, mailer):
        service = PasswordResetService(repos, mailer)

        assert await service.is_valid("never-issued") is False
        with pytest.raises(ValidationFailedError, match=INVALID_TOKEN_MESSAGE):
            await service.reset_password("never-issued", "a-brand-new-secret")
