"""Unit tests for the artist registration / approval workflow.

The API tests cover the HTTP surface; these exercise the service directly,
including the branches the endpoints cannot reach (artists without a login,
media cleanup on rejection).
"""

from io import BytesIO
from unittest.mock import AsyncMock

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from talanta_gallery.core.database.entities import Artist
from talanta_gallery.core.errors import ConflictError, NotFoundError
from talanta_gallery.core.models.domain import ArtistDecision
from talanta_gallery.core.models.io.artists import ArtistRegistrationRequest
from talanta_gallery.server.services.artist_approval import ArtistApprovalService, DecisionResult
from talanta_gallery.server.services.media_storage import MediaService


def _registration(username: str = "amani", email: str = "amani@example.com") -> ArtistRegistrationRequest:
    return ArtistRegistrationRequest.model_validate(
        {
            "user": {"username": username, "email": email, "password": "watercolour-99"},
            "artist": {"name": "Amani Otieno", "specialty": "Watercolour"},
        }
    )


class TestDecisionResult:
    def test_message(self):
        assert DecisionResult(1, ArtistDecision.approved, True).message == "Artist approved"
        assert DecisionResult(1, ArtistDecision.rejected, False).message == (
            "Artist rejected; notification email could not be sent"
        )


@pytest.mark.asyncio
class TestRegister:
    async def test_creates_pending_artist_and_notifies(self, repos, mailer, mail_transport):
        result = await ArtistApprovalService(repos, mailer).register(_registration())

        assert result.artist.approved is False
        assert result.artist.user_id == result.user.id
        assert result.artist.slug == "amani-otieno"
        assert result.email_sent is True
        assert result.admin_notified is True
        assert await repos.notification_preferences.get_by_artist(result.artist.id) is not None

    async def test_admin_notice_failure_is_separate(self, repos, mailer, mail_transport):
        mail_transport.fail = True

        result = await ArtistApprovalService(repos, mailer).register(_registration())

        assert result.email_sent is False
        assert result.admin_notified is False
        assert await repos.artists.get_by_id(result.artist.id) is not None

    async def test_conflict_leaves_no_partial_rows(self, repos, mailer):
        service = ArtistApprovalService(repos, mailer)
        await service.register(_registration())

        with pytest.raises(ConflictError):
            await service.register(_registration(username="amani-2"))

        assert await repos.users.count() == 1
        assert await repos.artists.count() == 1

    async def test_list_pending_includes_login(self, repos, mailer, make_artist):
        await make_artist(name="Approved Already")
        pending = await make_artist(name="Still Waiting", approved=False)

        rows = await ArtistApprovalService(repos, mailer).list_pending()

        assert [(artist.id, user.email) for artist, user in rows] == [(pending.id, "still-waiting@artists.example.org")]


@pytest.mark.asyncio
class TestDecisions:
    async def test_approve_sets_timestamp(self, repos, mailer, make_artist):
        pending = await make_artist(name="Still Waiting", approved=False)

        result = await ArtistApprovalService(repos, mailer).approve(pending.id)

        stored = await repos.artists.get_by_id(pending.id)
        assert result.email_sent is True
        assert stored.approved is True
        assert stored.approved_at is not None

    async def test_approve_artist_without_login(self, repos, mailer, mail_transport):
        orphan = await repos.artists.create(Artist(name="No Login", slug="no-login", approved=False))

        result = await ArtistApprovalService(repos, mailer).approve(orphan.id)

        assert result.email_sent is False
        assert mail_transport.sent == []
        assert (await repos.artists.get_by_id(orphan.id)).approved is True

    async def test_reject_stands_when_transport_crashes(self, repos, mailer, mail_transport, make_artist, monkeypatch):
        pending = await make_artist(name="Still Waiting", approved=False)
        monkeypatch.setattr(mail_transport, "deliver", AsyncMock(side_effect=RuntimeError("socket closed")))

        result = await ArtistApprovalService(repos, mailer).reject(pending.id)

        assert result.email_sent is False
        assert await repos.artists.get_by_id(pending.id) is None
        assert await repos.users.get_by_email("still-waiting@artists.example.org") is None

    async def test_unknown_artist(self, repos, mailer):
        service = ArtistApprovalService(repos, mailer)

        with pytest.raises(NotFoundError):
            await service.approve(404)
        with pytest.raises(NotFoundError):
            await service.reject(404)

    async def test_reject_removes_uploaded_files(self, repos, mailer, storage, make_artist):
        pending = await make_artist(name="Still Waiting", approved=False)
        upload = UploadFile(
            file=BytesIO(b"\x89PNG fake"), filename="sketch.png", headers=Headers({"content-type": "image/png"})
        )
        media = await MediaService(repos, storage).upload(upload, artist_id=pending.id)

        result = await ArtistApprovalService(repos, mailer, storage).reject(pending.id)

        assert result.decision is ArtistDecision.rejected
        assert result.email_sent is True
        assert await repos.media.get_by_id(media.id) is None
        assert list(storage.directory.iterdir()) == []

    async def test_reject_approved_artist_is_refused(self, repos, mailer, artist):
        with pytest.raises(ConflictError, match="Approved artists cannot be rejected"):
            await ArtistApprovalService(repos, mailer).reject(artist.id)

        assert await repos.artists.get_by_id(artist.id) is not None
