"""
Artist Approval Service.

Implements the registration workflow:

    register -> pending (approved=False)
    pending  -> approved (approved=True, approved_at set)   by an admin
    pending  -> rejected (artist, user and owned rows deleted) by an admin

Every transition is committed before any email is sent. A failed email is
logged and reported as ``email_sent=False`` in the result; it never rolls the
transition back. There is no automatic transition, timeout or retry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError

from talanta_gallery.core.database import utc_now
from talanta_gallery.core.database.entities import Artist, NotificationPreferences, User
from talanta_gallery.core.database.repositories import RepoBundle
from talanta_gallery.core.errors import ConflictError, NotFoundError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.domain import ArtistDecision
from talanta_gallery.core.models.io.artists import ArtistRegistrationRequest
from talanta_gallery.core.monitoring import log_artist_decision
from talanta_gallery.core.security import hash_password
from talanta_gallery.notifications import artist_approval as approval_emails
from talanta_gallery.notifications.mailer import Mailer
from talanta_gallery.server.services.artists import purge_artist, unique_slug
from talanta_gallery.server.services.media_storage import MediaStorage

logger = get_logger(__name__)


@dataclass
class RegistrationResult:
    artist: Artist
    user: User
    email_sent: bool
    admin_notified: bool


@dataclass
class DecisionResult:
    artist_id: int
    decision: ArtistDecision
    email_sent: bool

    @property
    def message(self) -> str:
        text = f"Artist {self.decision.value}"
        return text if self.email_sent else f"{text}; notification email could not be sent"


class ArtistApprovalService:
    def __init__(self, repos: RepoBundle, mailer: Mailer, storage: Optional[MediaStorage] = None) -> None:
        self.repos = repos
        self.mailer = mailer
        self.storage = storage

    async def register(self, payload: ArtistRegistrationRequest) -> RegistrationResult:
        """Create a pending artist with its login.

        Raises:
            ConflictError: Username or email already registered
        """
        credentials = payload.user
        if await self.repos.users.find_conflict(credentials.username, credentials.email):
            raise ConflictError("Username or email already exists")

        profile = payload.artist
        try:
            user = await self.repos.users.create(
                User(
                    username=credentials.username,
                    email=credentials.email,
                    password_hash=hash_password(credentials.password),
                ),
                commit=False,
            )
            artist = await self.repos.artists.create(
                Artist(
                    user_id=user.id,
                    name=profile.name,
                    slug=await unique_slug(self.repos.artists, profile.name),
                    bio=profile.bio,
                    specialty=profile.specialty,
                    image_url=profile.image_url,
                    approved=False,
                ),
                commit=False,
            )
            await self.repos.notification_preferences.create(
                NotificationPreferences(artist_id=artist.id), commit=False
            )
            await self.repos.commit()
        except IntegrityError as e:
            await self.repos.rollback()
            logger.info(f"Registration for '{credentials.username}' hit a uniqueness conflict: {e.orig}")
            raise ConflictError("Username or email already exists") from e

        logger.info(f"Artist {artist.id} ({artist.slug}) registered and awaiting approval")

        email_sent = await approval_emails.send_registration_confirmation(self.mailer, artist.name, user.email)
        admin_notified = await approval_emails.send_admin_approval_request(
            self.mailer, artist, user.username, user.email
        )
        return RegistrationResult(artist=artist, user=user, email_sent=email_sent, admin_notified=admin_notified)

    async def list_pending(self) -> List[Tuple[Artist, Optional[User]]]:
        """Pending registrations, oldest first, with their login accounts."""
        pending = await self.repos.artists.list_pending()
        result = []
        for artist in pending:
            user = await self.repos.users.get_by_id(artist.user_id) if artist.user_id else None
            result.append((artist, user))
        return result

    async def _get(self, artist_id: int) -> Artist:
        artist = await self.repos.artists.get_by_id(artist_id)
        if artist is None:
            raise NotFoundError("Artist", artist_id)
        return artist

    async def approve(self, artist_id: int) -> DecisionResult:
        """Approve a pending artist and email the artist.

        Raises:
            NotFoundError: Unknown artist
            ConflictError: Artist already approved
        """
        artist = await self._get(artist_id)
        if artist.approved:
            raise ConflictError("Artist is already approved")

        artist.approved = True
        artist.approved_at = utc_now()
        await self.repos.artists.update(artist)
        logger.info(f"Artist {artist_id} approved")

        user = await self.repos.users.get_by_id(artist.user_id) if artist.user_id else None
        email_sent = False
        if user is not None:
            email_sent = await approval_emails.send_approval_notice(self.mailer, artist.name, user.email)
        else:
            logger.warning(f"Artist {artist_id} has no login account; approval email skipped")

        log_artist_decision(artist_id, ArtistDecision.approved.value, email_sent)
        return DecisionResult(artist_id=artist_id, decision=ArtistDecision.approved, email_sent=email_sent)

    async def reject(self, artist_id: int) -> DecisionResult:
        """Reject a pending artist: delete it with its user, then email the artist.

        The contact details are read before the delete because the rows are
        gone by the time the email is sent.

        Raises:
            NotFoundError: Unknown artist
            ConflictError: Artist already approved
        """
        artist = await self._get(artist_id)
        if artist.approved:
            raise ConflictError("Approved artists cannot be rejected")

        user = await self.repos.users.get_by_id(artist.user_id) if artist.user_id else None
        contact_name = artist.name
        contact_email = user.email if user is not None else None

        try:
            purged = await purge_artist(self.repos, artist)
            await self.repos.commit()
        except Exception:
            await self.repos.rollback()
            logger.error(f"Rejecting artist {artist_id} failed; nothing was deleted", exc_info=True)
            raise
        logger.info(f"Artist {artist_id} rejected and removed with its user account")

        if self.storage is not None:
            for path in purged.media_paths:
                self.storage.delete(path)

        email_sent = False
        if contact_email:
            email_sent = await approval_emails.send_rejection_notice(self.mailer, contact_name, contact_email)

        log_artist_decision(artist_id, ArtistDecision.rejected.value, email_sent)
        return DecisionResult(artist_id=artist_id, decision=ArtistDecision.rejected, email_sent=email_sent)
