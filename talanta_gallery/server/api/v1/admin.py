"""
Admin Back-office Endpoints.

Admin login, the dashboard and the artist approval queue. Approving or
rejecting commits first and emails afterwards; the response's ``email_sent``
reports whether the artist was notified.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Query

from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.domain import ArtworkAvailability, OrderStatus
from talanta_gallery.core.models.io.artists import (
    ArtistAdminRead,
    ArtistDecisionResponse,
    PendingArtistRead,
    pending_artist,
)
from talanta_gallery.core.models.io.auth import AdminLoginRequest, TokenResponse
from talanta_gallery.core.models.io.blog import BlogShareRead, BlogShareReport
from talanta_gallery.core.models.io.dashboard import DashboardStats
from talanta_gallery.core.models.io.newsletter import NewsletterSubscriberRead
from talanta_gallery.server.core.auth import CurrentAdmin
from talanta_gallery.server.core.constant import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from talanta_gallery.server.services.accounts import AccountService
from talanta_gallery.server.services.artist_approval import ArtistApprovalService
from talanta_gallery.server.services.deps import MailerDep, ReposDep, StorageDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Admin Login",
    description="Exchange admin credentials for a bearer token valid for 24 hours.",
    responses={401: {"description": "Invalid credentials"}},
)
async def admin_login(payload: AdminLoginRequest, repos: ReposDep) -> TokenResponse:
    token = await AccountService(repos).admin_login(payload.username, payload.password)
    return TokenResponse(token=token, message="Login successful")


@router.get(
    "/dashboard",
    response_model=DashboardStats,
    summary="Dashboard Statistics",
    description="Counts of artists, artworks, orders, users and subscribers, and the revenue of completed orders.",
)
async def dashboard(_: CurrentAdmin, repos: ReposDep) -> DashboardStats:
    artist_counts = await repos.artists.count_by_approval()
    revenue = await repos.orders.revenue(OrderStatus.completed.value)
    return DashboardStats(
        approved_artists=artist_counts["approved"],
        pending_artists=artist_counts["pending"],
        artworks=await repos.artworks.count(),
        available_artworks=await repos.artworks.count({"availability": ArtworkAvailability.available.value}),
        orders=await repos.orders.count(),
        pending_orders=await repos.orders.count({"status": OrderStatus.pending.value}),
        revenue=revenue.quantize(Decimal("0.01")),
        users=await repos.users.count(),
        newsletter_subscribers=await repos.newsletter.count(),
    )


@router.get(
    "/artists",
    response_model=List[ArtistAdminRead],
    summary="List All Artists",
    description="Every artist regardless of approval state, newest first. Filter with `status=pending|approved`.",
)
async def list_artists(
    _: CurrentAdmin,
    repos: ReposDep,
    status: Optional[str] = Query(default=None, pattern="^(pending|approved)$"),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[ArtistAdminRead]:
    approved = None if status is None else status == "approved"
    artists = await repos.artists.list_all(approved=approved, limit=limit, offset=offset)
    return [ArtistAdminRead.model_validate(artist) for artist in artists]


@router.get(
    "/artists/pending",
    response_model=List[PendingArtistRead],
    summary="Pending Registrations",
    description="Artist registrations awaiting a decision, oldest first, with their username and email.",
)
async def list_pending_artists(_: CurrentAdmin, repos: ReposDep, mailer: MailerDep) -> List[PendingArtistRead]:
    pending = await ArtistApprovalService(repos, mailer).list_pending()
    return [pending_artist(artist, user) for artist, user in pending]


@router.post(
    "/artists/{artist_id}/approve",
    response_model=ArtistDecisionResponse,
    summary="Approve Artist",
    description="Approve a pending registration so the artist can sign in, then email the artist.",
    responses={
        400: {"description": "Artist is already approved"},
        404: {"description": "Artist not found"},
    },
)
async def approve_artist(
    artist_id: int, admin: CurrentAdmin, repos: ReposDep, mailer: MailerDep
) -> ArtistDecisionResponse:
    """
    Approve an artist registration.

    Sets ``approved`` and ``approved_at``. The approval stands even if the
    notification email fails; ``email_sent`` tells the admin whether to follow up.
    """
    result = await ArtistApprovalService(repos, mailer).approve(artist_id)
    logger.info(f"Admin {admin.username} approved artist {artist_id}")
    return ArtistDecisionResponse(
        artist_id=result.artist_id,
        status=result.decision.value,
        email_sent=result.email_sent,
        message=result.message,
    )


@router.post(
    "/artists/{artist_id}/reject",
    response_model=ArtistDecisionResponse,
    summary="Reject Artist",
    description="Delete a pending registration with its login account, then email the artist.",
    responses={
        400: {"description": "Approved artists cannot be rejected"},
        404: {"description": "Artist not found"},
    },
)
async def reject_artist(
    artist_id: int, admin: CurrentAdmin, repos: ReposDep, mailer: MailerDep, storage: StorageDep
) -> ArtistDecisionResponse:
    """
    Reject an artist registration.

    The artist row, its user and everything the artist owns are removed in
    one transaction. The rejection email uses contact details read before
    the delete.
    """
    result = await ArtistApprovalService(repos, mailer, storage).reject(artist_id)
    logger.info(f"Admin {admin.username} rejected artist {artist_id}")
    return ArtistDecisionResponse(
        artist_id=result.artist_id,
        status=result.decision.value,
        email_sent=result.email_sent,
        message=result.message,
    )


@router.get(
    "/blog/shares",
    response_model=BlogShareReport,
    summary="Blog Share Analytics",
    description="Recorded blog shares, newest first, with totals per platform.",
)
async def blog_shares(
    _: CurrentAdmin,
    repos: ReposDep,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> BlogShareReport:
    by_platform = await repos.blog_shares.counts_by_platform()
    rows = await repos.blog_shares.list_with_posts(limit=limit, offset=offset)
    shares = [
        BlogShareRead.model_validate(share).model_copy(update={"post_title": title}) for share, title in rows
    ]
    return BlogShareReport(total=sum(by_platform.values()), by_platform=by_platform, shares=shares)


@router.get(
    "/newsletter",
    response_model=List[NewsletterSubscriberRead],
    summary="Newsletter Subscribers",
)
async def newsletter_subscribers(
    _: CurrentAdmin,
    repos: ReposDep,
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> List[NewsletterSubscriberRead]:
    subscribers = await repos.newsletter.list(limit=limit, offset=offset)
    return [NewsletterSubscriberRead.model_validate(s) for s in subscribers]
