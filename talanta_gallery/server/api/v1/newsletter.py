"""
Newsletter API Endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from talanta_gallery.core.database.entities import NewsletterSubscriber
from talanta_gallery.core.errors import ConflictError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.io.newsletter import NewsletterSubscribe, NewsletterSubscriberRead
from talanta_gallery.server.services.deps import ReposDep

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/subscribe",
    response_model=NewsletterSubscriberRead,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe to Newsletter",
    responses={400: {"description": "Email already subscribed"}},
)
async def subscribe(payload: NewsletterSubscribe, repos: ReposDep) -> NewsletterSubscriberRead:
    if await repos.newsletter.get_by_email(payload.email) is not None:
        raise ConflictError("Email already subscribed")
    subscriber = await repos.newsletter.create(NewsletterSubscriber(email=payload.email))
    logger.info(f"Newsletter subscriber {subscriber.id} added")
    return NewsletterSubscriberRead.model_validate(subscriber)
