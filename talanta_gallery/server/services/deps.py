"""
Service Dependencies.

Annotated FastAPI dependencies shared by the routers: the database session,
the repository bundle bound to it, the mailer and the upload storage.
"""

from functools import lru_cache
from pathlib import Path
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from talanta_gallery.core.database import get_session
from talanta_gallery.core.database.repositories import RepoBundle, build_repos_from_session
from talanta_gallery.notifications.mailer import Mailer, build_mailer
from talanta_gallery.server.core.config import settings
from talanta_gallery.server.services.media_storage import MediaStorage

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> RepoBundle:
    return build_repos_from_session(session=session)


@lru_cache
def get_mailer() -> Mailer:
    """Process-wide mailer built from settings on first use."""
    return build_mailer(settings)


@lru_cache
def get_media_storage() -> MediaStorage:
    uploads = settings.uploads
    return MediaStorage(Path(uploads.directory), public_path=uploads.public_path, max_bytes=uploads.max_bytes)


ReposDep = Annotated[RepoBundle, Depends(get_repos)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]
StorageDep = Annotated[MediaStorage, Depends(get_media_storage)]
