"""
Media Storage Service.

Uploaded files are written to the upload directory under a random name and
served by the ``/uploads`` static mount. ``MediaService`` keeps the
``media_files`` rows and the files on disk in step: a failed insert removes
the written file, and deleting a row removes its file.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from fastapi import UploadFile

from talanta_gallery.core.database.entities import MediaFile
from talanta_gallery.core.database.repositories import RepoBundle
from talanta_gallery.core.errors import ValidationFailedError
from talanta_gallery.core.logging_config import get_logger
from talanta_gallery.core.models.domain import MediaType
from talanta_gallery.core.models.io.media import MediaFileUpdate, parse_tags

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024

DOCUMENT_MIME_TYPES = {
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "text/plain",
}

_SUFFIX_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


def media_type_for(mime_type: Optional[str]) -> Optional[MediaType]:
    """Classify a MIME type, or return None if uploads of that type are refused."""
    if not mime_type:
        return None
    mime_type = mime_type.split(";")[0].strip().lower()
    if mime_type.startswith("image/"):
        return MediaType.image
    if mime_type.startswith("video/"):
        return MediaType.video
    if mime_type in DOCUMENT_MIME_TYPES:
        return MediaType.document
    return None


@dataclass
class StoredFile:
    filename: str
    original_name: str
    mime_type: str
    media_type: MediaType
    size: int
    url: str
    path: str


class MediaStorage:
    """Local-disk storage for uploads.

    Args:
        directory: Directory files are written to
        public_path: URL prefix the directory is served at
        max_bytes: Largest accepted upload
    """

    def __init__(self, directory: Path, public_path: str = "/uploads", max_bytes: int = 10 * 1024 * 1024) -> None:
        self.directory = directory
        self.public_path = public_path.rstrip("/")
        self.max_bytes = max_bytes

    def ensure_directory(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _suffix(original_name: str) -> str:
        suffix = Path(original_name).suffix.lower()
        return suffix if _SUFFIX_RE.match(suffix) else ""

    async def save(self, upload: UploadFile) -> StoredFile:
        """Validate and write an upload.

        Raises:
            ValidationFailedError: Unsupported type, empty file or file above the size limit
        """
        mime_type = (upload.content_type or "").split(";")[0].strip().lower()
        media_type = media_type_for(mime_type)
        if media_type is None:
            raise ValidationFailedError(f"Unsupported file type: {mime_type or 'unknown'}")

        original_name = Path(upload.filename or "upload").name
        filename = f"{uuid.uuid4().hex}{self._suffix(original_name)}"
        self.ensure_directory()
        path = self.directory / filename

        size = 0
        try:
            with path.open("wb") as target:
                while chunk := await upload.read(CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise ValidationFailedError(
                            f"File exceeds the maximum upload size of {self.max_bytes} bytes"
                        )
                    target.write(chunk)
        except Exception:
            path.unlink(missing_ok=True)
            raise

        if size == 0:
            path.unlink(missing_ok=True)
            raise ValidationFailedError("Uploaded file is empty")

        logger.info(f"Stored upload '{original_name}' as {filename} ({size} bytes)")
        return StoredFile(
            filename=filename,
            original_name=original_name,
            mime_type=mime_type,
            media_type=media_type,
            size=size,
            url=f"{self.public_path}/{filename}",
            path=str(path),
        )

    def delete(self, path: str) -> bool:
        """Remove a stored file. Paths outside the upload directory are ignored."""
        target = Path(path).resolve()
        if self.directory.resolve() not in target.parents:
            logger.warning(f"Refusing to delete file outside the upload directory: {path}")
            return False
        try:
            target.unlink()
        except FileNotFoundError:
            logger.debug(f"Upload already removed: {path}")
            return False
        return True


class MediaService:
    """Media library operations for admins and artists."""

    def __init__(self, repos: RepoBundle, storage: MediaStorage) -> None:
        self.repos = repos
        self.storage = storage

    async def upload(
        self,
        upload: UploadFile,
        artist_id: Optional[int] = None,
        description: Optional[str] = None,
        alt_text: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> MediaFile:
        stored = await self.storage.save(upload)
        media = MediaFile(
            artist_id=artist_id,
            filename=stored.filename,
            original_name=stored.original_name,
            mime_type=stored.mime_type,
            media_type=stored.media_type.value,
            size=stored.size,
            url=stored.url,
            path=stored.path,
            description=description,
            alt_text=alt_text,
        )
        media.set_tags_list(parse_tags(tags))
        try:
            return await self.repos.media.create(media)
        except Exception:
            await self.repos.rollback()
            self.storage.delete(stored.path)
            raise

    async def update(self, media: MediaFile, payload: MediaFileUpdate) -> MediaFile:
        changes = payload.model_dump(exclude_unset=True)
        tags: Optional[List[str]] = changes.pop("tags", None)
        for key, value in changes.items():
            setattr(media, key, value)
        if tags is not None:
            media.set_tags_list([tag.strip() for tag in tags if tag.strip()])
        return await self.repos.media.update(media)

    async def delete(self, media: MediaFile) -> None:
        await self.repos.media.delete(media.id)
        self.storage.delete(media.path)
