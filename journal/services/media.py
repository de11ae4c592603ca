"""
Media upload service.

Validates uploaded images, pushes them to object storage and keeps the
media library table in sync with what is stored.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from io import BytesIO
from re import compile as re_compile
from secrets import token_hex
from uuid import UUID

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from journal.configs import settings
from journal.configs.settings import UPLOAD_FAILED_MESSAGE
from journal.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    NoFileError,
    StorageError,
    UnsupportedImageTypeError,
)
from journal.models.media import MediaDB
from journal.monitoring import get_logger
from journal.repositories.media import MediaRepository
from journal.services.storage import StorageService

logger = get_logger(__name__)

UNSAFE_NAME_CHARS = re_compile(r"[^a-zA-Z0-9]")
SVG_TYPE = "image/svg+xml"
MAX_SAFE_NAME_LENGTH = 50


@dataclass(frozen=True)
class UploadResult:
    """Outcome of an upload. ``error`` is set exactly when ``success`` is False."""

    success: bool
    url: str | None = None
    media_id: UUID | None = None
    error: str | None = None


def generate_storage_key(original_filename: str, moment: datetime | None = None) -> str:
    """
    Build a unique object key for an upload.

    Args:
        original_filename: Filename as sent by the client
        moment: Upload time, defaults to now

    Returns:
        str: ``uploads/{millis}-{random6}-{safe_name}.{ext}``
    """
    moment = moment or datetime.now(tz=UTC)
    stem, dot, extension = original_filename.rpartition(".")
    if not dot:
        stem, extension = original_filename, "jpg"
    safe_name = UNSAFE_NAME_CHARS.sub("-", stem)[:MAX_SAFE_NAME_LENGTH]
    millis = int(moment.timestamp() * 1000)
    return f"uploads/{millis}-{token_hex(3)}-{safe_name}.{extension.lower() or 'jpg'}"


class MediaService:
    """
    Service for uploading and deleting media files.

    Validation failures raise upload errors. A storage failure is reported
    through ``UploadResult`` with a generic message and is never retried.
    """

    def __init__(self, storage: StorageService, repo: MediaRepository) -> None:
        self.storage = storage
        self.repo = repo
        self.max_size_bytes = settings.MEDIA_IMAGE_MAX_SIZE_MB * 1024 * 1024
        self.allowed_types = settings.MEDIA_IMAGE_ALLOWED_TYPES

    def _validate_type(self, content_type: str | None) -> str:
        if not content_type or content_type not in self.allowed_types:
            raise UnsupportedImageTypeError(
                content_type=content_type or "unknown",
                allowed_types=self.allowed_types,
            )
        return content_type

    def _validate_size(self, size: int) -> None:
        if size > self.max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.MEDIA_IMAGE_MAX_SIZE_MB,
                actual_size_mb=size / (1024 * 1024),
            )

    async def _read_limited(self, file: UploadFile) -> bytes:
        """Read the upload, stopping one byte past the size limit."""
        if file.size is not None:
            self._validate_size(file.size)
        data = await file.read(self.max_size_bytes + 1)
        if len(data) > self.max_size_bytes:
            # Truncated read, the real size is unknown.
            raise ImageTooLargeError(max_size_mb=settings.MEDIA_IMAGE_MAX_SIZE_MB)
        return data

    @staticmethod
    def _dimensions(data: bytes, content_type: str) -> tuple[int | None, int | None]:
        """Pixel size of a raster image; SVGs have none."""
        if content_type == SVG_TYPE:
            return None, None
        try:
            with Image.open(BytesIO(data)) as img:
                img.verify()
            with Image.open(BytesIO(data)) as img:
                return img.width, img.height
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            raise InvalidImageError from e

    async def upload_image(
        self,
        file: UploadFile | None,
        uploaded_by: UUID | None = None,
    ) -> UploadResult:
        """
        Validate and store an image, recording it in the media library.

        Args:
            file: Uploaded file
            uploaded_by: Uploader; when given a media record is created

        Returns:
            UploadResult: URL and media id on success, error message otherwise

        Raises:
            NoFileError: If no file was sent
            UnsupportedImageTypeError: If the MIME type is not allowed
            ImageTooLargeError: If the file exceeds the size limit
            InvalidImageError: If a raster image cannot be decoded
        """
        if file is None or not file.filename:
            raise NoFileError

        content_type = self._validate_type(file.content_type)
        data = await self._read_limited(file)
        width, height = self._dimensions(data, content_type)

        key = generate_storage_key(file.filename)
        try:
            url = await self.storage.put_object(key, data, content_type)
        except StorageError:
            logger.warning("Upload failed", key=key, size=len(data))
            return UploadResult(success=False, error=UPLOAD_FAILED_MESSAGE)

        logger.info("File uploaded", key=key, size=len(data), content_type=content_type)
        if uploaded_by is None:
            return UploadResult(success=True, url=url)

        try:
            media = await self.repo.create(
                MediaDB(
                    filename=key,
                    original_filename=file.filename,
                    url=url,
                    mime_type=content_type,
                    size=len(data),
                    width=width,
                    height=height,
                    uploaded_by=uploaded_by,
                ),
            )
        except Exception:
            # The stored object is left in place.
            logger.warning("Media record not saved, stored object is orphaned", key=key)
            raise
        return UploadResult(success=True, url=url, media_id=media.id)

    async def delete_media(self, media: MediaDB) -> None:
        """
        Delete a media item from storage and from the library.

        Args:
            media: Media record

        Raises:
            StorageError: If the storage backend fails; the record is kept
        """
        await self.storage.delete_object(media.filename)
        await self.repo.remove(media)

    async def delete_owned_by_url(self, url: str, owner_id: UUID) -> bool:
        """
        Delete a user's own upload by its public URL.

        Only URLs recorded in the media library as uploaded by ``owner_id``
        and served by the current storage backend are removed. Anything else
        is left untouched.

        Args:
            url: Public URL returned by a previous upload
            owner_id: User the upload must belong to

        Returns:
            bool: True if the object and its record were deleted

        Raises:
            StorageError: If the storage backend fails; the record is kept
        """
        media = await self.repo.get_by_url(url)
        if media is None or media.uploaded_by != owner_id:
            return False
        if self.storage.key_from_url(url) is None:
            return False
        await self.delete_media(media)
        return True
