"""
Local filesystem storage implementation.

Used for development and tests. Files live under ``UPLOADS_DIR`` and are
served by the app at ``/media``.
"""

from pathlib import Path

import aiofiles
import aiofiles.os

from journal.configs import settings
from journal.errors.upload import StorageError
from journal.monitoring import get_logger

logger = get_logger(__name__)

MEDIA_URL_PREFIX = "/media"


class LocalStorage:
    """Stores files in the local filesystem under the configured uploads directory."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = root or settings.UPLOADS_DIR

    def _path_for(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if not path.is_relative_to(self.root.resolve()):
            mssg = "Invalid storage key"
            raise StorageError(mssg)
        return path

    def public_url(self, key: str) -> str:
        return f"{MEDIA_URL_PREFIX}/{key.lstrip('/')}"

    def key_from_url(self, url: str) -> str | None:
        prefix = f"{MEDIA_URL_PREFIX}/"
        return url.removeprefix(prefix) if url.startswith(prefix) else None

    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """
        Write ``data`` to ``UPLOADS_DIR/key``.

        Args:
            key: Object key
            data: Raw file bytes
            content_type: MIME type (not stored locally)

        Returns:
            str: URL path under ``/media``
        """
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(data)
        except OSError as e:
            logger.exception("Local upload failed", key=key)
            raise StorageError from e
        logger.debug("Stored file locally", key=key, content_type=content_type, size=len(data))
        return self.public_url(key)

    async def delete_object(self, key: str) -> bool:
        path = self._path_for(key)
        if not path.exists():
            return False
        try:
            await aiofiles.os.remove(path)
        except OSError as e:
            logger.exception("Local delete failed", key=key)
            mssg = "Failed to delete file from storage"
            raise StorageError(mssg) from e
        return True
