"""
Storage services package.

Object storage backends for uploaded files: an S3-compatible bucket for
production and the local filesystem for development.
"""

from journal.configs import settings
from journal.services.storage.base import StorageService
from journal.services.storage.local import LocalStorage
from journal.services.storage.s3_storage import S3Storage


def get_storage_service() -> StorageService:
    """
    Get the configured storage service.

    Returns:
        StorageService: Backend selected by ``STORAGE_PROVIDER``
    """
    if settings.STORAGE_PROVIDER == "s3":
        return S3Storage()
    return LocalStorage()


__all__ = [
    "LocalStorage",
    "S3Storage",
    "StorageService",
    "get_storage_service",
]
