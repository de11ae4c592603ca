"""
Base storage protocol for file storage operations.

Backends store opaque bytes under a key and hand back a public URL;
the database only ever keeps that URL.
"""

from abc import abstractmethod
from typing import Protocol


class StorageService(Protocol):
    """
    Protocol defining the interface for storage services.

    Implementations raise ``StorageError`` when the backend fails.
    """

    @abstractmethod
    async def put_object(self, key: str, data: bytes, content_type: str) -> str:
        """
        Store ``data`` under ``key``.

        Args:
            key: Object key, e.g. ``uploads/1732790000000-ab12cd-photo.jpg``
            data: Raw file bytes
            content_type: MIME type of the file

        Returns:
            str: Public URL of the stored object
        """
        ...

    @abstractmethod
    async def delete_object(self, key: str) -> bool:
        """
        Delete the object stored under ``key``.

        Returns:
            bool: True if the backend acknowledged the deletion
        """
        ...

    @abstractmethod
    def public_url(self, key: str) -> str:
        """Public URL for ``key``."""
        ...

    @abstractmethod
    def key_from_url(self, url: str) -> str | None:
        """Object key for a URL produced by this backend, or None if foreign."""
        ...
