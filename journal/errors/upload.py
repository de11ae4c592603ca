"""
Upload and upstream-service error classes.

Storage failures surface to the caller as a generic message and are
never retried.
"""

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    HTTP_415_UNSUPPORTED_MEDIA_TYPE,
    HTTP_502_BAD_GATEWAY,
)

from journal.errors.base import BaseAppError, create_exception_handler
from journal.monitoring import get_logger

logger = get_logger(__name__)


class UploadError(BaseAppError):
    """Base exception for upload-related errors."""

    def __init__(
        self,
        detail: str = "We couldn't upload your file. Please try again.",
        status_code: int = HTTP_400_BAD_REQUEST,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)


class NoFileError(UploadError):
    """Exception raised when a multipart request carries no file."""

    def __init__(self) -> None:
        super().__init__("No file provided")


class ImageTooLargeError(UploadError):
    """Exception raised when uploaded image exceeds size limit."""

    def __init__(
        self,
        max_size_mb: int = 10,
        actual_size_mb: float | None = None,
    ) -> None:
        detail = f"File too large. Maximum size is {max_size_mb}MB."
        if actual_size_mb is not None:
            detail += f" Your file is {actual_size_mb:.1f}MB."
        super().__init__(detail=detail, status_code=HTTP_413_REQUEST_ENTITY_TOO_LARGE)
        self.max_size_mb = max_size_mb


class UnsupportedImageTypeError(UploadError):
    """Exception raised when uploaded image type is not supported."""

    def __init__(
        self,
        content_type: str,
        allowed_types: list[str] | None = None,
    ) -> None:
        allowed = allowed_types or []
        detail = f"Invalid file type. Allowed: {', '.join(allowed)}"
        super().__init__(detail=detail, status_code=HTTP_415_UNSUPPORTED_MEDIA_TYPE)
        self.content_type = content_type
        self.allowed_types = allowed


class InvalidImageError(UploadError):
    """Exception raised when uploaded file is not a valid image."""

    def __init__(
        self,
        detail: str = "This file doesn't appear to be a valid image.",
    ) -> None:
        super().__init__(detail=detail)


class UpstreamServiceError(BaseAppError):
    """An external collaborator (object storage) failed."""

    def __init__(self, detail: str = "An upstream service failed. Please try again later.") -> None:
        super().__init__(detail=detail, status_code=HTTP_502_BAD_GATEWAY)


class StorageError(UpstreamServiceError):
    """Exception raised when a storage operation fails."""

    def __init__(self, detail: str = "Upload failed. Please try again.") -> None:
        super().__init__(detail=detail)


upload_exception_handler = create_exception_handler(logger)
