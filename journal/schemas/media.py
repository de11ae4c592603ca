"""Media library schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from journal.schemas.base import CamelModel
from journal.schemas.pagination import PaginationResponse


class MediaResponse(CamelModel):
    id: UUID
    filename: str
    original_filename: str
    url: str
    thumbnail_url: str | None = None
    mime_type: str
    size: int
    width: int | None = None
    height: int | None = None
    alt_text: str | None = None
    caption: str | None = None
    uploaded_by: UUID | None = None
    created_at: datetime
    updated_at: datetime


class MediaListItem(MediaResponse):
    """Media row joined with the uploader's display name."""

    uploader_name: str | None = None


class MediaListResponse(CamelModel):
    items: list[MediaListItem]
    pagination: PaginationResponse


class MediaUpdate(CamelModel):
    alt_text: str | None = Field(default=None, max_length=500)
    caption: str | None = Field(default=None, max_length=1000)


class StorageStats(CamelModel):
    """Bytes stored in total and by the current user."""

    total_bytes: int
    user_bytes: int
    media_count: int


class UploadResponse(CamelModel):
    """Outcome of an upload, mirroring the storage collaborator's result."""

    success: bool
    url: str | None = None
    media_id: UUID | None = None
    error: str | None = None
