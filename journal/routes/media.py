"""
Media Library Routes.

Browse uploaded files, edit their alt text and captions, and delete them.
Deleting removes the stored object as well as the library record.
"""

from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_204_NO_CONTENT

from journal.dependencies import (
    CurrentUserDep,
    MediaQueryDep,
    MediaRepoDep,
    MediaServiceDep,
)
from journal.managers import limiter
from journal.models import MediaDB
from journal.rbac import EditorOrAdminDep
from journal.repositories import PageParams
from journal.schemas import (
    MediaListItem,
    MediaListResponse,
    MediaResponse,
    MediaUpdate,
    PaginationResponse,
    StorageStats,
)

router = APIRouter(prefix="/admin/media", tags=["🖼️ Media"])

NOT_FOUND_EXAMPLE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Media not found"}}},
}


def to_list_item(media: MediaDB, uploader_name: str | None) -> MediaListItem:
    return MediaListItem.model_validate(media).model_copy(
        update={"uploader_name": uploader_name},
    )


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=MediaListResponse,
    summary="List media",
    description=(
        "Uploaded files, newest first, with the uploader's name. "
        "Filter by MIME prefix with `type`."
    ),
    operation_id="media_list",
)
@limiter.limit("60/minute")
async def list_media(
    request: Request,
    user: CurrentUserDep,
    query: MediaQueryDep,
    repo: MediaRepoDep,
) -> MediaListResponse:
    page = await repo.list_with_uploader(
        PageParams(page=query.page, limit=query.limit),
        mime_prefix=query.mime_type,
        search=query.search,
    )
    return MediaListResponse(
        items=[to_list_item(media, name) for media, name in page.items],
        pagination=PaginationResponse.model_validate(page),
    )


@router.get(
    "/stats",
    response_class=ORJSONResponse,
    response_model=StorageStats,
    summary="Storage usage",
    description="Bytes stored in total and by the caller.",
    operation_id="media_stats",
)
@limiter.limit("60/minute")
async def storage_stats(
    request: Request,
    user: CurrentUserDep,
    repo: MediaRepoDep,
) -> StorageStats:
    return StorageStats(
        total_bytes=await repo.total_storage_used(),
        user_bytes=await repo.storage_used_by(user.id),
        media_count=await repo.count(),
    )


@router.patch(
    "/{media_id}",
    response_class=ORJSONResponse,
    response_model=MediaResponse,
    summary="Update alt text and caption",
    responses={404: NOT_FOUND_EXAMPLE},
    operation_id="media_update",
)
@limiter.limit("30/minute")
async def update_media(
    request: Request,
    media_id: UUID,
    changes: MediaUpdate,
    user: CurrentUserDep,
    repo: MediaRepoDep,
) -> MediaResponse:
    media = await repo.get_or_raise(media_id)
    return MediaResponse.model_validate(await repo.update(media, changes))


@router.delete(
    "/{media_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete media",
    description="Editors and admins only. Removes the stored object and the library record.",
    responses={
        404: NOT_FOUND_EXAMPLE,
        502: {
            "description": "Storage failure",
            "content": {
                "application/json": {
                    "example": {"detail": "Failed to delete file from storage"},
                },
            },
        },
    },
    operation_id="media_delete",
)
@limiter.limit("30/minute")
async def delete_media(
    request: Request,
    media_id: UUID,
    user: EditorOrAdminDep,
    repo: MediaRepoDep,
    service: MediaServiceDep,
) -> Response:
    """
    Delete a media item.

    Parameters
    ----------
    request : Request
        Current request context.
    media_id : UUID
        Media identifier.
    user : UserDB
        Editor or admin.
    repo : MediaRepository
        Repository dependency.
    service : MediaService
        Upload pipeline, used for storage deletion.

    Raises
    ------
    RecordNotFoundError
        If the media item does not exist.
    StorageError
        If the storage backend fails; the record is kept.
    """
    media = await repo.get_or_raise(media_id)
    await service.delete_media(media)
    return Response(status_code=HTTP_204_NO_CONTENT)
