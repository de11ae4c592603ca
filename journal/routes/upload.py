"""
Upload Route.

Multipart image upload used by the article editor. Requires a signed-in
user; the stored file is added to the media library.
"""

from typing import Annotated

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import ORJSONResponse

from journal.configs.settings import UPLOAD_FAILED_MESSAGE
from journal.dependencies import MediaServiceDep
from journal.errors.upload import StorageError
from journal.managers import limiter
from journal.managers.rate_limiter import UPLOAD_RATE_LIMIT
from journal.rbac import AuthorUserDep
from journal.schemas import UploadResponse

router = APIRouter(prefix="/upload", tags=["📤 Upload"])


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=UploadResponse,
    summary="Upload an image",
    description="JPEG, PNG, GIF, WebP or SVG up to 10MB.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "url": "https://cdn.example.com/uploads/1732790000000-ab12cd-photo.jpg",
                        "mediaId": "123e4567-e89b-12d3-a456-426614174000",
                    },
                },
            },
        },
        400: {
            "description": "No file",
            "content": {"application/json": {"example": {"detail": "No file provided"}}},
        },
        401: {
            "description": "Not authenticated",
            "content": {"application/json": {"example": {"detail": "Not authenticated"}}},
        },
        413: {
            "description": "Too large",
            "content": {
                "application/json": {
                    "example": {"detail": "File too large. Maximum size is 10MB."},
                },
            },
        },
        502: {
            "description": "Storage failure",
            "content": {
                "application/json": {"example": {"detail": "Upload failed. Please try again."}},
            },
        },
    },
    operation_id="upload_image",
)
@limiter.limit(UPLOAD_RATE_LIMIT)
async def upload_image(
    request: Request,
    user: AuthorUserDep,
    service: MediaServiceDep,
    file: Annotated[UploadFile | None, File(description="Image file")] = None,
) -> UploadResponse:
    """
    Upload an image to object storage.

    Parameters
    ----------
    request : Request
        Current request context.
    user : UserDB
        Authenticated uploader.
    service : MediaService
        Upload pipeline.
    file : UploadFile | None
        Multipart file field ``file``.

    Returns
    -------
    UploadResponse
        Public URL and media id.

    Raises
    ------
    NoFileError
        If no file was sent.
    StorageError
        If the storage backend rejected the upload.
    """
    result = await service.upload_image(file, uploaded_by=user.id)
    if not result.success:
        raise StorageError(result.error or UPLOAD_FAILED_MESSAGE)
    return UploadResponse(success=True, url=result.url, media_id=result.media_id)
