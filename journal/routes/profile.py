"""
Profile Routes.

The signed-in user's own account: view it, rename it and change the avatar.
"""

from typing import Annotated

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import ORJSONResponse

from journal.configs.settings import UPLOAD_FAILED_MESSAGE
from journal.dependencies import CurrentUserDep, MediaServiceDep, UserRepoDep
from journal.errors.upload import StorageError
from journal.managers import limiter
from journal.managers.rate_limiter import UPLOAD_RATE_LIMIT
from journal.monitoring import get_logger
from journal.schemas import ProfileUpdate, UserResponse

router = APIRouter(prefix="/profile", tags=["🙋 Profile"])

logger = get_logger(__name__)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Get own profile",
    operation_id="profile_get",
)
@limiter.limit("60/minute")
async def get_profile(request: Request, user: CurrentUserDep) -> UserResponse:
    return UserResponse.model_validate(user)


@router.patch(
    "",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Update own profile",
    description="Change display name (at least 2 characters) or avatar URL.",
    operation_id="profile_update",
)
@limiter.limit("30/minute")
async def update_profile(
    request: Request,
    changes: ProfileUpdate,
    user: CurrentUserDep,
    repo: UserRepoDep,
) -> UserResponse:
    return UserResponse.model_validate(await repo.update_profile(user, changes))


@router.post(
    "/avatar",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Upload avatar",
    description=(
        "Upload an image and use it as the profile picture. "
        "The previous avatar is removed from storage when it was the "
        "user's own upload."
    ),
    operation_id="profile_avatar",
)
@limiter.limit(UPLOAD_RATE_LIMIT)
async def upload_avatar(
    request: Request,
    user: CurrentUserDep,
    repo: UserRepoDep,
    service: MediaServiceDep,
    file: Annotated[UploadFile | None, File(description="Avatar image")] = None,
) -> UserResponse:
    """
    Upload a new avatar.

    Parameters
    ----------
    request : Request
        Current request context.
    user : UserDB
        Authenticated user.
    repo : UserRepository
        Repository dependency.
    service : MediaService
        Upload pipeline.
    file : UploadFile | None
        Multipart file field ``file``.

    Returns
    -------
    UserResponse
        The user with the new image URL.
    """
    previous = user.image
    result = await service.upload_image(file, uploaded_by=user.id)
    if not result.success:
        raise StorageError(result.error or UPLOAD_FAILED_MESSAGE)
    updated = await repo.update_profile(user, ProfileUpdate(image=result.url))

    if previous and previous != result.url:
        try:
            await service.delete_owned_by_url(previous, owner_id=user.id)
        except StorageError:
            logger.warning("Old avatar not deleted", user_id=str(user.id), url=previous)
    return UserResponse.model_validate(updated)
