"""
User Management Routes.

Admin-only listing of accounts and role changes.
"""

from uuid import UUID

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from journal.dependencies import PageQueryDep, UserRepoDep
from journal.errors.validation import SelfRoleChangeError
from journal.managers import limiter
from journal.rbac import AdminUserDep
from journal.repositories import PageParams
from journal.schemas import UserListResponse, UserResponse, UserRoleUpdate

router = APIRouter(prefix="/admin/users", tags=["👥 Users"])


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=UserListResponse,
    summary="List users",
    operation_id="users_list",
)
@limiter.limit("60/minute")
async def list_users(
    request: Request,
    admin: AdminUserDep,
    repo: UserRepoDep,
    pagination: PageQueryDep,
) -> UserListResponse:
    page = await repo.list_page(PageParams(page=pagination.page, limit=pagination.limit))
    return UserListResponse(
        items=[UserResponse.model_validate(user) for user in page.items],
        total=page.total,
    )


@router.patch(
    "/{user_id}/role",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    summary="Change a user's role",
    description="Admins cannot change their own role.",
    responses={
        400: {
            "description": "Own role",
            "content": {
                "application/json": {"example": {"detail": "You cannot change your own role"}},
            },
        },
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"detail": "User not found"}}},
        },
    },
    operation_id="users_update_role",
)
@limiter.limit("30/minute")
async def update_user_role(
    request: Request,
    user_id: UUID,
    body: UserRoleUpdate,
    admin: AdminUserDep,
    repo: UserRepoDep,
) -> UserResponse:
    """
    Change a user's role.

    Parameters
    ----------
    request : Request
        Current request context.
    user_id : UUID
        Target user.
    body : UserRoleUpdate
        New role.
    admin : UserDB
        Acting admin.
    repo : UserRepository
        Repository dependency.

    Returns
    -------
    UserResponse
        The updated user.

    Raises
    ------
    SelfRoleChangeError
        If the admin targets their own account.
    RecordNotFoundError
        If the user does not exist.
    """
    if user_id == admin.id:
        raise SelfRoleChangeError
    user = await repo.get_or_raise(user_id)
    return UserResponse.model_validate(await repo.update_role(user, body.role))
