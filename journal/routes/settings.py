"""
Site Settings Routes.

Public read of the site copy and the editor/admin settings form.
"""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from journal.dependencies import SettingsRepoDep
from journal.managers import limiter
from journal.rbac import EditorOrAdminDep
from journal.schemas import SiteSettingsResponse, SiteSettingsUpdate

router = APIRouter(tags=["⚙️ Settings"])

FORBIDDEN_EXAMPLE = {
    "description": "Forbidden",
    "content": {
        "application/json": {
            "example": {"detail": "Insufficient permissions. Required role: admin, editor"},
        },
    },
}


@router.get(
    "/settings/public",
    response_class=ORJSONResponse,
    response_model=SiteSettingsResponse,
    summary="Public site settings",
    description=(
        "Site name, hero, about page and newsletter copy. "
        "Created with defaults on first read."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "id": "default",
                        "siteName": "Journal",
                        "siteTagline": "A personal blog about life, thoughts, and creativity.",
                        "showNewsletter": True,
                        "allowRegistration": True,
                    },
                },
            },
        },
    },
    operation_id="settings_public",
)
@limiter.limit("120/minute")
async def get_public_settings(request: Request, repo: SettingsRepoDep) -> SiteSettingsResponse:
    return SiteSettingsResponse.model_validate(await repo.get_settings())


@router.get(
    "/admin/settings",
    response_class=ORJSONResponse,
    response_model=SiteSettingsResponse,
    summary="Get settings for editing",
    responses={403: FORBIDDEN_EXAMPLE},
    operation_id="settings_admin_get",
)
@limiter.limit("60/minute")
async def get_settings_for_edit(
    request: Request,
    user: EditorOrAdminDep,
    repo: SettingsRepoDep,
) -> SiteSettingsResponse:
    return SiteSettingsResponse.model_validate(await repo.get_settings())


@router.patch(
    "/admin/settings",
    response_class=ORJSONResponse,
    response_model=SiteSettingsResponse,
    summary="Update site settings",
    description="Only the fields present in the body are written.",
    responses={403: FORBIDDEN_EXAMPLE},
    operation_id="settings_admin_update",
)
@limiter.limit("30/minute")
async def update_settings(
    request: Request,
    changes: SiteSettingsUpdate,
    user: EditorOrAdminDep,
    repo: SettingsRepoDep,
) -> SiteSettingsResponse:
    """
    Update site settings.

    Parameters
    ----------
    request : Request
        Current request context.
    changes : SiteSettingsUpdate
        Fields to change.
    user : UserDB
        Editor or admin making the change.
    repo : SiteSettingsRepository
        Repository dependency.

    Returns
    -------
    SiteSettingsResponse
        Settings after the update.
    """
    return SiteSettingsResponse.model_validate(await repo.update_settings(changes))
