"""
Admin Article Routes.

The article editor behind the admin area. Every endpoint requires a signed-in
user; what they may touch is decided by the authorization predicates.

Summary
-------
Endpoints include:
  - Dashboard listing (all articles for admins/editors, own for authors)
  - Create article
  - Get article for editing
  - Update article
  - Delete article
"""

from uuid import UUID

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from journal.dependencies import ArticleRepoDep, CurrentUserDep, PageQueryDep
from journal.managers import limiter
from journal.models import ArticleDB, UserDB
from journal.monitoring import get_logger
from journal.rbac import (
    AuthorUserDep,
    can_delete,
    can_edit,
    ensure_can_delete,
    ensure_can_edit,
    is_editor_or_admin,
)
from journal.repositories import ArticleFilter, PageParams
from journal.routes.articles import to_response
from journal.schemas import (
    AdminArticleItem,
    AdminArticleListResponse,
    ArticleCreate,
    ArticleResponse,
    ArticleUpdate,
    PaginationResponse,
)

router = APIRouter(prefix="/admin/articles", tags=["🛠️ Admin Articles"])

logger = get_logger(__name__)

WRITE_RATE_LIMIT = "30/minute"
READ_RATE_LIMIT = "120/minute"

FORBIDDEN_EXAMPLE = {
    "description": "Forbidden",
    "content": {
        "application/json": {
            "example": {"detail": "You don't have permission to edit this article"},
        },
    },
}
NOT_FOUND_EXAMPLE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Article not found"}}},
}
UNAUTHORIZED_EXAMPLE = {
    "description": "Not authenticated",
    "content": {"application/json": {"example": {"detail": "Not authenticated"}}},
}


def to_admin_item(article: ArticleDB, user: UserDB) -> AdminArticleItem:
    return AdminArticleItem.model_validate(
        {
            **article.model_dump(),
            "can_edit": can_edit(article, user.id, user.role),
            "can_delete": can_delete(article, user.id, user.role),
        },
    )


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=AdminArticleListResponse,
    summary="Dashboard article list",
    description=(
        "Admins and editors see every article, authors only their own. "
        "Each item says whether the caller may edit or delete it."
    ),
    responses={401: UNAUTHORIZED_EXAMPLE},
    operation_id="admin_articles_list",
)
@limiter.limit(READ_RATE_LIMIT)
async def list_dashboard_articles(
    request: Request,
    user: CurrentUserDep,
    repo: ArticleRepoDep,
    pagination: PageQueryDep,
    search: str | None = None,
) -> AdminArticleListResponse:
    """
    List articles for the admin dashboard.

    Parameters
    ----------
    request : Request
        Current request context.
    user : UserDB
        Authenticated user.
    repo : ArticleRepository
        Repository dependency.
    pagination : PageQuery
        Page and page size.
    search : str | None
        Optional free-text search.

    Returns
    -------
    AdminArticleListResponse
        Articles with per-item permissions.
    """
    filters = ArticleFilter(
        search=search,
        author_id=None if is_editor_or_admin(user.role) else user.id,
    )
    page = await repo.list_page(filters, PageParams(page=pagination.page, limit=pagination.limit))
    return AdminArticleListResponse(
        items=[to_admin_item(article, user) for article in page.items],
        pagination=PaginationResponse.model_validate(page),
    )


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=ArticleResponse,
    status_code=HTTP_201_CREATED,
    summary="Create article",
    description=(
        "Create an article owned by the caller. The slug comes from the title, "
        "the read time from the content. Articles are drafts unless `published` is set."
    ),
    responses={
        401: UNAUTHORIZED_EXAMPLE,
        409: {
            "description": "Duplicate slug",
            "content": {
                "application/json": {
                    "example": {
                        "detail": (
                            "An article with the slug 'finding-peace-in-chaos' already exists"
                        ),
                    },
                },
            },
        },
    },
    operation_id="admin_articles_create",
)
@limiter.limit(WRITE_RATE_LIMIT)
async def create_article(
    request: Request,
    user: AuthorUserDep,
    repo: ArticleRepoDep,
    article: ArticleCreate = Body(
        openapi_examples={
            "basic": {
                "summary": "Draft article",
                "value": {
                    "title": "Finding Peace In Chaos",
                    "subtitle": "On quiet mornings",
                    "category": "Mindfulness",
                    "tags": ["slow living"],
                    "content": "<p>There's a peculiar kind of silence...</p>",
                },
            },
        },
    ),
) -> ArticleResponse:
    """
    Create a new article.

    Raises
    ------
    DuplicateEntryError
        If another article already has the derived slug.
    """
    created = await repo.create(article, author_id=user.id)
    return to_response(created)


@router.get(
    "/{article_id}",
    response_class=ORJSONResponse,
    response_model=ArticleResponse,
    summary="Get article for editing",
    responses={401: UNAUTHORIZED_EXAMPLE, 403: FORBIDDEN_EXAMPLE, 404: NOT_FOUND_EXAMPLE},
    operation_id="admin_articles_get",
)
@limiter.limit(READ_RATE_LIMIT)
async def get_article_for_edit(
    request: Request,
    article_id: UUID,
    user: AuthorUserDep,
    repo: ArticleRepoDep,
) -> ArticleResponse:
    article = await repo.get_or_raise(article_id)
    ensure_can_edit(article, user)
    return to_response(article)


@router.patch(
    "/{article_id}",
    response_class=ORJSONResponse,
    response_model=ArticleResponse,
    summary="Update article",
    description=(
        "Partial update. Send `expectedUpdatedAt` with the `updatedAt` you loaded "
        "to reject the write if someone else saved in the meantime."
    ),
    responses={
        401: UNAUTHORIZED_EXAMPLE,
        403: FORBIDDEN_EXAMPLE,
        404: NOT_FOUND_EXAMPLE,
        409: {
            "description": "Stale update",
            "content": {
                "application/json": {
                    "example": {
                        "detail": "This record was changed by someone else. Reload and try again.",
                    },
                },
            },
        },
    },
    operation_id="admin_articles_update",
)
@limiter.limit(WRITE_RATE_LIMIT)
async def update_article(
    request: Request,
    article_id: UUID,
    changes: ArticleUpdate,
    user: AuthorUserDep,
    repo: ArticleRepoDep,
) -> ArticleResponse:
    """
    Update an article.

    Parameters
    ----------
    request : Request
        Current request context.
    article_id : UUID
        Article identifier.
    changes : ArticleUpdate
        Fields to change.
    user : UserDB
        Authenticated user.
    repo : ArticleRepository
        Repository dependency.

    Returns
    -------
    ArticleResponse
        Updated article.

    Raises
    ------
    ForbiddenError
        If the caller may not edit the article.
    ConflictError
        If ``expectedUpdatedAt`` is stale.
    """
    article = await repo.get_or_raise(article_id)
    ensure_can_edit(article, user)
    updated = await repo.update(article, changes)
    return to_response(updated)


@router.delete(
    "/{article_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete article",
    description="Admins may delete any article, everyone else only their own.",
    responses={401: UNAUTHORIZED_EXAMPLE, 403: FORBIDDEN_EXAMPLE, 404: NOT_FOUND_EXAMPLE},
    operation_id="admin_articles_delete",
)
@limiter.limit(WRITE_RATE_LIMIT)
async def delete_article(
    request: Request,
    article_id: UUID,
    user: AuthorUserDep,
    repo: ArticleRepoDep,
) -> Response:
    article = await repo.get_or_raise(article_id)
    ensure_can_delete(article, user)
    await repo.remove(article)
    logger.info("Article removed by user", article_id=str(article_id), user_id=str(user.id))
    return Response(status_code=HTTP_204_NO_CONTENT)
