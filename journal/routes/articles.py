"""
Public Article Routes.

Read-only endpoints behind the public site: the home feed, the filtered
article listing and single article pages.

Summary
-------
Endpoints include:
  - Home feed (latest published articles)
  - List articles (search, category, tag, page)
  - List categories and tags
  - Get article by slug

Visibility
----------
Anonymous visitors only ever see published articles. A signed-in viewer may
also open drafts by slug (for previews); listings never include drafts.
"""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse

from journal.configs import settings
from journal.configs.settings import (
    ARTICLES_PER_PAGE,
    HOME_LATEST_COUNT,
    RELATED_ARTICLES_COUNT,
)
from journal.dependencies import ArticleQueryDep, ArticleRepoDep, OptionalViewerDep
from journal.errors.database import RecordNotFoundError
from journal.managers import limiter
from journal.models import ArticleDB
from journal.rbac import can_view
from journal.repositories import ArticleFilter, PageParams
from journal.schemas import (
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleNavLink,
    ArticleResponse,
    ArticleSummary,
    HomeResponse,
    PaginationResponse,
)
from journal.utils.helpers import excerpt

router = APIRouter(prefix="/articles", tags=["📰 Articles"])

PUBLIC_RATE_LIMIT = "120/minute"

NOT_FOUND_EXAMPLE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"detail": "Article not found"}}},
}


def to_summary(article: ArticleDB) -> ArticleSummary:
    return ArticleSummary.model_validate(article)


def to_response(article: ArticleDB) -> ArticleResponse:
    return ArticleResponse.model_validate(article)


def to_nav_link(article: ArticleDB | None) -> ArticleNavLink | None:
    if article is None:
        return None
    return ArticleNavLink(slug=article.slug, title=article.title)


def canonical_url_for(article: ArticleDB) -> str:
    """The article's own canonical URL, or its address on the public site."""
    return article.canonical_url or f"{settings.SITE_URL.rstrip('/')}/article/{article.slug}"


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=ArticleListResponse,
    summary="List published articles",
    description=(
        "Published articles, newest first, 10 per page. Optional free-text search "
        "(`q`), category and tag filters are combined with AND."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "items": [
                            {
                                "slug": "finding-peace-in-chaos",
                                "title": "Finding Peace In Chaos",
                                "category": "Mindfulness",
                                "tags": ["slow living"],
                                "readTime": "8 min read",
                            },
                        ],
                        "pagination": {
                            "page": 1,
                            "limit": 10,
                            "total": 1,
                            "totalPages": 1,
                            "hasNext": False,
                            "hasPrev": False,
                        },
                        "categories": ["Mindfulness"],
                        "tags": ["slow living"],
                    },
                },
            },
        },
    },
    operation_id="articles_list",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def list_articles(
    request: Request,
    query: ArticleQueryDep,
    repo: ArticleRepoDep,
) -> ArticleListResponse:
    """
    List published articles.

    Parameters
    ----------
    request : Request
        Current request context.
    query : ArticleListQuery
        Page, search, category and tag.
    repo : ArticleRepository
        Repository dependency.

    Returns
    -------
    ArticleListResponse
        One page of articles plus the available categories and tags.
    """
    page = await repo.list_page(
        ArticleFilter(
            search=query.search,
            category=query.category,
            tag=query.tag,
            published_only=True,
        ),
        PageParams(page=query.page, limit=ARTICLES_PER_PAGE),
    )
    return ArticleListResponse(
        items=[to_summary(article) for article in page.items],
        pagination=PaginationResponse.model_validate(page),
        categories=await repo.list_categories(),
        tags=await repo.list_tags(),
        search=query.search,
        category=query.category,
        tag=query.tag,
    )


@router.get(
    "/home",
    response_class=ORJSONResponse,
    response_model=HomeResponse,
    summary="Home feed",
    description="The five most recent published articles and the published total.",
    operation_id="articles_home",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def home(request: Request, repo: ArticleRepoDep) -> HomeResponse:
    latest = await repo.latest_published(HOME_LATEST_COUNT)
    return HomeResponse(
        latest=[to_summary(article) for article in latest],
        total_published=await repo.count_published(),
    )


@router.get(
    "/categories",
    response_class=ORJSONResponse,
    response_model=list[str],
    summary="List categories",
    description="Distinct categories of published articles.",
    operation_id="articles_categories",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def list_categories(request: Request, repo: ArticleRepoDep) -> list[str]:
    return await repo.list_categories()


@router.get(
    "/tags",
    response_class=ORJSONResponse,
    response_model=list[str],
    summary="List tags",
    description="Distinct tags across published articles.",
    operation_id="articles_tags",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def list_tags(request: Request, repo: ArticleRepoDep) -> list[str]:
    return await repo.list_tags()


@router.get(
    "/{slug}",
    response_class=ORJSONResponse,
    response_model=ArticleDetailResponse,
    summary="Get article by slug",
    description=(
        "A single article with related articles and previous/next links. "
        "Drafts are only returned to signed-in viewers."
    ),
    responses={404: NOT_FOUND_EXAMPLE},
    operation_id="articles_get_by_slug",
)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_article(
    request: Request,
    slug: str,
    repo: ArticleRepoDep,
    viewer: OptionalViewerDep,
) -> ArticleDetailResponse:
    """
    Get an article by slug.

    Parameters
    ----------
    request : Request
        Current request context.
    slug : str
        Article slug.
    repo : ArticleRepository
        Repository dependency.
    viewer : UserDB | None
        Signed-in viewer, if any.

    Returns
    -------
    ArticleDetailResponse
        The article, related articles and navigation links.

    Raises
    ------
    RecordNotFoundError
        If the article does not exist or is a draft and the viewer is anonymous.
    """
    article = await repo.get_by_slug(slug)
    if article is None or not can_view(article, viewer):
        raise RecordNotFoundError(detail="Article not found")

    related = await repo.get_related(article, RELATED_ARTICLES_COUNT)
    previous, following = await repo.get_adjacent(article)
    return ArticleDetailResponse(
        article=to_response(article),
        related=[to_summary(item) for item in related],
        previous=to_nav_link(previous),
        next=to_nav_link(following),
        canonical_url=canonical_url_for(article),
        description=article.seo_description or excerpt(article.content),
    )
