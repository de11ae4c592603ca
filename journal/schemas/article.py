"""
Article schemas.

Request bodies and response shapes for public article pages and the
admin article editor.
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from journal.schemas.base import CamelModel
from journal.schemas.pagination import PaginationResponse

EXAMPLE_CONTENT = (
    "<p>There's a peculiar kind of silence that exists in the early morning hours, "
    "before the world wakes up and fills itself with noise.</p>"
)


def _not_blank(value: str) -> str:
    if not value or not value.strip():
        mssg = "must not be empty"
        raise ValueError(mssg)
    return value


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    seen: dict[str, None] = {}
    for tag in tags:
        if cleaned := tag.strip():
            seen.setdefault(cleaned, None)
    return list(seen)


class ArticleFields(CamelModel):
    """Optional editable article fields shared by create and update."""

    subtitle: str | None = Field(default=None, max_length=500)
    category: str | None = Field(default=None, max_length=100, examples=["Mindfulness"])
    tags: list[str] | None = Field(default=None, max_length=20, examples=[["slow living"]])
    author: str | None = Field(default=None, max_length=100, examples=["Journal"])
    hero_image: str | None = Field(default=None, max_length=1000)
    hero_image_caption: str | None = Field(default=None, max_length=500)
    seo_title: str | None = Field(default=None, max_length=200)
    seo_description: str | None = Field(default=None, max_length=500)
    seo_keywords: str | None = Field(default=None, max_length=500)
    canonical_url: str | None = Field(default=None, max_length=1000)

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, tags: list[str] | None) -> list[str] | None:
        """Strip whitespace, drop empty tags and duplicates, keep order."""
        return _clean_tags(tags)


class ArticleCreate(ArticleFields):
    """Article creation body. Slug, date and read time are derived."""

    title: str = Field(..., max_length=200, examples=["Finding Peace In Chaos"])
    content: str = Field(..., examples=[EXAMPLE_CONTENT])
    published: bool = False

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _not_blank(value)


class ArticleUpdate(ArticleFields):
    """
    Partial article update.

    ``expected_updated_at`` is an optional optimistic-concurrency token: when
    present it must equal the stored ``updatedAt`` or the update is rejected.
    """

    title: str | None = Field(default=None, max_length=200)
    content: str | None = None
    published: bool | None = None
    expected_updated_at: datetime | None = None

    @field_validator("title", "content")
    @classmethod
    def not_blank_when_given(cls, value: str | None) -> str | None:
        return None if value is None else _not_blank(value)


class ArticleSummary(CamelModel):
    """Article card used by listings."""

    id: UUID
    slug: str
    title: str
    subtitle: str | None = None
    category: str | None = None
    tags: list[str] = []
    date: str
    read_time: str | None = None
    author: str
    author_id: UUID | None = None
    hero_image: str | None = None
    published: bool
    created_at: datetime
    updated_at: datetime


class ArticleResponse(ArticleSummary):
    """Full article including body and SEO fields."""

    hero_image_caption: str | None = None
    content: str
    seo_title: str | None = None
    seo_description: str | None = None
    seo_keywords: str | None = None
    canonical_url: str | None = None


class AdminArticleItem(ArticleSummary):
    """Dashboard row with the actions the current user may take."""

    can_edit: bool
    can_delete: bool


class AdminArticleListResponse(CamelModel):
    items: list[AdminArticleItem]
    pagination: PaginationResponse


class ArticleListResponse(CamelModel):
    """Public article listing with facets for the filter bar."""

    items: list[ArticleSummary]
    pagination: PaginationResponse
    categories: list[str]
    tags: list[str]
    search: str | None = None
    category: str | None = None
    tag: str | None = None


class ArticleNavLink(CamelModel):
    slug: str
    title: str


class ArticleDetailResponse(CamelModel):
    """Single article page."""

    article: ArticleResponse
    related: list[ArticleSummary]
    previous: ArticleNavLink | None = None
    next: ArticleNavLink | None = None
    canonical_url: str
    description: str = Field(description="SEO description, or a plain-text excerpt of the body")


class HomeResponse(CamelModel):
    """Home page: latest published articles and the published total."""

    latest: list[ArticleSummary]
    total_published: int
