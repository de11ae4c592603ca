"""Article database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import JSON, Boolean, DateTime, Index, Text, false
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String

# JSONB on PostgreSQL for containment queries, plain JSON elsewhere.
TagList = JSON().with_variant(JSONB(), "postgresql")


class ArticleDB(SQLModel, table=True):
    """
    Article database model.

    Articles are drafts until ``published`` is set. ``author_id`` is a weak
    reference to the owning user and becomes NULL when that user is deleted;
    ``author`` is the display name shown on the page.
    """

    __tablename__ = cast("declared_attr[str]", "articles")

    __table_args__ = (
        Index("ix_articles_tags_gin", "tags", postgresql_using="gin"),
        Index("ix_articles_published_created", "published", "created_at"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="Article ID",
    )

    slug: str = Field(
        sa_column=Column(String(200), unique=True, nullable=False, index=True),
        description="URL-friendly slug (unique)",
    )
    title: str = Field(
        sa_column=Column(String(200), nullable=False),
        description="Article title",
    )
    subtitle: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Article subtitle",
    )
    category: str | None = Field(
        default=None,
        sa_column=Column(String(100), index=True),
        description="Category name",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(TagList, nullable=False),
        description="Tags",
    )
    date: str = Field(
        sa_column=Column(String(50), nullable=False),
        description="Display date, e.g. 'November 28, 2025'",
    )
    read_time: str | None = Field(
        default=None,
        sa_column=Column(String(50)),
        description="Read-time estimate, e.g. '8 min read'",
    )
    author: str = Field(
        default="Journal",
        sa_column=Column(String(100), nullable=False, server_default="Journal"),
        description="Author display name",
    )
    author_id: UUID | None = Field(
        default=None,
        sa_column=Column(
            "author_id",
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        ),
        description="Owning user (weak reference to users.id)",
    )
    hero_image: str | None = Field(
        default=None,
        sa_column=Column(String(1000)),
        description="Hero image URL",
    )
    hero_image_caption: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Hero image caption",
    )
    content: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Article body (HTML)",
    )
    published: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, server_default=false()),
        description="Whether the article is publicly visible",
    )

    # SEO
    seo_title: str | None = Field(default=None, sa_column=Column(String(200)))
    seo_description: str | None = Field(default=None, sa_column=Column(String(500)))
    seo_keywords: str | None = Field(default=None, sa_column=Column(String(500)))
    canonical_url: str | None = Field(default=None, sa_column=Column(String(1000)))

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "slug": "finding-peace-in-chaos",
                "title": "Finding Peace In Chaos",
                "category": "Mindfulness",
                "tags": ["mindfulness", "slow living"],
                "date": "November 28, 2025",
                "read_time": "8 min read",
                "author": "Journal",
                "published": False,
            },
        },
    )
