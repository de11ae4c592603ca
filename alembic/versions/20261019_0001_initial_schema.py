"""
Initial schema: users, articles, media and site settings.

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

TAG_LIST = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), "postgresql")


def upgrade() -> None:
    """Apply schema changes for this revision."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("email_verified", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column("image", sa.String(length=500), nullable=True),
        sa.Column("role", sa.String(length=20), server_default="author", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_role", "users", ["role"], unique=False)

    op.create_table(
        "articles",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("slug", sa.String(length=200), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("subtitle", sa.String(length=500), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=True),
        sa.Column("tags", TAG_LIST, nullable=False),
        sa.Column("date", sa.String(length=50), nullable=False),
        sa.Column("read_time", sa.String(length=50), nullable=True),
        sa.Column("author", sa.String(length=100), server_default="Journal", nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=True),
        sa.Column("hero_image", sa.String(length=1000), nullable=True),
        sa.Column("hero_image_caption", sa.String(length=500), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("published", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("seo_title", sa.String(length=200), nullable=True),
        sa.Column("seo_description", sa.String(length=500), nullable=True),
        sa.Column("seo_keywords", sa.String(length=500), nullable=True),
        sa.Column("canonical_url", sa.String(length=1000), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    op.create_index("ix_articles_slug", "articles", ["slug"], unique=True)
    op.create_index("ix_articles_category", "articles", ["category"], unique=False)
    op.create_index("ix_articles_author_id", "articles", ["author_id"], unique=False)
    op.create_index("ix_articles_created_at", "articles", ["created_at"], unique=False)
    op.create_index(
        "ix_articles_published_created",
        "articles",
        ["published", "created_at"],
        unique=False,
    )
    op.create_index(
        "ix_articles_tags_gin",
        "articles",
        ["tags"],
        unique=False,
        postgresql_using="gin",
    )

    op.create_table(
        "media",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("filename", sa.String(length=500), nullable=False),
        sa.Column("original_filename", sa.String(length=500), nullable=False),
        sa.Column("url", sa.String(length=1000), nullable=False),
        sa.Column("thumbnail_url", sa.String(length=1000), nullable=True),
        sa.Column("mime_type", sa.String(length=100), nullable=False),
        sa.Column("size", sa.BigInteger(), nullable=False),
        sa.Column("width", sa.Integer(), nullable=True),
        sa.Column("height", sa.Integer(), nullable=True),
        sa.Column("alt_text", sa.String(length=500), nullable=True),
        sa.Column("caption", sa.String(length=1000), nullable=True),
        sa.Column("uploaded_by", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_media_url", "media", ["url"], unique=False)
    op.create_index("ix_media_uploaded_by", "media", ["uploaded_by"], unique=False)
    op.create_index("ix_media_created_at", "media", ["created_at"], unique=False)

    settings_text = [
        "site_tagline",
        "site_description",
        "social_twitter",
        "social_github",
        "social_linkedin",
        "social_instagram",
        "footer_text",
        "hero_title",
        "hero_title_accent",
        "hero_description",
        "hero_image",
        "hero_cta_text",
        "hero_cta_link",
        "about_hero_title",
        "about_hero_subtitle",
        "about_intro_title",
        "about_intro_paragraph1",
        "about_intro_paragraph2",
        "about_intro_paragraph3",
        "about_email",
        "about_image",
        "values_section_title",
        "value1_title",
        "value1_description",
        "value2_title",
        "value2_description",
        "value3_title",
        "value3_description",
        "newsletter_title",
        "newsletter_description",
        "newsletter_image",
    ]
    op.create_table(
        "site_settings",
        sa.Column("id", sa.String(length=50), nullable=False),
        sa.Column("site_name", sa.String(length=200), nullable=False),
        *[sa.Column(name, sa.Text(), nullable=True) for name in settings_text],
        sa.Column("show_newsletter", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("allow_registration", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Revert schema changes for this revision."""
    op.drop_table("site_settings")
    op.drop_index("ix_media_created_at", table_name="media")
    op.drop_index("ix_media_uploaded_by", table_name="media")
    op.drop_index("ix_media_url", table_name="media")
    op.drop_table("media")
    op.drop_index("ix_articles_tags_gin", table_name="articles", postgresql_using="gin")
    op.drop_index("ix_articles_published_created", table_name="articles")
    op.drop_index("ix_articles_created_at", table_name="articles")
    op.drop_index("ix_articles_author_id", table_name="articles")
    op.drop_index("ix_articles_category", table_name="articles")
    op.drop_index("ix_articles_slug", table_name="articles")
    op.drop_table("articles")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
