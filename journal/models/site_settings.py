"""Site settings singleton model."""

from datetime import UTC, datetime
from typing import Any, cast

from sqlalchemy import Boolean, DateTime, Text, true
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

SETTINGS_ID = "default"


def _text(default: str | None = None) -> Any:
    return Field(default=default, sa_column=Column(Text))


class SiteSettingsDB(SQLModel, table=True):
    """
    Editable site copy and feature toggles.

    Exactly one row exists, keyed by ``SETTINGS_ID``. The primary key is
    the uniqueness guard that keeps concurrent first reads from creating a
    second row.
    """

    __tablename__ = cast("declared_attr[str]", "site_settings")

    id: str = Field(
        default=SETTINGS_ID,
        sa_column=Column(String(50), primary_key=True),
    )

    # General
    site_name: str = Field(
        default="Journal",
        sa_column=Column(String(200), nullable=False),
    )
    site_tagline: str | None = _text("A personal blog about life, thoughts, and creativity.")
    site_description: str | None = _text(
        "Welcome to my personal blog where I share my thoughts, experiences, "
        "and creative endeavors.",
    )
    social_twitter: str | None = _text()
    social_github: str | None = _text()
    social_linkedin: str | None = _text()
    social_instagram: str | None = _text()
    footer_text: str | None = _text("© 2025 Journal. All rights reserved.")

    # Hero section
    hero_title: str | None = _text("Thoughts,")
    hero_title_accent: str | None = _text("stories & ideas")
    hero_description: str | None = _text(
        "A space for reflection, creativity, and the quiet moments that shape who "
        "we become. Welcome to my corner of the internet.",
    )
    hero_image: str | None = _text(
        "https://images.unsplash.com/photo-1516414447565-b14be0adf13e?w=800&q=80",
    )
    hero_cta_text: str | None = _text("Learn more about me →")
    hero_cta_link: str | None = _text("/about")

    # About page
    about_hero_title: str | None = _text("Hello, I'm")
    about_hero_subtitle: str | None = _text("a storyteller")
    about_intro_title: str | None = _text("A little about me")
    about_intro_paragraph1: str | None = _text(
        "I believe in the power of words to inspire, heal, and connect us. My writing "
        "explores the intersection of mindfulness, creativity, and everyday life, "
        "finding meaning in the mundane and beauty in the ordinary.",
    )
    about_intro_paragraph2: str | None = _text(
        "When I'm not writing, you'll find me wandering through bookshops, "
        "experimenting in the kitchen, or getting lost in nature. I'm passionate "
        "about slow living, intentional design, and the art of doing nothing.",
    )
    about_intro_paragraph3: str | None = _text(
        "This blog is my attempt to share what I'm learning along the way: imperfect "
        "thoughts, honest reflections, and the occasional moment of clarity. "
        "Thank you for being here.",
    )
    about_email: str | None = _text("hello@journal.com")
    about_image: str | None = _text(
        "https://images.unsplash.com/photo-1544005313-94ddf0286df2?w=600&q=80",
    )

    # Values section
    values_section_title: str | None = _text("What I believe in")
    value1_title: str | None = _text("Intentionality")
    value1_description: str | None = _text(
        "Every choice we make shapes our life. I believe in making those choices "
        "with purpose and awareness.",
    )
    value2_title: str | None = _text("Simplicity")
    value2_description: str | None = _text(
        "In a world of excess, simplicity is a radical act. Less noise, more signal. "
        "Less clutter, more clarity.",
    )
    value3_title: str | None = _text("Connection")
    value3_description: str | None = _text(
        "We're all walking each other home. I believe in building bridges through "
        "stories and shared experiences.",
    )

    # Newsletter
    newsletter_title: str | None = _text("Stay in touch")
    newsletter_description: str | None = _text(
        "Subscribe to receive occasional updates, new posts, and thoughts delivered "
        "straight to your inbox.",
    )
    newsletter_image: str | None = _text(
        "https://images.unsplash.com/photo-1544716278-ca5e3f4abd8c?w=800&q=80",
    )
    show_newsletter: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, server_default=true()),
    )

    # Security
    allow_registration: bool = Field(
        default=True,
        sa_column=Column(Boolean, nullable=False, server_default=true()),
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
