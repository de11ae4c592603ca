"""Site settings schemas."""

from datetime import datetime

from pydantic import Field

from journal.schemas.base import CamelModel


class SiteSettingsFields(CamelModel):
    """Every editable site-settings field, all optional."""

    site_name: str | None = Field(default=None, min_length=1, max_length=200)
    site_tagline: str | None = None
    site_description: str | None = None
    social_twitter: str | None = None
    social_github: str | None = None
    social_linkedin: str | None = None
    social_instagram: str | None = None
    footer_text: str | None = None

    hero_title: str | None = None
    hero_title_accent: str | None = None
    hero_description: str | None = None
    hero_image: str | None = None
    hero_cta_text: str | None = None
    hero_cta_link: str | None = None

    about_hero_title: str | None = None
    about_hero_subtitle: str | None = None
    about_intro_title: str | None = None
    about_intro_paragraph1: str | None = None
    about_intro_paragraph2: str | None = None
    about_intro_paragraph3: str | None = None
    about_email: str | None = None
    about_image: str | None = None

    values_section_title: str | None = None
    value1_title: str | None = None
    value1_description: str | None = None
    value2_title: str | None = None
    value2_description: str | None = None
    value3_title: str | None = None
    value3_description: str | None = None

    newsletter_title: str | None = None
    newsletter_description: str | None = None
    newsletter_image: str | None = None
    show_newsletter: bool | None = None

    allow_registration: bool | None = None


class SiteSettingsUpdate(SiteSettingsFields):
    """
    Partial settings update.

    Only fields present in the request body are written; sending ``null``
    for a text field clears it.
    """


class SiteSettingsResponse(SiteSettingsFields):
    id: str
    site_name: str
    show_newsletter: bool
    allow_registration: bool
    updated_at: datetime
