from collections.abc import MutableMapping
from datetime import UTC, datetime
from html import unescape
from math import ceil
from re import compile as re_compile
from typing import Any

from fastapi import FastAPI, Request
from fastapi.routing import APIRoute
from starlette.routing import BaseRoute, Match, Route

NON_ALNUM_RUN = re_compile(r"[^a-z0-9]+")
HTML_TAG = re_compile(r"<[^>]*>")
WHITESPACE = re_compile(r"\s+")
WORDS_PER_MINUTE = 200


def host(request: Request) -> str:
    """Return the host IP address."""
    return request.client.host if request.client else "unknown"


def today_str() -> str:
    """Return today's date as a string."""
    return datetime.now(datetime.now().astimezone().tzinfo).strftime(
        "%Y-%m-%d %H:%M:%S",
    )


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(tz=UTC)


def get_summary(request: Request) -> str | None:
    """Extract route summary from request."""

    scope: MutableMapping[str, Any] = request.scope
    app: FastAPI = scope["app"]
    routes: list[BaseRoute] = app.routes

    summary = None
    for route in routes:
        is_api_route = type(route) is APIRoute
        is_route = type(route) is Route
        if is_api_route and route.matches(scope)[0] == Match.FULL:
            summary = route.summary
            break
        if is_route and route.matches(scope)[0] == Match.FULL:
            summary = route.name
            break

    return summary


def generate_slug(title: str) -> str:
    """
    Derive a URL slug from a title.

    Lowercases the title, collapses every run of characters outside
    ``[a-z0-9]`` into one hyphen and trims hyphens at both ends.

    Args:
        title: Article title (any string, possibly empty)

    Returns:
        str: Slug, empty when the title has no ASCII letters or digits

    Example:
        >>> generate_slug("Finding Peace In Chaos")
        'finding-peace-in-chaos'
        >>> generate_slug("  ...  ")
        ''
    """
    return NON_ALNUM_RUN.sub("-", title.lower()).strip("-")


def strip_tags(html: str) -> str:
    """Remove HTML tags, keeping the text between them."""
    return HTML_TAG.sub("", html)


def count_words(html: str) -> int:
    """Count whitespace-separated words in the text content of ``html``."""
    return len(strip_tags(html).split())


def calculate_read_time(html: str) -> str:
    """
    Estimate reading time for HTML content.

    Tags are stripped, words counted on whitespace, and the minutes rounded
    up at 200 words per minute.

    Args:
        html: Article body

    Returns:
        str: Display string such as ``"2 min read"``; empty content gives
        ``"0 min read"``
    """
    minutes = ceil(count_words(html) / WORDS_PER_MINUTE)
    return f"{minutes} min read"


def format_article_date(moment: datetime | None = None) -> str:
    """Display date stored on articles, e.g. ``November 28, 2025``."""
    moment = moment or utcnow()
    return f"{moment:%B} {moment.day}, {moment.year}"


def excerpt(html: str, length: int = 160) -> str:
    """Plain-text preview of ``html`` cut at a word boundary."""
    text = WHITESPACE.sub(" ", unescape(strip_tags(html))).strip()
    if len(text) <= length:
        return text
    cut = text[:length].rsplit(" ", 1)[0]
    return f"{cut}…"


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed for ``total`` items at ``limit`` per page."""
    return ceil(total / limit) if limit > 0 else 0
