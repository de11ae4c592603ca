from journal.utils.helpers import (
    calculate_read_time,
    count_words,
    excerpt,
    format_article_date,
    generate_slug,
    get_summary,
    host,
    strip_tags,
    today_str,
    total_pages,
    utcnow,
)

__all__ = [
    "calculate_read_time",
    "count_words",
    "excerpt",
    "format_article_date",
    "generate_slug",
    "get_summary",
    "host",
    "strip_tags",
    "today_str",
    "total_pages",
    "utcnow",
]
