from journal.repositories.article import ArticleFilter, ArticleRepository
from journal.repositories.base import BaseRepository, Page, PageParams
from journal.repositories.media import MediaRepository
from journal.repositories.settings import SiteSettingsRepository
from journal.repositories.user import UserRepository

__all__ = [
    "ArticleFilter",
    "ArticleRepository",
    "BaseRepository",
    "MediaRepository",
    "Page",
    "PageParams",
    "SiteSettingsRepository",
    "UserRepository",
]
