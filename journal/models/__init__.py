from journal.models.article import ArticleDB
from journal.models.media import MediaDB
from journal.models.site_settings import SETTINGS_ID, SiteSettingsDB
from journal.models.user import Role, UserDB

__all__ = [
    "ArticleDB",
    "MediaDB",
    "Role",
    "SETTINGS_ID",
    "SiteSettingsDB",
    "UserDB",
]
