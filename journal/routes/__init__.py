from journal.routes.admin import router as admin_router
from journal.routes.articles import router as articles_router
from journal.routes.auth import router as auth_router
from journal.routes.media import router as media_router
from journal.routes.profile import router as profile_router
from journal.routes.settings import router as settings_router
from journal.routes.upload import router as upload_router
from journal.routes.users import router as users_router

__all__ = [
    "admin_router",
    "articles_router",
    "auth_router",
    "media_router",
    "profile_router",
    "settings_router",
    "upload_router",
    "users_router",
]
