from journal.schemas.article import (
    AdminArticleItem,
    AdminArticleListResponse,
    ArticleCreate,
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleNavLink,
    ArticleResponse,
    ArticleSummary,
    ArticleUpdate,
    HomeResponse,
)
from journal.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    SessionInfo,
    SessionResponse,
    Token,
    TokenData,
)
from journal.schemas.media import (
    MediaListItem,
    MediaListResponse,
    MediaResponse,
    MediaUpdate,
    StorageStats,
    UploadResponse,
)
from journal.schemas.pagination import PaginationResponse
from journal.schemas.settings import SiteSettingsResponse, SiteSettingsUpdate
from journal.schemas.user import ProfileUpdate, UserListResponse, UserResponse, UserRoleUpdate

__all__ = [
    "AdminArticleItem",
    "AdminArticleListResponse",
    "ArticleCreate",
    "ArticleDetailResponse",
    "ArticleListResponse",
    "ArticleNavLink",
    "ArticleResponse",
    "ArticleSummary",
    "ArticleUpdate",
    "HomeResponse",
    "LoginRequest",
    "LoginResponse",
    "MediaListItem",
    "MediaListResponse",
    "MediaResponse",
    "MediaUpdate",
    "PaginationResponse",
    "ProfileUpdate",
    "RegisterRequest",
    "SessionInfo",
    "SessionResponse",
    "SiteSettingsResponse",
    "SiteSettingsUpdate",
    "StorageStats",
    "Token",
    "TokenData",
    "UploadResponse",
    "UserListResponse",
    "UserResponse",
    "UserRoleUpdate",
]
