from journal.dependencies.dependencies import (
    ArticleListQuery,
    ArticleQueryDep,
    ArticleRepoDep,
    AuthServiceDep,
    AuthSession,
    AuthSessionDep,
    CurrentUserDep,
    MediaListQuery,
    MediaQueryDep,
    MediaRepoDep,
    MediaServiceDep,
    OptionalAuthDep,
    OptionalViewerDep,
    PageQuery,
    PageQueryDep,
    SessionDep,
    SettingsRepoDep,
    UserRepoDep,
    get_auth_session,
    get_storage,
    require_auth,
    require_auth_with_role,
)

__all__ = [
    "ArticleListQuery",
    "ArticleQueryDep",
    "ArticleRepoDep",
    "AuthServiceDep",
    "AuthSession",
    "AuthSessionDep",
    "CurrentUserDep",
    "MediaListQuery",
    "MediaQueryDep",
    "MediaRepoDep",
    "MediaServiceDep",
    "OptionalAuthDep",
    "OptionalViewerDep",
    "PageQuery",
    "PageQueryDep",
    "SessionDep",
    "SettingsRepoDep",
    "UserRepoDep",
    "get_auth_session",
    "get_storage",
    "require_auth",
    "require_auth_with_role",
]
