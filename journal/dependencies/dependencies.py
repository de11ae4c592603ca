"""Application dependencies: auth session, repositories, services and query containers."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from journal.configs.settings import ARTICLES_PER_PAGE, MEDIA_PER_PAGE
from journal.db import get_session
from journal.errors.auth import UnauthenticatedError
from journal.managers.token_manager import decode_access_token
from journal.models import UserDB
from journal.repositories import (
    ArticleRepository,
    MediaRepository,
    SiteSettingsRepository,
    UserRepository,
)
from journal.schemas.auth import SessionInfo
from journal.services import AuthService, MediaService
from journal.services.storage import StorageService, get_storage_service

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


@dataclass(frozen=True)
class AuthSession:
    """
    The resolved ``{user, session}`` pair for a signed-in request.

    Attributes:
        user: The user row, carrying the role used for authorization.
        session: Token id and expiry.
    """

    user: UserDB
    session: SessionInfo


async def get_auth_session(
    token: Annotated[str | None, Depends(oauth2_scheme)],
    session: SessionDep,
) -> AuthSession | None:
    """
    Resolve the caller's session from the bearer token.

    Parameters
    ----------
    token : str | None
        Bearer token, if sent.
    session : AsyncSession
        Database session.

    Returns
    -------
    AuthSession | None
        None when no token is sent, the token is invalid or expired, or its
        user no longer exists.
    """
    if not token:
        return None
    token_data = decode_access_token(token)
    if token_data is None:
        return None
    user = await UserRepository(session).get_by_id(token_data.user_id)
    if user is None:
        return None
    return AuthSession(
        user=user,
        session=SessionInfo(id=token_data.jti, expires_at=token_data.expires_at),
    )


OptionalAuthDep = Annotated[AuthSession | None, Depends(get_auth_session)]


async def require_auth(auth: OptionalAuthDep) -> AuthSession:
    """
    Require a signed-in caller.

    Raises
    ------
    UnauthenticatedError
        If the request has no valid session.
    """
    if auth is None:
        raise UnauthenticatedError
    return auth


AuthSessionDep = Annotated[AuthSession, Depends(require_auth)]


async def require_auth_with_role(auth: AuthSessionDep) -> UserDB:
    """
    Require a signed-in caller and return their user row.

    The row carries the stored role, which every authorization check reads.

    Returns
    -------
    UserDB
        The authenticated user.
    """
    return auth.user


CurrentUserDep = Annotated[UserDB, Depends(require_auth_with_role)]


async def get_optional_viewer(auth: OptionalAuthDep) -> UserDB | None:
    """The signed-in viewer of a public page, or None for anonymous visitors."""
    return auth.user if auth else None


OptionalViewerDep = Annotated[UserDB | None, Depends(get_optional_viewer)]


def get_article_repository(session: SessionDep) -> ArticleRepository:
    return ArticleRepository(session)


def get_user_repository(session: SessionDep) -> UserRepository:
    return UserRepository(session)


def get_media_repository(session: SessionDep) -> MediaRepository:
    return MediaRepository(session)


def get_settings_repository(session: SessionDep) -> SiteSettingsRepository:
    return SiteSettingsRepository(session)


ArticleRepoDep = Annotated[ArticleRepository, Depends(get_article_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
MediaRepoDep = Annotated[MediaRepository, Depends(get_media_repository)]
SettingsRepoDep = Annotated[SiteSettingsRepository, Depends(get_settings_repository)]


def get_auth_service(user_repo: UserRepoDep, settings_repo: SettingsRepoDep) -> AuthService:
    return AuthService(user_repo, settings_repo)


def get_storage() -> StorageService:
    """Storage backend; overridden in tests."""
    return get_storage_service()


StorageDep = Annotated[StorageService, Depends(get_storage)]


def get_media_service(storage: StorageDep, repo: MediaRepoDep) -> MediaService:
    return MediaService(storage, repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]


@dataclass(frozen=True)
class ArticleListQuery:
    """
    Query container for article listings.

    Parameters
    ----------
    page : int
        1-indexed page number.
    search : str | None
        Free-text search on title, subtitle and content.
    category : str | None
        Exact category.
    tag : str | None
        Tag the article must carry.
    """

    page: int = 1
    search: str | None = None
    category: str | None = None
    tag: str | None = None


def get_article_list_query(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    search: Annotated[
        str | None,
        Query(alias="q", max_length=200, description="Search title, subtitle and content"),
    ] = None,
    category: Annotated[str | None, Query(max_length=100, description="Category filter")] = None,
    tag: Annotated[str | None, Query(max_length=100, description="Tag filter")] = None,
) -> ArticleListQuery:
    return ArticleListQuery(
        page=page,
        search=search or None,
        category=category or None,
        tag=tag or None,
    )


ArticleQueryDep = Annotated[ArticleListQuery, Depends(get_article_list_query)]


@dataclass(frozen=True)
class PageQuery:
    page: int = 1
    limit: int = ARTICLES_PER_PAGE


def get_page_query(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of records to return"),
    ] = ARTICLES_PER_PAGE,
) -> PageQuery:
    return PageQuery(page=page, limit=limit)


PageQueryDep = Annotated[PageQuery, Depends(get_page_query)]


@dataclass(frozen=True)
class MediaListQuery:
    """
    Query container for the media library.

    Parameters
    ----------
    page : int
        1-indexed page number.
    limit : int
        Page size.
    mime_type : str | None
        MIME type prefix, e.g. ``image/``.
    search : str | None
        Match on original filename or alt text.
    """

    page: int = 1
    limit: int = MEDIA_PER_PAGE
    mime_type: str | None = None
    search: str | None = None


def get_media_list_query(
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Page size")] = MEDIA_PER_PAGE,
    mime_type: Annotated[
        str | None,
        Query(alias="type", max_length=100, description="MIME type prefix, e.g. image/"),
    ] = None,
    search: Annotated[str | None, Query(alias="q", max_length=200)] = None,
) -> MediaListQuery:
    return MediaListQuery(
        page=page,
        limit=limit,
        mime_type=mime_type or None,
        search=search or None,
    )


MediaQueryDep = Annotated[MediaListQuery, Depends(get_media_list_query)]
