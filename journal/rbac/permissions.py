"""
Role-based access control.

Pure predicates deciding who may view, edit or delete an article, plus the
FastAPI dependencies that gate routes by role. Role is the only axis:

============  ==================  ====================
role          edit                delete
============  ==================  ====================
admin         any article         any article
editor        any article         own articles only
author        own articles only   own articles only
============  ==================  ====================

Editors may edit but not delete other people's articles.
"""

from collections.abc import Awaitable, Callable, Iterable
from typing import Annotated
from uuid import UUID

from fastapi import Depends

from journal.dependencies import require_auth_with_role
from journal.errors.auth import ForbiddenError
from journal.models import ArticleDB, Role, UserDB

AUTHORING_ROLES = frozenset(Role)
EDIT_ANY_ROLES = frozenset({Role.ADMIN, Role.EDITOR})
DELETE_ANY_ROLES = frozenset({Role.ADMIN})


def _is_owner(article: ArticleDB, user_id: UUID | None) -> bool:
    return user_id is not None and article.author_id == user_id


def is_admin(role: str) -> bool:
    return role in DELETE_ANY_ROLES


def is_editor_or_admin(role: str) -> bool:
    return role in EDIT_ANY_ROLES


def can_edit(article: ArticleDB, user_id: UUID | None, role: str) -> bool:
    """
    Whether a user may edit ``article``.

    Args:
        article: Article to edit
        user_id: Acting user
        role: Acting user's role

    Returns:
        bool: True for admins and editors, and for the article's owner
    """
    return is_editor_or_admin(role) or _is_owner(article, user_id)


def can_delete(article: ArticleDB, user_id: UUID | None, role: str) -> bool:
    """
    Whether a user may delete ``article``.

    Args:
        article: Article to delete
        user_id: Acting user
        role: Acting user's role

    Returns:
        bool: True for admins and for the article's owner
    """
    return is_admin(role) or _is_owner(article, user_id)


def can_view(article: ArticleDB, viewer: UserDB | None) -> bool:
    """Published articles are public; drafts are visible to any signed-in user."""
    return article.published or viewer is not None


def ensure_can_edit(article: ArticleDB, user: UserDB) -> None:
    """
    Raise unless ``user`` may edit ``article``.

    Raises:
        ForbiddenError: If the edit predicate is false
    """
    if not can_edit(article, user.id, user.role):
        mssg = "You don't have permission to edit this article"
        raise ForbiddenError(mssg)


def ensure_can_delete(article: ArticleDB, user: UserDB) -> None:
    """
    Raise unless ``user`` may delete ``article``.

    Raises:
        ForbiddenError: If the delete predicate is false
    """
    if not can_delete(article, user.id, user.role):
        mssg = "You don't have permission to delete this article"
        raise ForbiddenError(mssg)


def require_role(roles: Iterable[Role]) -> Callable[..., Awaitable[UserDB]]:
    """
    Create a dependency that requires one of ``roles``.

    Args:
        roles: Allowed roles

    Returns:
        Callable: Dependency returning the authenticated user

    Example:
        @router.get("/admin-only")
        async def admin_route(user: Annotated[UserDB, Depends(require_role([Role.ADMIN]))]):
            ...
    """
    allowed = frozenset(roles)

    async def role_checker(
        user: Annotated[UserDB, Depends(require_auth_with_role)],
    ) -> UserDB:
        if user.role not in allowed:
            raise ForbiddenError(
                f"Insufficient permissions. Required role: {', '.join(sorted(allowed))}",
            )
        return user

    return role_checker


# Type aliases for common dependencies
AdminUserDep = Annotated[UserDB, Depends(require_role([Role.ADMIN]))]
EditorOrAdminDep = Annotated[UserDB, Depends(require_role(EDIT_ANY_ROLES))]
AuthorUserDep = Annotated[UserDB, Depends(require_role(AUTHORING_ROLES))]
