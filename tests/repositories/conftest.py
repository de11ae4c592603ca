"""Pytest fixtures for repository tests."""

from collections.abc import Awaitable, Callable
from uuid import UUID

from pytest import fixture
from sqlmodel.ext.asyncio.session import AsyncSession

from journal.models import ArticleDB, Role, UserDB
from journal.repositories import ArticleRepository, UserRepository
from journal.schemas import ArticleCreate

ArticleFactory = Callable[..., Awaitable[ArticleDB]]


@fixture
def article_repo(session: AsyncSession) -> ArticleRepository:
    return ArticleRepository(session)


@fixture
async def author(session: AsyncSession) -> UserDB:
    """A persisted author owning the articles created by ``make_article``."""
    return await UserRepository(session).create(
        name="Ada Lovelace",
        email="ada@example.com",
        password_hash="$argon2id$v=19$m=8192,t=1,p=1$somehash",
        role=Role.AUTHOR,
    )


@fixture
def make_article(article_repo: ArticleRepository, author: UserDB) -> ArticleFactory:
    """Factory creating articles through the repository."""

    async def _make_article(
        title: str,
        content: str = "<p>Some words about life.</p>",
        *,
        published: bool = True,
        author_id: UUID | None = author.id,
        **fields: object,
    ) -> ArticleDB:
        data = ArticleCreate(title=title, content=content, published=published, **fields)
        return await article_repo.create(data, author_id=author_id)

    return _make_article
