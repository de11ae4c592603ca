# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read when the package is first imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["STORAGE_PROVIDER"] = "local"
os.environ["LOG_TO_FILE"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from datetime import timedelta  # noqa: E402
from pathlib import Path  # noqa: E402
from uuid import uuid4  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from pytest import fixture  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

from journal.db import get_session, init_db, transaction  # noqa: E402
from journal.dependencies import get_storage  # noqa: E402
from journal.main import app  # noqa: E402
from journal.managers import create_access_token, limiter  # noqa: E402
from journal.models import Role, UserDB  # noqa: E402
from journal.repositories import UserRepository  # noqa: E402
from journal.services.storage.local import LocalStorage  # noqa: E402

UserFactory = Callable[..., Awaitable[UserDB]]


@fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory SQLite engine shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@fixture
async def session(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A session for repository tests; nothing is committed unless a test does so."""
    async with session_maker() as session:
        yield session


@fixture
def storage(tmp_path: Path) -> LocalStorage:
    """Local storage rooted in a per-test temporary directory."""
    return LocalStorage(root=tmp_path / "uploads")


@fixture
async def client(
    session_maker: async_sessionmaker[AsyncSession],
    storage: LocalStorage,
) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the app, wired to the test database and storage."""

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with transaction(session_maker) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_storage] = lambda: storage
    limiter.enabled = False
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True


@fixture
def make_user(session_maker: async_sessionmaker[AsyncSession]) -> UserFactory:
    """Factory persisting a user with the given role."""

    async def _make_user(
        role: Role = Role.AUTHOR,
        name: str | None = None,
        email: str | None = None,
    ) -> UserDB:
        async with transaction(session_maker) as session:
            return await UserRepository(session).create(
                name=name or f"{role.value.title()} User",
                email=email or f"{role.value}-{uuid4().hex[:8]}@example.com",
                password_hash="$argon2id$v=19$m=8192,t=1,p=1$somehash",
                role=role,
            )

    return _make_user


@fixture
def auth_headers() -> Callable[[UserDB], dict[str, str]]:
    """Build a bearer Authorization header for a user."""

    def _auth_headers(user: UserDB) -> dict[str, str]:
        token = create_access_token(
            user_id=user.id,
            email=user.email,
            expires_delta=timedelta(minutes=30),
        )
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
