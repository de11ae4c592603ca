"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from journal.configs import engine_kwargs, settings
from journal.monitoring import get_logger

logger = get_logger(__name__)


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


engine: AsyncEngine = create_async_engine(settings.DATABASE_URL, **engine_kwargs())

if settings.DEBUG:
    _configure_engine_events(engine)

async_session_maker: async_sessionmaker[SQLModelAsyncSession] = async_sessionmaker(
    engine,
    class_=SQLModelAsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    One session per request: committed when the handler returns,
    rolled back when it raises.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[SQLModelAsyncSession] | None = None,
) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Args:
        session_maker: Session factory to use instead of the module default.

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction() as session:
            session.add(UserDB(name="Ada", email="ada@example.com"))
            # Commits on successful exit, rolls back on exception
        ```
    """
    async with (session_maker or async_session_maker)() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise


async def init_db(target: AsyncEngine | None = None) -> None:
    """
    Create all tables defined in SQLModel models.

    Note:
        This is a convenience for development and tests.
        For production, run the Alembic migrations.
    """
    async with (target or engine).begin() as conn:
        # Register every table on the metadata before create_all.
        from journal.models import ArticleDB, MediaDB, SiteSettingsDB, UserDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database initialized successfully!")


async def close_db() -> None:
    """Dispose the engine and its pooled connections."""
    await engine.dispose()
    logger.info("Database connections closed")
