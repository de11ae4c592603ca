"""Database engine and session helpers."""

from journal.db.database import (
    async_session_maker,
    close_db,
    engine,
    get_session,
    init_db,
    transaction,
)

__all__ = [
    "engine",
    "async_session_maker",
    "get_session",
    "init_db",
    "close_db",
    "transaction",
]
