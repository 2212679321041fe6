"""Database engine management."""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.tracker.core.config import get_settings
from src.tracker.core.storage_config import resolve_database_url

_engine: AsyncEngine | None = None


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine() -> AsyncEngine:
    """Get or create the database engine singleton."""
    global _engine
    if _engine is None:
        settings = get_settings()
        url = resolve_database_url(settings)
        if is_sqlite_url(url):
            _engine = create_async_engine(url)
            event.listen(_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        else:
            _engine = create_async_engine(
                url,
                pool_size=settings.database_pool_size,
                max_overflow=settings.database_max_overflow,
                pool_pre_ping=True,
            )
    return _engine


async def dispose_engine() -> None:
    """Dispose the database engine. Call during shutdown."""
    global _engine
    if _engine is not None:
        await _engine.dispose()
        _engine = None


def get_sync_url(url: str | None = None) -> str:
    """Convert the async URL to its sync driver (for Alembic)."""
    url = url or resolve_database_url()
    return url.replace("+asyncpg", "").replace("+aiosqlite", "")
