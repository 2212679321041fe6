"""Database utilities - engine, session, migrations."""

from src.tracker.core.db.engine import (
    dispose_engine,
    get_engine,
    get_sync_url,
    is_sqlite_url,
)
from src.tracker.core.db.session import get_session

__all__ = [
    # Engine
    "dispose_engine",
    "get_engine",
    "get_sync_url",
    "is_sqlite_url",
    # Session
    "get_session",
]
