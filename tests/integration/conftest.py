"""Integration test fixtures for database and HTTP client operations.

Each test gets its own SQLite file, migrated with Alembic exactly as in
production. Uses polyfactory for type-safe test data generation.
"""

import asyncio
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from src.tracker import main
from src.tracker.core import db
from src.tracker.core.config import get_settings
from src.tracker.core.db import get_sync_url
from src.tracker.core.migrations import run_migrations_sync
from src.tracker.core.storage_config import get_storage_config
from src.tracker.main import create_app
from src.tracker.models import Role, User
from tests.factories import DEFAULT_TEST_PASSWORD
from tests.helpers import create_user

LoginAs = Callable[..., Awaitable[AsyncClient]]


def _clear_caches() -> None:
    get_settings.cache_clear()
    get_storage_config.cache_clear()
    main._health_cache = None
    main._health_cache_time = 0


@pytest.fixture
def db_config_path(tmp_path: Path) -> Path:
    return tmp_path / "db_config.json"


@pytest.fixture(scope="function")
async def engine(
    tmp_path: Path, db_config_path: Path, monkeypatch: pytest.MonkeyPatch
) -> AsyncGenerator[AsyncEngine]:
    """Fresh migrated SQLite database for every test."""
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'tracker.db'}"
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("DB_CONFIG_PATH", str(db_config_path))
    _clear_caches()
    await db.dispose_engine()

    await asyncio.to_thread(run_migrations_sync, get_sync_url(database_url))

    test_engine = create_async_engine(database_url, poolclass=NullPool)
    yield test_engine

    await test_engine.dispose()
    await db.dispose_engine()
    _clear_caches()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit. Helpers in tests.helpers commit for you.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Anonymous client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def login_as(app: FastAPI) -> AsyncGenerator[LoginAs]:
    """Factory returning a client that holds a session cookie for the given user."""
    clients: list[AsyncClient] = []

    async def _login(user: User, password: str = DEFAULT_TEST_PASSWORD) -> AsyncClient:
        c = AsyncClient(transport=ASGITransport(app=app), base_url="http://test")
        clients.append(c)
        response = await c.post(
            "/api/auth/login", json={"email": user.email, "password": password}
        )
        assert response.status_code == 200, response.text
        return c

    yield _login

    for c in clients:
        await c.aclose()


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, Role.ADMIN, name="Admin User")


@pytest.fixture
async def manager_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, Role.PROJECT_MANAGER, name="Pat Manager")


@pytest.fixture
async def tekkie_user(db_session: AsyncSession) -> User:
    return await create_user(db_session, Role.TEKKIE, name="Alice Tekkie")


@pytest.fixture
async def other_tekkie(db_session: AsyncSession) -> User:
    return await create_user(db_session, Role.TEKKIE, name="Bob Coder")


@pytest.fixture
async def admin_client(login_as: LoginAs, admin_user: User) -> AsyncClient:
    return await login_as(admin_user)


@pytest.fixture
async def manager_client(login_as: LoginAs, manager_user: User) -> AsyncClient:
    return await login_as(manager_user)


@pytest.fixture
async def tekkie_client(login_as: LoginAs, tekkie_user: User) -> AsyncClient:
    return await login_as(tekkie_user)
