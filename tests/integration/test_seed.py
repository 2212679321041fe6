"""Integration tests for the database seed."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.models import Project, ProjectMembership, User
from src.tracker.seed import SEED_PROJECTS, SEED_USERS, seed_database

pytestmark = pytest.mark.integration


async def count(db_session: AsyncSession, model) -> int:
    result = await db_session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def test_seed_populates_empty_database(db_session: AsyncSession):
    assert await seed_database(db_session) is True

    assert await count(db_session, User) == len(SEED_USERS)
    assert await count(db_session, Project) == len(SEED_PROJECTS)
    assert await count(db_session, ProjectMembership) == sum(
        len(entry["team"]) for entry in SEED_PROJECTS
    )


async def test_seed_is_skipped_when_users_exist(db_session: AsyncSession, admin_user: User):
    assert await seed_database(db_session) is False
    assert await count(db_session, User) == 1
    assert await count(db_session, Project) == 0


async def test_seeded_admin_can_log_in_and_must_change_password(
    db_session: AsyncSession, client: AsyncClient
):
    await seed_database(db_session)

    response = await client.post(
        "/api/auth/login", json={"email": "admin@empresa.pt", "password": "admin123"}
    )

    assert response.status_code == 200
    assert response.json()["user"]["role"] == "ADMIN"
    assert response.json()["user"]["mustChangePassword"] is True


async def test_seeded_tekkie_sees_only_own_projects(
    db_session: AsyncSession, client: AsyncClient
):
    await seed_database(db_session)
    await client.post(
        "/api/auth/login", json={"email": "charlie@empresa.pt", "password": "tekkie123"}
    )
    projects = (await client.get("/api/projects")).json()
    by_name = {project["name"]: project["id"] for project in projects}

    visible = await client.get(f"/api/projects/{by_name['E-Commerce Redesign']}")
    hidden = await client.get(f"/api/projects/{by_name['Vibe Coding Platform']}")

    assert visible.status_code == 200
    assert hidden.status_code == 403
