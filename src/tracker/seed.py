"""
Database bootstrap - migrate, then seed default users and sample projects.

Run with:
    uv run python -m src.tracker.seed                   # migrate + seed
    uv run python -m src.tracker.seed --skip-migrations # seed only

Seeding is skipped when any user already exists.
"""

import argparse
import asyncio
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.config import get_settings
from src.tracker.core.db import dispose_engine, get_session
from src.tracker.core.logging import get_logger, setup_logging
from src.tracker.core.migrations import run_migrations_async
from src.tracker.core.security import hash_password
from src.tracker.models import Project, ProjectMembership, ProjectStatus, Role, User
from src.tracker.repositories import UserRepository

logger = get_logger(__name__)

# (key, name, email, password, role)
SEED_USERS = [
    ("admin", "Admin User", "admin@empresa.pt", "admin123", Role.ADMIN),
    ("pm", "Project Manager", "pm@empresa.pt", "pm123", Role.PROJECT_MANAGER),
    ("alice", "Alice Tekkie", "alice@empresa.pt", "tekkie123", Role.TEKKIE),
    ("bob", "Bob Coder", "bob@empresa.pt", "tekkie123", Role.TEKKIE),
    ("charlie", "Charlie Dev", "charlie@empresa.pt", "tekkie123", Role.TEKKIE),
]

SEED_PROJECTS = [
    {
        "name": "Vibe Coding Platform",
        "client": "Startup X",
        "start_date": datetime(2023, 10, 1),
        "end_date": datetime(2024, 3, 1),
        "manager": "Project Manager",
        "requirements": "A high-energy coding platform for rapid prototyping.",
        "suggestions": "Focus on dark mode and neon accents.",
        "creator": "pm",
        "status": ProjectStatus.ACTIVE,
        "team": ["pm", "alice", "bob"],
    },
    {
        "name": "E-Commerce Redesign",
        "client": "ShopifyStore",
        "start_date": datetime(2023, 11, 15),
        "end_date": datetime(2024, 1, 30),
        "manager": "Project Manager",
        "requirements": "Revamp the checkout flow for higher conversion.",
        "suggestions": "Make it seamless and mobile-first.",
        "creator": "pm",
        "status": ProjectStatus.DELAYED,
        "team": ["pm", "charlie"],
    },
    {
        "name": "Internal Dashboard",
        "client": "Internal",
        "start_date": datetime(2024, 1, 1),
        "end_date": datetime(2024, 6, 1),
        "manager": "Admin User",
        "requirements": "Tool for managing resources.",
        "suggestions": "Keep it simple.",
        "creator": "admin",
        "status": ProjectStatus.ACTIVE,
        "team": ["admin", "alice", "bob", "charlie"],
    },
]


async def seed_database(session: AsyncSession) -> bool:
    """Insert the default users and sample projects.

    Returns:
        False if the database already had users (nothing written), else True.
    """
    if await UserRepository(session).count() > 0:
        logger.info("Database already seeded, skipping")
        return False

    try:
        users: dict[str, User] = {}
        # One hash per distinct password
        hashes: dict[str, str] = {}
        for key, name, email, password, role in SEED_USERS:
            if password not in hashes:
                hashes[password] = hash_password(password)
            user = User(
                name=name,
                email=email,
                password_hash=hashes[password],
                role=role.value,
                must_change_password=True,
            )
            session.add(user)
            users[key] = user
        await session.flush()

        for entry in SEED_PROJECTS:
            project = Project(
                name=entry["name"],
                client=entry["client"],
                start_date=entry["start_date"],
                end_date=entry["end_date"],
                manager=entry["manager"],
                requirements=entry["requirements"],
                suggestions=entry["suggestions"],
                created_by=users[entry["creator"]].id,
                status=entry["status"].value,
            )
            session.add(project)
            await session.flush()
            for member in entry["team"]:
                session.add(ProjectMembership(project_id=project.id, user_id=users[member].id))

        await session.commit()
    except Exception:
        await session.rollback()
        raise

    logger.info(
        "Seeding complete",
        users=len(SEED_USERS),
        projects=len(SEED_PROJECTS),
    )
    return True


async def main(skip_migrations: bool = False) -> None:
    settings = get_settings()
    setup_logging(settings.debug)

    if not skip_migrations:
        logger.info("Running migrations")
        await run_migrations_async()

    try:
        async with get_session() as session:
            seeded = await seed_database(session)
        if seeded:
            logger.info("Default logins: admin@empresa.pt / admin123, pm@empresa.pt / pm123")
    finally:
        await dispose_engine()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Migrate and seed the tracker database")
    parser.add_argument(
        "--skip-migrations",
        action="store_true",
        help="Seed without running Alembic first",
    )
    args = parser.parse_args()
    asyncio.run(main(skip_migrations=args.skip_migrations))
