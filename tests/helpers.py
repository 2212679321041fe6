"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.models import Project, ProjectMembership, Role, User
from tests.factories import ProjectFactory, ProjectMembershipFactory, UserFactory


async def create_user(
    session: AsyncSession,
    role: Role = Role.TEKKIE,
    **user_kwargs,
) -> User:
    """Create and commit a user.

    Args:
        session: Database session
        role: Role for the user (default: TEKKIE)
        **user_kwargs: Additional args passed to UserFactory

    Returns:
        The persisted user
    """
    user = UserFactory.build(role=role.value, **user_kwargs)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


async def create_project(
    session: AsyncSession,
    creator: User,
    team: list[User] | None = None,
    **project_kwargs,
) -> Project:
    """Create and commit a project with its team.

    Args:
        session: Database session
        creator: User recorded as created_by
        team: Users added as project members
        **project_kwargs: Additional args passed to ProjectFactory
    """
    project = ProjectFactory.build(created_by=creator.id, **project_kwargs)
    session.add(project)
    await session.flush()

    for member in team or []:
        session.add(ProjectMembershipFactory.build(project_id=project.id, user_id=member.id))
    await session.commit()
    await session.refresh(project)
    return project


async def add_member(session: AsyncSession, project: Project, user: User) -> ProjectMembership:
    membership = ProjectMembershipFactory.build(project_id=project.id, user_id=user.id)
    session.add(membership)
    await session.commit()
    return membership


def project_payload(**overrides) -> dict:
    """Valid camelCase body for POST /api/projects."""
    payload = {
        "name": "New Platform",
        "client": "Client Co",
        "startDate": "2024-01-01T00:00:00Z",
        "endDate": "2024-06-01T00:00:00Z",
        "manager": "Project Manager",
        "requirements": "Ship an MVP.",
        "suggestions": "Dark mode first.",
        "techStack": {"frontend": "React", "backend": "FastAPI", "db": "Postgres"},
        "team": [],
    }
    payload.update(overrides)
    return payload
