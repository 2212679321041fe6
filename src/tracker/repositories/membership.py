"""Repository for project team membership."""

from collections.abc import Iterable

from sqlalchemy import delete
from sqlmodel import select

from src.tracker.models import ProjectMembership
from src.tracker.repositories.base import BaseRepository


class MembershipRepository(BaseRepository[ProjectMembership]):
    model = ProjectMembership

    async def get_team_ids(self, project_id: int) -> list[int]:
        """User ids on a project's team, ascending."""
        result = await self.session.execute(
            select(ProjectMembership.user_id)
            .where(ProjectMembership.project_id == project_id)
            .order_by(ProjectMembership.user_id)
        )
        return list(result.scalars().all())

    async def get_team_map(self, project_ids: Iterable[int]) -> dict[int, list[int]]:
        """Team ids for several projects in one query."""
        ids = list(project_ids)
        teams: dict[int, list[int]] = {project_id: [] for project_id in ids}
        if not ids:
            return teams
        result = await self.session.execute(
            select(ProjectMembership.project_id, ProjectMembership.user_id)
            .where(ProjectMembership.project_id.in_(ids))  # type: ignore[attr-defined]
            .order_by(ProjectMembership.user_id)
        )
        for project_id, user_id in result.all():
            teams[project_id].append(user_id)
        return teams

    def add_members(self, project_id: int, user_ids: Iterable[int]) -> None:
        """Add memberships (add to session, no commit)."""
        for user_id in user_ids:
            self.session.add(ProjectMembership(project_id=project_id, user_id=user_id))

    async def remove_members(self, project_id: int, user_ids: Iterable[int]) -> None:
        ids = list(user_ids)
        if not ids:
            return
        await self.session.execute(
            delete(ProjectMembership).where(
                ProjectMembership.project_id == project_id,  # type: ignore[arg-type]
                ProjectMembership.user_id.in_(ids),  # type: ignore[attr-defined]
            )
        )

    async def delete_for_user(self, user_id: int) -> None:
        await self.session.execute(
            delete(ProjectMembership).where(ProjectMembership.user_id == user_id)  # type: ignore[arg-type]
        )
