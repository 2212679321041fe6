"""Repository for Project entity."""

from sqlalchemy import delete
from sqlmodel import select

from src.tracker.models import (
    Project,
    ProjectMeeting,
    ProjectMembership,
    ProjectMessage,
    UserNote,
)
from src.tracker.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_all(self) -> list[Project]:
        """All projects, newest first."""
        result = await self.session.execute(
            select(Project).order_by(Project.created_at.desc(), Project.id.desc())  # type: ignore[attr-defined, union-attr]
        )
        return list(result.scalars().all())

    async def delete_cascade(self, project_id: int) -> None:
        """Delete a project and everything hanging off it.

        Notes, meetings, messages and memberships are removed explicitly
        before the project row; engine-level cascades are not assumed.
        """
        for model in (UserNote, ProjectMeeting, ProjectMessage, ProjectMembership):
            await self.session.execute(
                delete(model).where(model.project_id == project_id)  # type: ignore[attr-defined]
            )
        await self.session.execute(
            delete(Project).where(Project.id == project_id)  # type: ignore[arg-type]
        )
