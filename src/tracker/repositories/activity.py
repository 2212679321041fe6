"""Repositories for project activity: messages, meetings and notes."""

from sqlalchemy import delete
from sqlmodel import select

from src.tracker.models import ProjectMeeting, ProjectMessage, User, UserNote
from src.tracker.repositories.base import BaseRepository


class MessageRepository(BaseRepository[ProjectMessage]):
    model = ProjectMessage

    async def list_for_project(self, project_id: int) -> list[tuple[ProjectMessage, str | None]]:
        """Messages oldest first, each paired with its author's display name."""
        result = await self.session.execute(
            select(ProjectMessage, User.name)
            .join(User, User.id == ProjectMessage.user_id, isouter=True)  # type: ignore[arg-type]
            .where(ProjectMessage.project_id == project_id)
            .order_by(ProjectMessage.timestamp, ProjectMessage.id)  # type: ignore[arg-type]
        )
        return [(message, name) for message, name in result.all()]

    async def delete_for_user(self, user_id: int) -> None:
        await self.session.execute(
            delete(ProjectMessage).where(ProjectMessage.user_id == user_id)  # type: ignore[arg-type]
        )


class MeetingRepository(BaseRepository[ProjectMeeting]):
    model = ProjectMeeting

    async def list_for_project(self, project_id: int) -> list[ProjectMeeting]:
        """Meetings ordered by meeting date."""
        result = await self.session.execute(
            select(ProjectMeeting)
            .where(ProjectMeeting.project_id == project_id)
            .order_by(ProjectMeeting.date, ProjectMeeting.id)  # type: ignore[arg-type]
        )
        return list(result.scalars().all())


class NoteRepository(BaseRepository[UserNote]):
    model = UserNote

    async def get_for(self, project_id: int, user_id: int) -> UserNote | None:
        result = await self.session.execute(
            select(UserNote).where(
                UserNote.project_id == project_id,
                UserNote.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def delete_for_user(self, user_id: int) -> None:
        await self.session.execute(
            delete(UserNote).where(UserNote.user_id == user_id)  # type: ignore[arg-type]
        )
