"""Repository for User entity."""

from collections.abc import Iterable

from sqlalchemy import func, update
from sqlmodel import select

from src.tracker.models import Project, User
from src.tracker.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address."""
        result = await self.session.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def get_many(self, ids: Iterable[int]) -> list[User]:
        """Users for the given ids, ordered by id. Unknown ids are skipped."""
        id_list = list(set(ids))
        if not id_list:
            return []
        result = await self.session.execute(
            select(User).where(User.id.in_(id_list)).order_by(User.id)  # type: ignore[union-attr]
        )
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(User))
        return result.scalar_one()

    async def count_created_projects(self, user_id: int) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Project).where(Project.created_by == user_id)
        )
        return result.scalar_one()

    async def clear_project_updater(self, user_id: int) -> None:
        """Drop `updated_by` references so the user row can be deleted."""
        await self.session.execute(
            update(Project)
            .where(Project.updated_by == user_id)  # type: ignore[arg-type]
            .values(updated_by=None)
        )
