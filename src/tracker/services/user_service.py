"""User management - admin CRUD over accounts."""

import random

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.core.exceptions import ConflictError, NotFoundError
from src.tracker.core.logging import get_logger
from src.tracker.core.security import hash_password
from src.tracker.models import AVATAR_ICONS, User
from src.tracker.repositories import (
    MembershipRepository,
    MessageRepository,
    NoteRepository,
    SessionRepository,
    UserRepository,
)
from src.tracker.schemas.user import UserCreate, UserUpdate

logger = get_logger(__name__)


def random_avatar() -> str:
    return random.choice(AVATAR_ICONS)


class UserService:
    """User management service."""

    def __init__(
        self,
        user_repo: UserRepository,
        session_repo: SessionRepository,
        membership_repo: MembershipRepository,
        message_repo: MessageRepository,
        note_repo: NoteRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.session_repo = session_repo
        self.membership_repo = membership_repo
        self.message_repo = message_repo
        self.note_repo = note_repo
        self.session = session

    async def list_users(self) -> list[User]:
        return await self.user_repo.list_all()

    async def get_user(self, user_id: int) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def create_user(self, data: UserCreate) -> User:
        """Admin-created accounts must change their password on first login."""
        if await self.user_repo.exists_by_email(data.email):
            raise ConflictError(f"User with email '{data.email}' already exists")

        user = User(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
            role=data.role.value,
            avatar=data.avatar or random_avatar(),
            must_change_password=True,
        )
        self.user_repo.add(user)
        try:
            await self.session.commit()
            await self.session.refresh(user)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError(f"User with email '{data.email}' already exists") from e
        except Exception:
            await self.session.rollback()
            raise
        logger.info("User created", new_user_id=user.id, role=user.role)
        return user

    async def update_user(self, user_id: int, data: UserUpdate) -> User:
        user = await self.get_user(user_id)
        update_data = data.model_dump(exclude_unset=True)

        if "password" in update_data:
            password = update_data.pop("password")
            if password is not None:
                # Admin reset: the user picks a new one on next login
                user.password_hash = hash_password(password)
                user.must_change_password = True

        if "email" in update_data and update_data["email"] != user.email:
            if update_data["email"] is None:
                update_data.pop("email")
            elif await self.user_repo.exists_by_email(update_data["email"]):
                raise ConflictError(f"User with email '{update_data['email']}' already exists")

        if update_data.get("role") is not None:
            update_data["role"] = update_data["role"].value

        for field, value in update_data.items():
            if value is None and field in ("name", "role"):
                continue
            setattr(user, field, value)

        self.user_repo.add(user)
        try:
            await self.session.commit()
            await self.session.refresh(user)
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("User with this email already exists") from e
        except Exception:
            await self.session.rollback()
            raise
        return user

    async def delete_user(self, user_id: int) -> None:
        """Delete a user with their sessions, memberships, messages and notes.

        Raises:
            NotFoundError: no such user.
            ConflictError: the user still owns projects as creator.
        """
        user = await self.get_user(user_id)
        if await self.user_repo.count_created_projects(user_id):
            raise ConflictError("User created projects; reassign or delete them first")

        try:
            await self.session_repo.delete_for_user(user_id)
            await self.membership_repo.delete_for_user(user_id)
            await self.message_repo.delete_for_user(user_id)
            await self.note_repo.delete_for_user(user_id)
            await self.user_repo.clear_project_updater(user_id)
            await self.user_repo.delete(user)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("User deleted", deleted_user_id=user_id)
