"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.tracker.api.dependencies.db import DBSession
from src.tracker.api.dependencies.repositories import (
    MeetingRepo,
    MembershipRepo,
    MessageRepo,
    NoteRepo,
    ProjectRepo,
    SessionRepo,
    UserRepo,
)
from src.tracker.core.config import get_settings
from src.tracker.services import AuthService, ConfigService, ProjectService, UserService


def get_auth_service(
    user_repo: UserRepo,
    session_repo: SessionRepo,
    session: DBSession,
) -> AuthService:
    return AuthService(user_repo, session_repo, session)


def get_user_service(
    user_repo: UserRepo,
    session_repo: SessionRepo,
    membership_repo: MembershipRepo,
    message_repo: MessageRepo,
    note_repo: NoteRepo,
    session: DBSession,
) -> UserService:
    return UserService(user_repo, session_repo, membership_repo, message_repo, note_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    membership_repo: MembershipRepo,
    user_repo: UserRepo,
    message_repo: MessageRepo,
    meeting_repo: MeetingRepo,
    note_repo: NoteRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(
        project_repo,
        membership_repo,
        user_repo,
        message_repo,
        meeting_repo,
        note_repo,
        session,
    )


def get_config_service() -> ConfigService:
    """Config service bound to the current settings (no database access)."""
    return ConfigService(get_settings())


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ConfigServiceDep = Annotated[ConfigService, Depends(get_config_service)]
