"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.tracker.api.dependencies.db import DBSession
from src.tracker.repositories import (
    MeetingRepository,
    MembershipRepository,
    MessageRepository,
    NoteRepository,
    ProjectRepository,
    SessionRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_session_repository(session: DBSession) -> SessionRepository:
    return SessionRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_membership_repository(session: DBSession) -> MembershipRepository:
    return MembershipRepository(session)


def get_message_repository(session: DBSession) -> MessageRepository:
    return MessageRepository(session)


def get_meeting_repository(session: DBSession) -> MeetingRepository:
    return MeetingRepository(session)


def get_note_repository(session: DBSession) -> NoteRepository:
    return NoteRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
SessionRepo = Annotated[SessionRepository, Depends(get_session_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
MembershipRepo = Annotated[MembershipRepository, Depends(get_membership_repository)]
MessageRepo = Annotated[MessageRepository, Depends(get_message_repository)]
MeetingRepo = Annotated[MeetingRepository, Depends(get_meeting_repository)]
NoteRepo = Annotated[NoteRepository, Depends(get_note_repository)]
