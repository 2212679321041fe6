"""Repository layer - data access abstraction."""

from src.tracker.repositories.activity import (
    MeetingRepository,
    MessageRepository,
    NoteRepository,
)
from src.tracker.repositories.base import BaseRepository
from src.tracker.repositories.membership import MembershipRepository
from src.tracker.repositories.project import ProjectRepository
from src.tracker.repositories.session import SessionRepository
from src.tracker.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    # Accounts
    "SessionRepository",
    "UserRepository",
    # Projects
    "MeetingRepository",
    "MembershipRepository",
    "MessageRepository",
    "NoteRepository",
    "ProjectRepository",
]
