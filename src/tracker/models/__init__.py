"""Model exports.

Import from here: `from src.tracker.models import User, Project`
"""

from src.tracker.models.auth import UserSession
from src.tracker.models.base import to_naive_utc, utc_now
from src.tracker.models.enums import AVATAR_ICONS, ProjectStatus, Role
from src.tracker.models.project import (
    Project,
    ProjectMeeting,
    ProjectMembership,
    ProjectMessage,
    UserNote,
)
from src.tracker.models.user import User

__all__ = [
    # Enums
    "AVATAR_ICONS",
    "ProjectStatus",
    "Role",
    # Models
    "Project",
    "ProjectMeeting",
    "ProjectMembership",
    "ProjectMessage",
    "User",
    "UserNote",
    "UserSession",
    # Helpers
    "to_naive_utc",
    "utc_now",
]
