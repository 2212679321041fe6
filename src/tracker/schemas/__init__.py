from src.tracker.schemas.auth import ChangePasswordRequest, LoginRequest, UserEnvelope
from src.tracker.schemas.base import CamelModel, MessageResponse
from src.tracker.schemas.config import (
    StorageConfigRead,
    StorageConfigSaved,
    StorageConfigUpdate,
)
from src.tracker.schemas.project import (
    MeetingCreate,
    MeetingRead,
    MessageCreate,
    MessageRead,
    NoteRead,
    NoteUpsert,
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
    TechStack,
)
from src.tracker.schemas.user import UserCreate, UserRead, UserUpdate

__all__ = [
    # Base
    "CamelModel",
    "MessageResponse",
    # Auth
    "ChangePasswordRequest",
    "LoginRequest",
    "UserEnvelope",
    # Config
    "StorageConfigRead",
    "StorageConfigSaved",
    "StorageConfigUpdate",
    # Project
    "MeetingCreate",
    "MeetingRead",
    "MessageCreate",
    "MessageRead",
    "NoteRead",
    "NoteUpsert",
    "ProjectCreate",
    "ProjectDetail",
    "ProjectRead",
    "ProjectSummary",
    "ProjectUpdate",
    "TechStack",
    # User
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
