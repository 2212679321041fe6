"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.tracker.api.dependencies.auth import (
    AdminContext,
    CurrentContext,
    ManagerContext,
    SessionToken,
    get_request_context,
    get_session_token,
    require_role,
)

# Database
from src.tracker.api.dependencies.db import DBSession, get_db_session

# Repositories
from src.tracker.api.dependencies.repositories import (
    MeetingRepo,
    MembershipRepo,
    MessageRepo,
    NoteRepo,
    ProjectRepo,
    SessionRepo,
    UserRepo,
)

# Services
from src.tracker.api.dependencies.services import (
    AuthServiceDep,
    ConfigServiceDep,
    ProjectServiceDep,
    UserServiceDep,
    get_auth_service,
    get_config_service,
    get_project_service,
    get_user_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Auth
    "AdminContext",
    "CurrentContext",
    "ManagerContext",
    "SessionToken",
    "get_request_context",
    "get_session_token",
    "require_role",
    # Repositories
    "MeetingRepo",
    "MembershipRepo",
    "MessageRepo",
    "NoteRepo",
    "ProjectRepo",
    "SessionRepo",
    "UserRepo",
    # Services
    "AuthServiceDep",
    "ConfigServiceDep",
    "ProjectServiceDep",
    "UserServiceDep",
    "get_auth_service",
    "get_config_service",
    "get_project_service",
    "get_user_service",
]
