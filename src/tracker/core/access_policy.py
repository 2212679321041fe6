"""Role-based access rules.

Pure predicates: callers load the data, these decide.
"""

from collections.abc import Collection
from typing import Protocol

from src.tracker.models.enums import Role


class Actor(Protocol):
    id: int | None
    role: str


class OwnedProject(Protocol):
    created_by: int


def _role(user: Actor) -> Role:
    return Role(user.role)


def can_view_project(user: Actor, team_ids: Collection[int]) -> bool:
    """ADMIN and PROJECT_MANAGER see everything; TEKKIE only their teams."""
    if _role(user) in (Role.ADMIN, Role.PROJECT_MANAGER):
        return True
    return user.id in team_ids


def can_post_message(user: Actor, team_ids: Collection[int]) -> bool:
    return can_view_project(user, team_ids)


def can_edit_restricted_fields(user: Actor, project: OwnedProject) -> bool:
    """Requirements and suggestions belong to the creator (or an admin)."""
    return _role(user) == Role.ADMIN or project.created_by == user.id


def can_manage_users(user: Actor) -> bool:
    return _role(user) == Role.ADMIN


def can_manage_project_meta(user: Actor) -> bool:
    return _role(user) in (Role.ADMIN, Role.PROJECT_MANAGER)


def can_view_client_details(user: Actor) -> bool:
    return _role(user) in (Role.ADMIN, Role.PROJECT_MANAGER)


def can_edit_note(user: Actor, owner_id: int) -> bool:
    """TEKKIEs write only their own notes."""
    if _role(user) == Role.TEKKIE:
        return user.id == owner_id
    return True
