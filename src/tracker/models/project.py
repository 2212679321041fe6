"""Project and its activity: team, messages, meetings, per-user notes."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Column, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.tracker.models.base import utc_now
from src.tracker.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """Client project. Progress is derived from the dates and never stored."""

    __tablename__ = "projects"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=200, index=True)
    client: str = Field(max_length=200)
    start_date: datetime
    end_date: datetime
    manager: str = Field(max_length=100)
    requirements: str
    suggestions: str | None = Field(default=None)
    created_by: int = Field(foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
    updated_by: int | None = Field(default=None, foreign_key="users.id", ondelete="SET NULL")
    tech_stack: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON, nullable=True))
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20, index=True)
    github_link: str | None = Field(default=None, max_length=500)
    client_contact: str | None = Field(default=None, max_length=200)
    client_phone: str | None = Field(default=None, max_length=50)
    client_email: str | None = Field(default=None, max_length=255)
    estimated_budget: str | None = Field(default=None, max_length=100)


class ProjectMembership(SQLModel, table=True):
    """Team membership. `team` on a project is always derived from these rows."""

    __tablename__ = "project_users"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_project_users_pair"),)

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")


class ProjectMessage(SQLModel, table=True):
    __tablename__ = "project_messages"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    content: str
    timestamp: datetime = Field(default_factory=utc_now)


class ProjectMeeting(SQLModel, table=True):
    __tablename__ = "project_meetings"

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    date: datetime
    feedback: str
    created_at: datetime = Field(default_factory=utc_now)


class UserNote(SQLModel, table=True):
    """Private technical notes, one row per (project, user)."""

    __tablename__ = "user_notes"
    __table_args__ = (UniqueConstraint("project_id", "user_id", name="uq_user_notes_pair"),)

    id: int | None = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    stack_suggestions: str | None = Field(default=None)
    technical_notes: str | None = Field(default=None)
