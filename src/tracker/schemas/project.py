"""Project schemas for API request/response."""

from datetime import datetime
from typing import Self

from pydantic import Field, field_validator, model_validator

from src.tracker.models.base import to_naive_utc
from src.tracker.models.enums import ProjectStatus
from src.tracker.schemas.base import CamelModel, strip_or_none
from src.tracker.schemas.user import UserRead


def _required_text(v: str, label: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{label} cannot be empty or whitespace only")
    return v


class TechStack(CamelModel):
    frontend: str = ""
    backend: str = ""
    db: str = ""
    ai_agent: str = ""
    other: str = ""


class ProjectCreate(CamelModel):
    name: str = Field(max_length=200)
    client: str = Field(max_length=200)
    start_date: datetime
    end_date: datetime
    manager: str = Field(max_length=100)
    requirements: str
    suggestions: str | None = None
    tech_stack: TechStack | None = None
    github_link: str | None = Field(default=None, max_length=500)
    client_contact: str | None = Field(default=None, max_length=200)
    client_phone: str | None = Field(default=None, max_length=50)
    client_email: str | None = Field(default=None, max_length=255)
    estimated_budget: str | None = Field(default=None, max_length=100)
    team: list[int] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _required_text(v, "Project name")

    @field_validator("client")
    @classmethod
    def validate_client(cls, v: str) -> str:
        return _required_text(v, "Client")

    @field_validator("manager")
    @classmethod
    def validate_manager(cls, v: str) -> str:
        return _required_text(v, "Manager")

    @field_validator("requirements")
    @classmethod
    def validate_requirements(cls, v: str) -> str:
        return _required_text(v, "Requirements")

    @field_validator(
        "suggestions",
        "github_link",
        "client_contact",
        "client_phone",
        "client_email",
        "estimated_budget",
    )
    @classmethod
    def validate_optional_text(cls, v: str | None) -> str | None:
        return strip_or_none(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @model_validator(mode="after")
    def validate_dates(self) -> Self:
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class ProjectUpdate(CamelModel):
    """Partial update. Only fields present in the request body are applied."""

    name: str | None = Field(default=None, max_length=200)
    client: str | None = Field(default=None, max_length=200)
    start_date: datetime | None = None
    end_date: datetime | None = None
    manager: str | None = Field(default=None, max_length=100)
    requirements: str | None = None
    suggestions: str | None = None
    status: ProjectStatus | None = None
    tech_stack: TechStack | None = None
    github_link: str | None = Field(default=None, max_length=500)
    client_contact: str | None = Field(default=None, max_length=200)
    client_phone: str | None = Field(default=None, max_length=50)
    client_email: str | None = Field(default=None, max_length=255)
    estimated_budget: str | None = Field(default=None, max_length=100)
    team: list[int] | None = None

    @field_validator("name", "client", "manager", "requirements")
    @classmethod
    def validate_required_text(cls, v: str | None) -> str | None:
        if v is not None:
            return _required_text(v, "Field")
        return v

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime | None) -> datetime | None:
        return to_naive_utc(v) if v is not None else None


# Fields only the project creator (or an admin) may change
RESTRICTED_FIELDS = frozenset({"requirements", "suggestions"})

# Never copied onto the project row by a patch
NON_COLUMN_FIELDS = frozenset({"team"})


class MessageRead(CamelModel):
    id: int
    project_id: int
    user_id: int
    content: str
    timestamp: datetime
    user_name: str | None = None


class MessageCreate(CamelModel):
    content: str = Field(max_length=5000)

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return _required_text(v, "Message")


class MeetingRead(CamelModel):
    id: int
    project_id: int
    date: datetime
    feedback: str
    created_at: datetime


class MeetingCreate(CamelModel):
    date: datetime
    feedback: str = Field(max_length=5000)

    @field_validator("feedback")
    @classmethod
    def validate_feedback(cls, v: str) -> str:
        return _required_text(v, "Feedback")

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)


class NoteRead(CamelModel):
    id: int | None = None
    project_id: int
    user_id: int
    stack_suggestions: str | None = ""
    technical_notes: str | None = ""


class NoteUpsert(CamelModel):
    stack_suggestions: str | None = None
    technical_notes: str | None = None


class ProjectRead(CamelModel):
    """List view: project plus derived team and progress."""

    id: int
    name: str
    client: str
    start_date: datetime
    end_date: datetime
    manager: str
    requirements: str
    suggestions: str | None = None
    created_by: int
    created_at: datetime
    updated_at: datetime
    updated_by: int | None = None
    tech_stack: TechStack | None = None
    status: ProjectStatus
    github_link: str | None = None
    client_contact: str | None = None
    client_phone: str | None = None
    client_email: str | None = None
    estimated_budget: str | None = None
    team: list[int] = Field(default_factory=list)
    team_members: list[UserRead] = Field(default_factory=list)
    progress: int = 0
    created_by_name: str | None = None
    updated_by_name: str | None = None


class ProjectDetail(ProjectRead):
    messages: list[MessageRead] = Field(default_factory=list)


class ProjectSummary(CamelModel):
    """Dashboard counters."""

    total: int
    active: int
    completed: int
    delayed: int
    average_progress: int
