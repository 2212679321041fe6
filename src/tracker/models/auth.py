"""Server-side login sessions."""

from datetime import datetime

from sqlmodel import Field, SQLModel

from src.tracker.models.base import utc_now


class UserSession(SQLModel, table=True):
    """A login session. The cookie carries the raw token; only its hash is stored."""

    __tablename__ = "sessions"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    token_hash: str = Field(max_length=255, unique=True, index=True)
    expires_at: datetime = Field(index=True)
    created_at: datetime = Field(default_factory=utc_now)
    ip_address: str | None = Field(default=None, max_length=45)
    user_agent: str | None = Field(default=None, max_length=500)
