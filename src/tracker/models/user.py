"""User model."""

from sqlmodel import Field, SQLModel

from src.tracker.models.enums import Role


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    role: str = Field(default=Role.TEKKIE.value, max_length=50)
    avatar: str | None = Field(default=None, max_length=50)
    must_change_password: bool = Field(default=False)
