from pydantic import EmailStr, Field, field_validator

from src.tracker.models.enums import Role
from src.tracker.schemas.base import CamelModel, strip_or_none


class UserRead(CamelModel):
    """Public view of a user. The password hash never leaves the server."""

    id: int
    name: str
    email: str
    role: Role
    avatar: str | None = None
    must_change_password: bool = False


class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(max_length=100)
    role: Role = Role.TEKKIE
    avatar: str | None = Field(default=None, max_length=50)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be empty or whitespace only")
        return v

    @field_validator("avatar")
    @classmethod
    def validate_avatar(cls, v: str | None) -> str | None:
        return strip_or_none(v)


class UserUpdate(CamelModel):
    """Admin edit. A password here is a reset and forces a change on next login."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailStr | None = None
    role: Role | None = None
    avatar: str | None = Field(default=None, max_length=50)
    password: str | None = Field(default=None, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Name cannot be empty or whitespace only")
        return v
