from pydantic import EmailStr, Field

from src.tracker.schemas.base import CamelModel
from src.tracker.schemas.user import UserRead


class LoginRequest(CamelModel):
    email: EmailStr
    # Blank passwords are allowed; they go through the normal verification path
    password: str = Field(default="", max_length=100)


class UserEnvelope(CamelModel):
    user: UserRead


class ChangePasswordRequest(CamelModel):
    current_password: str = Field(default="", max_length=100)
    new_password: str = Field(min_length=1, max_length=100)
