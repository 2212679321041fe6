"""Request-scoped context passed explicitly to handlers."""

from dataclasses import dataclass

from src.tracker.models import Role, User


@dataclass(frozen=True)
class RequestContext:
    """Who is calling, resolved once per request by the auth dependency.

    Attributes:
        user: The authenticated user
        session_id: Primary key of the login session row
        request_id: Correlation id of the request, if any
    """

    user: User
    session_id: int
    request_id: str | None = None

    @property
    def user_id(self) -> int:
        return self.user.id  # type: ignore[return-value]

    @property
    def role(self) -> Role:
        return Role(self.user.role)
