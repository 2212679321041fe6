"""Authentication and authorization dependencies."""

from collections.abc import Awaitable, Callable
from typing import Annotated

from asgi_correlation_id import correlation_id
from fastapi import Depends, HTTPException, Request, status

from src.tracker.api.context import RequestContext
from src.tracker.api.dependencies.services import AuthServiceDep
from src.tracker.core.config import get_settings
from src.tracker.core.logging import bind_user_context
from src.tracker.models import Role


def get_session_token(request: Request) -> str | None:
    """Raw session token from the cookie, if present."""
    return request.cookies.get(get_settings().session_cookie_name)


SessionToken = Annotated[str | None, Depends(get_session_token)]


async def get_request_context(
    auth_service: AuthServiceDep,
    token: SessionToken,
) -> RequestContext:
    """Resolve the session cookie to a RequestContext, or 401."""
    resolved = await auth_service.get_session_user(token)
    if resolved is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    user, user_session = resolved

    bind_user_context(user.id, user.role)  # type: ignore[arg-type]

    return RequestContext(
        user=user,
        session_id=user_session.id,  # type: ignore[arg-type]
        request_id=correlation_id.get(),
    )


CurrentContext = Annotated[RequestContext, Depends(get_request_context)]


def require_role(*roles: Role) -> Callable[[RequestContext], Awaitable[RequestContext]]:
    """Dependency factory: 401 without a session, 403 if the role is not listed."""
    allowed = frozenset(roles)

    async def dependency(ctx: CurrentContext) -> RequestContext:
        if ctx.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Forbidden",
            )
        return ctx

    return dependency


AdminContext = Annotated[RequestContext, Depends(require_role(Role.ADMIN))]
ManagerContext = Annotated[
    RequestContext, Depends(require_role(Role.ADMIN, Role.PROJECT_MANAGER))
]
