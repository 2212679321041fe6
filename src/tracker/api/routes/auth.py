"""Authentication endpoints - cookie sessions."""

from fastapi import APIRouter, Response, status
from starlette.requests import Request

from src.tracker.api.dependencies import AuthServiceDep, CurrentContext, SessionToken
from src.tracker.core.config import get_settings
from src.tracker.core.rate_limit import limiter
from src.tracker.schemas.auth import ChangePasswordRequest, LoginRequest, UserEnvelope
from src.tracker.schemas.base import MessageResponse
from src.tracker.schemas.user import UserRead

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_expire_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        path="/",
    )


def _clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
        path="/",
    )


@router.post(
    "/login",
    response_model=UserEnvelope,
    summary="Log in",
    responses={
        200: {"description": "Session cookie set; returns the user"},
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many login attempts"},
    },
)
@limiter.limit(get_settings().login_rate_limit)
async def login(
    request: Request,
    response: Response,
    login_data: LoginRequest,
    service: AuthServiceDep,
) -> UserEnvelope:
    """Verify email and password and open a session.

    Unknown email and wrong password produce the same 401.
    """
    user, token = await service.login(
        login_data.email,
        login_data.password,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    _set_session_cookie(response, token)
    return UserEnvelope(user=UserRead.model_validate(user))


@router.post(
    "/logout",
    response_model=MessageResponse,
    summary="Log out",
    responses={200: {"description": "Session closed (or there was none)"}},
)
async def logout(
    response: Response,
    service: AuthServiceDep,
    token: SessionToken,
) -> MessageResponse:
    await service.logout(token)
    _clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/me",
    response_model=UserEnvelope,
    summary="Current user",
    responses={401: {"description": "No valid session"}},
)
async def me(ctx: CurrentContext) -> UserEnvelope:
    return UserEnvelope(user=UserRead.model_validate(ctx.user))


@router.post(
    "/change-password",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Change own password",
    responses={
        400: {"description": "Current password is wrong"},
        401: {"description": "No valid session"},
    },
)
async def change_password(
    data: ChangePasswordRequest,
    ctx: CurrentContext,
    service: AuthServiceDep,
) -> MessageResponse:
    await service.change_password(ctx.user, data.current_password, data.new_password)
    return MessageResponse(message="Password updated successfully")
