"""User administration endpoints."""

from fastapi import APIRouter, status

from src.tracker.api.dependencies import AdminContext, ManagerContext, UserServiceDep
from src.tracker.schemas.base import MessageResponse
from src.tracker.schemas.user import UserCreate, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=list[UserRead],
    summary="List users",
    responses={403: {"description": "Requires ADMIN or PROJECT_MANAGER"}},
)
async def list_users(_ctx: ManagerContext, service: UserServiceDep) -> list[UserRead]:
    users = await service.list_users()
    return [UserRead.model_validate(user) for user in users]


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user",
    responses={
        403: {"description": "Requires ADMIN or PROJECT_MANAGER"},
        404: {"description": "User not found"},
    },
)
async def get_user(user_id: int, _ctx: ManagerContext, service: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await service.get_user(user_id))


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    description="New accounts must change their password on first login.",
    responses={
        403: {"description": "Requires ADMIN"},
        409: {"description": "Email already in use"},
    },
)
async def create_user(data: UserCreate, _ctx: AdminContext, service: UserServiceDep) -> UserRead:
    return UserRead.model_validate(await service.create_user(data))


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update user",
    description="Setting a password resets it and forces a change on next login.",
    responses={
        403: {"description": "Requires ADMIN"},
        404: {"description": "User not found"},
        409: {"description": "Email already in use"},
    },
)
async def update_user(
    user_id: int, data: UserUpdate, _ctx: AdminContext, service: UserServiceDep
) -> UserRead:
    return UserRead.model_validate(await service.update_user(user_id, data))


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete user",
    responses={
        403: {"description": "Requires ADMIN"},
        404: {"description": "User not found"},
        409: {"description": "User created projects"},
    },
)
async def delete_user(
    user_id: int, _ctx: AdminContext, service: UserServiceDep
) -> MessageResponse:
    await service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")
