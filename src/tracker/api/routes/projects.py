"""Project endpoints - CRUD, team, messages, meetings and notes."""

from fastapi import APIRouter, status

from src.tracker.api.dependencies import CurrentContext, ManagerContext, ProjectServiceDep
from src.tracker.schemas.base import MessageResponse
from src.tracker.schemas.project import (
    MeetingCreate,
    MeetingRead,
    MessageCreate,
    MessageRead,
    NoteRead,
    NoteUpsert,
    ProjectCreate,
    ProjectDetail,
    ProjectRead,
    ProjectSummary,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])

_NOT_FOUND = {404: {"description": "Project not found"}}
_NOT_ON_TEAM = {403: {"description": "Not on the project team"}}


@router.get(
    "",
    response_model=list[ProjectRead],
    summary="List projects",
    description="All projects with team and progress. No message stream in this view.",
)
async def list_projects(ctx: CurrentContext, service: ProjectServiceDep) -> list[ProjectRead]:
    return await service.list_projects(ctx.user)


# Declared before /{project_id} so "summary" is not parsed as an id
@router.get(
    "/summary",
    response_model=ProjectSummary,
    summary="Project dashboard counters",
)
async def project_summary(_ctx: CurrentContext, service: ProjectServiceDep) -> ProjectSummary:
    return await service.summary()


@router.get(
    "/{project_id}",
    response_model=ProjectDetail,
    summary="Get project",
    responses={**_NOT_ON_TEAM, **_NOT_FOUND},
)
async def get_project(
    project_id: int, ctx: CurrentContext, service: ProjectServiceDep
) -> ProjectDetail:
    return await service.get_project(project_id, ctx.user)


@router.post(
    "",
    response_model=ProjectDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        400: {"description": "Validation failed or unknown team member"},
        403: {"description": "Requires ADMIN or PROJECT_MANAGER"},
    },
)
async def create_project(
    data: ProjectCreate, ctx: ManagerContext, service: ProjectServiceDep
) -> ProjectDetail:
    return await service.create_project(data, ctx.user)


@router.patch(
    "/{project_id}",
    response_model=ProjectDetail,
    summary="Update project",
    description=(
        "Partial update. Requirements and suggestions are editable by the creator "
        "or an admin; other fields by admins and project managers. "
        "`team` replaces the membership list."
    ),
    responses={
        400: {"description": "Validation failed or unknown team member"},
        403: {"description": "Not allowed to edit these fields"},
        **_NOT_FOUND,
    },
)
async def update_project(
    project_id: int, data: ProjectUpdate, ctx: CurrentContext, service: ProjectServiceDep
) -> ProjectDetail:
    return await service.update_project(project_id, data, ctx.user)


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete project",
    description="Removes the project with its notes, meetings, messages and team.",
    responses={403: {"description": "Requires ADMIN or PROJECT_MANAGER"}, **_NOT_FOUND},
)
async def delete_project(
    project_id: int, _ctx: ManagerContext, service: ProjectServiceDep
) -> MessageResponse:
    await service.delete_project(project_id)
    return MessageResponse(message="Project deleted successfully")


@router.get(
    "/{project_id}/messages",
    response_model=list[MessageRead],
    summary="List project messages",
    responses={**_NOT_ON_TEAM, **_NOT_FOUND},
)
async def list_messages(
    project_id: int, ctx: CurrentContext, service: ProjectServiceDep
) -> list[MessageRead]:
    return await service.list_messages(project_id, ctx.user)


@router.post(
    "/{project_id}/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Post a timeline update",
    responses={**_NOT_ON_TEAM, **_NOT_FOUND},
)
async def add_message(
    project_id: int, data: MessageCreate, ctx: CurrentContext, service: ProjectServiceDep
) -> MessageRead:
    return await service.add_message(project_id, ctx.user, data.content)


@router.get(
    "/{project_id}/meetings",
    response_model=list[MeetingRead],
    summary="List meetings",
    responses={**_NOT_ON_TEAM, **_NOT_FOUND},
)
async def list_meetings(
    project_id: int, ctx: CurrentContext, service: ProjectServiceDep
) -> list[MeetingRead]:
    return await service.list_meetings(project_id, ctx.user)


@router.post(
    "/{project_id}/meetings",
    response_model=MeetingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Record meeting feedback",
    responses={**_NOT_ON_TEAM, **_NOT_FOUND},
)
async def add_meeting(
    project_id: int, data: MeetingCreate, ctx: CurrentContext, service: ProjectServiceDep
) -> MeetingRead:
    return await service.add_meeting(project_id, ctx.user, data)


@router.get(
    "/{project_id}/notes/{user_id}",
    response_model=NoteRead,
    summary="Get a user's notes on a project",
    description="Returns empty notes when none have been written.",
    responses={**_NOT_ON_TEAM, 404: {"description": "Project or user not found"}},
)
async def get_note(
    project_id: int, user_id: int, ctx: CurrentContext, service: ProjectServiceDep
) -> NoteRead:
    return await service.get_note(project_id, user_id, ctx.user)


@router.put(
    "/{project_id}/notes/{user_id}",
    response_model=NoteRead,
    summary="Create or update a user's notes on a project",
    responses={
        403: {"description": "TEKKIEs may only edit their own notes"},
        404: {"description": "Project or user not found"},
    },
)
async def upsert_note(
    project_id: int,
    user_id: int,
    data: NoteUpsert,
    ctx: CurrentContext,
    service: ProjectServiceDep,
) -> NoteRead:
    return await service.upsert_note(project_id, user_id, ctx.user, data)
