"""Storage configuration endpoints (ADMIN only)."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from src.tracker.api.dependencies import AdminContext, ConfigServiceDep
from src.tracker.schemas.config import (
    StorageConfigRead,
    StorageConfigSaved,
    StorageConfigUpdate,
)

router = APIRouter(prefix="/config", tags=["config"])


@router.get(
    "/db",
    response_model=StorageConfigRead,
    summary="Saved storage backend",
    responses={403: {"description": "Requires ADMIN"}},
)
async def get_db_config(_ctx: AdminContext, service: ConfigServiceDep) -> StorageConfigRead:
    return service.get_config()


@router.post(
    "/db",
    response_model=StorageConfigSaved,
    summary="Save storage backend",
    description="Written to the config file. Takes effect after a server restart.",
    responses={
        400: {"description": "External backend without a connection string"},
        403: {"description": "Requires ADMIN"},
    },
)
async def save_db_config(
    data: StorageConfigUpdate, _ctx: AdminContext, service: ConfigServiceDep
) -> StorageConfigSaved:
    return StorageConfigSaved(message=service.save_config(data))


@router.get(
    "/schema",
    response_class=PlainTextResponse,
    summary="Download schema SQL",
    description="SQL for every migration, rendered for the active database dialect.",
    responses={403: {"description": "Requires ADMIN"}},
)
async def download_schema(_ctx: AdminContext, service: ConfigServiceDep) -> PlainTextResponse:
    sql = await service.export_schema()
    return PlainTextResponse(
        sql,
        headers={"Content-Disposition": "attachment; filename=schema.sql"},
    )
