from pydantic import Field, model_validator

from src.tracker.core.storage_config import StorageBackend
from src.tracker.schemas.base import CamelModel


class StorageConfigRead(CamelModel):
    type: StorageBackend
    sqlite_path: str | None = None
    connection_string: str | None = None


class StorageConfigUpdate(CamelModel):
    type: StorageBackend = StorageBackend.LOCAL
    sqlite_path: str | None = Field(default=None, max_length=500)
    connection_string: str | None = Field(default=None, max_length=1000)

    @model_validator(mode="after")
    def validate_backend_fields(self) -> "StorageConfigUpdate":
        if self.type == StorageBackend.EXTERNAL and not (self.connection_string or "").strip():
            raise ValueError("connectionString is required for an external database")
        return self


class StorageConfigSaved(CamelModel):
    message: str
    restart_required: bool = True
