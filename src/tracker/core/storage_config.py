"""Storage backend selection persisted to a small JSON file.

The file is read once per process; switching backends requires a restart.
"""

import json
from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.tracker.core.config import Settings, get_settings
from src.tracker.core.logging import get_logger

logger = get_logger(__name__)


class StorageBackend(str, Enum):
    """Where the relational store lives."""

    LOCAL = "local"  # embedded SQLite file
    EXTERNAL = "external"  # networked PostgreSQL


class StorageConfig(BaseModel):
    """Persisted storage settings, stored with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    type: StorageBackend = StorageBackend.LOCAL
    sqlite_path: str | None = Field(default=None, alias="sqlitePath")
    connection_string: str | None = Field(default=None, alias="connectionString")

    @model_validator(mode="after")
    def validate_backend_fields(self) -> "StorageConfig":
        if self.type == StorageBackend.EXTERNAL and not (self.connection_string or "").strip():
            raise ValueError("connectionString is required for an external database")
        return self


def load_storage_config(path: str | Path) -> StorageConfig:
    """Read the config file, falling back to the local default if missing or unreadable."""
    config_path = Path(path)
    if not config_path.exists():
        return StorageConfig()
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
        return StorageConfig.model_validate(data)
    except (OSError, ValueError) as e:
        logger.warning("Failed to read storage config, using defaults", path=str(path), error=str(e))
        return StorageConfig()


def save_storage_config(config: StorageConfig, path: str | Path) -> None:
    """Write the config file. Takes effect on the next process start."""
    config_path = Path(path)
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = config.model_dump(mode="json", by_alias=True, exclude_none=True)
    config_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def normalize_postgres_url(url: str) -> str:
    """Point a plain postgres URL at the asyncpg driver."""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+asyncpg://" + url[len(prefix) :]
    return url


def database_url_from_config(config: StorageConfig, default_sqlite_path: str) -> str:
    if config.type == StorageBackend.EXTERNAL:
        # connection_string presence is enforced by the model validator
        return normalize_postgres_url(config.connection_string or "")
    sqlite_path = config.sqlite_path or default_sqlite_path
    return f"sqlite+aiosqlite:///{sqlite_path}"


@lru_cache
def get_storage_config() -> StorageConfig:
    """Storage config as it was at process start."""
    return load_storage_config(get_settings().db_config_path)


def resolve_database_url(settings: Settings | None = None) -> str:
    """DATABASE_URL if set, otherwise the URL derived from the config file."""
    settings = settings or get_settings()
    if settings.database_url:
        return settings.database_url
    return database_url_from_config(get_storage_config(), settings.default_sqlite_path)
