"""Storage backend configuration and schema export."""

import asyncio

from src.tracker.core.config import Settings
from src.tracker.core.db import get_sync_url
from src.tracker.core.logging import get_logger
from src.tracker.core.migrations import render_schema_sql
from src.tracker.core.storage_config import (
    StorageBackend,
    StorageConfig,
    get_storage_config,
    load_storage_config,
    resolve_database_url,
    save_storage_config,
)
from src.tracker.schemas.config import StorageConfigRead, StorageConfigUpdate

logger = get_logger(__name__)

RESTART_MESSAGE = "Configuration saved. Restart the server to apply the new database settings."


class ConfigService:
    """Reads and writes the storage config file.

    The running engine keeps the backend it started with; saved changes apply
    after a restart.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def get_config(self) -> StorageConfigRead:
        """The config as currently saved on disk (may differ from the active one)."""
        config = load_storage_config(self.settings.db_config_path)
        return StorageConfigRead(
            type=config.type,
            sqlite_path=config.sqlite_path,
            connection_string=config.connection_string,
        )

    def active_backend(self) -> StorageBackend:
        if self.settings.database_url:
            if self.settings.database_url.startswith("sqlite"):
                return StorageBackend.LOCAL
            return StorageBackend.EXTERNAL
        return get_storage_config().type

    def save_config(self, data: StorageConfigUpdate) -> str:
        config = StorageConfig(
            type=data.type,
            sqlite_path=data.sqlite_path if data.type == StorageBackend.LOCAL else None,
            connection_string=(
                data.connection_string.strip()
                if data.type == StorageBackend.EXTERNAL and data.connection_string
                else None
            ),
        )
        save_storage_config(config, self.settings.db_config_path)
        logger.info(
            "Storage config saved",
            backend=config.type.value,
            connection=config.connection_string,
            path=self.settings.db_config_path,
        )
        return RESTART_MESSAGE

    async def export_schema(self) -> str:
        """SQL for all migrations, rendered for the active backend's dialect."""
        url = get_sync_url(resolve_database_url(self.settings))
        return await asyncio.to_thread(render_schema_sql, url)
