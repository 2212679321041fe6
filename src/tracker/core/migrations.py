"""Reusable migration runner for production, seeding and tests."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from io import StringIO
from pathlib import Path

from alembic.config import Config

from alembic import command

ALEMBIC_DIR = Path(__file__).resolve().parents[2] / "alembic"


def build_alembic_config(
    url: str | None = None, output_buffer: StringIO | None = None
) -> Config:
    """Alembic config built in code, independent of the working directory.

    Args:
        url: Sync database URL. Defaults to the resolved application database.
        output_buffer: Where offline (--sql) output is written.
    """
    alembic_cfg = Config(output_buffer=output_buffer)
    alembic_cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    if url:
        alembic_cfg.set_main_option("sqlalchemy.url", url)
    return alembic_cfg


def run_migrations_sync(url: str | None = None) -> None:
    """Upgrade the database to the latest revision."""
    command.upgrade(build_alembic_config(url), "head")


async def run_migrations_async(url: str | None = None) -> None:
    """Run Alembic migrations from async context.

    Uses ThreadPoolExecutor to avoid event loop conflicts with Alembic.
    """
    loop = asyncio.get_running_loop()
    with ThreadPoolExecutor() as pool:
        await loop.run_in_executor(pool, run_migrations_sync, url)


def render_schema_sql(url: str | None = None) -> str:
    """SQL for every migration up to head, rendered offline for the target dialect."""
    buffer = StringIO()
    command.upgrade(build_alembic_config(url, output_buffer=buffer), "head", sql=True)
    return buffer.getvalue()
