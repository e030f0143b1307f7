"""
Schema management.

The schema is described by a linear list of alembic revisions under
``guardmap/migrations/versions``; alembic records the applied head in the
``alembic_version`` table, so each revision runs exactly once per database.
Called once at process start, never from the request path.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Connection

from guardmap.database import Database

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def alembic_config() -> Config:
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    return cfg


def _upgrade(connection: Connection, cfg: Config, revision: str) -> None:
    cfg.attributes["connection"] = connection
    command.upgrade(cfg, revision)


async def run_migrations(database: Database, revision: str = "head") -> None:
    """Bring the database schema up to ``revision`` on the shared engine."""
    cfg = alembic_config()
    async with database.engine.begin() as conn:
        await conn.run_sync(_upgrade, cfg, revision)
    logger.info("Database schema at %s", revision)
