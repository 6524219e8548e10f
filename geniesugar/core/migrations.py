"""Alembic helpers: locate the config, upgrade to head, inspect revisions."""

from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import text

from geniesugar.database import get_engine
from geniesugar.logging_config import get_logger

logger = get_logger(__name__)

# Repository root: geniesugar/core/migrations.py -> ../../
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def get_alembic_config() -> Config:
    """Build the Alembic config from alembic.ini at the project root.

    Raises:
        FileNotFoundError: If alembic.ini is missing.
    """
    alembic_ini = PROJECT_ROOT / "alembic.ini"
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    return config


def run_migrations() -> None:
    """Upgrade the database to the latest revision."""
    logger.info("Running database migrations")
    try:
        command.upgrade(get_alembic_config(), "head")
    except Exception:
        logger.exception("Database migration failed")
        raise
    logger.info("Database migrations completed")


def get_head_revision() -> str | None:
    """Return the newest revision id shipped with the code."""
    script = ScriptDirectory.from_config(get_alembic_config())
    return script.get_current_head()


async def get_applied_revision() -> str | None:
    """Return the revision recorded in the database, or None if unavailable."""
    try:
        async with get_engine().connect() as conn:
            result = await conn.execute(
                text("SELECT version_num FROM alembic_version LIMIT 1")
            )
            row = result.fetchone()
    except Exception:
        return None
    return row[0] if row else None
