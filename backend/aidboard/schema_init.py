"""
Aid Board Backend - Schema Initializer
=======================================

What:  Applies pending Alembic migrations when the service starts.
How:   Borrows one connection from the application's pool and runs
       `alembic upgrade head` on it inside a transaction, via run_sync()
       so the event loop is never blocked by Alembic's synchronous API.
When:  Once, in the application lifespan, before requests are served.

Failure policy:
    A missing migrations directory or a failed upgrade is logged as a
    warning and startup continues, so the service can run against a
    database that was provisioned some other way.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy.engine import Connection

from aidboard.database import Database

logger = logging.getLogger(__name__)


def build_alembic_config(script_location: Path) -> Config:
    """An in-memory Alembic config pointing at script_location (no ini file)."""
    config = Config()
    # ConfigParser interpolation treats "%" specially
    config.set_main_option("script_location", str(script_location).replace("%", "%%"))
    return config


def _upgrade(connection: Connection, script_location: Path) -> None:
    config = build_alembic_config(script_location)
    config.attributes["connection"] = connection
    command.upgrade(config, "head")


async def apply_migrations(database: Database, migrations_dir: Path) -> bool:
    """
    Upgrade the schema to the latest revision.

    Returns True when the upgrade ran, False when it was skipped.
    Never raises.
    """
    migrations_dir = Path(migrations_dir)
    if not migrations_dir.is_dir():
        logger.warning(
            "Skipping migrations (directory may be missing): %s", migrations_dir
        )
        return False

    try:
        async with database.engine.begin() as conn:
            await conn.run_sync(_upgrade, migrations_dir)
    except Exception as e:
        logger.warning(
            "Skipping migrations (upgrade failed): %s: %s",
            type(e).__name__,
            str(e),
            exc_info=logger.isEnabledFor(logging.DEBUG),
        )
        return False

    logger.info("Migrations applied from %s", migrations_dir)
    return True
