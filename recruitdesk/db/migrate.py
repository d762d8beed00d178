"""
Database migration runner for Alembic migrations.
"""
import logging
import os

from alembic.config import Config
from alembic import command
from sqlalchemy import create_engine, text

from recruitdesk.core import config as app_config

logger = logging.getLogger(__name__)

ADVISORY_LOCK_ID = 734201557

ALEMBIC_INI_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "alembic.ini",
)


def run_migrations(database_url: str = None) -> None:
    """
    Run Alembic migrations to head revision.

    On Postgres an advisory lock keeps concurrently starting instances from
    migrating at the same time.
    """
    url = database_url or app_config.DATABASE_URL
    if not url:
        raise ValueError("DATABASE_URL is not set")

    logger.info("Running alembic upgrade head")

    alembic_cfg = Config(ALEMBIC_INI_PATH)
    alembic_cfg.set_main_option("sqlalchemy.url", url)

    engine = create_engine(url, pool_pre_ping=True)
    lock_conn = None
    try:
        if url.startswith("postgresql"):
            # Hold the connection open for the lifetime of the lock
            lock_conn = engine.connect()
            lock_conn.execute(text(f"SELECT pg_advisory_lock({ADVISORY_LOCK_ID})"))
            lock_conn.commit()
            logger.info("Migration lock acquired")

        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")
    except Exception:
        logger.exception("Migration failed")
        raise
    finally:
        if lock_conn is not None:
            lock_conn.execute(text(f"SELECT pg_advisory_unlock({ADVISORY_LOCK_ID})"))
            lock_conn.commit()
            lock_conn.close()
        engine.dispose()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_migrations()
