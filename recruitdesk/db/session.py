import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recruitdesk.core import config
from recruitdesk.core.errors import ServerConfigurationError

logger = logging.getLogger(__name__)

# Bound by init_engine() at startup
engine: Optional[Engine] = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_engine(database_url: Optional[str] = None) -> Engine:
    """
    Create the process-wide engine and bind SessionLocal to it.

    SQLite URLs get foreign key enforcement and, for in-memory databases,
    a single shared connection.
    """
    global engine

    url = database_url or config.DATABASE_URL
    if not url:
        raise ServerConfigurationError("DATABASE_URL is not set")

    kwargs = {"pool_pre_ping": True}
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    if engine is not None:
        engine.dispose()

    engine = create_engine(url, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    SessionLocal.configure(bind=engine)
    logger.info(f"Database engine initialised (dialect={engine.dialect.name})")
    return engine


def dispose_engine() -> None:
    """Close all pooled connections. Safe to call when no engine exists."""
    global engine
    if engine is None:
        return
    engine.dispose()
    engine = None
    logger.info("Database engine disposed")


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
