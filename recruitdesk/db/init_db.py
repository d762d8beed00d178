import logging

from recruitdesk.db import session
from recruitdesk.db.base import Base
from recruitdesk.db import models  # noqa: F401  (registers tables)

logger = logging.getLogger(__name__)


def create_tables() -> None:
    """Create any missing tables on the bound engine (dev/test convenience)."""
    if session.engine is None:
        session.init_engine()
    Base.metadata.create_all(bind=session.engine)
    logger.info("Database tables ensured")
