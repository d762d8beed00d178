"""
Request audit log writer.

Runs after the response has been produced; a failed write is logged and
never reaches the client.
"""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from recruitdesk.db.models.request_log import RequestLog
from recruitdesk.db.session import SessionLocal

logger = logging.getLogger(__name__)


def record_request(
    method: str,
    path: str,
    status_code: int,
    latency_ms: int,
    ip_address: Optional[str] = None,
    user_id: Optional[int] = None,
    api_key_used: bool = False,
) -> None:
    db = SessionLocal()
    try:
        db.add(RequestLog(
            method=method,
            path=path,
            status_code=status_code,
            latency_ms=latency_ms,
            ip_address=ip_address,
            user_id=user_id,
            api_key_used=api_key_used,
        ))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to write request log for {method} {path}: {e}")
    finally:
        db.close()
