from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index
from sqlalchemy.sql import func
from recruitdesk.db.base import Base


class RequestLog(Base):
    """
    One row per handled HTTP request, written after the response is produced.

    user_id is informational only (no foreign key) so audit rows outlive users.
    """
    __tablename__ = "request_logs"

    id = Column(Integer, primary_key=True, index=True)
    method = Column(String(10), nullable=False)
    path = Column(String, nullable=False)
    status_code = Column(Integer, nullable=False)
    latency_ms = Column(Integer, nullable=False)
    ip_address = Column(String, nullable=True)
    user_id = Column(Integer, nullable=True)
    api_key_used = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    __table_args__ = (
        Index("idx_request_log_path_created", "path", "created_at"),
    )
