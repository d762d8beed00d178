"""
Database models module.

Importing this package registers every table on Base.metadata so that
create_all() and Alembic autogenerate see the full schema.
"""
from recruitdesk.db.models.user import User
from recruitdesk.db.models.tag import Tag, candidate_tags
from recruitdesk.db.models.review import Review, PHASE_ONE, PHASE_TWO
from recruitdesk.db.models.candidate import Candidate, CandidateStatus, CANDIDATE_STATUSES
from recruitdesk.db.models.request_log import RequestLog

__all__ = [
    "User",
    "Tag",
    "candidate_tags",
    "Review",
    "PHASE_ONE",
    "PHASE_TWO",
    "Candidate",
    "CandidateStatus",
    "CANDIDATE_STATUSES",
    "RequestLog",
]
