"""
Candidate model - one row per application received from the intake bot.
"""
import enum

from sqlalchemy import Column, Integer, String, DateTime, JSON, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from recruitdesk.db.base import Base
from recruitdesk.db.models.tag import Tag, candidate_tags
from recruitdesk.db.models.review import Review


class CandidateStatus(str, enum.Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    REJECTED = "rejected"


CANDIDATE_STATUSES = tuple(s.value for s in CandidateStatus)


class Candidate(Base):
    """
    Candidate application.

    ``raw_answers`` keeps the decoded intake payload verbatim for audit;
    full_name/email/github_link are the fields operators work with.
    """
    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, index=True)
    uuid = Column(String, nullable=False, index=True)  # external correlation id from the bot
    sender = Column(String, nullable=False)  # contact string, usually a phone number
    status = Column(String(20), nullable=False, default=CandidateStatus.PENDING.value, index=True)

    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    github_link = Column(String, nullable=True)
    raw_answers = Column(JSON, nullable=False, default=dict)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    reviews = relationship(
        Review,
        back_populates="candidate",
        order_by=[Review.phase, Review.created_at, Review.id],
        passive_deletes=True,
    )
    tags = relationship(
        Tag,
        secondary=candidate_tags,
        back_populates="candidates",
        order_by=Tag.name,
    )

    __table_args__ = (
        Index("idx_candidate_status_created", "status", "created_at"),
    )

    def __repr__(self):
        return f"<Candidate(id={self.id}, full_name='{self.full_name}', status='{self.status}')>"
