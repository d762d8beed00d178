"""
Review model - phase-tagged evaluation of a candidate by an operator.

Phase 1 rows carry criteria_ratings/notes, phase 2 rows carry
final_score/hire_decision/final_comment.
"""
from sqlalchemy import (
    Column, Integer, Text, Float, Boolean, DateTime, ForeignKey, JSON,
    UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from recruitdesk.db.base import Base

PHASE_ONE = 1
PHASE_TWO = 2


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    phase = Column(Integer, nullable=False)
    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Phase 1
    criteria_ratings = Column(JSON, nullable=True)  # {"technical_skills": 4, ...}
    notes = Column(Text, nullable=True)

    # Phase 2
    final_score = Column(Float, nullable=True)
    hire_decision = Column(Boolean, nullable=True)
    final_comment = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    candidate = relationship("Candidate", back_populates="reviews")
    reviewer = relationship("User", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("candidate_id", "phase", name="uq_review_candidate_phase"),
        CheckConstraint("phase IN (1, 2)", name="ck_review_phase"),
    )

    def __repr__(self):
        return f"<Review(id={self.id}, candidate_id={self.candidate_id}, phase={self.phase})>"
