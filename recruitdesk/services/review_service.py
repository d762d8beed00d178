"""
Review lifecycle service.

A candidate moves NoReview -> Phase1Submitted -> Phase2Submitted. Each phase
may be submitted once, phase 2 only after phase 1, and a phase 2 submission
moves the candidate to "reviewed" unless an operator already rejected them.
"""
import enum
import logging
import math
from typing import Any, Dict, Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from recruitdesk.core.errors import (
    ValidationError,
    NotFound,
    InvalidReference,
    Conflict,
    is_unique_violation,
    translate_integrity_error,
)
from recruitdesk.core.review_criteria import validate_criteria_ratings
from recruitdesk.db.models.candidate import Candidate, CandidateStatus
from recruitdesk.db.models.review import Review, PHASE_ONE, PHASE_TWO
from recruitdesk.db.models.user import User

logger = logging.getLogger(__name__)


class ReviewState(str, enum.Enum):
    NO_REVIEW = "no_review"
    PHASE_ONE_SUBMITTED = "phase_one_submitted"
    PHASE_TWO_SUBMITTED = "phase_two_submitted"


def review_state(reviews: Iterable[Review]) -> ReviewState:
    """Lifecycle state implied by a candidate's reviews."""
    phases = {r.phase for r in reviews}
    if PHASE_TWO in phases:
        return ReviewState.PHASE_TWO_SUBMITTED
    if PHASE_ONE in phases:
        return ReviewState.PHASE_ONE_SUBMITTED
    return ReviewState.NO_REVIEW


def derive_status(reviews: Iterable[Review]) -> CandidateStatus:
    """A candidate is reviewed once a phase 2 review exists, pending before that."""
    if review_state(reviews) is ReviewState.PHASE_TWO_SUBMITTED:
        return CandidateStatus.REVIEWED
    return CandidateStatus.PENDING


def _require_ids(candidate_id: Optional[int], reviewer_id: Optional[int]) -> None:
    if not candidate_id or not reviewer_id:
        raise ValidationError("Candidate ID and User ID are required")


def _load_candidate(db: Session, candidate_id: int) -> Candidate:
    candidate = db.get(Candidate, candidate_id)
    if candidate is None:
        raise NotFound("Candidate not found")
    return candidate


def _check_reviewer(db: Session, reviewer_id: int) -> None:
    if db.get(User, reviewer_id) is None:
        raise InvalidReference("Operation failed: the reviewing user does not exist.")


def _commit_review(db: Session, review: Review) -> Review:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # A concurrent submission for the same phase won the insert
        if is_unique_violation(e):
            raise Conflict(f"A phase {review.phase} review already exists for this candidate")
        raise translate_integrity_error(e)
    db.refresh(review)
    return review


def create_phase_one_review(
    db: Session,
    candidate_id: int,
    reviewer_id: int,
    criteria_ratings: Dict[str, Any],
    notes: Optional[str] = None,
) -> Review:
    """
    Record the structured phase 1 evaluation.

    Raises:
        ValidationError: missing ids or bad criteriaRatings
        NotFound: candidate does not exist
        InvalidReference: reviewer does not exist
        Conflict: a phase 1 review is already on file
    """
    _require_ids(candidate_id, reviewer_id)
    if not criteria_ratings:
        raise ValidationError("criteriaRatings are required for a phase 1 review")
    problems = validate_criteria_ratings(criteria_ratings)
    if problems:
        raise ValidationError("Invalid criteriaRatings: " + "; ".join(problems))

    candidate = _load_candidate(db, candidate_id)
    _check_reviewer(db, reviewer_id)

    if review_state(candidate.reviews) is not ReviewState.NO_REVIEW:
        raise Conflict("A phase 1 review already exists for this candidate")

    review = Review(
        phase=PHASE_ONE,
        candidate=candidate,
        user_id=reviewer_id,
        criteria_ratings=dict(criteria_ratings),
        notes=notes,
    )
    db.add(review)
    _commit_review(db, review)

    logger.info(f"Phase 1 review created: review_id={review.id}, candidate_id={candidate_id}, user_id={reviewer_id}")
    return review


def create_phase_two_review(
    db: Session,
    candidate_id: int,
    reviewer_id: int,
    final_score: Any,
    hire_decision: Any,
    final_comment: Optional[str] = None,
) -> Review:
    """
    Record the final decision and sync the candidate status in the same commit.

    hire_decision is taken as given; it is not derived from final_score.

    Raises:
        ValidationError: missing ids, non-numeric score or non-boolean decision
        NotFound: candidate does not exist
        InvalidReference: reviewer does not exist
        Conflict: no phase 1 review yet, or a phase 2 review is already on file
    """
    _require_ids(candidate_id, reviewer_id)
    if (
        isinstance(final_score, bool)
        or not isinstance(final_score, (int, float))
        or not math.isfinite(final_score)
        or not isinstance(hire_decision, bool)
    ):
        raise ValidationError("finalScore and hireDecision are required for a phase 2 review")

    candidate = _load_candidate(db, candidate_id)
    _check_reviewer(db, reviewer_id)

    state = review_state(candidate.reviews)
    if state is ReviewState.NO_REVIEW:
        raise Conflict("A phase 1 review is required before phase 2")
    if state is ReviewState.PHASE_TWO_SUBMITTED:
        raise Conflict("A phase 2 review already exists for this candidate")

    review = Review(
        phase=PHASE_TWO,
        candidate=candidate,
        user_id=reviewer_id,
        final_score=float(final_score),
        hire_decision=hire_decision,
        final_comment=final_comment,
    )
    db.add(review)

    if candidate.status != CandidateStatus.REJECTED.value:
        candidate.status = derive_status(candidate.reviews).value

    _commit_review(db, review)

    logger.info(
        f"Phase 2 review created: review_id={review.id}, candidate_id={candidate_id}, "
        f"user_id={reviewer_id}, hire_decision={hire_decision}"
    )
    return review
