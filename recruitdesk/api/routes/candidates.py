"""
Candidate endpoints.

POST /api/candidates is the bot webhook (API key); everything else is for
operators (bearer token).
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from recruitdesk.core.auth_dependency import require_api_key, get_current_user_id
from recruitdesk.core.rate_limit import bot_rate_limit, user_rate_limit
from recruitdesk.db.session import get_db
from recruitdesk.schemas.candidate import (
    CandidateIngest,
    CandidateResponse,
    CandidateUpdate,
    IngestResponse,
)
from recruitdesk.schemas.review import (
    PhaseOneReviewCreate,
    PhaseTwoReviewCreate,
    ReviewResponse,
)
from recruitdesk.schemas.tag import CandidateTagsUpdate
from recruitdesk.services import candidate_service, review_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/candidates", tags=["Candidates"])


# ✅ BOT WEBHOOK
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=IngestResponse,
    dependencies=[Depends(bot_rate_limit), Depends(require_api_key)],
)
def ingest_candidate(payload: CandidateIngest, db: Session = Depends(get_db)):
    candidate = candidate_service.ingest_candidate(
        db,
        uuid=payload.uuid,
        sender=payload.sender,
        message_body=payload.message_body,
        tag_names=payload.tags,
    )
    return IngestResponse(candidate_id=candidate.id)


@router.get("", response_model=List[CandidateResponse], dependencies=[Depends(user_rate_limit)])
def list_candidates(
    response: Response,
    search: Optional[str] = Query(None, description="Case-insensitive match on full name"),
    status_filter: Optional[List[str]] = Query(None, alias="status", description="Any of these statuses"),
    tag: Optional[List[str]] = Query(None, description="All of these tag names"),
    page: Optional[int] = Query(None, ge=1, description="Page number"),
    page_size: Optional[int] = Query(None, ge=1, le=100, alias="pageSize", description="Items per page"),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    List candidates newest first with reviews and tags.

    Without page and pageSize every match is returned; with only one of them
    the other defaults (page 1, 20 per page). X-Total-Count always
    holds the number of matches before paging.
    """
    total = candidate_service.count_candidates(db, search, status_filter, tag)
    response.headers["X-Total-Count"] = str(total)
    return candidate_service.list_candidates(
        db,
        search=search,
        statuses=status_filter,
        tags=tag,
        page=page,
        page_size=page_size,
    )


@router.get("/{candidate_id}", response_model=CandidateResponse, dependencies=[Depends(user_rate_limit)])
def get_candidate(
    candidate_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return candidate_service.get_candidate(db, candidate_id)


@router.put("/{candidate_id}", response_model=CandidateResponse, dependencies=[Depends(user_rate_limit)])
def update_candidate(
    candidate_id: int,
    payload: CandidateUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    fields = payload.model_dump(exclude_unset=True)
    return candidate_service.update_candidate(db, candidate_id, fields)


@router.put("/{candidate_id}/tags", response_model=CandidateResponse, dependencies=[Depends(user_rate_limit)])
def set_candidate_tags(
    candidate_id: int,
    payload: CandidateTagsUpdate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return candidate_service.set_candidate_tags(db, candidate_id, payload.tag_ids)


@router.delete(
    "/{candidate_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    dependencies=[Depends(user_rate_limit)],
)
def delete_candidate(
    candidate_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    candidate_service.delete_candidate(db, candidate_id)
    logger.info(f"Candidate {candidate_id} deleted by user_id={user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ✅ REVIEW LIFECYCLE
@router.post(
    "/{candidate_id}/phase-one",
    status_code=status.HTTP_201_CREATED,
    response_model=ReviewResponse,
    dependencies=[Depends(user_rate_limit)],
)
def submit_phase_one_review(
    candidate_id: int,
    payload: PhaseOneReviewCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return review_service.create_phase_one_review(
        db,
        candidate_id=candidate_id,
        reviewer_id=user_id,
        criteria_ratings=payload.criteria_ratings,
        notes=payload.notes,
    )


@router.post(
    "/{candidate_id}/phase-two",
    status_code=status.HTTP_201_CREATED,
    response_model=ReviewResponse,
    dependencies=[Depends(user_rate_limit)],
)
def submit_phase_two_review(
    candidate_id: int,
    payload: PhaseTwoReviewCreate,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return review_service.create_phase_two_review(
        db,
        candidate_id=candidate_id,
        reviewer_id=user_id,
        final_score=payload.final_score,
        hire_decision=payload.hire_decision,
        final_comment=payload.final_comment,
    )
