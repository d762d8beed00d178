from typing import List

from fastapi import APIRouter, Depends

from recruitdesk.core.auth_dependency import get_current_user_id
from recruitdesk.core.review_criteria import REVIEW_CRITERIA
from recruitdesk.schemas.review import CriterionResponse

router = APIRouter(prefix="/api/reviews", tags=["Reviews"])


@router.get("/criteria", response_model=List[CriterionResponse])
def list_review_criteria(user_id: int = Depends(get_current_user_id)):
    """Phase 1 criteria, in display order."""
    return REVIEW_CRITERIA
