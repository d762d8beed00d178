from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recruitdesk.core.auth_dependency import get_current_user_id
from recruitdesk.core.rate_limit import user_rate_limit
from recruitdesk.db.session import get_db
from recruitdesk.schemas.tag import TagResponse
from recruitdesk.services import candidate_service

router = APIRouter(prefix="/api/tags", tags=["Tags"])


# ✅ TAG CATALOGUE (alphabetical)
@router.get("", response_model=List[TagResponse], dependencies=[Depends(user_rate_limit)])
def list_tags(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return candidate_service.list_tags(db)
