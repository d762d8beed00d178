from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from recruitdesk.core import config
from recruitdesk.core.rate_limit import user_rate_limit
from recruitdesk.db.session import get_db
from recruitdesk.schemas.auth import LoginRequest, TokenResponse
from recruitdesk.services import auth_service

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# ✅ OPERATOR LOGIN -> one hour bearer token
@router.post("/login", response_model=TokenResponse, dependencies=[Depends(user_rate_limit)])
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    token = auth_service.login(db, payload.username, payload.password)
    return TokenResponse(
        token=token,
        token_type="bearer",
        expires_in=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
