"""
Request authentication dependencies.

Two independent schemes, picked per route:
- require_api_key: static key in X-API-Key, used by the intake bot
- get_current_user_id: signed bearer token, used by operators
"""
import logging
import secrets
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader, HTTPBearer, HTTPAuthorizationCredentials

from recruitdesk.core import config
from recruitdesk.core.errors import Unauthorized, ServerConfigurationError
from recruitdesk.core.security import decode_access_token

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def require_api_key(
    request: Request,
    api_key: Optional[str] = Depends(api_key_header),
) -> bool:
    """Accept the request only if it carries the configured bot key."""
    if not config.API_KEY:
        logger.error("API_KEY is not configured")
        raise ServerConfigurationError("Server configuration error: API key is missing")

    if not api_key or not secrets.compare_digest(api_key.encode("utf-8"), config.API_KEY.encode("utf-8")):
        raise Unauthorized("Unauthorized: Invalid API Key")

    request.state.api_key_used = True
    return True


def get_current_user_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    """Get the operator's user id from the Authorization: Bearer token."""
    if not config.JWT_SECRET:
        logger.error("JWT_SECRET is not configured")
        raise ServerConfigurationError("Server configuration error: signing secret is missing")

    if credentials is None or not credentials.credentials:
        raise Unauthorized("No token provided")

    user_id = decode_access_token(credentials.credentials)
    request.state.user_id = user_id
    return user_id
