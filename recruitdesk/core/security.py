import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import jwt, JWTError, ExpiredSignatureError

from recruitdesk.core import config
from recruitdesk.core.errors import Unauthorized, ServerConfigurationError

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    password_bytes = (password or "").encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        logger.warning("Password exceeds 72 bytes, truncating before bcrypt")
        password_bytes = password_bytes[:BCRYPT_MAX_BYTES]
    return password_bytes


def hash_password(password: str) -> str:
    """
    Hash a password with a fresh bcrypt salt.

    Args:
        password: Plain text password

    Returns:
        bcrypt hash string ($2b$...)
    """
    salt = bcrypt.gensalt(rounds=config.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Verify a password against its stored hash.

    Hashes written by other bcrypt implementations ($2a$, $2y$) are accepted.
    Returns False for malformed hashes instead of raising.
    """
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification failed on a malformed hash: {e}")
        return False


def _require_secret() -> str:
    if not config.JWT_SECRET:
        logger.error("JWT_SECRET is not configured")
        raise ServerConfigurationError("Server configuration error: signing secret is missing")
    return config.JWT_SECRET


def create_access_token(
    user_id: int,
    expires_delta: Optional[timedelta] = None,
    now: Optional[datetime] = None,
) -> str:
    """Issue a signed operator token carrying the ``userId`` claim."""
    secret = _require_secret()
    issued_at = now or datetime.now(timezone.utc)
    expire = issued_at + (expires_delta or timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode = {
        "sub": str(user_id),
        "userId": user_id,
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(to_encode, secret, algorithm=config.ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Verify a bearer token and return the user id it was issued for.

    Raises:
        ServerConfigurationError: no signing secret configured
        Unauthorized: bad signature, expired, or missing/invalid userId claim
    """
    secret = _require_secret()
    try:
        payload = jwt.decode(token, secret, algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except JWTError:
        raise Unauthorized("Invalid token")

    user_id = payload.get("userId")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise Unauthorized("Invalid token")
    return user_id
