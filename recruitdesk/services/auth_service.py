"""
Operator login.
"""
import logging

from sqlalchemy.orm import Session

from recruitdesk.core.errors import InvalidCredentials, ValidationError
from recruitdesk.core.logging_config import sanitize_log_data
from recruitdesk.core.security import hash_password, verify_password, create_access_token
from recruitdesk.db.models.user import User

logger = logging.getLogger(__name__)

_dummy_hash = None


def _get_dummy_hash() -> str:
    """Hash checked for unknown usernames so both failures cost one bcrypt round."""
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("not-a-real-password")
    return _dummy_hash


def authenticate_user(db: Session, username: str, password: str) -> User:
    """
    Look up an operator by exact username and check the password.

    Raises:
        ValidationError: username or password missing
        InvalidCredentials: unknown user or wrong password (same error for both)
    """
    if not username or not password:
        raise ValidationError("Username and password are required")

    user = db.query(User).filter(User.username == username).first()
    password_hash = user.password_hash if user else _get_dummy_hash()
    if not verify_password(password, password_hash) or not user:
        logger.info(f"Failed login attempt: {sanitize_log_data({'username': username, 'password': password})}")
        raise InvalidCredentials()

    return user


def login(db: Session, username: str, password: str) -> str:
    """Authenticate and issue a one hour bearer token."""
    user = authenticate_user(db, username, password)
    token = create_access_token(user.id)
    logger.info(f"User logged in: user_id={user.id}")
    return token
