"""
Create an operator account, or rotate the password of an existing one.
Run: python -m scripts.create_user <username> <password>
"""
import sys
import os
import logging

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from recruitdesk.core.security import hash_password
from recruitdesk.db import session as db_session
from recruitdesk.db.models.user import User

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_or_update_user(db, username: str, password: str) -> User:
    user = db.query(User).filter(User.username == username).first()
    if user:
        logger.info(f"Rotating password for existing user: {username} (ID: {user.id})")
        user.password_hash = hash_password(password)
    else:
        logger.info(f"Creating new user: {username}")
        user = User(username=username, password_hash=hash_password(password))
        db.add(user)
    db.commit()
    db.refresh(user)
    return user


def main(argv):
    if len(argv) != 3:
        print("Usage: python -m scripts.create_user <username> <password>")
        return 2

    db_session.init_engine()
    db = db_session.SessionLocal()
    try:
        user = create_or_update_user(db, argv[1], argv[2])
        print(f"\n[SUCCESS] User {user.username} ready (ID: {user.id})")
        return 0
    except Exception:
        db.rollback()
        logger.exception(f"Failed to set up user {argv[1]}")
        return 1
    finally:
        db.close()
        db_session.dispose_engine()


if __name__ == "__main__":
    sys.exit(main(sys.argv))
