"""
Shared fixtures: in-memory SQLite per test, a TestClient, an operator
account with a bearer token, and the bot API key.
"""
import json
import os

# Must be set before recruitdesk.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["API_KEY"] = "test-api-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_DIR"] = ""

import pytest
from fastapi.testclient import TestClient

from recruitdesk.main import app
from recruitdesk.core.rate_limit import rate_limit_store
from recruitdesk.core.security import hash_password, create_access_token
from recruitdesk.db import session as db_session
from recruitdesk.db.base import Base
from recruitdesk.db.models import Candidate, Review, Tag, User, PHASE_ONE, PHASE_TWO

TEST_DATABASE_URL = "sqlite://"
TEST_API_KEY = "test-api-key"
OPERATOR_PASSWORD = "password123"


@pytest.fixture(scope="function", autouse=True)
def engine():
    """Create a fresh database for each test."""
    engine = db_session.init_engine(TEST_DATABASE_URL)
    Base.metadata.create_all(bind=engine)
    rate_limit_store.clear()
    yield engine
    Base.metadata.drop_all(bind=engine)
    db_session.dispose_engine()


@pytest.fixture
def db(engine):
    """Database session fixture."""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def operator(db):
    user = User(username="admin", password_hash=hash_password(OPERATOR_PASSWORD))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def second_operator(db):
    user = User(username="recruiter", password_hash=hash_password(OPERATOR_PASSWORD))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def auth_headers(operator):
    return {"Authorization": f"Bearer {create_access_token(operator.id)}"}


@pytest.fixture
def api_key_headers():
    return {"X-API-Key": TEST_API_KEY}


@pytest.fixture
def make_message_body():
    """Build the bot's double-encoded message_body from an answers dict."""
    def _make(answers):
        return json.dumps({"payload": json.dumps(answers)})
    return _make


@pytest.fixture
def tags(db):
    created = [Tag(name=name) for name in ("Python", "Docker", "AWS")]
    db.add_all(created)
    db.commit()
    for tag in created:
        db.refresh(tag)
    return created


@pytest.fixture
def candidate(db):
    candidate = Candidate(
        uuid="abc-1",
        sender="+391234567",
        status="pending",
        full_name="Ada Lovelace",
        email="ada@example.com",
        raw_answers={"fullName": "Ada Lovelace", "email": "ada@example.com"},
    )
    db.add(candidate)
    db.commit()
    db.refresh(candidate)
    return candidate


@pytest.fixture
def reviewed_candidate(db, candidate, operator):
    """Candidate with both phases on file."""
    db.add_all([
        Review(
            phase=PHASE_ONE,
            candidate_id=candidate.id,
            user_id=operator.id,
            criteria_ratings={"technical_skills": 4, "communication": 5},
        ),
        Review(
            phase=PHASE_TWO,
            candidate_id=candidate.id,
            user_id=operator.id,
            final_score=8.5,
            hire_decision=True,
        ),
    ])
    db.commit()
    return candidate
