"""
Seed the database with operators, the tag catalogue and sample candidates.
Run: python -m scripts.seed

Safe to re-run: users and tags are upserted, sample candidates are replaced.
"""
import sys
import os
import random
import uuid
import logging

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from recruitdesk.core.review_criteria import CRITERIA_IDS
from recruitdesk.core.security import hash_password
from recruitdesk.db import session as db_session
from recruitdesk.db.init_db import create_tables
from recruitdesk.db.models import Candidate, CandidateStatus, Review, Tag, User, PHASE_ONE, PHASE_TWO

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

USERS = [
    {"username": "admin", "password": "password123"},
    {"username": "recruiter", "password": "password123"},
]

TAGS = [
    "React", "Vue", "Angular", "TypeScript", "JavaScript", "Node.js", "Python",
    "PHP", "Go", "NestJS", "FastAPI", "PostgreSQL", "MySQL", "MongoDB", "Redis",
    "Docker", "Kubernetes", "AWS", "Nginx", "GitHub Actions", "Project Management",
    "Agile", "UI/UX", "Data Science",
]

FIRST_NAMES = ["Ada", "Alan", "Grace", "Linus", "Margaret", "Dennis", "Barbara", "Ken", "Frances", "Edsger"]
LAST_NAMES = ["Lovelace", "Turing", "Hopper", "Torvalds", "Hamilton", "Ritchie", "Liskov", "Thompson", "Allen", "Dijkstra"]

SAMPLE_CANDIDATES = 25
# Sample data only: the API never derives hire_decision from the score
SAMPLE_HIRE_THRESHOLD = 7.5


def seed_users(db):
    users = []
    for entry in USERS:
        user = db.query(User).filter(User.username == entry["username"]).first()
        if not user:
            user = User(username=entry["username"], password_hash=hash_password(entry["password"]))
            db.add(user)
            logger.info(f"Created user: {entry['username']}")
        users.append(user)
    db.flush()
    return users


def seed_tags(db):
    existing = {t.name: t for t in db.query(Tag).all()}
    tags = []
    for name in TAGS:
        tag = existing.get(name)
        if tag is None:
            tag = Tag(name=name)
            db.add(tag)
        tags.append(tag)
    db.flush()
    logger.info(f"{len(tags)} tags created/updated")
    return tags


def seed_candidates(db, users, tags, count=SAMPLE_CANDIDATES, rng=None):
    rng = rng or random.Random()
    for _ in range(count):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        full_name = f"{first} {last}"
        email = f"{first}.{last}@example.com".lower()
        status = rng.choice([s.value for s in CandidateStatus])

        candidate = Candidate(
            uuid=str(uuid.uuid4()),
            sender=f"+39{rng.randint(3000000000, 3999999999)}",
            status=status,
            full_name=full_name,
            email=email,
            github_link=f"github.com/{first.lower()}{last.lower()}",
            raw_answers={"screen_0_TextInput_0": full_name, "screen_0_TextInput_1": email},
            tags=rng.sample(tags, rng.randint(2, 6)),
        )
        db.add(candidate)

        if status == CandidateStatus.PENDING.value:
            continue

        db.add(Review(
            phase=PHASE_ONE,
            candidate=candidate,
            user_id=rng.choice(users).id,
            criteria_ratings={c: rng.randint(1, 5) for c in CRITERIA_IDS},
            notes="Sample phase 1 notes.",
        ))

        if status == CandidateStatus.REVIEWED.value:
            final_score = round(rng.uniform(7, 10), 1)
            db.add(Review(
                phase=PHASE_TWO,
                candidate=candidate,
                user_id=rng.choice(users).id,
                final_score=final_score,
                hire_decision=final_score > SAMPLE_HIRE_THRESHOLD,
                final_comment="Sample phase 2 comment.",
            ))
    logger.info(f"{count} sample candidates generated")


def main():
    db_session.init_engine()
    create_tables()
    db = db_session.SessionLocal()
    try:
        logger.info("Removing previous sample candidates")
        db.query(Review).delete()
        db.query(Candidate).delete()

        users = seed_users(db)
        tags = seed_tags(db)
        seed_candidates(db, users, tags)
        db.commit()
        logger.info("Seeding finished")
    except Exception:
        db.rollback()
        logger.exception("Seeding failed")
        raise
    finally:
        db.close()
        db_session.dispose_engine()


if __name__ == "__main__":
    main()
