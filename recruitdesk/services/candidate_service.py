"""
Candidate repository.

Handles webhook ingestion, dashboard listing/filtering, operator edits,
tag assignment, and the cascading delete.
"""
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from recruitdesk.core.errors import (
    ValidationError,
    NotFound,
    InvalidReference,
    translate_integrity_error,
)
from recruitdesk.db.models.candidate import Candidate, CandidateStatus, CANDIDATE_STATUSES
from recruitdesk.db.models.review import Review
from recruitdesk.db.models.tag import Tag

logger = logging.getLogger(__name__)

# Intake form keys first, then the plain names some bots send
ANSWER_FIELDS: Dict[str, tuple] = {
    "full_name": ("screen_0_TextInput_0", "fullName", "full_name"),
    "email": ("screen_0_TextInput_1", "email"),
    "github_link": ("screen_0_TextInput_4", "githubLink", "github_link"),
}
MISSING_ANSWER = "N/A"
DEFAULT_PAGE_SIZE = 20

UPDATABLE_FIELDS = ("status", "full_name", "email", "github_link")


def decode_message_body(message_body: Any) -> Dict[str, Any]:
    """
    Decode the bot's double-encoded payload.

    message_body is a JSON object whose ``payload`` field is itself a JSON
    string holding the form answers. Both layers are decoded in order.

    Raises:
        ValidationError: either layer is missing or not valid JSON
    """
    if not isinstance(message_body, str) or not message_body.strip():
        raise ValidationError("message_body must be a non-empty JSON string")

    try:
        outer = json.loads(message_body)
    except json.JSONDecodeError:
        raise ValidationError("message_body is not valid JSON")

    if not isinstance(outer, dict) or "payload" not in outer:
        raise ValidationError("message_body must be a JSON object with a 'payload' field")

    payload = outer["payload"]
    if not isinstance(payload, str):
        raise ValidationError("payload must be a JSON-encoded string")

    try:
        answers = json.loads(payload)
    except json.JSONDecodeError:
        raise ValidationError("payload is not valid JSON")

    if not isinstance(answers, dict):
        raise ValidationError("payload must decode to a JSON object")

    return answers


def _answer(answers: Dict[str, Any], keys: Iterable[str]) -> Optional[str]:
    for key in keys:
        value = answers.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _commit(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error on commit: {e.orig}")
        raise translate_integrity_error(e)


def get_or_create_tags(db: Session, names: Iterable[str]) -> List[Tag]:
    """
    Resolve tag names, creating unknown ones. Does not commit.

    Names match existing tags case-insensitively, so "python" reuses "Python".
    """
    wanted = {}
    for name in names:
        name = (name or "").strip()
        if name and name.lower() not in wanted:
            wanted[name.lower()] = name
    if not wanted:
        return []

    existing = {
        t.name.lower(): t
        for t in db.query(Tag).filter(func.lower(Tag.name).in_(list(wanted))).all()
    }
    tags = []
    for key, name in wanted.items():
        tag = existing.get(key)
        if tag is None:
            tag = Tag(name=name)
            db.add(tag)
            logger.info(f"Tag created on demand: name={name}")
        tags.append(tag)
    return tags


def ingest_candidate(
    db: Session,
    uuid: Optional[str],
    sender: Optional[str],
    message_body: Any,
    tag_names: Optional[List[str]] = None,
) -> Candidate:
    """
    Create a pending candidate from a webhook submission.

    The decoded answers are stored verbatim in raw_answers.
    """
    if not uuid or not sender or not message_body:
        raise ValidationError("uuid, message_body, and sender are required.")

    answers = decode_message_body(message_body)

    candidate = Candidate(
        uuid=uuid,
        sender=sender,
        status=CandidateStatus.PENDING.value,
        full_name=_answer(answers, ANSWER_FIELDS["full_name"]) or MISSING_ANSWER,
        email=_answer(answers, ANSWER_FIELDS["email"]) or MISSING_ANSWER,
        github_link=_answer(answers, ANSWER_FIELDS["github_link"]),
        raw_answers=answers,
    )
    if tag_names:
        candidate.tags = get_or_create_tags(db, tag_names)

    db.add(candidate)
    _commit(db)
    db.refresh(candidate)

    logger.info(f"Candidate ingested: candidate_id={candidate.id}, uuid={uuid}")
    return candidate


def _filtered_query(
    db: Session,
    search: Optional[str] = None,
    statuses: Optional[List[str]] = None,
    tags: Optional[List[str]] = None,
) -> Query:
    query = db.query(Candidate)

    if search and search.strip():
        query = query.filter(func.lower(Candidate.full_name).contains(search.strip().lower()))

    if statuses:
        unknown = [s for s in statuses if s not in CANDIDATE_STATUSES]
        if unknown:
            raise ValidationError(f"Unknown status filter: {', '.join(unknown)}")
        query = query.filter(Candidate.status.in_(statuses))

    # Every requested tag must be present
    for tag_name in tags or []:
        tag_name = tag_name.strip().lower()
        if tag_name:
            query = query.filter(Candidate.tags.any(func.lower(Tag.name) == tag_name))

    return query


def list_candidates(
    db: Session,
    search: Optional[str] = None,
    statuses: Optional[List[str]] = None,
    tags: Optional[List[str]] = None,
    page: Optional[int] = None,
    page_size: Optional[int] = None,
) -> List[Candidate]:
    """
    Candidates newest first, with reviews and tags loaded.

    Paging applies when either page or page_size is given. A missing page
    means the first one, a missing page_size means DEFAULT_PAGE_SIZE.
    """
    query = (
        _filtered_query(db, search, statuses, tags)
        .options(selectinload(Candidate.reviews), selectinload(Candidate.tags))
        .order_by(Candidate.created_at.desc(), Candidate.id.desc())
    )
    if page or page_size:
        page = page or 1
        page_size = page_size or DEFAULT_PAGE_SIZE
        query = query.offset((page - 1) * page_size).limit(page_size)
    return query.all()


def count_candidates(
    db: Session,
    search: Optional[str] = None,
    statuses: Optional[List[str]] = None,
    tags: Optional[List[str]] = None,
) -> int:
    return _filtered_query(db, search, statuses, tags).count()


def get_candidate(db: Session, candidate_id: int) -> Candidate:
    candidate = (
        db.query(Candidate)
        .options(selectinload(Candidate.reviews), selectinload(Candidate.tags))
        .filter(Candidate.id == candidate_id)
        .first()
    )
    if not candidate:
        raise NotFound("Candidate not found")
    return candidate


def update_candidate(db: Session, candidate_id: int, fields: Dict[str, Any]) -> Candidate:
    """
    Partial update of status/full_name/email/github_link.

    Raises:
        ValidationError: no fields, unknown fields, or an unknown status
        NotFound: candidate does not exist
    """
    if not fields:
        raise ValidationError("No fields to update")

    unknown = [k for k in fields if k not in UPDATABLE_FIELDS]
    if unknown:
        raise ValidationError(f"Fields cannot be updated: {', '.join(unknown)}")

    if "status" in fields and fields["status"] not in CANDIDATE_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(CANDIDATE_STATUSES)}")

    for key in ("full_name", "email", "status"):
        if key in fields and not fields[key]:
            raise ValidationError(f"{key} cannot be empty")

    candidate = get_candidate(db, candidate_id)
    for key, value in fields.items():
        setattr(candidate, key, value)

    _commit(db)
    db.refresh(candidate)

    logger.info(f"Candidate updated: candidate_id={candidate_id}, fields={sorted(fields)}")
    return candidate


def set_candidate_tags(db: Session, candidate_id: int, tag_ids: List[int]) -> Candidate:
    """Replace the candidate's tags with the given existing tags."""
    candidate = get_candidate(db, candidate_id)

    wanted = set(tag_ids)
    tags = db.query(Tag).filter(Tag.id.in_(wanted)).all() if wanted else []
    missing = wanted - {t.id for t in tags}
    if missing:
        raise InvalidReference(
            f"Operation failed: tag id(s) {', '.join(str(i) for i in sorted(missing))} do not exist."
        )

    candidate.tags = tags
    _commit(db)
    db.refresh(candidate)

    logger.info(f"Candidate tags set: candidate_id={candidate_id}, tag_ids={sorted(wanted)}")
    return candidate


def delete_candidate(db: Session, candidate_id: int) -> None:
    """
    Delete a candidate and all of its reviews in one transaction.

    Either both deletes are committed or neither is.
    """
    try:
        db.execute(delete(Review).where(Review.candidate_id == candidate_id))
        result = db.execute(delete(Candidate).where(Candidate.id == candidate_id))
        if result.rowcount == 0:
            raise NotFound("Candidate not found")
        db.commit()
    except (NotFound, SQLAlchemyError):
        db.rollback()
        raise

    logger.info(f"Candidate deleted with its reviews: candidate_id={candidate_id}")


def list_tags(db: Session) -> List[Tag]:
    return db.query(Tag).order_by(Tag.name.asc()).all()
