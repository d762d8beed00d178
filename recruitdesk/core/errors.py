"""
Error taxonomy for the RecruitDesk API.

Services raise these directly; the handlers registered in ``recruitdesk.main``
turn them into ``{"status": "error", "message": ...}`` responses.
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError


class RecruitDeskError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(RecruitDeskError):
    status_code = 400
    default_message = "Invalid request"


class InvalidReference(RecruitDeskError):
    """A referenced row (tag, user, ...) does not exist."""
    status_code = 400
    default_message = "Referenced resource does not exist"


class Unauthorized(RecruitDeskError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidCredentials(Unauthorized):
    default_message = "Invalid credentials"


class NotFound(RecruitDeskError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(RecruitDeskError):
    status_code = 409
    default_message = "Conflict"


class ServerConfigurationError(RecruitDeskError):
    default_message = "Server configuration error"


class InternalError(RecruitDeskError):
    pass


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    """True when the driver reports a foreign key failure (SQLite or Postgres)."""
    pgcode = getattr(exc.orig, "pgcode", None)
    if pgcode == "23503":
        return True
    return "foreign key" in str(exc.orig).lower()


def is_unique_violation(exc: IntegrityError) -> bool:
    pgcode = getattr(exc.orig, "pgcode", None)
    if pgcode == "23505":
        return True
    return "unique" in str(exc.orig).lower()


def translate_integrity_error(exc: IntegrityError) -> RecruitDeskError:
    """Map a store integrity failure onto the API taxonomy."""
    if is_foreign_key_violation(exc):
        return InvalidReference("Operation failed: a referenced id is not valid or does not exist.")
    if is_unique_violation(exc):
        return Conflict("Operation failed: the record already exists.")
    return InternalError()
