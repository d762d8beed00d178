"""
Pydantic schemas for candidate endpoints.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from recruitdesk.schemas.base import CamelModel
from recruitdesk.schemas.review import ReviewResponse
from recruitdesk.schemas.tag import TagResponse

STATUS_PATTERN = "^(pending|reviewed|rejected)$"


class CandidateIngest(BaseModel):
    """Webhook body sent by the intake bot. Field names are the bot's."""
    uuid: Optional[str] = Field(None, description="External correlation id")
    message_body: Optional[str] = Field(None, description="JSON string whose 'payload' is a JSON string of answers")
    sender: Optional[str] = Field(None, description="Sender contact, e.g. phone number")
    tags: Optional[List[str]] = Field(None, description="Tag names to attach, created if unknown")

    model_config = {
        "json_schema_extra": {
            "example": {
                "uuid": "abc-1",
                "message_body": "{\"payload\": \"{\\\"screen_0_TextInput_0\\\": \\\"Ada Lovelace\\\", \\\"screen_0_TextInput_1\\\": \\\"ada@example.com\\\"}\"}",
                "sender": "+391234567"
            }
        }
    }


class IngestResponse(CamelModel):
    status: str = "success"
    message: str = "Candidate data saved successfully"
    candidate_id: int


class CandidateUpdate(CamelModel):
    """Partial operator edit. Only fields present in the body are changed."""
    status: Optional[str] = Field(None, pattern=STATUS_PATTERN)
    full_name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    github_link: Optional[str] = Field(None, max_length=500)


class CandidateResponse(CamelModel):
    id: int
    uuid: str
    sender: str
    status: str
    full_name: str
    email: str
    github_link: Optional[str] = None
    raw_answers: Dict[str, Any]
    created_at: datetime
    updated_at: datetime
    reviews: List[ReviewResponse] = []
    tags: List[TagResponse] = []
