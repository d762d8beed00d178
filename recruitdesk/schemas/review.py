"""
Pydantic schemas for review endpoints.
"""
from typing import Dict, Optional, Union
from datetime import datetime
from pydantic import Field, StrictBool, StrictFloat, StrictInt

from recruitdesk.schemas.base import CamelModel


class PhaseOneReviewCreate(CamelModel):
    """Phase 1: per-criterion ratings (1-5)."""
    criteria_ratings: Dict[str, StrictInt] = Field(..., description="Criterion id -> rating 1..5")
    notes: Optional[str] = Field(None, description="Free-form reviewer notes")

    model_config = {
        "json_schema_extra": {
            "example": {
                "criteriaRatings": {"technical_skills": 4, "communication": 5},
                "notes": "Solid fundamentals"
            }
        }
    }


class PhaseTwoReviewCreate(CamelModel):
    """Phase 2: final score and hire decision, both supplied by the reviewer."""
    final_score: Union[StrictInt, StrictFloat] = Field(..., description="Final score, typically 1-10")
    hire_decision: StrictBool = Field(..., description="Hire / no hire")
    final_comment: Optional[str] = Field(None, description="Closing comment")


class ReviewResponse(CamelModel):
    id: int
    phase: int
    candidate_id: int
    user_id: int
    criteria_ratings: Optional[Dict[str, int]] = None
    notes: Optional[str] = None
    final_score: Optional[float] = None
    hire_decision: Optional[bool] = None
    final_comment: Optional[str] = None
    created_at: datetime


class CriterionResponse(CamelModel):
    id: str
    label: str
