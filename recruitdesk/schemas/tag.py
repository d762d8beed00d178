"""
Pydantic schemas for tag endpoints.
"""
from typing import List
from pydantic import Field

from recruitdesk.schemas.base import CamelModel


class TagResponse(CamelModel):
    id: int
    name: str


class CandidateTagsUpdate(CamelModel):
    """Replace a candidate's tags. An empty list clears them."""
    tag_ids: List[int] = Field(..., description="Ids of existing tags")
