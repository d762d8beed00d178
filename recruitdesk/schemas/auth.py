"""
Pydantic schemas for authentication endpoints.
"""
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request schema for operator login."""
    username: str = Field(..., min_length=1, max_length=150, description="Operator username")
    password: str = Field(..., min_length=1, description="Operator password")

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "admin",
                "password": "password123"
            }
        }
    }


class TokenResponse(BaseModel):
    """Bearer token issued on login; valid for one hour."""
    token: str = Field(..., description="Signed JWT")
    token_type: str = Field("bearer", description="Always 'bearer'")
    expires_in: int = Field(..., description="Lifetime in seconds")
