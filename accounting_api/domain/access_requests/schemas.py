"""Client access request schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import RequestModel, require_text


class AccessRequestCreate(RequestModel):
    """A user asking to be upgraded to the client role"""

    email: Optional[str] = Field(default=None, validate_default=True)
    name: Optional[str] = None
    reason: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return require_text(v, "email")


class AccessRequestDecision(RequestModel):
    """``status`` and ``decision`` are aliases; ``status`` wins when both are sent"""

    status: Optional[str] = None
    decision: Optional[str] = None
    decidedByEmail: Optional[str] = None


class AccessRequestResponse(BaseModel):
    """Schema for access request response; decision fields appear once decided"""

    id: str
    email: str
    name: str
    reason: str
    status: str
    createdAt: int
    decidedAt: Optional[int] = None
    decidedByEmail: Optional[str] = None
