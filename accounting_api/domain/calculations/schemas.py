"""Calculation domain schemas - Pydantic models for validation"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import RequestModel, require_text


class CalculationCreate(RequestModel):
    """Schema for saving a calculator report"""

    id: Optional[str] = None
    userEmail: Optional[str] = Field(default=None, validate_default=True)
    userName: Optional[str] = None
    name: Optional[str] = None
    userRole: Optional[str] = None
    role: Optional[str] = None
    type: Optional[str] = Field(default=None, validate_default=True)
    label: Optional[str] = None
    inputs: Any = None
    results: Any = None
    timestamp: Optional[float] = None

    @field_validator("userEmail")
    @classmethod
    def validate_user_email(cls, v):
        return require_text(v, "userEmail")

    @field_validator("type")
    @classmethod
    def validate_type(cls, v):
        return require_text(v, "type")


class CalculationResponse(BaseModel):
    """Schema for calculation response; userEmail is omitted when unknown"""

    id: str
    userName: str
    userEmail: Optional[str] = None
    label: str
    type: str
    timestamp: int
    inputs: Any = None
    results: Any = None
