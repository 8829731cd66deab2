"""Inquiry domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel

from ...schemas import RequestModel


class InquiryCreate(RequestModel):
    """Contact form submission; every field is optional"""

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None
    status: Optional[str] = None


class InquiryUpdate(RequestModel):
    status: Optional[str] = None


class InquiryResponse(BaseModel):
    """Schema for inquiry response; status is pending or responded"""

    id: str
    userId: Optional[str] = None
    name: str
    email: str
    service: str
    message: str
    timestamp: int
    status: str


class InquiryStatusResponse(BaseModel):
    ok: bool
    status: str
