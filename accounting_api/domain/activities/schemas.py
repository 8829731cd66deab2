"""Activity domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel

from ...schemas import RequestModel


class ActivityCreate(RequestModel):
    id: Optional[str] = None
    userName: Optional[str] = None
    userEmail: Optional[str] = None
    action: Optional[str] = None
    details: Optional[str] = None


class ActivityResponse(BaseModel):
    id: str
    userName: str
    userEmail: str
    action: str
    details: str
    timestamp: int
