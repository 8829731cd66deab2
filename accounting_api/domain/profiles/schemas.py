"""Profile domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel

from ...schemas import DocumentResponse, RequestModel


class NotificationPrefs(BaseModel):
    email: Optional[bool] = None
    whatsapp: Optional[bool] = None


class ProfileUpdate(RequestModel):
    """Full replacement of the editable profile fields"""

    name: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    address: Optional[str] = None
    pan: Optional[str] = None
    aadhaar: Optional[str] = None
    notificationPrefs: Optional[NotificationPrefs] = None


class NotificationPrefsResponse(BaseModel):
    email: bool
    whatsapp: bool


class ProfileResponse(BaseModel):
    """Schema for profile response"""

    email: str
    name: str
    phone: str
    whatsapp: str
    address: str
    pan: str
    aadhaar: str
    aadhaarDocument: Optional[DocumentResponse] = None
    notificationPrefs: NotificationPrefsResponse
    createdAt: int
    updatedAt: int
