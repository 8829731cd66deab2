"""User domain schemas - Pydantic models for responses"""

from pydantic import BaseModel


class UserResponse(BaseModel):
    """Schema for user response; timestamps are epoch milliseconds"""

    id: str
    email: str
    name: str
    role: str
    createdAt: int
    updatedAt: int
