"""User router - FastAPI endpoints for user listing"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...dto import user_to_dto
from .schemas import UserResponse
from .service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


@router.get("", response_model=list[UserResponse])
async def get_users(
    role: Optional[str] = Query(None, description="Filter by role (admin, employee, client, ...)"),
    service: UserService = Depends(get_user_service),
):
    """List users, newest first"""
    return [user_to_dto(u) for u in service.list_users(role)]
