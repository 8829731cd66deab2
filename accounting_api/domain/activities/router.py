"""Activity router - FastAPI endpoints for the audit log"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...config import ACTIVITIES_DEFAULT_TAKE
from ...database import get_db
from ...dto import activity_to_dto
from .schemas import ActivityCreate, ActivityResponse
from .service import ActivityService

router = APIRouter(prefix="/activities", tags=["Activities"])


def get_activity_service(db: Session = Depends(get_db)) -> ActivityService:
    return ActivityService(db)


@router.get("", response_model=list[ActivityResponse])
async def get_activities(
    email: Optional[str] = Query(None),
    take: int = Query(ACTIVITIES_DEFAULT_TAKE, description="Clamped to 1..500"),
    service: ActivityService = Depends(get_activity_service),
):
    """Newest entries first"""
    return [activity_to_dto(a) for a in service.list_activities(email, take)]


@router.post("", response_model=ActivityResponse)
async def create_activity(data: ActivityCreate, service: ActivityService = Depends(get_activity_service)):
    return activity_to_dto(service.record(data))
