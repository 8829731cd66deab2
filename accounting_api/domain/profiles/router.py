"""Profile router - FastAPI endpoints for client profiles"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...dto import profile_to_dto
from .schemas import ProfileResponse, ProfileUpdate
from .service import ProfileService

router = APIRouter(prefix="/profiles", tags=["Profiles"])


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    return ProfileService(db)


@router.get("", response_model=list[ProfileResponse])
async def get_profiles(service: ProfileService = Depends(get_profile_service)):
    """All profiles, most recently updated first"""
    return [profile_to_dto(p) for p in service.list_profiles()]


@router.get("/{email}", response_model=ProfileResponse)
async def get_profile(email: str, service: ProfileService = Depends(get_profile_service)):
    """
    Get a profile by email.

    Read-or-provision: an unknown email gets a user and an empty profile.
    """
    return profile_to_dto(service.get_or_provision(email))


@router.put("/{email}", response_model=ProfileResponse)
async def update_profile(
    email: str,
    data: ProfileUpdate,
    service: ProfileService = Depends(get_profile_service),
):
    """Replace the editable fields of a profile"""
    return profile_to_dto(service.update_profile(email, data))
