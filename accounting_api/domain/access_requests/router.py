"""Client access request router - FastAPI endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...dto import access_request_to_dto
from .schemas import AccessRequestCreate, AccessRequestDecision, AccessRequestResponse
from .service import AccessRequestService

router = APIRouter(prefix="/client-access-requests", tags=["Client Access Requests"])


def get_access_request_service(db: Session = Depends(get_db)) -> AccessRequestService:
    return AccessRequestService(db)


@router.get("", response_model=list[AccessRequestResponse], response_model_exclude_unset=True)
async def get_access_requests(
    email: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    service: AccessRequestService = Depends(get_access_request_service),
):
    return [access_request_to_dto(r) for r in service.list_requests(email, status)]


@router.post("", response_model=AccessRequestResponse, response_model_exclude_unset=True)
async def submit_access_request(
    data: AccessRequestCreate,
    service: AccessRequestService = Depends(get_access_request_service),
):
    return access_request_to_dto(service.submit(data))


@router.patch("/{request_id}", response_model=AccessRequestResponse, response_model_exclude_unset=True)
async def decide_access_request(
    request_id: str,
    data: AccessRequestDecision,
    service: AccessRequestService = Depends(get_access_request_service),
):
    """Approve or reject; the requester's role follows the decision"""
    return access_request_to_dto(service.decide(request_id, data))
