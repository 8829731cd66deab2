"""Inquiry router - FastAPI endpoints for contact form submissions"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...dto import inquiry_to_dto
from .schemas import InquiryCreate, InquiryResponse, InquiryStatusResponse, InquiryUpdate
from .service import InquiryService

router = APIRouter(prefix="/inquiries", tags=["Inquiries"])


def get_inquiry_service(db: Session = Depends(get_db)) -> InquiryService:
    return InquiryService(db)


@router.get("", response_model=list[InquiryResponse], response_model_exclude_unset=True)
async def get_inquiries(
    email: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    service: InquiryService = Depends(get_inquiry_service),
):
    return [inquiry_to_dto(i) for i in service.list_inquiries(email, status)]


@router.post("", response_model=InquiryResponse, response_model_exclude_unset=True)
async def create_inquiry(data: InquiryCreate, service: InquiryService = Depends(get_inquiry_service)):
    return inquiry_to_dto(service.create_inquiry(data))


@router.patch("/{inquiry_id}", response_model=InquiryStatusResponse)
async def update_inquiry(
    inquiry_id: str,
    data: InquiryUpdate,
    service: InquiryService = Depends(get_inquiry_service),
):
    """Mark an inquiry responded (or back to pending)"""
    return service.update_inquiry(inquiry_id, data)
