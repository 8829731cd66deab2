"""Inquiry service - contact form submissions"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Inquiry
from ...schemas import text
from ...shared.normalizers import normalize_inquiry_status
from .schemas import InquiryCreate, InquiryUpdate

logger = logging.getLogger(__name__)


class InquiryService:
    """Service layer for inquiries"""

    def __init__(self, db: Session):
        self.db = db

    def list_inquiries(self, email: Optional[str] = None, status: Optional[str] = None) -> list[Inquiry]:
        query = self.db.query(Inquiry)
        if text(email):
            query = query.filter(Inquiry.email == text(email))
        if status:
            query = query.filter(Inquiry.status == normalize_inquiry_status(status))
        return query.order_by(Inquiry.created_at.desc()).all()

    def create_inquiry(self, data: InquiryCreate) -> Inquiry:
        inquiry = Inquiry(
            name=data.name or "",
            email=data.email or "",
            service=data.service or "",
            message=data.message or "",
            status=normalize_inquiry_status(data.status),
        )
        if data.id:
            inquiry.id = data.id

        self.db.add(inquiry)
        self.db.commit()
        self.db.refresh(inquiry)
        logger.info(f"New inquiry {inquiry.id} from {inquiry.email or 'anonymous'}")
        return inquiry

    def update_inquiry(self, inquiry_id: str, data: InquiryUpdate) -> dict:
        inquiry = self.db.get(Inquiry, text(inquiry_id))
        if not inquiry:
            raise HTTPException(status_code=404, detail="Inquiry not found")

        if data.provided("status"):
            inquiry.status = normalize_inquiry_status(data.status)
        self.db.commit()
        return {"ok": True, "status": inquiry.status}
