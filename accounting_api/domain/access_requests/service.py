"""Client access request service - USER to CLIENT upgrade workflow"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session, joinedload

from ...models import ClientAccessRequest, utcnow
from ...schemas import text
from ...shared.normalizers import normalize_access_request_status
from ..users.service import ensure_user
from .schemas import AccessRequestCreate, AccessRequestDecision

logger = logging.getLogger(__name__)


class AccessRequestService:
    """Service layer for client access requests"""

    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(ClientAccessRequest).options(joinedload(ClientAccessRequest.decided_by))

    def list_requests(self, email: Optional[str] = None, status: Optional[str] = None) -> list[ClientAccessRequest]:
        query = self._query()
        if text(email):
            query = query.filter(ClientAccessRequest.requested_email == text(email))
        if status:
            query = query.filter(ClientAccessRequest.status == normalize_access_request_status(status))
        return query.order_by(ClientAccessRequest.created_at.desc()).all()

    def submit(self, data: AccessRequestCreate) -> ClientAccessRequest:
        """
        Record a request and mark the user CLIENT_PENDING.

        A second submission while one is still pending returns the pending
        request unchanged.
        """
        email = data.email
        name = text(data.name)
        user = ensure_user(self.db, email, name=name, role="client_pending")

        existing = (
            self._query()
            .filter(
                ClientAccessRequest.requested_email == email,
                ClientAccessRequest.status == "PENDING",
            )
            .order_by(ClientAccessRequest.created_at.desc())
            .first()
        )
        if existing:
            self.db.commit()
            return existing

        request = ClientAccessRequest(
            user=user,
            requested_name=name or user.name or email,
            requested_email=email,
            reason=data.reason or "",
            status="PENDING",
        )
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)
        logger.info(f"Client access requested by {email}")
        return request

    def decide(self, request_id: str, data: AccessRequestDecision) -> ClientAccessRequest:
        request_id = text(request_id)
        if not request_id:
            raise HTTPException(status_code=400, detail="id is required")

        decision = normalize_access_request_status(data.status or data.decision)
        if decision == "PENDING":
            raise HTTPException(status_code=400, detail="decision must be approved or rejected")

        request = self._query().filter(ClientAccessRequest.id == request_id).first()
        if not request:
            raise HTTPException(status_code=404, detail="Access request not found")

        decided_by_email = text(data.decidedByEmail)
        request.decided_by = (
            ensure_user(self.db, decided_by_email, default_role="admin") if decided_by_email else None
        )
        request.status = decision
        request.decided_at = utcnow()
        request.user.role = "CLIENT" if decision == "APPROVED" else "USER"

        self.db.commit()
        self.db.refresh(request)
        logger.info(f"Access request {request.id} for {request.requested_email} {decision.lower()}")
        return request
