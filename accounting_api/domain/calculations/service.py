"""Calculation service - saved calculator reports"""

import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import CALCULATIONS_DEFAULT_TAKE, CALCULATIONS_MAX_TAKE
from ...models import Calculation
from ...shared.pagination import clamp
from ...shared.timestamps import from_millis
from ..users.repository import UserRepository
from ..users.service import ensure_user
from .repository import CalculationRepository
from .schemas import CalculationCreate

logger = logging.getLogger(__name__)


class CalculationService:
    """Service layer for calculation business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CalculationRepository()

    def list_calculations(
        self, email: str = "", take: int = CALCULATIONS_DEFAULT_TAKE, skip: int = 0
    ) -> list[Calculation]:
        take = clamp(take, 1, CALCULATIONS_MAX_TAKE)
        skip = max(skip, 0)

        email = (email or "").strip()
        if email:
            user = UserRepository.get_by_email(self.db, email)
            if user is None:
                return []
            return self.repo.list_recent(self.db, user.id, take, skip)

        return self.repo.list_recent(self.db, take=take, skip=skip)

    def create_calculation(self, data: CalculationCreate) -> Calculation:
        user = ensure_user(
            self.db,
            data.userEmail,
            name=data.userName or data.name,
            role=data.userRole or data.role,
        )

        calculation_data = {
            "user": user,
            "type": data.type,
            "label": (data.label or "").strip() or "Report",
            "inputs": data.inputs if data.inputs is not None else {},
            "results": data.results if data.results is not None else {},
            "source_timestamp": from_millis(data.timestamp),
        }
        if data.id:
            calculation_data["id"] = data.id

        calculation = self.repo.create(self.db, **calculation_data)
        self.db.commit()
        self.db.refresh(calculation)
        logger.info(f"Saved {calculation.type} calculation {calculation.id} for {user.email}")
        return calculation

    def delete_calculation(self, calculation_id: str) -> dict:
        calculation_id = (calculation_id or "").strip()
        if not calculation_id:
            raise HTTPException(status_code=400, detail="id is required")

        calculation = self.repo.get_by_id(self.db, calculation_id)
        if not calculation:
            raise HTTPException(status_code=404, detail="Calculation not found")

        self.repo.delete(self.db, calculation)
        self.db.commit()
        return {"ok": True}
