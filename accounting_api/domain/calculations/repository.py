"""Calculation repository - Database operations for saved reports"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Calculation


class CalculationRepository:
    """Repository for calculation database operations"""

    @staticmethod
    def list_recent(
        db: Session, user_id: Optional[str] = None, take: int = 50, skip: int = 0
    ) -> list[Calculation]:
        query = db.query(Calculation).options(joinedload(Calculation.user))
        if user_id is not None:
            query = query.filter(Calculation.user_id == user_id)
        return query.order_by(Calculation.created_at.desc()).offset(skip).limit(take).all()

    @staticmethod
    def get_by_id(db: Session, calculation_id: str) -> Optional[Calculation]:
        return db.get(Calculation, calculation_id)

    @staticmethod
    def create(db: Session, **calculation_data) -> Calculation:
        calculation = Calculation(**calculation_data)
        db.add(calculation)
        db.flush()
        return calculation

    @staticmethod
    def delete(db: Session, calculation: Calculation) -> None:
        db.delete(calculation)
        db.flush()
