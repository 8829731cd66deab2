"""Case repository - Database operations for tax cases and their tasks"""

from typing import Optional

from sqlalchemy.orm import Query, Session, joinedload, selectinload

from ...models import CaseTask, TaxCase


def case_query(db: Session) -> Query:
    """Cases with every relation the case DTO reads"""
    return db.query(TaxCase).options(
        joinedload(TaxCase.client),
        joinedload(TaxCase.assigned_to),
        selectinload(TaxCase.documents),
        selectinload(TaxCase.appointments),
        selectinload(TaxCase.invoices),
        selectinload(TaxCase.internal_notes),
        selectinload(TaxCase.tasks).joinedload(CaseTask.assignee),
    )


class CaseRepository:
    """Repository for case database operations"""

    @staticmethod
    def get_case(db: Session, case_id: str) -> Optional[TaxCase]:
        return case_query(db).filter(TaxCase.id == case_id).first()

    @staticmethod
    def list_cases(
        db: Session,
        client_id: Optional[str] = None,
        assignee_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[TaxCase]:
        query = case_query(db)
        if client_id:
            query = query.filter(TaxCase.client_id == client_id)
        if assignee_id:
            query = query.filter(TaxCase.assigned_to_user_id == assignee_id)
        if status:
            query = query.filter(TaxCase.status == status)
        return query.order_by(TaxCase.updated_at.desc()).all()

    @staticmethod
    def create_case(db: Session, **case_data) -> TaxCase:
        tax_case = TaxCase(**case_data)
        db.add(tax_case)
        db.flush()
        return tax_case

    @staticmethod
    def get_task(db: Session, task_id: str) -> Optional[CaseTask]:
        return db.query(CaseTask).options(joinedload(CaseTask.assignee)).filter(CaseTask.id == task_id).first()

    @staticmethod
    def create_task(db: Session, **task_data) -> CaseTask:
        task = CaseTask(**task_data)
        db.add(task)
        db.flush()
        return task
