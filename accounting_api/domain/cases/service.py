"""Case service - Business logic for tax cases and their tasks"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import CaseTask, TaxCase, User
from ...shared.normalizers import normalize_case_status, normalize_task_status
from ...shared.timestamps import from_millis
from ...schemas import text
from ..users.repository import UserRepository
from ..users.service import ensure_user
from .repository import CaseRepository
from .schemas import CaseCreate, CaseTaskInput, CaseUpdate, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "New Case"
DEFAULT_SERVICE = "Income Tax Filing"

# Checklist seeded into a new case when the caller sends no tasks
GST_TASKS = ("Collect sales invoices", "Collect purchase invoices", "Reconcile input credits")
AUDIT_TASKS = (
    "Collect financial statements",
    "Collect ledger exports",
    "Prepare audit checklist",
)
TDS_TASKS = ("Collect payment list", "Confirm section & rates", "Prepare return data")
INCOME_TAX_TASKS = (
    "Collect Form 16 / salary details",
    "Collect bank interest statements",
    "Collect deduction proofs (80C/80D)",
)


def default_task_titles(service: Optional[str]) -> tuple[str, ...]:
    s = (service or "").lower()
    if "gst" in s:
        return GST_TASKS
    if "audit" in s:
        return AUDIT_TASKS
    if "tds" in s:
        return TDS_TASKS
    return INCOME_TAX_TASKS


def resolve_staff(db: Session, email: Optional[str]) -> Optional[User]:
    """Assignees are provisioned as employees when first seen"""
    email = text(email)
    if not email:
        return None
    return ensure_user(db, email, default_role="employee")


def build_task(task: CaseTaskInput) -> CaseTask:
    row = CaseTask(
        title=task.title or "",
        status=normalize_task_status(task.status),
        due_at=from_millis(task.dueAt),
    )
    if task.id:
        row.id = task.id
    created_at = from_millis(task.createdAt)
    if created_at:
        row.created_at = created_at
    return row


class CaseService:
    """Service layer for case business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = CaseRepository()

    def get_case(self, case_id: str) -> TaxCase:
        tax_case = self.repo.get_case(self.db, text(case_id))
        if not tax_case:
            raise HTTPException(status_code=404, detail="Case not found")
        return tax_case

    def list_cases(
        self,
        client_email: Optional[str] = None,
        assignee_email: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[TaxCase]:
        # An email filter naming an unknown user does not narrow the result
        client = UserRepository.get_by_email(self.db, text(client_email)) if text(client_email) else None
        assignee = (
            UserRepository.get_by_email(self.db, text(assignee_email)) if text(assignee_email) else None
        )
        return self.repo.list_cases(
            self.db,
            client_id=client.id if client else None,
            assignee_id=assignee.id if assignee else None,
            status=normalize_case_status(status) if status else None,
        )

    def create_case(self, data: CaseCreate) -> TaxCase:
        client = ensure_user(
            self.db,
            data.clientEmail,
            name=data.clientName or data.userName,
            default_role="user",
        )
        assigned_to = resolve_staff(self.db, data.assignedToEmail)
        service = text(data.service, DEFAULT_SERVICE)

        inline_tasks = [t for t in data.tasks or [] if t is not None]
        if not inline_tasks:
            inline_tasks = [CaseTaskInput(title=title) for title in default_task_titles(service)]

        case_data = {
            "client": client,
            "assigned_to": assigned_to,
            "title": text(data.title, DEFAULT_TITLE),
            "service": service,
            "status": normalize_case_status(data.status) if data.status else "NEW",
            "provided_data": data.providedData if data.providedData is not None else {},
            "tasks": [build_task(t) for t in inline_tasks],
        }
        if data.id:
            case_data["id"] = data.id

        tax_case = self.repo.create_case(self.db, **case_data)
        self.db.commit()
        logger.info(f"Opened case {tax_case.id} ({service}) for {client.email}")
        return self.get_case(tax_case.id)

    def update_case(self, case_id: str, data: CaseUpdate) -> TaxCase:
        tax_case = self.get_case(case_id)

        if data.provided("title"):
            tax_case.title = data.title or ""
        if data.provided("service"):
            tax_case.service = data.service or ""
        if data.provided("status"):
            tax_case.status = normalize_case_status(data.status)
        if data.provided("providedData"):
            tax_case.provided_data = data.providedData if data.providedData is not None else {}
        if data.provided("assignedToEmail"):
            # Empty string unassigns the case
            tax_case.assigned_to = resolve_staff(self.db, data.assignedToEmail)

        self.db.commit()
        logger.info(f"Updated case {tax_case.id}")
        return self.get_case(tax_case.id)

    def create_task(self, case_id: str, data: TaskCreate) -> CaseTask:
        tax_case = self.get_case(case_id)

        task_data = {
            "case_id": tax_case.id,
            "title": data.title or "",
            "status": normalize_task_status(data.status),
            "assignee": resolve_staff(self.db, data.assigneeEmail),
            "due_at": from_millis(data.dueAt),
        }
        if data.id:
            task_data["id"] = data.id
        created_at = from_millis(data.createdAt)
        if created_at:
            task_data["created_at"] = created_at

        task = self.repo.create_task(self.db, **task_data)
        self.db.commit()
        self.db.refresh(task)
        return task

    def update_task(self, case_id: str, task_id: str, data: TaskUpdate) -> CaseTask:
        task = self.repo.get_task(self.db, text(task_id))
        if not task:
            raise HTTPException(status_code=404, detail="Task not found")
        if task.case_id != text(case_id):
            raise HTTPException(status_code=400, detail="Task does not belong to caseId")

        if data.provided("title"):
            task.title = data.title or ""
        if data.provided("status"):
            task.status = normalize_task_status(data.status)
        if data.provided("assigneeEmail"):
            task.assignee = resolve_staff(self.db, data.assigneeEmail)
        if data.provided("dueAt"):
            task.due_at = from_millis(data.dueAt)

        self.db.commit()
        self.db.refresh(task)
        return task
