"""
Legacy import service

Re-populates the database from a browser export. Entities are processed in
dependency order (users, profiles, calculations, inquiries, activities,
cases with their children, access requests) inside one transaction: either
the whole export lands or nothing does.

Rows upsert by id, so importing the same export twice leaves one copy of
everything. Elements exported without an id are keyed by a hash of their
content, so identical id-less elements collapse into one row. Case
children are authoritative: the stored documents, appointments, invoices,
tasks and notes of an imported case are replaced by the ones in the export.
"""

import hashlib
import json
import logging
from typing import Optional, TypeVar

from sqlalchemy.orm import Session

from ...database import Base
from ...models import (
    Activity,
    Calculation,
    CaseAppointment,
    CaseInternalNote,
    CaseInvoice,
    CaseTask,
    ClientAccessRequest,
    Document,
    Inquiry,
    TaxCase,
    User,
    generate_id,
)
from ...schemas import RequestModel, text
from ...shared.normalizers import (
    normalize_access_request_status,
    normalize_appointment_mode,
    normalize_appointment_status,
    normalize_case_status,
    normalize_inquiry_status,
    normalize_invoice_status,
    normalize_task_status,
)
from ...shared.timestamps import from_millis, now_millis
from ..profiles.service import notification_flags, upsert_profile
from ..users.service import ensure_user
from .schemas import (
    LegacyAccessRequest,
    LegacyActivity,
    LegacyCalculation,
    LegacyCase,
    LegacyInquiry,
    LocalExport,
)

logger = logging.getLogger(__name__)

LEGACY_STORAGE_KEY = "legacy:indexeddb"

ModelT = TypeVar("ModelT", bound=Base)

CASE_CHILDREN = {"documents", "appointments", "invoices", "tasks", "internalNotes"}


def legacy_id(kind: str, element: RequestModel, exclude: Optional[set[str]] = None) -> str:
    """Content-derived id for an exported element that carries none"""
    payload = json.dumps(
        element.model_dump(mode="json", exclude=exclude), sort_keys=True, separators=(",", ":")
    )
    return f"legacy-{kind}-{hashlib.sha1(payload.encode()).hexdigest()}"


def empty_summary() -> dict:
    return {
        "users": 0,
        "profiles": 0,
        "cases": 0,
        "calculations": 0,
        "inquiries": 0,
        "activities": 0,
        "clientAccessRequests": 0,
    }


class LegacyImportService:
    """Imports a local-storage export in a single transaction"""

    def __init__(self, db: Session):
        self.db = db

    def run(self, export: LocalExport) -> dict:
        summary = empty_summary()
        try:
            for u in export.users:
                if not text(u.email):
                    continue
                ensure_user(self.db, text(u.email), name=u.name, role=u.role)
                summary["users"] += 1

            for p in export.profiles:
                if not text(p.email):
                    continue
                user = ensure_user(self.db, text(p.email), name=p.name, role=p.role)
                fields = {
                    "phone": p.phone or "",
                    "whatsapp": p.whatsapp or "",
                    "address": p.address or "",
                    "pan": p.pan or "",
                    "aadhaar": p.aadhaar or "",
                    **notification_flags(p.notificationPrefs),
                }
                upsert_profile(
                    self.db,
                    user,
                    fields,
                    created_at=from_millis(p.createdAt),
                    updated_at=from_millis(p.updatedAt),
                )
                summary["profiles"] += 1

            for c in export.calculations:
                if self._import_calculation(c):
                    summary["calculations"] += 1

            for i in export.inquiries:
                if self._import_inquiry(i):
                    summary["inquiries"] += 1

            for a in export.activities:
                self._import_activity(a)
                summary["activities"] += 1

            for c in export.cases:
                if self._import_case(c):
                    summary["cases"] += 1

            for r in export.clientAccessRequests:
                if self._import_access_request(r):
                    summary["clientAccessRequests"] += 1

            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Legacy import failed, nothing was written: {e}")
            raise

        logger.info(f"Legacy import finished: {summary}")
        return {"ok": True, "summary": summary}

    def _upsert(self, model: type[ModelT], row_id: str) -> ModelT:
        """Existing row with this id, or a new pending one"""
        row = self.db.get(model, row_id)
        if row is None:
            row = model(id=row_id)
            self.db.add(row)
        return row

    def _import_calculation(self, c: LegacyCalculation) -> bool:
        email = text(c.userEmail)
        if not text(c.type) or not email:
            logger.debug(f"Skipping calculation {c.id}: missing type or userEmail")
            return False

        user = ensure_user(self.db, email, name=c.userName or c.name)
        ts = from_millis(c.timestamp)

        row = self._upsert(Calculation, c.id or legacy_id("calculation", c))
        row.user = user
        row.type = text(c.type)
        row.label = c.label or "Report"
        row.inputs = c.inputs if c.inputs is not None else {}
        row.results = c.results if c.results is not None else {}
        row.source_timestamp = ts
        if ts:
            if row.created_at is None:
                row.created_at = ts
            row.updated_at = ts
        self.db.flush()
        return True

    def _import_inquiry(self, i: LegacyInquiry) -> bool:
        if not text(i.email):
            logger.debug(f"Skipping inquiry {i.id}: missing email")
            return False

        ts = from_millis(i.timestamp)
        row = self._upsert(Inquiry, i.id or legacy_id("inquiry", i))
        row.name = i.name or ""
        row.email = text(i.email)
        row.service = i.service or ""
        row.message = i.message or ""
        row.status = normalize_inquiry_status(i.status)
        if ts:
            if row.created_at is None:
                row.created_at = ts
            row.updated_at = ts
        self.db.flush()
        return True

    def _import_activity(self, a: LegacyActivity) -> None:
        row = self._upsert(Activity, a.id or legacy_id("activity", a))
        row.user_name = a.userName or "User"
        row.user_email = a.userEmail or ""
        row.action = a.action or ""
        row.details = a.details or ""
        ts = from_millis(a.timestamp)
        if ts:
            row.created_at = ts
        self.db.flush()

    def _staff(self, email: Optional[str], name: Optional[str] = None) -> Optional[User]:
        email = text(email)
        if not email:
            return None
        return ensure_user(self.db, email, name=name, default_role="employee")

    def _import_case(self, c: LegacyCase) -> bool:
        if not text(c.clientEmail):
            logger.debug(f"Skipping case {c.id}: missing clientEmail")
            return False

        client = ensure_user(self.db, text(c.clientEmail), name=c.clientName, default_role="user")
        tax_case = self._upsert(TaxCase, c.id or legacy_id("case", c, exclude=CASE_CHILDREN))
        tax_case.client = client
        tax_case.assigned_to = self._staff(c.assignedToEmail)
        tax_case.title = c.title or "New Case"
        tax_case.service = c.service or "Income Tax Filing"
        tax_case.status = normalize_case_status(c.status)
        tax_case.provided_data = c.providedData if c.providedData is not None else {}
        created_at = from_millis(c.createdAt)
        if created_at:
            tax_case.created_at = created_at
        updated_at = from_millis(c.updatedAt)
        if updated_at:
            tax_case.updated_at = updated_at

        # Drop the stored children first so re-imported ids can be inserted again
        tax_case.documents = []
        tax_case.appointments = []
        tax_case.invoices = []
        tax_case.tasks = []
        tax_case.internal_notes = []
        self.db.flush()

        tax_case.documents = [
            self._with_optional(
                Document(
                    id=d.id or generate_id(),
                    kind="CASE",
                    owner=client,
                    name=d.name or "Document",
                    mime_type=d.type or "application/octet-stream",
                    size=int(d.size or 0),
                    storage_key=LEGACY_STORAGE_KEY,
                ),
                uploaded_at=from_millis(d.uploadedAt),
            )
            for d in c.documents
        ]
        tax_case.appointments = [
            self._with_optional(
                CaseAppointment(
                    id=a.id or generate_id(),
                    preferred_date=a.preferredDate or "",
                    preferred_time=a.preferredTime or "",
                    mode=normalize_appointment_mode(a.mode),
                    notes=a.notes or "",
                    status=normalize_appointment_status(a.status),
                    scheduled_for=a.scheduledFor or None,
                ),
                requested_at=from_millis(a.requestedAt),
            )
            for a in c.appointments
        ]
        tax_case.invoices = [
            self._with_optional(
                CaseInvoice(
                    id=inv.id or generate_id(),
                    number=inv.number or f"INV-{now_millis()}",
                    due_date=inv.dueDate or "",
                    currency=inv.currency or "INR",
                    amount=inv.amount or 0,
                    description=inv.description or "",
                    status=normalize_invoice_status(inv.status),
                    payment_link=inv.paymentLink or "",
                ),
                created_at=from_millis(inv.createdAt),
            )
            for inv in c.invoices
        ]
        tax_case.tasks = [
            self._with_optional(
                CaseTask(
                    id=t.id or generate_id(),
                    title=t.title or "",
                    status=normalize_task_status(t.status),
                    assignee=self._staff(t.assigneeEmail),
                    due_at=from_millis(t.dueAt),
                ),
                created_at=from_millis(t.createdAt),
            )
            for t in c.tasks
        ]
        tax_case.internal_notes = [
            self._with_optional(
                CaseInternalNote(
                    id=n.id or generate_id(),
                    author=self._staff(n.authorEmail, name=n.authorName),
                    author_email=text(n.authorEmail),
                    author_name=n.authorName or text(n.authorEmail) or "Staff",
                    text=n.text or "",
                ),
                created_at=from_millis(n.createdAt),
            )
            for n in c.internalNotes
        ]
        self.db.flush()
        return True

    @staticmethod
    def _with_optional(row: ModelT, **timestamps) -> ModelT:
        """Apply exported timestamps; absent ones keep the column default"""
        for key, value in timestamps.items():
            if value is not None:
                setattr(row, key, value)
        return row

    def _import_access_request(self, r: LegacyAccessRequest) -> bool:
        email = text(r.email)
        if not email:
            logger.debug(f"Skipping access request {r.id}: missing email")
            return False

        status = normalize_access_request_status(r.status)
        role = {"APPROVED": "client", "PENDING": "client_pending"}.get(status, "user")
        requester = ensure_user(self.db, email, name=r.name, role=role)

        decided_by_email = text(r.decidedByEmail)
        decided_by = (
            ensure_user(self.db, decided_by_email, default_role="admin") if decided_by_email else None
        )

        if r.id:
            request_id = r.id
        elif r.createdAt:
            request_id = f"legacy-{requester.id}-{int(r.createdAt)}"
        else:
            request_id = legacy_id("access-request", r)
        row = self._upsert(ClientAccessRequest, request_id)
        row.user = requester
        row.requested_name = r.name or requester.name or requester.email
        row.requested_email = email
        row.reason = r.reason or ""
        row.status = status
        row.decided_at = from_millis(r.decidedAt)
        row.decided_by = decided_by
        created_at = from_millis(r.createdAt)
        if created_at:
            row.created_at = created_at
        self.db.flush()
        return True
