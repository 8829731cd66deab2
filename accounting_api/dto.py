"""
Wire-format mappers

Rows (with their relations loaded) are turned into the camelCase JSON shapes
the web client consumes. Timestamps are epoch milliseconds; a missing required
timestamp is reported as "now" rather than null.
"""

from typing import Any, Optional

from .models import (
    Activity,
    Calculation,
    CaseAppointment,
    CaseInternalNote,
    CaseInvoice,
    CaseTask,
    ClientAccessRequest,
    ClientProfile,
    Document,
    Inquiry,
    TaxCase,
    User,
)
from .shared.timestamps import to_millis, to_millis_or_now


def _drop_none(data: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Omit optional keys whose value is absent"""
    for key in keys:
        if data.get(key) is None:
            data.pop(key, None)
    return data


def user_to_dto(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "createdAt": to_millis_or_now(user.created_at),
        "updatedAt": to_millis_or_now(user.updated_at),
    }


def document_to_dto(document: Document) -> dict:
    return {
        "id": document.id,
        "name": document.name,
        "type": document.mime_type,
        "size": document.size,
        "uploadedAt": to_millis_or_now(document.uploaded_at),
    }


def profile_to_dto(profile: ClientProfile) -> dict:
    return {
        "email": profile.user.email,
        "name": profile.user.name,
        "phone": profile.phone,
        "whatsapp": profile.whatsapp,
        "address": profile.address,
        "pan": profile.pan,
        "aadhaar": profile.aadhaar,
        "aadhaarDocument": (
            document_to_dto(profile.aadhaar_document) if profile.aadhaar_document else None
        ),
        "notificationPrefs": {
            "email": profile.notify_email,
            "whatsapp": profile.notify_whatsapp,
        },
        "createdAt": to_millis_or_now(profile.created_at),
        "updatedAt": to_millis_or_now(profile.updated_at),
    }


def calculation_to_dto(calculation: Calculation) -> dict:
    user = calculation.user
    timestamp = to_millis(calculation.source_timestamp)
    if timestamp is None:
        timestamp = to_millis_or_now(calculation.created_at)

    data = {
        "id": calculation.id,
        "userName": (user.name if user else None) or "User",
        "userEmail": user.email if user else None,
        "label": calculation.label,
        "type": calculation.type,
        "timestamp": timestamp,
        "inputs": calculation.inputs,
        "results": calculation.results,
    }
    return _drop_none(data, "userEmail")


def appointment_to_dto(appointment: CaseAppointment) -> dict:
    data = {
        "id": appointment.id,
        "requestedAt": to_millis_or_now(appointment.requested_at),
        "preferredDate": appointment.preferred_date,
        "preferredTime": appointment.preferred_time,
        "mode": appointment.mode,
        "notes": appointment.notes,
        "status": appointment.status,
        "scheduledFor": appointment.scheduled_for or None,
    }
    return _drop_none(data, "scheduledFor")


def invoice_to_dto(invoice: CaseInvoice) -> dict:
    return {
        "id": invoice.id,
        "number": invoice.number,
        "createdAt": to_millis_or_now(invoice.created_at),
        "dueDate": invoice.due_date,
        "currency": invoice.currency,
        "amount": invoice.amount,
        "description": invoice.description,
        "status": invoice.status,
        "paymentLink": invoice.payment_link,
    }


def note_to_dto(note: CaseInternalNote) -> dict:
    return {
        "id": note.id,
        "authorEmail": note.author_email,
        "authorName": note.author_name,
        "text": note.text,
        "createdAt": to_millis_or_now(note.created_at),
    }


def task_to_dto(task: CaseTask) -> dict:
    data = {
        "id": task.id,
        "title": task.title,
        "status": task.status,
        "assigneeEmail": task.assignee.email if task.assignee else None,
        "createdAt": to_millis_or_now(task.created_at),
        "dueAt": to_millis(task.due_at),
    }
    return _drop_none(data, "assigneeEmail", "dueAt")


def case_to_dto(tax_case: TaxCase) -> dict:
    client = tax_case.client
    assigned_to = tax_case.assigned_to
    return {
        "id": tax_case.id,
        "clientEmail": client.email if client else "",
        "clientName": client.name if client else "",
        "title": tax_case.title,
        "service": tax_case.service,
        "status": tax_case.status,
        "createdAt": to_millis_or_now(tax_case.created_at),
        "updatedAt": to_millis_or_now(tax_case.updated_at),
        "providedData": tax_case.provided_data or {},
        "documents": [document_to_dto(d) for d in tax_case.documents or []],
        "appointments": [appointment_to_dto(a) for a in tax_case.appointments or []],
        "invoices": [invoice_to_dto(i) for i in tax_case.invoices or []],
        "assignedToEmail": assigned_to.email if assigned_to else "",
        "internalNotes": [note_to_dto(n) for n in tax_case.internal_notes or []],
        "tasks": [task_to_dto(t) for t in tax_case.tasks or []],
    }


def inquiry_to_dto(inquiry: Inquiry) -> dict:
    data = {
        "id": inquiry.id,
        "userId": inquiry.user_id,
        "name": inquiry.name,
        "email": inquiry.email,
        "service": inquiry.service,
        "message": inquiry.message,
        "timestamp": to_millis_or_now(inquiry.created_at),
        "status": "responded" if inquiry.status == "RESPONDED" else "pending",
    }
    return _drop_none(data, "userId")


def activity_to_dto(activity: Activity) -> dict:
    return {
        "id": activity.id,
        "userName": activity.user_name,
        "userEmail": activity.user_email,
        "action": activity.action,
        "details": activity.details,
        "timestamp": to_millis_or_now(activity.created_at),
    }


def access_request_to_dto(request: ClientAccessRequest) -> dict:
    decided_by: Optional[User] = request.decided_by
    data = {
        "id": request.id,
        "email": request.requested_email,
        "name": request.requested_name,
        "reason": request.reason or "",
        "status": (request.status or "PENDING").lower(),
        "createdAt": to_millis_or_now(request.created_at),
        "decidedAt": to_millis(request.decided_at),
        "decidedByEmail": (decided_by.email if decided_by else None) or None,
    }
    return _drop_none(data, "decidedAt", "decidedByEmail")


def open_appointment_entry(tax_case: TaxCase, appointment: CaseAppointment) -> dict:
    """Dashboard row for an appointment that is still requested or confirmed"""
    client = tax_case.client
    return {
        "caseId": tax_case.id,
        "caseTitle": tax_case.title,
        "clientName": client.name if client else "",
        "clientEmail": client.email if client else "",
        "date": appointment.scheduled_for
        or f"{appointment.preferred_date} {appointment.preferred_time}",
        "status": appointment.status,
    }
