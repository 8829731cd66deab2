"""
Legacy export schemas

Shapes of the JSON blob the old browser-only app exported from local
storage. Every field is optional; elements that are not objects are dropped
while parsing so one bad entry never rejects the whole export.
"""

from typing import Any, Optional

from pydantic import BaseModel, field_validator

from ...schemas import RequestModel
from ..profiles.schemas import NotificationPrefs


def objects_only(value: Any) -> list:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


class LegacyUser(RequestModel):
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None


class LegacyProfile(RequestModel):
    email: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    address: Optional[str] = None
    pan: Optional[str] = None
    aadhaar: Optional[str] = None
    notificationPrefs: Optional[NotificationPrefs] = None
    createdAt: Optional[float] = None
    updatedAt: Optional[float] = None


class LegacyCalculation(RequestModel):
    id: Optional[str] = None
    userEmail: Optional[str] = None
    userName: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    label: Optional[str] = None
    inputs: Any = None
    results: Any = None
    timestamp: Optional[float] = None


class LegacyInquiry(RequestModel):
    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    service: Optional[str] = None
    message: Optional[str] = None
    status: Optional[str] = None
    timestamp: Optional[float] = None


class LegacyActivity(RequestModel):
    id: Optional[str] = None
    userName: Optional[str] = None
    userEmail: Optional[str] = None
    action: Optional[str] = None
    details: Optional[str] = None
    timestamp: Optional[float] = None


class LegacyDocument(RequestModel):
    """Document metadata only; the blobs stayed in the browser"""

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    size: Optional[float] = None
    uploadedAt: Optional[float] = None


class LegacyAppointment(RequestModel):
    id: Optional[str] = None
    requestedAt: Optional[float] = None
    preferredDate: Optional[str] = None
    preferredTime: Optional[str] = None
    mode: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = None
    scheduledFor: Optional[str] = None


class LegacyInvoice(RequestModel):
    id: Optional[str] = None
    number: Optional[str] = None
    createdAt: Optional[float] = None
    dueDate: Optional[str] = None
    currency: Optional[str] = None
    amount: Optional[float] = None
    description: Optional[str] = None
    status: Optional[str] = None
    paymentLink: Optional[str] = None


class LegacyTask(RequestModel):
    id: Optional[str] = None
    title: Optional[str] = None
    status: Optional[str] = None
    assigneeEmail: Optional[str] = None
    createdAt: Optional[float] = None
    dueAt: Optional[float] = None


class LegacyNote(RequestModel):
    id: Optional[str] = None
    authorEmail: Optional[str] = None
    authorName: Optional[str] = None
    text: Optional[str] = None
    createdAt: Optional[float] = None


class LegacyCase(RequestModel):
    id: Optional[str] = None
    clientEmail: Optional[str] = None
    clientName: Optional[str] = None
    assignedToEmail: Optional[str] = None
    title: Optional[str] = None
    service: Optional[str] = None
    status: Optional[str] = None
    providedData: Any = None
    createdAt: Optional[float] = None
    updatedAt: Optional[float] = None
    documents: list[LegacyDocument] = []
    appointments: list[LegacyAppointment] = []
    invoices: list[LegacyInvoice] = []
    tasks: list[LegacyTask] = []
    internalNotes: list[LegacyNote] = []

    @field_validator("documents", "appointments", "invoices", "tasks", "internalNotes", mode="before")
    @classmethod
    def validate_children(cls, v):
        return objects_only(v)


class LegacyAccessRequest(RequestModel):
    id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    reason: Optional[str] = None
    status: Optional[str] = None
    createdAt: Optional[float] = None
    decidedAt: Optional[float] = None
    decidedByEmail: Optional[str] = None


class LocalExport(RequestModel):
    """Full export blob; any missing or malformed array counts as empty"""

    users: list[LegacyUser] = []
    profiles: list[LegacyProfile] = []
    calculations: list[LegacyCalculation] = []
    inquiries: list[LegacyInquiry] = []
    activities: list[LegacyActivity] = []
    cases: list[LegacyCase] = []
    clientAccessRequests: list[LegacyAccessRequest] = []

    @field_validator(
        "users",
        "profiles",
        "calculations",
        "inquiries",
        "activities",
        "cases",
        "clientAccessRequests",
        mode="before",
    )
    @classmethod
    def validate_arrays(cls, v):
        return objects_only(v)


class ImportSummary(BaseModel):
    users: int
    profiles: int
    cases: int
    calculations: int
    inquiries: int
    activities: int
    clientAccessRequests: int


class ImportResponse(BaseModel):
    ok: bool
    summary: ImportSummary
