"""Case domain schemas - Pydantic models for validation"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ...schemas import DocumentResponse, RequestModel, require_text


class CaseTaskInput(RequestModel):
    """Task supplied inline when creating a case"""

    id: Optional[str] = None
    title: Optional[str] = None
    status: Optional[str] = None
    createdAt: Optional[float] = None
    dueAt: Optional[float] = None


class CaseCreate(RequestModel):
    """Schema for opening a new case"""

    id: Optional[str] = None
    clientEmail: Optional[str] = Field(default=None, validate_default=True)
    clientName: Optional[str] = None
    userName: Optional[str] = None
    title: Optional[str] = None
    service: Optional[str] = None
    status: Optional[str] = None
    assignedToEmail: Optional[str] = None
    providedData: Any = None
    tasks: Optional[list[Optional[CaseTaskInput]]] = None

    @field_validator("clientEmail")
    @classmethod
    def validate_client_email(cls, v):
        return require_text(v, "clientEmail")

    @field_validator("tasks", mode="before")
    @classmethod
    def validate_tasks(cls, v):
        # Anything but an array means "use the service defaults"
        return v if isinstance(v, list) else None


class CaseUpdate(RequestModel):
    """Partial update; only keys present in the body are applied"""

    title: Optional[str] = None
    service: Optional[str] = None
    status: Optional[str] = None
    providedData: Any = None
    assignedToEmail: Optional[str] = None


class TaskCreate(RequestModel):
    id: Optional[str] = None
    title: Optional[str] = None
    status: Optional[str] = None
    assigneeEmail: Optional[str] = None
    createdAt: Optional[float] = None
    dueAt: Optional[float] = None


class TaskUpdate(RequestModel):
    """Partial update; an explicit null dueAt clears the due date"""

    title: Optional[str] = None
    status: Optional[str] = None
    assigneeEmail: Optional[str] = None
    dueAt: Optional[float] = None


class AppointmentResponse(BaseModel):
    id: str
    requestedAt: int
    preferredDate: str
    preferredTime: str
    mode: str
    notes: str
    status: str
    scheduledFor: Optional[str] = None


class InvoiceResponse(BaseModel):
    id: str
    number: str
    createdAt: int
    dueDate: str
    currency: str
    amount: float
    description: str
    status: str
    paymentLink: str


class InternalNoteResponse(BaseModel):
    id: str
    authorEmail: str
    authorName: str
    text: str
    createdAt: int


class TaskResponse(BaseModel):
    """Schema for task response; assigneeEmail and dueAt are omitted when unset"""

    id: str
    title: str
    status: str
    assigneeEmail: Optional[str] = None
    createdAt: int
    dueAt: Optional[int] = None


class CaseResponse(BaseModel):
    """Schema for case response with all children"""

    id: str
    clientEmail: str
    clientName: str
    title: str
    service: str
    status: str
    createdAt: int
    updatedAt: int
    providedData: Any = None
    documents: list[DocumentResponse]
    appointments: list[AppointmentResponse]
    invoices: list[InvoiceResponse]
    assignedToEmail: str
    internalNotes: list[InternalNoteResponse]
    tasks: list[TaskResponse]
