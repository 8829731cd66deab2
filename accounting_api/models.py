import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from .database import Base


def generate_id():
    """Generate a string primary key for rows created without a supplied id"""
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(64), primary_key=True, default=generate_id)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False, default="User")
    # ADMIN, EMPLOYEE, CLIENT, CLIENT_PENDING, USER
    role = Column(String(20), nullable=False, default="USER", index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    profile = relationship("ClientProfile", back_populates="user", uselist=False)
    calculations = relationship("Calculation", back_populates="user")


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(64), primary_key=True, default=generate_id)
    kind = Column(String(20), nullable=False, default="CASE")  # CASE, AADHAAR
    case_id = Column(String(64), ForeignKey("tax_cases.id"), nullable=True, index=True)
    owner_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    name = Column(String(255), nullable=False, default="Document")
    mime_type = Column(String(255), nullable=False, default="application/octet-stream")
    size = Column(Integer, nullable=False, default=0)
    storage_key = Column(String(500), nullable=False)  # "legacy:indexeddb" for imported rows
    uploaded_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    tax_case = relationship("TaxCase", back_populates="documents")
    owner = relationship("User")


class ClientProfile(Base):
    __tablename__ = "client_profiles"

    id = Column(String(64), primary_key=True, default=generate_id)
    user_id = Column(String(64), ForeignKey("users.id"), unique=True, nullable=False)
    phone = Column(String(50), nullable=False, default="")
    whatsapp = Column(String(50), nullable=False, default="")
    address = Column(Text, nullable=False, default="")
    pan = Column(String(20), nullable=False, default="")
    aadhaar = Column(String(20), nullable=False, default="")
    aadhaar_document_id = Column(String(64), ForeignKey("documents.id"), nullable=True)
    notify_email = Column(Boolean, nullable=False, default=True)
    notify_whatsapp = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="profile")
    aadhaar_document = relationship("Document", foreign_keys=[aadhaar_document_id])


class TaxCase(Base):
    __tablename__ = "tax_cases"

    id = Column(String(64), primary_key=True, default=generate_id)
    client_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    assigned_to_user_id = Column(String(64), ForeignKey("users.id"), nullable=True, index=True)
    title = Column(String(255), nullable=False, default="New Case")
    service = Column(String(255), nullable=False, default="Income Tax Filing")
    # NEW, IN_REVIEW, WAITING_ON_CLIENT, SCHEDULED, ON_HOLD, COMPLETED
    status = Column(String(30), nullable=False, default="NEW", index=True)
    provided_data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    client = relationship("User", foreign_keys=[client_id])
    assigned_to = relationship("User", foreign_keys=[assigned_to_user_id])

    # Children are owned by the case; replacing a collection deletes the old rows
    documents = relationship(
        "Document",
        back_populates="tax_case",
        cascade="all, delete-orphan",
        order_by="Document.uploaded_at",
    )
    appointments = relationship(
        "CaseAppointment",
        back_populates="tax_case",
        cascade="all, delete-orphan",
        order_by="CaseAppointment.requested_at",
    )
    invoices = relationship(
        "CaseInvoice",
        back_populates="tax_case",
        cascade="all, delete-orphan",
        order_by="CaseInvoice.created_at",
    )
    tasks = relationship(
        "CaseTask",
        back_populates="tax_case",
        cascade="all, delete-orphan",
        order_by="CaseTask.created_at",
    )
    internal_notes = relationship(
        "CaseInternalNote",
        back_populates="tax_case",
        cascade="all, delete-orphan",
        order_by="CaseInternalNote.created_at",
    )


class CaseAppointment(Base):
    __tablename__ = "case_appointments"

    id = Column(String(64), primary_key=True, default=generate_id)
    case_id = Column(String(64), ForeignKey("tax_cases.id"), nullable=False, index=True)
    requested_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    preferred_date = Column(String(50), nullable=False, default="")
    preferred_time = Column(String(50), nullable=False, default="")
    mode = Column(String(20), nullable=False, default="CALL")  # CALL, VIDEO, IN_PERSON
    notes = Column(Text, nullable=False, default="")
    # REQUESTED, CONFIRMED, COMPLETED, CANCELLED
    status = Column(String(20), nullable=False, default="REQUESTED")
    scheduled_for = Column(String(100), nullable=True)  # Free text, e.g. "2024-07-01 10:30"

    tax_case = relationship("TaxCase", back_populates="appointments")


class CaseInvoice(Base):
    __tablename__ = "case_invoices"

    id = Column(String(64), primary_key=True, default=generate_id)
    case_id = Column(String(64), ForeignKey("tax_cases.id"), nullable=False, index=True)
    number = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    due_date = Column(String(50), nullable=False, default="")
    currency = Column(String(10), nullable=False, default="INR")
    amount = Column(Float, nullable=False, default=0)
    description = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="DRAFT")  # DRAFT, SENT, PAID, VOID
    payment_link = Column(String(500), nullable=False, default="")

    tax_case = relationship("TaxCase", back_populates="invoices")


class CaseTask(Base):
    __tablename__ = "case_tasks"

    id = Column(String(64), primary_key=True, default=generate_id)
    case_id = Column(String(64), ForeignKey("tax_cases.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False, default="")
    status = Column(String(20), nullable=False, default="TODO")  # TODO, IN_PROGRESS, DONE
    assignee_id = Column(String(64), ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    due_at = Column(DateTime(timezone=True), nullable=True)

    tax_case = relationship("TaxCase", back_populates="tasks")
    assignee = relationship("User")


class CaseInternalNote(Base):
    __tablename__ = "case_internal_notes"

    id = Column(String(64), primary_key=True, default=generate_id)
    case_id = Column(String(64), ForeignKey("tax_cases.id"), nullable=False, index=True)
    author_id = Column(String(64), ForeignKey("users.id"), nullable=True)
    author_email = Column(String(255), nullable=False, default="")
    author_name = Column(String(255), nullable=False, default="Staff")
    text = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    tax_case = relationship("TaxCase", back_populates="internal_notes")
    author = relationship("User")


class Calculation(Base):
    """A saved calculator report: raw inputs and computed results"""

    __tablename__ = "calculations"

    id = Column(String(64), primary_key=True, default=generate_id)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(100), nullable=False)
    label = Column(String(255), nullable=False, default="Report")
    inputs = Column(JSON, nullable=False, default=dict)
    results = Column(JSON, nullable=False, default=dict)
    # When the report was computed on the client; independent of row creation
    source_timestamp = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", back_populates="calculations")


class Inquiry(Base):
    """Contact form submission"""

    __tablename__ = "inquiries"

    id = Column(String(64), primary_key=True, default=generate_id)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=True)
    name = Column(String(255), nullable=False, default="")
    email = Column(String(255), nullable=False, default="", index=True)
    service = Column(String(255), nullable=False, default="")
    message = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="PENDING")  # PENDING, RESPONDED
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)


class Activity(Base):
    """Audit log entry"""

    __tablename__ = "activities"

    id = Column(String(64), primary_key=True, default=generate_id)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=True)
    user_name = Column(String(255), nullable=False, default="User")
    user_email = Column(String(255), nullable=False, default="", index=True)
    action = Column(String(255), nullable=False, default="")
    details = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False, index=True)


class ClientAccessRequest(Base):
    """Request from a USER to be upgraded to the CLIENT role"""

    __tablename__ = "client_access_requests"

    id = Column(String(128), primary_key=True, default=generate_id)
    user_id = Column(String(64), ForeignKey("users.id"), nullable=False)
    requested_name = Column(String(255), nullable=False, default="")
    requested_email = Column(String(255), nullable=False, index=True)
    reason = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="PENDING")  # PENDING, APPROVED, REJECTED
    decided_at = Column(DateTime(timezone=True), nullable=True)
    decided_by_user_id = Column(String(64), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    user = relationship("User", foreign_keys=[user_id])
    decided_by = relationship("User", foreign_keys=[decided_by_user_id])
