"""
Enum normalizers

Every status/role field accepts loose client input. These helpers fold the
value onto a closed set and fall back to a default; they never raise.
"""

from typing import Any

ROLES = ("ADMIN", "EMPLOYEE", "CLIENT", "CLIENT_PENDING", "USER")
CASE_STATUSES = ("NEW", "IN_REVIEW", "WAITING_ON_CLIENT", "SCHEDULED", "ON_HOLD", "COMPLETED")
TASK_STATUSES = ("TODO", "IN_PROGRESS", "DONE")
APPOINTMENT_MODES = ("CALL", "VIDEO", "IN_PERSON")
APPOINTMENT_STATUSES = ("REQUESTED", "CONFIRMED", "COMPLETED", "CANCELLED")
INVOICE_STATUSES = ("DRAFT", "SENT", "PAID", "VOID")
INQUIRY_STATUSES = ("PENDING", "RESPONDED")
ACCESS_REQUEST_STATUSES = ("PENDING", "APPROVED", "REJECTED")

# Appointments that still need attention on the dashboards
OPEN_APPOINTMENT_STATUSES = ("REQUESTED", "CONFIRMED")


def _fold(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().upper()


def _pick(value: Any, allowed: tuple[str, ...], default: str) -> str:
    folded = _fold(value)
    return folded if folded in allowed else default


def normalize_role(role: Any) -> str:
    return _pick(role, ROLES, "USER")


def normalize_case_status(status: Any) -> str:
    return _pick(status, CASE_STATUSES, "NEW")


def normalize_task_status(status: Any) -> str:
    return _pick(status, TASK_STATUSES, "TODO")


def normalize_appointment_mode(mode: Any) -> str:
    return _pick(mode, APPOINTMENT_MODES, "CALL")


def normalize_appointment_status(status: Any) -> str:
    return _pick(status, APPOINTMENT_STATUSES, "REQUESTED")


def normalize_invoice_status(status: Any) -> str:
    return _pick(status, INVOICE_STATUSES, "DRAFT")


def normalize_inquiry_status(status: Any) -> str:
    return _pick(status, INQUIRY_STATUSES, "PENDING")


def normalize_access_request_status(status: Any) -> str:
    return _pick(status, ACCESS_REQUEST_STATUSES, "PENDING")
