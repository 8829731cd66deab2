from __future__ import annotations

import pytest

from accounting_api.shared.normalizers import (
    ACCESS_REQUEST_STATUSES,
    APPOINTMENT_MODES,
    APPOINTMENT_STATUSES,
    CASE_STATUSES,
    INQUIRY_STATUSES,
    INVOICE_STATUSES,
    ROLES,
    TASK_STATUSES,
    normalize_access_request_status,
    normalize_appointment_mode,
    normalize_appointment_status,
    normalize_case_status,
    normalize_inquiry_status,
    normalize_invoice_status,
    normalize_role,
    normalize_task_status,
)

NORMALIZERS = [
    (normalize_role, ROLES, "USER"),
    (normalize_case_status, CASE_STATUSES, "NEW"),
    (normalize_task_status, TASK_STATUSES, "TODO"),
    (normalize_appointment_mode, APPOINTMENT_MODES, "CALL"),
    (normalize_appointment_status, APPOINTMENT_STATUSES, "REQUESTED"),
    (normalize_invoice_status, INVOICE_STATUSES, "DRAFT"),
    (normalize_inquiry_status, INQUIRY_STATUSES, "PENDING"),
    (normalize_access_request_status, ACCESS_REQUEST_STATUSES, "PENDING"),
]


@pytest.mark.parametrize("normalize, allowed, default", NORMALIZERS)
def test_garbage_and_empty_input_fall_back_to_default(normalize, allowed, default) -> None:
    for value in (None, "", "   ", "not-a-status", 42, {"x": 1}):
        assert normalize(value) == default


@pytest.mark.parametrize("normalize, allowed, default", NORMALIZERS)
def test_every_member_is_accepted_in_any_case_and_is_idempotent(normalize, allowed, default) -> None:
    for member in allowed:
        assert normalize(member.lower()) == member
        assert normalize(f" {member} ") == member
        assert normalize(normalize(member)) == member


def test_role_values_used_by_the_front_end() -> None:
    assert normalize_role("client_pending") == "CLIENT_PENDING"
    assert normalize_role("Employee") == "EMPLOYEE"
    assert normalize_inquiry_status("responded") == "RESPONDED"
