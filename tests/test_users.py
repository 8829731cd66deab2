from __future__ import annotations

import pytest

from accounting_api.domain.users.service import ensure_user


def test_new_user_gets_name_from_email_and_user_role(db_session) -> None:
    user = ensure_user(db_session, "priya@example.com")

    assert user.name == "priya"
    assert user.role == "USER"


def test_role_is_stable_when_no_role_is_given(db_session) -> None:
    ensure_user(db_session, "ravi@example.com", role="employee")

    for _ in range(3):
        user = ensure_user(db_session, "ravi@example.com", name="Ravi K")

    assert user.role == "EMPLOYEE"
    assert user.name == "Ravi K"


def test_default_role_only_applies_on_creation(db_session) -> None:
    created = ensure_user(db_session, "staff@example.com", default_role="employee")
    assert created.role == "EMPLOYEE"

    ensure_user(db_session, "boss@example.com", role="admin")
    existing = ensure_user(db_session, "boss@example.com", default_role="employee")
    assert existing.role == "ADMIN"


def test_blank_name_keeps_existing_name(db_session) -> None:
    ensure_user(db_session, "anita@example.com", name="Anita Rao")
    user = ensure_user(db_session, "anita@example.com", name="  ")
    assert user.name == "Anita Rao"


def test_email_is_required(db_session) -> None:
    with pytest.raises(ValueError):
        ensure_user(db_session, "   ")


def test_list_users_filters_by_role(client, api) -> None:
    client.post(f"{api}/calculations", json={"userEmail": "a@example.com", "type": "gst"})
    client.post(
        f"{api}/calculations",
        json={"userEmail": "b@example.com", "type": "gst", "userRole": "employee"},
    )

    everyone = client.get(f"{api}/users").json()
    employees = client.get(f"{api}/users", params={"role": "employee"}).json()

    assert {u["email"] for u in everyone} == {"a@example.com", "b@example.com"}
    assert [u["email"] for u in employees] == ["b@example.com"]
    assert isinstance(employees[0]["createdAt"], int)
