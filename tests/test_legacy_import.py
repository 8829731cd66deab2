from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from accounting_api.domain.legacy_import.service import LegacyImportService
from accounting_api.main import app


def export_blob() -> dict:
    return {
        "users": [
            {"email": "admin@example.com", "name": "Admin", "role": "admin"},
            {"name": "no email"},
            None,
        ],
        "profiles": [
            {
                "email": "lata@example.com",
                "name": "Lata",
                "pan": "ABCDE1234F",
                "notificationPrefs": {"whatsapp": True},
                "updatedAt": 1_700_000_000_000,
            }
        ],
        "calculations": [
            {"id": "calc-1", "userEmail": "lata@example.com", "type": "gst", "timestamp": 1_700_000_000_000},
            {"id": "calc-2", "userEmail": "lata@example.com"},
            {"id": "calc-3", "type": "gst"},
        ],
        "inquiries": [
            {"id": "inq-1", "email": "lead@example.com", "status": "responded"},
            {"id": "inq-2", "name": "no email"},
        ],
        "activities": [{"id": "act-1", "action": "LOGIN"}, {"action": "NO ID"}],
        "cases": [
            {
                "id": "case-1",
                "clientEmail": "lata@example.com",
                "assignedToEmail": "ca@example.com",
                "service": "GST Filing",
                "status": "in_review",
                "createdAt": 1_690_000_000_000,
                "documents": [{"id": "doc-1", "name": "invoice.pdf", "type": "application/pdf", "size": 2048}],
                "appointments": [
                    {"id": "appt-1", "preferredDate": "2024-07-01", "preferredTime": "10:30", "mode": "video"}
                ],
                "invoices": [{"id": "inv-1", "number": "INV-1", "amount": 1500, "status": "sent"}],
                "tasks": [
                    {"id": "task-1", "title": "Collect invoices", "status": "done"},
                    {"id": "task-2", "title": "Reconcile", "assigneeEmail": "ca@example.com"},
                ],
                "internalNotes": [{"id": "note-1", "authorEmail": "ca@example.com", "text": "Called client"}],
            },
            {"id": "case-2", "title": "no client"},
        ],
        "clientAccessRequests": [
            {"email": "lata@example.com", "status": "approved", "createdAt": 1_695_000_000_000},
            {"name": "no email"},
        ],
    }


def test_import_summary_counts_only_processed_elements(client, api) -> None:
    response = client.post(f"{api}/import/local-export", json=export_blob())

    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "summary": {
            "users": 1,
            "profiles": 1,
            "cases": 1,
            "calculations": 1,
            "inquiries": 1,
            "activities": 2,
            "clientAccessRequests": 1,
        },
    }


def test_imported_case_and_children(client, api) -> None:
    client.post(f"{api}/import/local-export", json=export_blob())

    case = client.get(f"{api}/cases/case-1").json()

    assert case["status"] == "IN_REVIEW"
    assert case["assignedToEmail"] == "ca@example.com"
    assert case["createdAt"] == 1_690_000_000_000
    assert case["documents"][0]["type"] == "application/pdf"
    assert case["appointments"][0]["mode"] == "VIDEO"
    assert case["appointments"][0]["status"] == "REQUESTED"
    assert case["invoices"][0]["status"] == "SENT"
    assert {t["id"]: t["status"] for t in case["tasks"]} == {"task-1": "DONE", "task-2": "TODO"}
    assert case["internalNotes"][0]["authorName"] == "ca@example.com"


def test_import_is_idempotent_and_replaces_case_children(client, api) -> None:
    blob = export_blob()
    client.post(f"{api}/import/local-export", json=blob)
    client.post(f"{api}/import/local-export", json=blob)

    blob["cases"][0]["tasks"] = [{"id": "task-2", "title": "Reconcile again", "status": "in_progress"}]
    blob["cases"][0]["documents"] = []
    client.post(f"{api}/import/local-export", json=blob)

    case = client.get(f"{api}/cases/case-1").json()
    assert [(t["id"], t["title"], t["status"]) for t in case["tasks"]] == [
        ("task-2", "Reconcile again", "IN_PROGRESS")
    ]
    assert case["documents"] == []
    assert len(case["appointments"]) == 1

    assert len(client.get(f"{api}/cases").json()) == 1
    assert len(client.get(f"{api}/calculations").json()) == 1
    assert len(client.get(f"{api}/inquiries").json()) == 1
    assert len(client.get(f"{api}/client-access-requests").json()) == 1
    assert len(client.get(f"{api}/activities").json()) == 2


def test_access_request_without_id_gets_legacy_id_and_role(client, api) -> None:
    client.post(f"{api}/import/local-export", json=export_blob())

    users = {u["email"]: u for u in client.get(f"{api}/users").json()}
    requests = client.get(f"{api}/client-access-requests").json()

    lata = users["lata@example.com"]
    assert lata["role"] == "CLIENT"
    assert requests[0]["id"] == f"legacy-{lata['id']}-1695000000000"
    assert requests[0]["status"] == "approved"
    assert users["admin@example.com"]["role"] == "ADMIN"
    assert users["ca@example.com"]["role"] == "EMPLOYEE"


def test_malformed_arrays_count_as_empty(client, api) -> None:
    response = client.post(
        f"{api}/import/local-export",
        json={"users": "oops", "cases": {"id": "x"}, "activities": [1, "two", None]},
    )

    assert response.status_code == 200
    assert set(response.json()["summary"].values()) == {0}


def test_empty_body_imports_nothing(client, api) -> None:
    response = client.post(f"{api}/import/local-export")

    assert response.status_code == 200
    assert response.json()["summary"]["users"] == 0


def test_failure_rolls_back_the_whole_import(api) -> None:
    with TestClient(app, raise_server_exceptions=False) as client:
        with patch.object(LegacyImportService, "_import_inquiry", side_effect=RuntimeError("boom")):
            response = client.post(f"{api}/import/local-export", json=export_blob())

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}
        assert client.get(f"{api}/users").json() == []
        assert client.get(f"{api}/calculations").json() == []


def test_elements_without_ids_are_not_duplicated_on_reimport(client, api) -> None:
    blob = {
        "cases": [{"clientEmail": "lata@example.com", "tasks": [{"title": "Collect PAN"}]}],
        "calculations": [{"userEmail": "lata@example.com", "type": "gst"}],
        "inquiries": [{"email": "lead@example.com"}],
        "activities": [{"action": "LOGIN"}],
        "clientAccessRequests": [{"email": "new@example.com"}],
    }

    first = client.post(f"{api}/import/local-export", json=blob)
    client.post(f"{api}/import/local-export", json=blob)

    assert first.status_code == 200
    cases = client.get(f"{api}/cases").json()
    assert len(cases) == 1
    assert cases[0]["id"].startswith("legacy-case-")
    assert len(cases[0]["tasks"]) == 1
    assert len(client.get(f"{api}/calculations").json()) == 1
    assert len(client.get(f"{api}/inquiries").json()) == 1
    assert len(client.get(f"{api}/activities").json()) == 1
    assert len(client.get(f"{api}/client-access-requests").json()) == 1


def test_changed_content_without_id_is_a_new_row(client, api) -> None:
    client.post(f"{api}/import/local-export", json={"activities": [{"action": "LOGIN"}]})
    client.post(f"{api}/import/local-export", json={"activities": [{"action": "LOGOUT"}]})

    actions = sorted(a["action"] for a in client.get(f"{api}/activities").json())
    assert actions == ["LOGIN", "LOGOUT"]
