from __future__ import annotations

from accounting_api.domain.cases.service import AUDIT_TASKS, GST_TASKS, INCOME_TAX_TASKS, TDS_TASKS


def open_case(client, api, **overrides) -> dict:
    payload = {"clientEmail": "client@example.com", "clientName": "Sunita Iyer"}
    payload.update(overrides)
    response = client.post(f"{api}/cases", json=payload)
    assert response.status_code == 200, response.text
    return response.json()


def test_client_email_is_required(client, api) -> None:
    response = client.post(f"{api}/cases", json={"title": "No client"})

    assert response.status_code == 400
    assert response.json() == {"error": "clientEmail is required"}


def test_defaults(client, api) -> None:
    case = open_case(client, api)

    assert case["title"] == "New Case"
    assert case["service"] == "Income Tax Filing"
    assert case["status"] == "NEW"
    assert case["clientName"] == "Sunita Iyer"
    assert case["assignedToEmail"] == ""
    assert case["providedData"] == {}
    assert {t["title"] for t in case["tasks"]} == set(INCOME_TAX_TASKS)


def test_gst_case_gets_gst_checklist(client, api) -> None:
    case = open_case(client, api, service="GST Filing")

    assert len(case["tasks"]) == 3
    assert {t["title"] for t in case["tasks"]} == set(GST_TASKS)
    assert all(t["status"] == "TODO" for t in case["tasks"])


def test_checklist_follows_service_keyword(client, api) -> None:
    audit = open_case(client, api, service="Statutory Audit")
    tds = open_case(client, api, service="TDS Return")

    assert {t["title"] for t in audit["tasks"]} == set(AUDIT_TASKS)
    assert {t["title"] for t in tds["tasks"]} == set(TDS_TASKS)


def test_inline_tasks_replace_the_checklist(client, api) -> None:
    case = open_case(
        client,
        api,
        service="GST Filing",
        tasks=[{"id": "t-1", "title": "Upload GSTR-1", "status": "in_progress"}],
    )

    assert [(t["id"], t["title"], t["status"]) for t in case["tasks"]] == [
        ("t-1", "Upload GSTR-1", "IN_PROGRESS")
    ]


def test_empty_task_array_uses_checklist(client, api) -> None:
    case = open_case(client, api, service="GST", tasks=[])
    assert {t["title"] for t in case["tasks"]} == set(GST_TASKS)


def test_get_missing_case(client, api) -> None:
    response = client.get(f"{api}/cases/nope")

    assert response.status_code == 404
    assert response.json() == {"error": "Case not found"}


def test_patch_assigns_and_unassigns(client, api) -> None:
    case = open_case(client, api)

    assigned = client.patch(
        f"{api}/cases/{case['id']}",
        json={"assignedToEmail": "ca@example.com", "status": "in_review"},
    ).json()
    assert assigned["assignedToEmail"] == "ca@example.com"
    assert assigned["status"] == "IN_REVIEW"
    assert assigned["title"] == "New Case"

    employees = client.get(f"{api}/users", params={"role": "employee"}).json()
    assert [u["email"] for u in employees] == ["ca@example.com"]

    unassigned = client.patch(f"{api}/cases/{case['id']}", json={"assignedToEmail": ""}).json()
    assert unassigned["assignedToEmail"] == ""
    assert unassigned["status"] == "IN_REVIEW"


def test_patch_missing_case(client, api) -> None:
    assert client.patch(f"{api}/cases/nope", json={"title": "x"}).status_code == 404


def test_list_filters(client, api) -> None:
    first = open_case(client, api, assignedToEmail="ca@example.com")
    open_case(client, api, clientEmail="other@example.com", status="completed")

    by_client = client.get(f"{api}/cases", params={"clientEmail": "client@example.com"}).json()
    by_assignee = client.get(f"{api}/cases", params={"assigneeEmail": "ca@example.com"}).json()
    by_status = client.get(f"{api}/cases", params={"status": "completed"}).json()
    unknown_client = client.get(f"{api}/cases", params={"clientEmail": "ghost@example.com"}).json()

    assert [c["id"] for c in by_client] == [first["id"]]
    assert [c["id"] for c in by_assignee] == [first["id"]]
    assert [c["clientEmail"] for c in by_status] == ["other@example.com"]
    assert len(unknown_client) == 2


def test_add_task(client, api) -> None:
    case = open_case(client, api)

    task = client.post(
        f"{api}/cases/{case['id']}/tasks",
        json={"title": "Collect rent receipts", "assigneeEmail": "ca@example.com", "dueAt": 1_800_000_000_000},
    ).json()

    assert task["title"] == "Collect rent receipts"
    assert task["status"] == "TODO"
    assert task["assigneeEmail"] == "ca@example.com"
    assert task["dueAt"] == 1_800_000_000_000

    refreshed = client.get(f"{api}/cases/{case['id']}").json()
    assert task["id"] in {t["id"] for t in refreshed["tasks"]}


def test_add_task_to_missing_case(client, api) -> None:
    response = client.post(f"{api}/cases/nope/tasks", json={"title": "x"})
    assert response.status_code == 404


def test_patch_task(client, api) -> None:
    case = open_case(client, api)
    task = client.post(
        f"{api}/cases/{case['id']}/tasks", json={"title": "Draft", "dueAt": 1_800_000_000_000}
    ).json()

    updated = client.patch(
        f"{api}/cases/{case['id']}/tasks/{task['id']}",
        json={"status": "done", "dueAt": None},
    ).json()

    assert updated["status"] == "DONE"
    assert updated["title"] == "Draft"
    assert "dueAt" not in updated


def test_patch_task_of_another_case_is_rejected_untouched(client, api) -> None:
    first = open_case(client, api)
    second = open_case(client, api, clientEmail="second@example.com")
    task_id = first["tasks"][0]["id"]

    response = client.patch(
        f"{api}/cases/{second['id']}/tasks/{task_id}",
        json={"status": "done"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Task does not belong to caseId"}
    reloaded = client.get(f"{api}/cases/{first['id']}").json()
    assert next(t for t in reloaded["tasks"] if t["id"] == task_id)["status"] == "TODO"


def test_patch_missing_task(client, api) -> None:
    case = open_case(client, api)
    response = client.patch(f"{api}/cases/{case['id']}/tasks/nope", json={"status": "done"})
    assert response.status_code == 404
