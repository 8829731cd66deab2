from __future__ import annotations


def test_admin_summary(client, api) -> None:
    client.post(f"{api}/calculations", json={"userEmail": "zara@example.com", "type": "gst"})
    client.post(f"{api}/calculations", json={"userEmail": "zara@example.com", "type": "tds"})
    client.post(
        f"{api}/cases",
        json={"clientEmail": "zara@example.com", "assignedToEmail": "ca@example.com", "status": "scheduled"},
    )
    client.post(f"{api}/cases", json={"clientEmail": "amit@example.com", "status": "waiting_on_client"})
    client.post(f"{api}/activities", json={"action": "LOGIN"})

    summary = client.get(f"{api}/dashboard/admin").json()

    assert summary["stats"] == {
        "calculations": 2,
        "total": 2,
        "active": 2,
        "waiting": 1,
        "scheduled": 1,
        "unassigned": 1,
        "clients": 2,
        "employees": 1,
        "admins": 0,
    }
    assert [c["email"] for c in summary["clients"]] == [
        "amit@example.com",
        "ca@example.com",
        "zara@example.com",
    ]
    zara = next(c for c in summary["clients"] if c["email"] == "zara@example.com")
    assert zara["calcCount"] == 2
    assert zara["role"] == "user"
    assert len(summary["calculations"]) == 2
    assert len(summary["activities"]) == 1
    assert summary["appointments"] == []


def test_employee_summary_for_unknown_email(client, api) -> None:
    summary = client.get(f"{api}/dashboard/employee/ghost@example.com").json()

    assert summary == {
        "stats": {"total": 0, "active": 0, "waiting": 0, "scheduled": 0},
        "tasks": [],
        "appointments": [],
    }


def test_employee_summary_lists_open_tasks(client, api) -> None:
    case = client.post(
        f"{api}/cases",
        json={"clientEmail": "zara@example.com", "assignedToEmail": "ca@example.com", "service": "GST"},
    ).json()
    done_id = case["tasks"][0]["id"]
    client.patch(f"{api}/cases/{case['id']}/tasks/{done_id}", json={"status": "done"})

    summary = client.get(f"{api}/dashboard/employee/ca@example.com").json()

    assert summary["stats"] == {"total": 1, "active": 1, "waiting": 0, "scheduled": 0}
    assert len(summary["tasks"]) == 2
    assert done_id not in {t["id"] for t in summary["tasks"]}
    assert all(t["caseId"] == case["id"] for t in summary["tasks"])
    assert all(t["clientEmail"] == "zara@example.com" for t in summary["tasks"])
