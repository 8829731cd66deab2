from __future__ import annotations

from datetime import datetime, timezone

from accounting_api.dto import task_to_dto
from accounting_api.models import CaseTask
from accounting_api.shared.timestamps import from_millis, now_millis, to_millis, to_millis_or_now


def test_millis_round_trip() -> None:
    millis = 1_700_000_000_123
    assert to_millis(from_millis(millis)) == millis


def test_naive_datetimes_are_read_as_utc() -> None:
    naive = datetime(2024, 4, 1, 12, 30)
    aware = datetime(2024, 4, 1, 12, 30, tzinfo=timezone.utc)
    assert to_millis(naive) == to_millis(aware)


def test_absent_values() -> None:
    assert to_millis(None) is None
    assert from_millis(None) is None
    assert from_millis(0) is None


def test_missing_timestamp_is_reported_as_now() -> None:
    before = now_millis()
    value = to_millis_or_now(None)
    assert before <= value <= now_millis()


def test_task_dto_omits_absent_optional_fields() -> None:
    task = CaseTask(id="t1", title="Collect PAN", status="TODO")
    before = now_millis()

    dto = task_to_dto(task)

    assert "dueAt" not in dto
    assert "assigneeEmail" not in dto
    assert dto["createdAt"] >= before


def test_task_dto_carries_due_date() -> None:
    task = CaseTask(
        id="t1",
        title="File return",
        status="DONE",
        created_at=from_millis(1_700_000_000_000),
        due_at=from_millis(1_700_086_400_000),
    )

    dto = task_to_dto(task)

    assert dto["createdAt"] == 1_700_000_000_000
    assert dto["dueAt"] == 1_700_086_400_000
