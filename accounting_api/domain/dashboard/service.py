"""Dashboard service - read-only summaries for the admin and employee views"""

from sqlalchemy.orm import Session

from ...config import (
    DASHBOARD_MAX_APPOINTMENTS,
    DASHBOARD_MAX_TASKS,
    DASHBOARD_RECENT_ACTIVITIES,
    DASHBOARD_RECENT_CALCULATIONS,
)
from ...dto import activity_to_dto, calculation_to_dto, open_appointment_entry
from ...models import Activity, TaxCase
from ...schemas import text
from ...shared.normalizers import OPEN_APPOINTMENT_STATUSES
from ...shared.timestamps import to_millis_or_now
from ..calculations.repository import CalculationRepository
from ..cases.repository import CaseRepository
from ..users.repository import UserRepository


def case_stats(cases: list[TaxCase]) -> dict:
    return {
        "total": len(cases),
        "active": sum(1 for c in cases if c.status != "COMPLETED"),
        "waiting": sum(1 for c in cases if c.status == "WAITING_ON_CLIENT"),
        "scheduled": sum(1 for c in cases if c.status == "SCHEDULED"),
    }


def open_appointments(cases: list[TaxCase]) -> list[dict]:
    rows = [
        open_appointment_entry(c, a)
        for c in cases
        for a in c.appointments
        if a.status in OPEN_APPOINTMENT_STATUSES
    ]
    return rows[:DASHBOARD_MAX_APPOINTMENTS]


class DashboardService:
    """
    Aggregates for the back-office dashboards.

    Every read runs in the request's session, one after another; the
    numbers are a best-effort snapshot rather than a consistent one.
    """

    def __init__(self, db: Session):
        self.db = db

    def admin_summary(self) -> dict:
        users = UserRepository.list_users(self.db)
        cases = CaseRepository.list_cases(self.db)
        calculations = CalculationRepository.list_recent(self.db, take=DASHBOARD_RECENT_CALCULATIONS)
        activities = (
            self.db.query(Activity)
            .order_by(Activity.created_at.desc())
            .limit(DASHBOARD_RECENT_ACTIVITIES)
            .all()
        )

        # calcCount only reflects the recent window, not the full history
        calc_counts: dict[str, int] = {}
        for calculation in calculations:
            calc_counts[calculation.user_id] = calc_counts.get(calculation.user_id, 0) + 1

        clients = sorted(
            (
                {
                    "name": u.name,
                    "email": u.email,
                    "role": u.role.lower(),
                    "calcCount": calc_counts.get(u.id, 0),
                }
                for u in users
            ),
            key=lambda row: row["name"].lower(),
        )

        stats = {
            "calculations": len(calculations),
            **case_stats(cases),
            "unassigned": sum(1 for c in cases if not c.assigned_to_user_id),
            "clients": sum(1 for u in users if u.role in ("CLIENT", "USER")),
            "employees": sum(1 for u in users if u.role == "EMPLOYEE"),
            "admins": sum(1 for u in users if u.role == "ADMIN"),
        }

        return {
            "stats": stats,
            "clients": clients,
            "calculations": [calculation_to_dto(c) for c in calculations],
            "activities": [activity_to_dto(a) for a in activities],
            "appointments": open_appointments(cases),
        }

    def employee_summary(self, email: str) -> dict:
        employee = UserRepository.get_by_email(self.db, text(email))
        if not employee:
            return {
                "stats": {"total": 0, "active": 0, "waiting": 0, "scheduled": 0},
                "tasks": [],
                "appointments": [],
            }

        cases = CaseRepository.list_cases(self.db, assignee_id=employee.id)

        tasks = [
            {
                "id": t.id,
                "title": t.title,
                "status": t.status,
                "createdAt": to_millis_or_now(t.created_at),
                "caseId": c.id,
                "caseTitle": c.title,
                "clientName": c.client.name if c.client else "",
                "clientEmail": c.client.email if c.client else "",
            }
            for c in cases
            for t in c.tasks
            if t.status != "DONE"
        ]
        tasks.sort(key=lambda row: row["createdAt"], reverse=True)

        return {
            "stats": case_stats(cases),
            "tasks": tasks[:DASHBOARD_MAX_TASKS],
            "appointments": open_appointments(cases),
        }
