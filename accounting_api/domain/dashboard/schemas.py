"""Dashboard schemas - Pydantic models for responses"""

from pydantic import BaseModel

from ..activities.schemas import ActivityResponse
from ..calculations.schemas import CalculationResponse


class CaseStats(BaseModel):
    total: int
    active: int
    waiting: int
    scheduled: int


class AdminStats(CaseStats):
    calculations: int
    unassigned: int
    clients: int
    employees: int
    admins: int


class ClientSummary(BaseModel):
    name: str
    email: str
    role: str
    calcCount: int


class OpenAppointment(BaseModel):
    caseId: str
    caseTitle: str
    clientName: str
    clientEmail: str
    date: str
    status: str


class OpenTask(BaseModel):
    id: str
    title: str
    status: str
    createdAt: int
    caseId: str
    caseTitle: str
    clientName: str
    clientEmail: str


class AdminDashboardResponse(BaseModel):
    stats: AdminStats
    clients: list[ClientSummary]
    calculations: list[CalculationResponse]
    activities: list[ActivityResponse]
    appointments: list[OpenAppointment]


class EmployeeDashboardResponse(BaseModel):
    stats: CaseStats
    tasks: list[OpenTask]
    appointments: list[OpenAppointment]
