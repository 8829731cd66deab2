"""Dashboard router - summary endpoints for admin and employee views"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import AdminDashboardResponse, EmployeeDashboardResponse
from .service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


@router.get("/admin", response_model=AdminDashboardResponse, response_model_exclude_unset=True)
async def get_admin_dashboard(service: DashboardService = Depends(get_dashboard_service)):
    return service.admin_summary()


@router.get(
    "/employee/{email}", response_model=EmployeeDashboardResponse, response_model_exclude_unset=True
)
async def get_employee_dashboard(email: str, service: DashboardService = Depends(get_dashboard_service)):
    """Workload of one employee; an unknown email yields an empty summary"""
    if not email.strip():
        raise HTTPException(status_code=400, detail="email is required")
    return service.employee_summary(email)
