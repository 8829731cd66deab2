"""Case router - FastAPI endpoints for tax cases and case tasks"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...dto import case_to_dto, task_to_dto
from .schemas import CaseCreate, CaseResponse, CaseUpdate, TaskCreate, TaskResponse, TaskUpdate
from .service import CaseService

router = APIRouter(prefix="/cases", tags=["Cases"])


def get_case_service(db: Session = Depends(get_db)) -> CaseService:
    return CaseService(db)


# ============================================================================
# CASES
# ============================================================================


@router.get("", response_model=list[CaseResponse], response_model_exclude_unset=True)
async def get_cases(
    clientEmail: Optional[str] = Query(None),
    assigneeEmail: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    service: CaseService = Depends(get_case_service),
):
    """Cases, most recently updated first"""
    cases = service.list_cases(clientEmail, assigneeEmail, status)
    return [case_to_dto(c) for c in cases]


@router.get("/{case_id}", response_model=CaseResponse, response_model_exclude_unset=True)
async def get_case(case_id: str, service: CaseService = Depends(get_case_service)):
    return case_to_dto(service.get_case(case_id))


@router.post("", response_model=CaseResponse, response_model_exclude_unset=True)
async def create_case(data: CaseCreate, service: CaseService = Depends(get_case_service)):
    """Open a case; seeds a service-specific checklist when no tasks are sent"""
    return case_to_dto(service.create_case(data))


@router.patch("/{case_id}", response_model=CaseResponse, response_model_exclude_unset=True)
async def update_case(
    case_id: str,
    data: CaseUpdate,
    service: CaseService = Depends(get_case_service),
):
    return case_to_dto(service.update_case(case_id, data))


# ============================================================================
# CASE TASKS
# ============================================================================


@router.post("/{case_id}/tasks", response_model=TaskResponse, response_model_exclude_unset=True)
async def create_task(
    case_id: str,
    data: TaskCreate,
    service: CaseService = Depends(get_case_service),
):
    return task_to_dto(service.create_task(case_id, data))


@router.patch("/{case_id}/tasks/{task_id}", response_model=TaskResponse, response_model_exclude_unset=True)
async def update_task(
    case_id: str,
    task_id: str,
    data: TaskUpdate,
    service: CaseService = Depends(get_case_service),
):
    return task_to_dto(service.update_task(case_id, task_id, data))
