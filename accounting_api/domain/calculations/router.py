"""Calculation router - FastAPI endpoints for saved reports"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...config import CALCULATIONS_DEFAULT_TAKE
from ...database import get_db
from ...dto import calculation_to_dto
from ...schemas import OkResponse
from .schemas import CalculationCreate, CalculationResponse
from .service import CalculationService

router = APIRouter(prefix="/calculations", tags=["Calculations"])


def get_calculation_service(db: Session = Depends(get_db)) -> CalculationService:
    return CalculationService(db)


@router.get("", response_model=list[CalculationResponse], response_model_exclude_unset=True)
async def get_calculations(
    email: str = Query(""),
    take: int = Query(CALCULATIONS_DEFAULT_TAKE, description="Clamped to 1..200"),
    skip: int = Query(0),
    service: CalculationService = Depends(get_calculation_service),
):
    """Saved calculations, newest first"""
    return [calculation_to_dto(c) for c in service.list_calculations(email, take, skip)]


@router.post("", response_model=CalculationResponse, response_model_exclude_unset=True)
async def create_calculation(
    data: CalculationCreate,
    service: CalculationService = Depends(get_calculation_service),
):
    """Save a calculator report for a user (provisioned by email)"""
    return calculation_to_dto(service.create_calculation(data))


@router.delete("/{calculation_id}", response_model=OkResponse)
async def delete_calculation(
    calculation_id: str,
    service: CalculationService = Depends(get_calculation_service),
):
    """Delete a saved calculation"""
    return service.delete_calculation(calculation_id)
