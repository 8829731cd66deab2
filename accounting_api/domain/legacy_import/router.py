"""Legacy import router - one-shot migration of browser exports"""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ImportResponse, LocalExport
from .service import LegacyImportService

router = APIRouter(prefix="/import", tags=["Import"])


def get_import_service(db: Session = Depends(get_db)) -> LegacyImportService:
    return LegacyImportService(db)


@router.post("/local-export", response_model=ImportResponse)
async def import_local_export(
    data: Optional[LocalExport] = None,
    service: LegacyImportService = Depends(get_import_service),
):
    """
    Import the JSON produced by the admin "Download Export" button.

    Returns how many elements of each kind were imported; elements missing
    their natural key are skipped and not counted.
    """
    return service.run(data or LocalExport())
