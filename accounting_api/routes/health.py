from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from ..database import get_db

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    """Liveness plus a database round trip"""
    db.execute(text("SELECT 1"))
    return {"ok": True, "db": "connected"}
