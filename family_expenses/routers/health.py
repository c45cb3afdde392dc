from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from family_expenses.core.db import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db)):
    db.execute(text("SELECT 1"))
    return {"ok": True}
