from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
from notebase.core.database import get_db

router = APIRouter(tags=["health"])


@router.get("/z")
def healthz(db: Session = Depends(get_db)):
    # l'API répond et le store est joignable
    db.execute(text("SELECT 1"))
    return {"status": "ok"}
