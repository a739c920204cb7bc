from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from notebase.core.database import get_db
from notebase.schemas.search import SearchResponse
from notebase.services.search_service import search

router = APIRouter(tags=["search"])


#recherche dans databases / pages / dashboards
@router.get("/search", response_model=SearchResponse)
def search_workspace(q: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return search(db, q)
