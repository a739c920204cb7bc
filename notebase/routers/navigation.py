from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from notebase.core.database import get_db
from notebase.schemas.view import NavigationRequest, NavigationTarget
from notebase.services.navigation_service import resolve

router = APIRouter(tags=["navigation"])


# Message de navigation typé {kind, id, parentId} -> cible + fil d'Ariane
@router.post("/navigate", response_model=NavigationTarget)
def navigate(request: NavigationRequest, db: Session = Depends(get_db)):
    return resolve(db, request)
