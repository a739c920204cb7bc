from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from notebase.core.database import get_db
from notebase.models.database import Database
from notebase.schemas.page import PageCreate, PageUpdate, PageResponse, TemplateInstantiate, MarkdownImport
from notebase.schemas.view import Progress
from notebase.services import page_service
from notebase.services.blob_service import parse_columns
from notebase.services.projection_service import compute_progress, get_breadcrumbs

router = APIRouter(prefix="/pages", tags=["pages"])


@router.get("", response_model=List[PageResponse])
def list_pages(database_id: Optional[str] = Query(None, alias="databaseId"), db: Session = Depends(get_db)):
    return page_service.list_pages(db, database_id)


# Crée une page
@router.post("", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def create_page(page_data: PageCreate, db: Session = Depends(get_db)):
    return page_service.create_page(db, **page_data.model_dump())


@router.post("/import/markdown", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def import_markdown(request: MarkdownImport, db: Session = Depends(get_db)):
    return page_service.import_markdown(db, request.database_id, request.filename, request.text, request.parent_id)


@router.get("/{page_id}", response_model=PageResponse)
def get_page(page_id: str, db: Session = Depends(get_db)):
    return page_service.get_page(db, page_id)


@router.put("/{page_id}", response_model=PageResponse)
def update_page(page_id: str, page_data: PageUpdate, db: Session = Depends(get_db)):
    # seuls les champs envoyés sont pris en compte
    return page_service.update_page(db, page_id, page_data.model_dump(exclude_unset=True))


@router.delete("/{page_id}")
def delete_page(page_id: str, db: Session = Depends(get_db)):
    page_service.delete_page(db, page_id)
    return {"success": True}


@router.post("/{page_id}/instantiate", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
def instantiate_template(page_id: str, request: Optional[TemplateInstantiate] = None, db: Session = Depends(get_db)):
    request = request or TemplateInstantiate()
    return page_service.instantiate_template(db, page_id, request.title, request.content, request.parent_id)


@router.get("/{page_id}/progress", response_model=Optional[Progress])
def get_progress(page_id: str, db: Session = Depends(get_db)):
    """null si la page n'a pas de sous-pages"""
    page = page_service.get_page(db, page_id)
    columns = []
    if page.database_id:
        database = db.query(Database).filter(Database.id == page.database_id).first()
        if database:
            columns = parse_columns(database.columns)
    return compute_progress(page_service.list_pages(db, page.database_id), page.id, columns)


@router.get("/{page_id}/breadcrumbs", response_model=List[PageResponse])
def get_page_breadcrumbs(page_id: str, db: Session = Depends(get_db)):
    page = page_service.get_page(db, page_id)
    return get_breadcrumbs(page_service.list_pages(db, page.database_id), page.id)
