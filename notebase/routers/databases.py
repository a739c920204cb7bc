from fastapi import APIRouter, Body, Depends, Query, Response, status
from sqlalchemy.orm import Session
from datetime import date
from typing import Any, Dict, List, Literal, Optional
from notebase.core.database import get_db
from notebase.schemas.database import DatabaseCreate, DatabaseUpdate, DatabaseResponse, ColumnCreate, ColumnUpdate
from notebase.schemas.page import PageResponse
from notebase.schemas.transfer import DatabaseExport, CsvImportRequest
from notebase.schemas.view import DatabaseView, CalendarMonth, Timeline
from notebase.services import database_service, page_service, transfer_service
from notebase.services.blob_service import parse_columns
from notebase.services.projection_service import database_view
from notebase.services.timeline_service import calendar_month, timeline

router = APIRouter(prefix="/databases", tags=["databases"])


@router.get("", response_model=List[DatabaseResponse])
def list_databases(db: Session = Depends(get_db)):
    return database_service.list_databases(db)


# Crée une database avec le schéma par défaut
@router.post("", response_model=DatabaseResponse, status_code=status.HTTP_201_CREATED)
def create_database(database_data: Optional[DatabaseCreate] = None, db: Session = Depends(get_db)):
    database_data = database_data or DatabaseCreate()
    return database_service.create_database(db, database_data.name, database_data.icon)


@router.post("/import", response_model=DatabaseResponse, status_code=status.HTTP_201_CREATED)
def import_database(payload: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    return transfer_service.import_database(db, payload)


@router.post("/import/csv", response_model=DatabaseResponse, status_code=status.HTTP_201_CREATED)
def import_csv(request: CsvImportRequest, db: Session = Depends(get_db)):
    return transfer_service.import_csv(db, request.text, request.filename)


@router.get("/{database_id}", response_model=DatabaseResponse)
def get_database(database_id: str, db: Session = Depends(get_db)):
    return database_service.get_database(db, database_id)


@router.put("/{database_id}", response_model=DatabaseResponse)
def update_database(database_id: str, database_data: DatabaseUpdate, db: Session = Depends(get_db)):
    return database_service.update_database(db, database_id, database_data.model_dump(exclude_unset=True))


@router.delete("/{database_id}")
def delete_database(database_id: str, db: Session = Depends(get_db)):
    database_service.delete_database(db, database_id)
    return {"success": True}


# Export JSON / CSV
@router.get("/{database_id}/export", response_model=DatabaseExport)
def export_database(database_id: str, db: Session = Depends(get_db)):
    return transfer_service.export_database(db, database_id)


@router.get("/{database_id}/export.csv")
def export_csv(database_id: str, db: Session = Depends(get_db)):
    text = transfer_service.export_csv(db, database_id)
    return Response(
        content=text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{database_id}.csv"'}
    )


# Schéma de colonnes
@router.post("/{database_id}/columns", response_model=DatabaseResponse, status_code=status.HTTP_201_CREATED)
def add_column(database_id: str, column_data: ColumnCreate, db: Session = Depends(get_db)):
    return database_service.add_column(db, database_id, column_data)


@router.put("/{database_id}/columns/{column_id}", response_model=DatabaseResponse)
def update_column(database_id: str, column_id: str, column_data: ColumnUpdate, db: Session = Depends(get_db)):
    return database_service.update_column(db, database_id, column_id, column_data)


@router.delete("/{database_id}/columns/{column_id}", response_model=DatabaseResponse)
def remove_column(database_id: str, column_id: str, db: Session = Depends(get_db)):
    return database_service.remove_column(db, database_id, column_id)


@router.get("/{database_id}/templates", response_model=List[PageResponse])
def list_templates(database_id: str, db: Session = Depends(get_db)):
    database_service.get_database(db, database_id)
    return page_service.list_templates(db, database_id)


# Vues dérivées
@router.get("/{database_id}/view", response_model=DatabaseView)
def get_view(
    database_id: str,
    parent_id: Optional[str] = Query(None, alias="parentId"),
    mode: Literal["table", "board"] = Query("table"),
    db: Session = Depends(get_db)
):
    database = database_service.get_database(db, database_id)
    pages = page_service.list_pages(db, database_id)
    return database_view(database, pages, parent_id, mode)


@router.get("/{database_id}/calendar", response_model=CalendarMonth)
def get_calendar(
    database_id: str,
    year: Optional[int] = Query(None, ge=1, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
    db: Session = Depends(get_db)
):
    today = date.today()
    database = database_service.get_database(db, database_id)
    pages = page_service.list_pages(db, database_id)
    return calendar_month(pages, parse_columns(database.columns), year or today.year, month or today.month)


@router.get("/{database_id}/timeline", response_model=Timeline)
def get_timeline(
    database_id: str,
    mode: Literal["Day", "Week", "Month"] = Query("Day"),
    db: Session = Depends(get_db)
):
    database = database_service.get_database(db, database_id)
    pages = page_service.list_pages(db, database_id)
    return timeline(pages, parse_columns(database.columns), mode)
