"""Database service: CRUD + édition du schéma de colonnes"""

import json
import logging
import re
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from notebase.core.errors import NotFoundError, ValidationError
from notebase.models.database import Database
from notebase.models.page import Page
from notebase.schemas.database import ColumnCreate, ColumnUpdate, ColumnDef
from notebase.services.blob_service import dump_blob, dump_columns, parse_columns_strict

logger = logging.getLogger(__name__)

DEFAULT_COLUMNS = [
    {"id": "status", "name": "Status", "type": "select", "width": 150, "options": ["Todo", "In Progress", "Done"]},
    {"id": "date", "name": "Date", "type": "date", "width": 150},
    {"id": "priority", "name": "Priority", "type": "select", "width": 150, "options": ["Low", "Medium", "High"]},
    {"id": "assignee", "name": "Assignee", "type": "text", "width": 150},
]


def default_columns() -> str:
    return json.dumps(DEFAULT_COLUMNS)


def list_databases(db: Session) -> List[Database]:
    return db.query(Database).all()


def get_database(db: Session, database_id: str) -> Database:
    database = db.query(Database).filter(Database.id == database_id).first()
    if not database:
        raise NotFoundError("Database not found")
    return database


def create_database(db: Session, name: Optional[str] = None, icon: Optional[str] = None) -> Database:
    database = Database(
        name=name or "Untitled Database",
        icon=icon or "Database",
        columns=default_columns()
    )
    db.add(database)
    db.commit()
    db.refresh(database)
    logger.info(f"Database created: {database.id}")
    return database


def _check_unique_ids(columns: List[Any]) -> None:
    # une string opaque est stockée telle quelle; une liste est vérifiée avant sérialisation
    ids = [c.get("id") if isinstance(c, dict) else getattr(c, "id", None) for c in columns]
    duplicates = sorted({i for i in ids if isinstance(i, (str, int)) and ids.count(i) > 1}, key=str)
    if duplicates:
        raise ValidationError(f"Duplicate column id(s): {', '.join(map(str, duplicates))}")


def update_database(db: Session, database_id: str, changes: Dict[str, Any]) -> Database:
    # coalesce: un champ absent ou null garde sa valeur
    database = get_database(db, database_id)
    if isinstance(changes.get("columns"), list):
        _check_unique_ids(changes["columns"])

    for field, value in changes.items():
        if value is None:
            continue
        if field == "columns":
            value = dump_blob(value, "[]")
        setattr(database, field, value)

    db.commit()
    db.refresh(database)
    return database


def delete_database(db: Session, database_id: str) -> int:
    """Supprime la database et toutes ses pages dans une seule transaction"""
    database = get_database(db, database_id)

    try:
        deleted_pages = db.query(Page).filter(
            Page.database_id == database_id
        ).delete(synchronize_session=False)
        db.delete(database)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(f"Database {database_id} deleted with {deleted_pages} page(s)")
    return deleted_pages


# Schéma de colonnes
# read-modify-write du blob entier: dernier écrit gagne

def slugify_column(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def _unique_id(base: str, taken: set) -> str:
    base = base or "column"
    candidate = base
    n = 2
    while candidate in taken:
        candidate = f"{base}-{n}"
        n += 1
    return candidate


def add_column(db: Session, database_id: str, column_data: ColumnCreate) -> Database:
    database = get_database(db, database_id)
    columns = parse_columns_strict(database.columns)
    taken = {c.id for c in columns}

    if column_data.id:
        if column_data.id in taken:
            raise ValidationError(f"Column id '{column_data.id}' already exists")
        column_id = column_data.id
    else:
        column_id = _unique_id(slugify_column(column_data.name), taken)

    columns.append(ColumnDef(
        id=column_id,
        name=column_data.name,
        type=column_data.type,
        width=column_data.width,
        options=column_data.options
    ))
    database.columns = dump_columns(columns)
    db.commit()
    db.refresh(database)
    return database


def update_column(db: Session, database_id: str, column_id: str, column_data: ColumnUpdate) -> Database:
    database = get_database(db, database_id)
    columns = parse_columns_strict(database.columns)

    updates = {k: v for k, v in column_data.model_dump(exclude_unset=True).items() if v is not None}
    for index, column in enumerate(columns):
        if column.id == column_id:
            columns[index] = column.model_copy(update=updates)
            break
    else:
        raise NotFoundError("Column not found")

    database.columns = dump_columns(columns)
    db.commit()
    db.refresh(database)
    return database


def remove_column(db: Session, database_id: str, column_id: str) -> Database:
    # les valeurs déjà présentes dans properties restent (ignorées au rendu)
    database = get_database(db, database_id)
    columns = parse_columns_strict(database.columns)

    remaining = [c for c in columns if c.id != column_id]
    if len(remaining) == len(columns):
        raise NotFoundError("Column not found")

    database.columns = dump_columns(remaining)
    db.commit()
    db.refresh(database)
    return database
