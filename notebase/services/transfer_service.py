"""
Import / export des databases.

Format portable: ``{"database": {...}, "pages": [...]}``, les blobs
(columns, properties) restent des strings JSON. Le CSV passe par le même
chemin d'import après projection en pages temporaires.
"""

import csv
import io
import json
import logging
import re
from typing import Any, Dict
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from notebase.core.errors import ValidationError
from notebase.models.database import Database, new_id
from notebase.models.page import Page
from notebase.schemas.database import DatabaseResponse
from notebase.schemas.page import PageResponse
from notebase.schemas.transfer import ImportedDatabase, ImportedPage, DatabaseExport
from notebase.services.blob_service import dump_blob, parse_columns, parse_properties
from notebase.services.database_service import get_database

logger = logging.getLogger(__name__)


def _read_payload(payload: Any):
    if not isinstance(payload, dict) or "database" not in payload or "pages" not in payload:
        raise ValidationError("Import payload must contain 'database' and 'pages'")
    if not isinstance(payload["pages"], list):
        raise ValidationError("'pages' must be a list")

    try:
        source_database = ImportedDatabase.model_validate(payload["database"] or {})
        source_pages = [ImportedPage.model_validate(p) for p in payload["pages"]]
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid import payload: {e.error_count()} error(s)")

    return source_database, source_pages


def import_database(db: Session, payload: Dict[str, Any]) -> Database:
    """Crée une nouvelle database et des pages avec des ids neufs.

    1er passage: table ancien id -> nouvel id pour toutes les pages, pour que
    les parentId pointant plus loin dans la liste se résolvent aussi.
    2e passage: insertion avec les parentId réécrits; un parent absent du
    lot devient null.
    """
    source_database, source_pages = _read_payload(payload)

    database = Database(
        id=new_id(),
        name=f"{source_database.name or 'Imported'} (Imported)",
        icon=source_database.icon or "Database",
        columns=dump_blob(source_database.columns, "[]")
    )

    fresh_ids = [new_id() for _ in source_pages]
    id_map = {}
    for source, fresh in zip(source_pages, fresh_ids):
        # en cas de doublon, la première occurrence sert de cible
        if source.id is not None and source.id not in id_map:
            id_map[source.id] = fresh

    try:
        db.add(database)
        for source, fresh in zip(source_pages, fresh_ids):
            db.add(Page(
                id=fresh,
                title=source.title or "Untitled",
                content=source.content or "",
                properties=dump_blob(source.properties, "{}"),
                parent_id=id_map.get(source.parent_id) if source.parent_id else None,
                database_id=database.id,
                is_template=bool(source.is_template)
            ))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.refresh(database)
    logger.info(f"Imported database {database.id} with {len(source_pages)} page(s)")
    return database


def export_database(db: Session, database_id: str) -> DatabaseExport:
    database = get_database(db, database_id)
    pages = db.query(Page).filter(Page.database_id == database_id).all()

    return DatabaseExport(
        database=DatabaseResponse.model_validate(database),
        pages=[PageResponse.model_validate(p) for p in pages]
    )


def export_csv(db: Session, database_id: str) -> str:
    """Une ligne par page (hors templates): titre puis une colonne par colonne du schéma"""
    database = get_database(db, database_id)
    columns = parse_columns(database.columns)
    pages = db.query(Page).filter(
        Page.database_id == database_id,
        Page.is_template == False
    ).all()

    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(["Title"] + [c.name for c in columns])
    for page in pages:
        props = parse_properties(page.properties)
        row = [page.title or ""]
        for column in columns:
            value = props.get(column.id)
            row.append("" if value is None else value)
        writer.writerow(row)
    return buf.getvalue()


# Projection CSV -> payload d'import

def slugify_header(header: str) -> str:
    return re.sub(r"[^a-z0-9]", "-", header.lower())


def project_csv(text: str, filename: str = "Imported.csv") -> Dict[str, Any]:
    """Transforme un CSV (ligne d'en-tête obligatoire) en payload d'import.

    Toutes les colonnes deviennent des colonnes ``text``; la première donne
    le titre de chaque ligne (ou ``Row N`` si vide).
    """
    reader = csv.DictReader(io.StringIO(text.lstrip("\ufeff")))
    # un en-tête dupliqué ne donne qu'une colonne (DictReader garde la dernière valeur)
    headers = list(dict.fromkeys(h for h in (reader.fieldnames or []) if h is not None))
    if not headers:
        raise ValidationError("CSV has no header row")

    columns = []
    column_ids = {}
    for header in headers:
        base = slugify_header(header) or "column"
        column_id = base
        n = 2
        while column_id in column_ids.values():
            column_id = f"{base}-{n}"
            n += 1
        column_ids[header] = column_id
        columns.append({"id": column_id, "name": header, "type": "text", "width": 150})

    title_header = headers[0]
    pages = []
    for index, row in enumerate(reader):
        properties = {}
        for header in headers:
            value = row.get(header)
            if value is not None:
                properties[column_ids[header]] = value

        pages.append({
            "id": f"temp-{index}",
            "title": row.get(title_header) or f"Row {index + 1}",
            "content": "",
            "properties": json.dumps(properties),
            "parentId": None,
            "isTemplate": False
        })

    return {
        "database": {
            "name": re.sub(r"\.csv$", "", filename, flags=re.IGNORECASE),
            "icon": "Database",
            "columns": json.dumps(columns)
        },
        "pages": pages
    }


def import_csv(db: Session, text: str, filename: str = "Imported.csv") -> Database:
    return import_database(db, project_csv(text, filename))
