# IMPORTS
import logging
import re
from typing import Any, Dict, List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from notebase.core.errors import NotFoundError, ValidationError
from notebase.models.page import Page
from notebase.services.blob_service import dump_blob
from notebase.services.database_service import get_database

logger = logging.getLogger(__name__)


# func 1: lecture

def list_pages(db: Session, database_id: Optional[str] = None) -> List[Page]:
    query = db.query(Page)
    if database_id:
        query = query.filter(Page.database_id == database_id)
    return query.all()


def list_templates(db: Session, database_id: str) -> List[Page]:
    return db.query(Page).filter(
        Page.database_id == database_id,
        Page.is_template == True
    ).all()


def get_page(db: Session, page_id: str) -> Page:
    page = db.query(Page).filter(Page.id == page_id).first()
    if not page:
        raise NotFoundError("Page not found")
    return page


# func 2: écriture

def create_page(
    db: Session,
    database_id: Optional[str] = None,
    parent_id: Optional[str] = None,
    title: Optional[str] = None,
    content: Optional[str] = None,
    properties: Any = None,
    is_template: Optional[bool] = False
) -> Page:
    page = Page(
        title=title or "Untitled",
        content=content or "",
        properties=dump_blob(properties, "{}"),
        parent_id=parent_id or None,
        database_id=database_id,
        is_template=bool(is_template)
    )
    db.add(page)
    db.commit()
    db.refresh(page)
    return page


def update_page(db: Session, page_id: str, changes: Dict[str, Any]) -> Page:
    # même sémantique coalesce que update_database; is_template=False est une valeur, pas un "absent"
    page = get_page(db, page_id)

    for field, value in changes.items():
        if value is None:
            continue
        if field == "properties":
            value = dump_blob(value, "{}")
        setattr(page, field, value)

    db.commit()
    db.refresh(page)
    return page


def delete_page(db: Session, page_id: str) -> int:
    """Supprime la page et ses enfants directs.

    Un seul niveau: les petits-enfants restent en base, sans parent atteignable.
    """
    page = get_page(db, page_id)

    try:
        deleted_children = db.query(Page).filter(
            Page.parent_id == page_id
        ).delete(synchronize_session=False)
        db.delete(page)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    logger.info(f"Page {page_id} deleted with {deleted_children} direct child(ren)")
    return deleted_children


# func 3: templates et import markdown

def instantiate_template(
    db: Session,
    template_id: str,
    title: Optional[str] = None,
    content: Optional[str] = None,
    parent_id: Optional[str] = None
) -> Page:
    template = get_page(db, template_id)
    if not template.is_template:
        raise ValidationError("Page is not a template")

    return create_page(
        db,
        database_id=template.database_id,
        parent_id=parent_id,
        title=title or template.title,
        content=content or template.content,
        properties=template.properties,
        is_template=False
    )


def import_markdown(
    db: Session,
    database_id: str,
    filename: str,
    text: str,
    parent_id: Optional[str] = None
) -> Page:
    # la database doit exister, sinon 404
    get_database(db, database_id)
    title = re.sub(r"\.md$", "", filename, flags=re.IGNORECASE)
    return create_page(db, database_id=database_id, parent_id=parent_id, title=title, content=text)
