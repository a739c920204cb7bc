from pydantic import field_validator
from datetime import datetime
from typing import Optional, Any
from notebase.schemas.base import CamelModel

# Schemas pour les pages

class PageCreate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    properties: Optional[Any] = None  # string JSON ou dict
    parent_id: Optional[str] = None
    database_id: Optional[str] = None
    is_template: Optional[bool] = None

class PageUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    properties: Optional[Any] = None
    parent_id: Optional[str] = None
    database_id: Optional[str] = None
    # tri-état: True, False, ou absent (= inchangé)
    is_template: Optional[bool] = None

class PageResponse(CamelModel):
    id: str
    title: Optional[str]
    content: Optional[str]
    properties: Optional[str]
    parent_id: Optional[str]
    database_id: Optional[str]
    is_template: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("is_template", mode="before")
    @classmethod
    def flag_as_bool(cls, value):
        # SQLite renvoie 0/1, une page non persistée renvoie None
        return bool(value)

class TemplateInstantiate(CamelModel):
    """Créer une page depuis un template"""
    title: Optional[str] = None
    content: Optional[str] = None
    parent_id: Optional[str] = None

class MarkdownImport(CamelModel):
    database_id: str
    parent_id: Optional[str] = None
    filename: str
    text: str = ""
