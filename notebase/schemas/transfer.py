"""Schemas import / export (format portable ``{database, pages}``)"""

from pydantic import field_validator
from typing import Optional, List, Any
from notebase.schemas.base import CamelModel
from notebase.schemas.database import DatabaseResponse
from notebase.schemas.page import PageResponse


class ImportedDatabase(CamelModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    columns: Optional[Any] = None


class ImportedPage(CamelModel):
    id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    properties: Optional[Any] = None
    parent_id: Optional[str] = None
    is_template: Optional[bool] = None

    # les exports d'autres outils utilisent parfois des ids numériques
    @field_validator("id", "parent_id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        if value is None or value == "":
            return None
        return str(value)


class DatabaseExport(CamelModel):
    database: DatabaseResponse
    pages: List[PageResponse]


class CsvImportRequest(CamelModel):
    filename: str = "Imported.csv"
    text: str
