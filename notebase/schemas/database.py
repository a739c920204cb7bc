from pydantic import ConfigDict
from datetime import datetime
from typing import Optional, List, Any, Literal
from notebase.schemas.base import CamelModel

ColumnType = Literal["text", "number", "date", "select"]

# Schemas pour les databases

class ColumnDef(CamelModel):
    id: str
    name: str
    type: ColumnType = "text"
    width: int = 150
    options: Optional[List[str]] = None

    model_config = ConfigDict(extra="ignore")

class ColumnCreate(CamelModel):
    name: str
    id: Optional[str] = None  # slug généré depuis le nom si absent
    type: ColumnType = "text"
    width: int = 150
    options: Optional[List[str]] = None

class ColumnUpdate(CamelModel):
    name: Optional[str] = None
    type: Optional[ColumnType] = None
    width: Optional[int] = None
    options: Optional[List[str]] = None

class DatabaseCreate(CamelModel):
    name: Optional[str] = None
    icon: Optional[str] = None

class DatabaseUpdate(CamelModel):
    name: Optional[str] = None
    icon: Optional[str] = None
    columns: Optional[Any] = None  # string JSON ou liste de colonnes

class DatabaseResponse(CamelModel):
    id: str
    name: Optional[str]
    icon: Optional[str]
    columns: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
