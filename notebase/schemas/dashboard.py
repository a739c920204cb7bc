from pydantic import ConfigDict, Field
from datetime import datetime
from typing import Optional, List, Any, Literal
from notebase.schemas.base import CamelModel

WidgetType = Literal["database", "notes", "tasks"]
ViewMode = Literal["table", "board"]

# Schemas dashboards / widgets

class WidgetDef(CamelModel):
    i: str  # id du widget (convention de la grille)
    x: int = 0
    y: int = 0
    w: int = 1
    h: int = 2
    type: WidgetType
    database_id: Optional[str] = None
    view_mode: Optional[ViewMode] = None

    # les champs spécifiques inconnus sont conservés tels quels
    model_config = ConfigDict(extra="allow")

class WidgetCreate(CamelModel):
    type: WidgetType
    database_id: Optional[str] = None
    view_mode: Optional[ViewMode] = None

class LayoutItem(CamelModel):
    i: str
    x: int
    y: int
    w: int = Field(1, ge=1)
    h: int = Field(1, ge=1)

class DashboardCreate(CamelModel):
    name: Optional[str] = None
    widgets: Optional[Any] = None

class DashboardUpdate(CamelModel):
    name: Optional[str] = None
    widgets: Optional[Any] = None

class DashboardResponse(CamelModel):
    id: str
    name: Optional[str]
    widgets: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
