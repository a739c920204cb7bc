"""Structures dérivées renvoyées par la couche de projection"""

from datetime import date
from typing import Optional, List, Dict, Literal
from notebase.schemas.base import CamelModel
from notebase.schemas.database import DatabaseResponse, ColumnDef
from notebase.schemas.page import PageResponse
from notebase.schemas.dashboard import DashboardResponse, WidgetDef


class Progress(CamelModel):
    total: int
    completed: int
    fraction: float
    percentage: int


class BoardColumn(CamelModel):
    status: str
    pages: List[PageResponse] = []


class DatabaseView(CamelModel):
    database: DatabaseResponse
    columns: List[ColumnDef]
    parent_id: Optional[str] = None
    breadcrumbs: List[PageResponse] = []
    pages: List[PageResponse] = []
    templates: List[PageResponse] = []
    board: Optional[List[BoardColumn]] = None
    progress: Dict[str, Progress] = {}


class WidgetData(CamelModel):
    widget: WidgetDef
    database: Optional[DatabaseResponse] = None
    pages: List[PageResponse] = []
    board: Optional[List[BoardColumn]] = None


class DashboardRender(CamelModel):
    dashboard: DashboardResponse
    widgets: List[WidgetData] = []


class CalendarDay(CamelModel):
    day: date
    in_month: bool
    pages: List[PageResponse] = []


class CalendarMonth(CamelModel):
    year: int
    month: int
    weeks: List[List[CalendarDay]]


class TimelineBar(CamelModel):
    page: PageResponse
    start: date
    end: date
    offset: int
    width: int
    status: Optional[str] = None


class Timeline(CamelModel):
    mode: Literal["Day", "Week", "Month"]
    start: date
    end: date
    cell_width: int
    days: int
    today_offset: int
    bars: List[TimelineBar] = []


class NavigationRequest(CamelModel):
    kind: Literal["database", "page", "dashboard"]
    id: str
    parent_id: Optional[str] = None


class NavigationTarget(CamelModel):
    kind: Literal["database", "page", "dashboard"]
    database: Optional[DatabaseResponse] = None
    page: Optional[PageResponse] = None
    dashboard: Optional[DashboardResponse] = None
    parent_id: Optional[str] = None
    breadcrumbs: List[PageResponse] = []
