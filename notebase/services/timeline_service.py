"""
Projections calendrier et timeline (Gantt).

Les dates viennent des properties ("Oct 12, 2023", "2023-10-12"...), parsées
avec dateutil; une valeur illisible sort simplement la page de la vue.
"""

from collections import defaultdict
from datetime import date
from typing import Iterable, List, Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta, MO, SU
from notebase.schemas.database import ColumnDef
from notebase.schemas.page import PageResponse
from notebase.schemas.view import CalendarDay, CalendarMonth, Timeline, TimelineBar
from notebase.services.blob_service import parse_properties
from notebase.services.projection_service import status_key

CELL_WIDTHS = {"Day": 40, "Week": 10, "Month": 3}
END_COLUMN_NAMES = ("end", "end date", "end-date", "due", "due date", "due-date", "deadline")


def _shift(day: date, delta: relativedelta, bound: date) -> date:
    # au-delà de date.min / date.max on reste sur la borne
    try:
        return day + delta
    except (OverflowError, ValueError):
        return bound


def parse_page_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    try:
        return date_parser.parse(str(value)).date()
    except (ValueError, OverflowError):
        return None


def start_key(columns: List[ColumnDef]) -> str:
    for column in columns:
        if column.type == "date":
            return column.id
    return "date"


def end_key(columns: List[ColumnDef]) -> Optional[str]:
    start = start_key(columns)
    for column in columns:
        if column.type != "date" or column.id == start:
            continue
        if column.id.lower() in END_COLUMN_NAMES or column.name.lower() in END_COLUMN_NAMES:
            return column.id
    return None


# func 1: calendrier mensuel

def calendar_month(pages: Iterable, columns: List[ColumnDef], year: int, month: int) -> CalendarMonth:
    """Grille lundi -> dimanche couvrant le mois entier"""
    first = date(year, month, 1)
    last = first + relativedelta(day=31)
    grid_start = _shift(first, relativedelta(weekday=MO(-1)), date.min)
    grid_end = _shift(last, relativedelta(weekday=SU(+1)), date.max)

    key = start_key(columns)
    by_day = defaultdict(list)
    for page in pages:
        if page.is_template:
            continue
        day = parse_page_date(parse_properties(page.properties).get(key))
        if day and grid_start <= day <= grid_end:
            by_day[day].append(PageResponse.model_validate(page))

    days = [grid_start]
    while days[-1] < grid_end:
        days.append(days[-1] + relativedelta(days=1))

    # la dernière semaine de décembre 9999 est tronquée à date.max
    cells = [CalendarDay(day=d, in_month=d.month == month, pages=by_day.get(d, [])) for d in days]
    weeks = [cells[i:i + 7] for i in range(0, len(cells), 7)]

    return CalendarMonth(year=year, month=month, weeks=weeks)


# func 2: timeline

def timeline(pages: Iterable, columns: List[ColumnDef], mode: str = "Day", today: Optional[date] = None) -> Timeline:
    today = today or date.today()
    cell_width = CELL_WIDTHS[mode]
    start_id = start_key(columns)
    end_id = end_key(columns)
    state_id = status_key(columns)

    spans = []
    for page in pages:
        if page.is_template:
            continue
        props = parse_properties(page.properties)
        start = parse_page_date(props.get(start_id))
        if start is None:
            continue
        end = parse_page_date(props.get(end_id)) if end_id else None
        if end is None or end < start:
            end = start
        spans.append((page, start, end, props.get(state_id)))

    if spans:
        range_start = _shift(min(s[1] for s in spans), relativedelta(days=-7), date.min)
        range_end = _shift(max(s[2] for s in spans), relativedelta(days=14), date.max)
    else:
        range_start = _shift(today, relativedelta(days=-7), date.min)
        range_end = _shift(today, relativedelta(days=21), date.max)

    bars = [
        TimelineBar(
            page=PageResponse.model_validate(page),
            start=start,
            end=end,
            offset=(start - range_start).days * cell_width,
            width=((end - start).days + 1) * cell_width,
            status=None if status is None else str(status)
        )
        for page, start, end, status in spans
    ]

    return Timeline(
        mode=mode,
        start=range_start,
        end=range_end,
        cell_width=cell_width,
        days=(range_end - range_start).days + 1,
        today_offset=(today - range_start).days * cell_width,
        bars=bars
    )
