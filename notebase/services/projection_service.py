"""
Projections pures: arborescence, board, progression, widgets de dashboard.

Aucun accès à la base ici: les fonctions prennent des listes déjà chargées
(modèles ORM ou tout objet avec les mêmes attributs) et renvoient les
schemas de notebase.schemas.view.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional
from notebase.schemas.database import ColumnDef, DatabaseResponse
from notebase.schemas.dashboard import WidgetDef, DashboardResponse
from notebase.schemas.page import PageResponse
from notebase.schemas.view import BoardColumn, DashboardRender, DatabaseView, Progress, WidgetData
from notebase.services.blob_service import parse_columns, parse_properties, parse_widgets

logger = logging.getLogger(__name__)

DEFAULT_STATUSES = ["Todo", "In Progress", "Done"]
DONE_VALUES = ("done", "completed", "finished")
WIDGET_LIMIT = 5
BOARD_WIDGET_LIMIT = 3


def _as_response(pages: Iterable) -> List[PageResponse]:
    return [PageResponse.model_validate(p) for p in pages]


# func 1: hiérarchie

def get_children(pages: Iterable, parent_id: Optional[str] = None) -> List:
    """Enfants directs de parent_id (None = racine), templates exclus"""
    parent_id = parent_id or None
    return [p for p in pages if (p.parent_id or None) == parent_id and not p.is_template]


def get_templates(pages: Iterable, database_id: Optional[str] = None) -> List:
    return [p for p in pages if p.is_template and (database_id is None or p.database_id == database_id)]


def get_breadcrumbs(pages: Iterable, page_id: Optional[str]) -> List:
    """Remonte les parentId depuis page_id; renvoie [racine, ..., page_id].

    S'arrête sur un parent null, introuvable, ou déjà vu (cycle).
    """
    by_id = {p.id: p for p in pages}
    trail = []
    seen = set()
    current = page_id

    while current and current not in seen:
        page = by_id.get(current)
        if page is None:
            break
        seen.add(current)
        trail.append(page)
        current = page.parent_id

    if current and current in seen:
        logger.warning(f"Parent cycle detected at page {current}")

    trail.reverse()
    return trail


# func 2: board / statuts

def find_status_column(columns: List[ColumnDef]) -> Optional[ColumnDef]:
    for column in columns:
        if column.type == "select" and (column.name.lower() == "status" or column.id == "status"):
            return column
    return None


def status_key(columns: List[ColumnDef]) -> str:
    column = find_status_column(columns)
    return column.id if column else "status"


def status_options(columns: List[ColumnDef]) -> List[str]:
    column = find_status_column(columns)
    if column and column.options is not None:
        return column.options
    return list(DEFAULT_STATUSES)


def build_board(pages: Iterable, columns: List[ColumnDef], parent_id: Optional[str] = None) -> List[BoardColumn]:
    """Groupe les enfants directs par valeur de statut.

    Une page dont le statut ne correspond à aucune option n'apparaît dans
    aucune colonne (pas de colonne "inconnu").
    """
    key = status_key(columns)
    children = get_children(pages, parent_id)
    values = {p.id: parse_properties(p.properties).get(key) for p in children}

    return [
        BoardColumn(status=status, pages=_as_response(p for p in children if values[p.id] == status))
        for status in status_options(columns)
    ]


# func 3: progression des sous-pages

def _is_done(value) -> bool:
    if value is None:
        return False
    return str(value).strip().lower() in DONE_VALUES


def compute_progress(pages: Iterable, page_id: str, columns: List[ColumnDef]) -> Optional[Progress]:
    """None si la page n'a pas d'enfants (différent de 0 sur N)"""
    children = get_children(pages, page_id)
    if not children:
        return None

    key = status_key(columns)
    completed = sum(1 for p in children if _is_done(parse_properties(p.properties).get(key)))
    fraction = completed / len(children)

    return Progress(
        total=len(children),
        completed=completed,
        fraction=fraction,
        percentage=int(fraction * 100 + 0.5)
    )


def database_view(database, pages: Iterable, parent_id: Optional[str] = None, mode: str = "table") -> DatabaseView:
    """Tout ce qu'il faut pour afficher une database à un niveau de l'arbre"""
    columns = parse_columns(database.columns)
    scoped = [p for p in pages if p.database_id == database.id]
    children = get_children(scoped, parent_id)

    progress = {}
    for page in children:
        result = compute_progress(scoped, page.id, columns)
        if result is not None:
            progress[page.id] = result

    return DatabaseView(
        database=DatabaseResponse.model_validate(database),
        columns=columns,
        parent_id=parent_id,
        breadcrumbs=_as_response(get_breadcrumbs(scoped, parent_id)) if parent_id else [],
        pages=_as_response(children),
        templates=_as_response(get_templates(scoped, database.id)),
        board=build_board(scoped, columns, parent_id) if mode == "board" else None,
        progress=progress
    )


# func 4: widgets de dashboard

def _most_recent(pages: List) -> List:
    # tri stable: à date égale on garde l'ordre de stockage
    return sorted(pages, key=lambda p: p.updated_at or p.created_at or datetime.min, reverse=True)


def widget_data(widget: WidgetDef, databases: Iterable, pages: Iterable) -> WidgetData:
    pages = list(pages)

    if widget.type == "notes":
        notes = [p for p in pages if not p.is_template and not p.parent_id]
        return WidgetData(widget=widget, pages=_as_response(_most_recent(notes)[:WIDGET_LIMIT]))

    if widget.type == "tasks":
        tasks = [p for p in pages if not p.is_template and "status" in parse_properties(p.properties)]
        return WidgetData(widget=widget, pages=_as_response(tasks[:WIDGET_LIMIT]))

    if widget.type == "database":
        database = next((d for d in databases if d.id == widget.database_id), None)
        roots = [
            p for p in pages
            if p.database_id == widget.database_id and not p.is_template and not p.parent_id
        ]
        data = WidgetData(
            widget=widget,
            database=DatabaseResponse.model_validate(database) if database else None
        )
        if widget.view_mode == "board":
            values = {p.id: parse_properties(p.properties).get("status") for p in roots}
            data.board = [
                BoardColumn(
                    status=status,
                    pages=_as_response([p for p in roots if values[p.id] == status][:BOARD_WIDGET_LIMIT])
                )
                for status in DEFAULT_STATUSES
            ]
        else:
            data.pages = _as_response(roots[:WIDGET_LIMIT])
        return data

    return WidgetData(widget=widget)


def dashboard_render(dashboard, databases: Iterable, pages: Iterable) -> DashboardRender:
    databases = list(databases)
    pages = list(pages)
    return DashboardRender(
        dashboard=DashboardResponse.model_validate(dashboard),
        widgets=[widget_data(w, databases, pages) for w in parse_widgets(dashboard.widgets)]
    )
