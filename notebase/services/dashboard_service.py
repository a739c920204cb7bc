"""Dashboard service"""

import logging
import uuid
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from notebase.core.errors import NotFoundError, ValidationError
from notebase.models.dashboard import Dashboard
from notebase.schemas.dashboard import WidgetCreate, WidgetDef, LayoutItem
from notebase.services.blob_service import dump_blob, dump_widgets, parse_widgets_strict

logger = logging.getLogger(__name__)


def list_dashboards(db: Session) -> List[Dashboard]:
    return db.query(Dashboard).all()


def get_dashboard(db: Session, dashboard_id: str) -> Dashboard:
    dashboard = db.query(Dashboard).filter(Dashboard.id == dashboard_id).first()
    if not dashboard:
        raise NotFoundError("Dashboard not found")
    return dashboard


def create_dashboard(db: Session, name: Optional[str] = None, widgets: Any = None) -> Dashboard:
    dashboard = Dashboard(
        name=name or "Untitled Dashboard",
        widgets=dump_blob(widgets, "[]")
    )
    db.add(dashboard)
    db.commit()
    db.refresh(dashboard)
    return dashboard


def update_dashboard(db: Session, dashboard_id: str, changes: Dict[str, Any]) -> Dashboard:
    dashboard = get_dashboard(db, dashboard_id)

    for field, value in changes.items():
        if value is None:
            continue
        if field == "widgets":
            value = dump_blob(value, "[]")
        setattr(dashboard, field, value)

    db.commit()
    db.refresh(dashboard)
    return dashboard


def delete_dashboard(db: Session, dashboard_id: str) -> None:
    # pas de cascade: un dashboard ne possède ni databases ni pages
    dashboard = get_dashboard(db, dashboard_id)
    db.delete(dashboard)
    db.commit()
    logger.info(f"Dashboard {dashboard_id} deleted")


# Widgets: on remplace toujours la liste entière

def _save_widgets(db: Session, dashboard: Dashboard, widgets: List[WidgetDef]) -> Dashboard:
    dashboard.widgets = dump_widgets(widgets)
    db.commit()
    db.refresh(dashboard)
    return dashboard


def add_widget(db: Session, dashboard_id: str, widget_data: WidgetCreate) -> Dashboard:
    dashboard = get_dashboard(db, dashboard_id)
    widgets = parse_widgets_strict(dashboard.widgets)

    if widget_data.type == "database" and not widget_data.database_id:
        raise ValidationError("A database widget needs a databaseId")

    # placé sous le widget le plus bas
    bottom = max((w.y + w.h for w in widgets), default=0)
    widget = WidgetDef(
        i=f"w-{uuid.uuid4().hex[:12]}",
        x=0,
        y=bottom,
        w=1 if widget_data.type in ("notes", "tasks") else 2,
        h=2,
        type=widget_data.type,
        database_id=widget_data.database_id,
        view_mode=widget_data.view_mode or ("table" if widget_data.type == "database" else None)
    )
    widgets.append(widget)
    return _save_widgets(db, dashboard, widgets)


def remove_widget(db: Session, dashboard_id: str, widget_id: str) -> Dashboard:
    dashboard = get_dashboard(db, dashboard_id)
    widgets = parse_widgets_strict(dashboard.widgets)

    remaining = [w for w in widgets if w.i != widget_id]
    if len(remaining) == len(widgets):
        raise NotFoundError("Widget not found")
    return _save_widgets(db, dashboard, remaining)


def apply_layout(db: Session, dashboard_id: str, layout: List[LayoutItem]) -> Dashboard:
    """Applique les positions de la grille; les ids inconnus sont ignorés"""
    dashboard = get_dashboard(db, dashboard_id)
    widgets = parse_widgets_strict(dashboard.widgets)

    positions = {item.i: item for item in layout}
    moved = []
    for widget in widgets:
        item = positions.get(widget.i)
        if item:
            widget = widget.model_copy(update={"x": item.x, "y": item.y, "w": item.w, "h": item.h})
        moved.append(widget)
    return _save_widgets(db, dashboard, moved)
