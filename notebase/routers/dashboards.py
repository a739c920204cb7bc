from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from notebase.core.database import get_db
from notebase.schemas.dashboard import DashboardCreate, DashboardUpdate, DashboardResponse, WidgetCreate, LayoutItem
from notebase.schemas.view import DashboardRender
from notebase.services import dashboard_service, database_service, page_service
from notebase.services.projection_service import dashboard_render

router = APIRouter(prefix="/dashboards", tags=["dashboards"])


@router.get("", response_model=List[DashboardResponse])
def list_dashboards(db: Session = Depends(get_db)):
    return dashboard_service.list_dashboards(db)


@router.post("", response_model=DashboardResponse, status_code=status.HTTP_201_CREATED)
def create_dashboard(dashboard_data: Optional[DashboardCreate] = None, db: Session = Depends(get_db)):
    dashboard_data = dashboard_data or DashboardCreate()
    return dashboard_service.create_dashboard(db, dashboard_data.name, dashboard_data.widgets)


@router.get("/{dashboard_id}", response_model=DashboardResponse)
def get_dashboard(dashboard_id: str, db: Session = Depends(get_db)):
    return dashboard_service.get_dashboard(db, dashboard_id)


@router.put("/{dashboard_id}", response_model=DashboardResponse)
def update_dashboard(dashboard_id: str, dashboard_data: DashboardUpdate, db: Session = Depends(get_db)):
    return dashboard_service.update_dashboard(db, dashboard_id, dashboard_data.model_dump(exclude_unset=True))


@router.delete("/{dashboard_id}")
def delete_dashboard(dashboard_id: str, db: Session = Depends(get_db)):
    dashboard_service.delete_dashboard(db, dashboard_id)
    return {"success": True}


# Widgets
@router.post("/{dashboard_id}/widgets", response_model=DashboardResponse, status_code=status.HTTP_201_CREATED)
def add_widget(dashboard_id: str, widget_data: WidgetCreate, db: Session = Depends(get_db)):
    return dashboard_service.add_widget(db, dashboard_id, widget_data)


@router.delete("/{dashboard_id}/widgets/{widget_id}", response_model=DashboardResponse)
def remove_widget(dashboard_id: str, widget_id: str, db: Session = Depends(get_db)):
    return dashboard_service.remove_widget(db, dashboard_id, widget_id)


@router.put("/{dashboard_id}/layout", response_model=DashboardResponse)
def update_layout(dashboard_id: str, layout: List[LayoutItem], db: Session = Depends(get_db)):
    return dashboard_service.apply_layout(db, dashboard_id, layout)


@router.get("/{dashboard_id}/render", response_model=DashboardRender)
def render_dashboard(dashboard_id: str, db: Session = Depends(get_db)):
    dashboard = dashboard_service.get_dashboard(db, dashboard_id)
    return dashboard_render(dashboard, database_service.list_databases(db), page_service.list_pages(db))
