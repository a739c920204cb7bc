"""Résolution des demandes de navigation ("ouvrir cet élément")"""

from sqlalchemy.orm import Session
from notebase.models.database import Database
from notebase.models.page import Page
from notebase.schemas.database import DatabaseResponse
from notebase.schemas.dashboard import DashboardResponse
from notebase.schemas.page import PageResponse
from notebase.schemas.view import NavigationRequest, NavigationTarget
from notebase.services.dashboard_service import get_dashboard
from notebase.services.database_service import get_database
from notebase.services.page_service import get_page, list_pages
from notebase.services.projection_service import get_breadcrumbs


def resolve(db: Session, request: NavigationRequest) -> NavigationTarget:
    """Renvoie la cible demandée + le fil d'Ariane; 404 si l'id n'existe pas"""
    if request.kind == "dashboard":
        dashboard = get_dashboard(db, request.id)
        return NavigationTarget(kind="dashboard", dashboard=DashboardResponse.model_validate(dashboard))

    if request.kind == "database":
        database = get_database(db, request.id)
        trail = []
        if request.parent_id:
            trail = get_breadcrumbs(list_pages(db, database.id), request.parent_id)
        return NavigationTarget(
            kind="database",
            database=DatabaseResponse.model_validate(database),
            parent_id=request.parent_id,
            breadcrumbs=[PageResponse.model_validate(p) for p in trail]
        )

    page = get_page(db, request.id)
    database = None
    if page.database_id:
        database = db.query(Database).filter(Database.id == page.database_id).first()
    scope = list_pages(db, page.database_id) if page.database_id else db.query(Page).all()
    trail = get_breadcrumbs(scope, page.parent_id) if page.parent_id else []

    return NavigationTarget(
        kind="page",
        page=PageResponse.model_validate(page),
        database=DatabaseResponse.model_validate(database) if database else None,
        parent_id=page.parent_id,
        breadcrumbs=[PageResponse.model_validate(p) for p in trail]
    )
