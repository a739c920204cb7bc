from sqlalchemy.orm import Session
from sqlalchemy import or_
from notebase.models.database import Database
from notebase.models.page import Page
from notebase.models.dashboard import Dashboard
from typing import Dict, List, Optional


def _like_pattern(query: str) -> str:
    # % et _ saisis par l'utilisateur sont cherchés littéralement
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def search(db: Session, query: Optional[str]) -> Dict[str, List]:
    """Recherche par sous-chaîne, insensible à la casse (ILIKE).

    Pages: titre OU contenu. Databases et dashboards: nom.
    Pas de classement ni de pagination, ordre de stockage.
    """
    results = {"databases": [], "pages": [], "dashboards": []}
    if not query:
        return results

    pattern = _like_pattern(query)

    results["databases"] = db.query(Database).filter(
        Database.name.ilike(pattern, escape="\\")
    ).all()

    results["pages"] = db.query(Page).filter(
        or_(
            Page.title.ilike(pattern, escape="\\"),
            Page.content.ilike(pattern, escape="\\")
        )
    ).all()

    results["dashboards"] = db.query(Dashboard).filter(
        Dashboard.name.ilike(pattern, escape="\\")
    ).all()

    return results
