"""Données de démo insérées au premier démarrage (store vide)"""

import json
import logging
from sqlalchemy.orm import Session
from notebase.models.database import Database
from notebase.models.page import Page
from notebase.models.dashboard import Dashboard
from notebase.services.database_service import default_columns

logger = logging.getLogger(__name__)


def _props(**values) -> str:
    return json.dumps(values)


def seed_demo_data(db: Session) -> bool:
    """Renvoie True si quelque chose a été inséré"""
    seeded = False

    if db.query(Database).count() == 0:
        db.add_all([
            Database(id="db-1", name="Design Project", icon="Palette", columns=default_columns()),
            Database(id="db-2", name="Engineering Tasks", icon="Code", columns=default_columns()),
        ])

        # templates
        db.add_all([
            Page(
                id="tpl-1", title="Bug Report Template", database_id="db-2", is_template=True,
                content="<h2>Steps to Reproduce</h2><p>1. </p><h2>Expected Behavior</h2><p></p><h2>Actual Behavior</h2><p></p>",
                properties=_props(status="Todo", priority="High")
            ),
            Page(
                id="tpl-2", title="Design Spec Template", database_id="db-1", is_template=True,
                content="<h2>Overview</h2><p></p><h2>Requirements</h2><ul><li></li></ul>",
                properties=_props(status="Todo", priority="Medium")
            ),
        ])

        db.add_all([
            Page(
                id="1", title="Color Palette Refinement", database_id="db-1",
                content="We need to refine the primary and secondary colors for the new brand identity.",
                properties=_props(status="In Progress", date="Oct 12, 2023", priority="High", assignee="Alex M.")
            ),
            Page(
                id="2", title="Database Schema UI", database_id="db-1",
                content="Design the UI for the database schema builder.",
                properties=_props(status="Done", date="Oct 10, 2023", priority="Medium", assignee="Lena S.")
            ),
            Page(
                id="3", title="Typography Guide (Inter)", database_id="db-1",
                content="Create a comprehensive guide for using the Inter font family.",
                properties=_props(status="Todo", date="Oct 08, 2023", priority="Low", assignee="Marc K.")
            ),
            Page(
                id="4", title="API Rate Limiting", database_id="db-2",
                content="Implement rate limiting for the public API.",
                properties=_props(status="In Progress", date="Oct 05, 2023", priority="High", assignee="Sarah P.")
            ),
            Page(
                id="5", title="Redis Cache Setup", database_id="db-2",
                content="Setup Redis cache for faster read operations.",
                properties=_props(status="Done", date="Oct 01, 2023", priority="Medium", assignee="Alex M.")
            ),
            Page(
                id="6", title="Primary Colors", database_id="db-1", parent_id="1",
                content="Selected Blue (#135bec) as the primary brand color.",
                properties=_props(status="Done", date="Oct 11, 2023", priority="High", assignee="Alex M.")
            ),
        ])
        seeded = True

    if db.query(Dashboard).count() == 0:
        widgets = [
            {"i": "w1", "x": 0, "y": 0, "w": 2, "h": 2, "type": "database", "databaseId": "db-1", "viewMode": "table"},
            {"i": "w2", "x": 2, "y": 0, "w": 1, "h": 2, "type": "notes"},
            {"i": "w3", "x": 0, "y": 2, "w": 3, "h": 2, "type": "database", "databaseId": "db-2", "viewMode": "board"},
        ]
        db.add(Dashboard(id="dash-1", name="Home Dashboard", widgets=json.dumps(widgets)))
        seeded = True

    if seeded:
        db.commit()
        logger.info("Demo workspace seeded")
    return seeded
