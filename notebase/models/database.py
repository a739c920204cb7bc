"""Database model (collection définie par l'utilisateur, pas le store)"""

from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
import uuid
from notebase.core.database import Base


def new_id() -> str:
    return str(uuid.uuid4())


class Database(Base):
    __tablename__ = "databases"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, default="Untitled Database")
    icon = Column(String, default="Database")
    columns = Column(Text, default="[]")  # schéma JSON sérialisé

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
