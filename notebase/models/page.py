"""Page model"""

from sqlalchemy import Column, String, Text, DateTime, Boolean
from datetime import datetime
from notebase.core.database import Base
from notebase.models.database import new_id


class Page(Base):
    __tablename__ = "pages"

    id = Column(String, primary_key=True, default=new_id)
    title = Column(String, default="Untitled")
    content = Column(Text, default="")
    properties = Column(Text, default="{}")  # {column_id: valeur} en JSON

    # références faibles: pas de ForeignKey, les orphelins sont tolérés
    parent_id = Column(String, nullable=True, index=True)
    database_id = Column(String, nullable=True, index=True)
    is_template = Column(Boolean, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
