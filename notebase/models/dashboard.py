from sqlalchemy import Column, String, Text, DateTime
from datetime import datetime
from notebase.core.database import Base
from notebase.models.database import new_id


class Dashboard(Base):
    __tablename__ = "dashboards"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, default="Untitled Dashboard")
    widgets = Column(Text, default="[]")  # liste de widgets en JSON

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
