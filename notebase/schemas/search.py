from typing import List
from notebase.schemas.base import CamelModel
from notebase.schemas.database import DatabaseResponse
from notebase.schemas.page import PageResponse
from notebase.schemas.dashboard import DashboardResponse


class SearchResponse(CamelModel):
    databases: List[DatabaseResponse] = []
    pages: List[PageResponse] = []
    dashboards: List[DashboardResponse] = []
