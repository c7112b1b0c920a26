# schemas/maintenance.py
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel


class MaintenanceStatusUpdate(BaseModel):
     request_id: Optional[int] = None
     status: Optional[str] = None
     schedule_date: Optional[date] = None
     completion_date: Optional[date] = None


class MaintenanceResponse(BaseModel):
     request_id: int
     tenant_id: int
     unit_id: int
     subject: str
     description: str
     category: str
     status: str
     schedule_date: Optional[date] = None
     completion_date: Optional[date] = None
     created_at: datetime
     photo_urls: List[str] = []
     tenant_name: Optional[str] = None
     unit_name: Optional[str] = None
     property_name: Optional[str] = None
