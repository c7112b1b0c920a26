# schemas/pdc.py
"""
Pydantic schemas for post-dated checks.
"""
from datetime import date, datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict


class PDCStatusUpdate(BaseModel):
     """Status is validated in the service so the error lists the allowed values."""
     pdc_id: Optional[int] = None
     status: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {"pdc_id": 12, "status": "cleared"}
          }
     )


class PDCResponse(BaseModel):
     pdc_id: int
     lease_id: str
     check_number: Optional[str] = None
     bank_name: Optional[str] = None
     amount: float
     due_date: Optional[date] = None
     status: str
     uploaded_image_url: Optional[str] = None
     notes: Optional[str] = None
     cleared_at: Optional[datetime] = None
     bounced_at: Optional[datetime] = None
     replaced_at: Optional[datetime] = None
     created_at: Optional[datetime] = None

     # Related data
     unit_name: Optional[str] = None
     property_name: Optional[str] = None
     tenant_name: Optional[str] = None


class Pagination(BaseModel):
     total: int
     page: int
     limit: int
     totalPages: int


class PDCListResponse(BaseModel):
     data: List[PDCResponse]
     totalCount: int
     pagination: Pagination
