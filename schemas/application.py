# schemas/application.py
"""
Pydantic schemas for tenant applications (prospective tenants).
"""
from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class ApplicationDecision(str, Enum):
     """Landlord screening decision."""
     APPROVED = "approved"
     DISAPPROVED = "disapproved"


class ProceedDecision(str, Enum):
     YES = "yes"
     NO = "no"


class ApplicationCreate(BaseModel):
     unit_id: int = Field(..., gt=0)
     message: Optional[str] = Field(None, max_length=2000)


class ApplicationStatusUpdate(BaseModel):
     unit_id: int = Field(..., gt=0)
     tenant_id: int = Field(..., gt=0)
     status: ApplicationDecision
     message: Optional[str] = Field(None, max_length=2000, description="Required when disapproving")


class ProceedRequest(BaseModel):
     decision: ProceedDecision


class ApplicationResponse(BaseModel):
     id: int
     unit_id: int
     tenant_id: int
     status: str
     message: Optional[str] = None
     proceeded: Optional[str] = None
     tenant_name: Optional[str] = None
     tenant_email: Optional[str] = None
     created_at: datetime
