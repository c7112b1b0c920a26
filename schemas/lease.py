# schemas/lease.py
"""
Pydantic schemas for the lease generation wizard and lease lifecycle actions.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class SignerRole(str, Enum):
     LANDLORD = "landlord"
     TENANT = "tenant"


class LeaseType(str, Enum):
     RESIDENTIAL = "residential"
     COMMERCIAL = "commercial"


class RenewalDecision(str, Enum):
     APPROVED = "approved"
     DECLINED = "declined"


class LeaseGenerateRequest(BaseModel):
     """Terms collected by the lease wizard; the final step posts them all."""
     agreement_id: str = Field(..., min_length=1)
     lease_type: LeaseType = LeaseType.RESIDENTIAL
     start_date: date
     end_date: date
     rent_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
     security_deposit: Decimal = Field(default=Decimal("0"), ge=0)
     advance_payment: Decimal = Field(default=Decimal("0"), ge=0)
     billing_due_day: int = Field(default=1, ge=1, le=31)
     grace_period_days: int = Field(default=3, ge=0, le=31)
     late_fee_amount: Decimal = Field(default=Decimal("0"), ge=0)
     pet_policy: Optional[str] = None
     maintenance_responsibility: Optional[str] = None
     additional_terms: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "agreement_id": "UPKYPLEASE123456",
                    "lease_type": "residential",
                    "start_date": "2026-11-01",
                    "end_date": "2027-10-31",
                    "rent_amount": 12000.00,
                    "security_deposit": 24000.00,
                    "advance_payment": 12000.00,
                    "billing_due_day": 5,
                    "grace_period_days": 3,
                    "late_fee_amount": 500.00
               }
          }
     )


class SendOtpRequest(BaseModel):
     agreement_id: str
     role: SignerRole
     email: str
     timezone: Optional[str] = None


class VerifyOtpRequest(BaseModel):
     agreement_id: str
     role: SignerRole
     otp: str = Field(..., min_length=6, max_length=6)


class ExtendLeaseRequest(BaseModel):
     agreement_id: str
     new_end_date: date
     new_rent_amount: Optional[Decimal] = None


class AgreementRequest(BaseModel):
     agreement_id: str


class RenewalRequestCreate(BaseModel):
     agreement_id: str
     requested_start_date: date
     requested_end_date: date
     notes: Optional[str] = None


class RenewalStatusUpdate(BaseModel):
     id: int = Field(..., gt=0)
     status: RenewalDecision


class SignatureResponse(BaseModel):
     role: str
     email: Optional[str] = None
     status: str
     signed_at: Optional[datetime] = None

     model_config = ConfigDict(from_attributes=True)


class LeaseResponse(BaseModel):
     agreement_id: str
     is_renewal_of: Optional[str] = None
     tenant_id: Optional[int] = None
     unit_id: int
     lease_type: str
     start_date: Optional[date] = None
     end_date: Optional[date] = None
     status: str
     rent_amount: Optional[float] = None
     security_deposit_amount: float = 0
     advance_payment_amount: float = 0
     billing_due_day: int
     grace_period_days: int
     late_penalty_amount: float = 0
     is_security_deposit_paid: bool
     is_advance_payment_paid: bool
     agreement_url: Optional[str] = None

     # Related data
     tenant_name: Optional[str] = None
     unit_name: Optional[str] = None
     property_id: Optional[int] = None
     property_name: Optional[str] = None
     signatures: List[SignatureResponse] = []
     pdc_count: Optional[int] = None
