# schemas/billing.py
"""
Pydantic schemas for monthly billing (submetered and non-submetered units).
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, List
from pydantic import BaseModel, Field, ConfigDict


class ChargeItem(BaseModel):
     """A charge or discount line; malformed items are skipped by the service."""
     type: Optional[str] = None
     amount: Any = None
     category: Optional[str] = None


class NonSubmeteredBillRequest(BaseModel):
     unit_id: Optional[int] = None
     agreement_id: Optional[str] = None
     total: Any = None
     additional_charges: List[ChargeItem] = []
     discounts: List[ChargeItem] = []

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "unit_id": 4,
                    "agreement_id": "UPKYPLEASE123456",
                    "total": 12500.00,
                    "additional_charges": [{"type": "Parking", "amount": 1000}],
                    "discounts": [{"type": "Loyalty", "amount": 500}]
               }
          }
     )


class SubmeteredBillRequest(BaseModel):
     unit_id: int = Field(..., gt=0)
     readingDate: date
     dueDate: Optional[date] = None
     waterPrevReading: Optional[Decimal] = None
     waterCurrentReading: Optional[Decimal] = None
     electricityPrevReading: Optional[Decimal] = None
     electricityCurrentReading: Optional[Decimal] = None
     totalWaterAmount: Decimal = Field(default=Decimal("0"), ge=0)
     totalElectricityAmount: Decimal = Field(default=Decimal("0"), ge=0)
     total_amount_due: Decimal = Field(..., ge=0)
     additionalCharges: List[ChargeItem] = []


class ChargeResponse(BaseModel):
     charge_category: str
     charge_type: str
     amount: float


class MeterReadingResponse(BaseModel):
     utility_type: str
     reading_date: date
     previous_reading: float
     current_reading: float
     consumption: float


class BillingResponse(BaseModel):
     billing_id: str
     lease_id: str
     unit_id: int
     billing_period: date
     total_water_amount: float
     total_electricity_amount: float
     total_amount_due: float
     due_date: date
     status: str
     paid_at: Optional[datetime] = None
     charges: List[ChargeResponse] = []


class CurrentBillingResponse(BaseModel):
     billing: Optional[BillingResponse] = None
     meter_readings: List[MeterReadingResponse] = []


class BillingSummaryResponse(BaseModel):
     total_paid: float
     total_unpaid: float
     total_overdue: float
     unpaid_count: int
     overdue_count: int
