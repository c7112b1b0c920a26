# schemas/payment.py
"""
Pydantic schemas for tenant payments and gateway checkout.
"""
from datetime import datetime
from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class InitialPaymentType(str, Enum):
     SECURITY_DEPOSIT = "security_deposit"
     ADVANCE_PAYMENT = "advance_payment"


class CheckoutRequest(BaseModel):
     billing_id: str = Field(..., min_length=1)

     model_config = ConfigDict(
          json_schema_extra={"example": {"billing_id": "UPKYPBILL004211"}}
     )


class CheckoutResponse(BaseModel):
     invoice_id: str
     invoice_url: str
     external_id: str


class InitialPaymentRequest(BaseModel):
     agreement_id: str
     payment_types: List[InitialPaymentType] = Field(..., min_length=1)
     ref: str = Field(..., min_length=1, description="Gateway reference; makes the call idempotent")


class PaymentResponse(BaseModel):
     payment_id: int
     bill_id: Optional[str] = None
     agreement_id: str
     payment_type: str
     amount_paid: float
     gross_amount: Optional[float] = None
     net_amount: Optional[float] = None
     gateway_fee: Optional[float] = None
     payment_method: Optional[str] = None
     payment_status: str
     payout_status: str
     proof_of_payment: Optional[str] = None
     receipt_reference: Optional[str] = None
     payment_date: Optional[datetime] = None

     # Related data
     tenant_name: Optional[str] = None
     unit_name: Optional[str] = None
     transaction_hash: Optional[str] = None
