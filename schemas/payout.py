# schemas/payout.py
from typing import Optional, List
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class PayoutMethod(str, Enum):
     BANK_TRANSFER = "bank_transfer"
     GCASH = "gcash"
     MAYA = "maya"


class PayoutAccountRequest(BaseModel):
     payout_method: PayoutMethod
     account_name: Optional[str] = None
     account_number: Optional[str] = None
     bank_name: Optional[str] = None
     channel_code: Optional[str] = None

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "payout_method": "gcash",
                    "account_name": "Maria Santos",
                    "account_number": "09171234567"
               }
          }
     )


class PayoutAccountResponse(BaseModel):
     id: int
     landlord_id: int
     payout_method: str
     channel_code: str
     account_name: str
     account_number: str
     bank_name: Optional[str] = None
     is_active: bool

     model_config = ConfigDict(from_attributes=True)


class DisburseRequest(BaseModel):
     payment_ids: List[int] = Field(default_factory=list)
