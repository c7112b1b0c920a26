# schemas/property.py
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class PropertyCreate(BaseModel):
     """Schema for registering a property."""
     property_name: str = Field(..., min_length=1, max_length=255)
     property_type: Optional[str] = Field(None, max_length=50)
     description: Optional[str] = None
     street: Optional[str] = Field(None, max_length=255)
     barangay: Optional[str] = Field(None, max_length=100)
     city: Optional[str] = Field(None, max_length=100)
     province: Optional[str] = Field(None, max_length=100)
     zip_code: Optional[str] = Field(None, max_length=10)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "property_name": "Sampaguita Residences",
                    "property_type": "apartment",
                    "street": "12 Mabini St.",
                    "barangay": "Poblacion",
                    "city": "Makati",
                    "province": "Metro Manila"
               }
          }
     )


class PropertyResponse(BaseModel):
     property_id: int
     landlord_id: int
     property_name: str
     property_type: Optional[str] = None
     description: Optional[str] = None
     street: Optional[str] = None
     barangay: Optional[str] = None
     city: Optional[str] = None
     province: Optional[str] = None
     zip_code: Optional[str] = None
     created_at: datetime

     model_config = ConfigDict(from_attributes=True)


class UnitCreate(BaseModel):
     unit_name: str = Field(..., min_length=1, max_length=50)
     unit_size: Optional[Decimal] = Field(None, gt=0)
     furnish: Optional[str] = Field(None, max_length=50)
     rent_amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)


class UnitResponse(BaseModel):
     unit_id: int
     property_id: int
     unit_name: str
     unit_size: Optional[float] = None
     furnish: Optional[str] = None
     rent_amount: Optional[float] = None
     status: str

     model_config = ConfigDict(from_attributes=True)
