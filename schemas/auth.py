# schemas/auth.py
"""
Pydantic schemas for registration, login and e-mail OTP verification.
"""
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, ConfigDict


class SignupRole(str, Enum):
     LANDLORD = "landlord"
     TENANT = "tenant"


class RegisterRequest(BaseModel):
     first_name: str = Field(..., min_length=1, max_length=100)
     last_name: str = Field(..., min_length=1, max_length=100)
     email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
     password: str = Field(..., min_length=8, max_length=128)
     role: SignupRole
     timezone: str = Field(default="Asia/Manila", max_length=64)

     model_config = ConfigDict(
          json_schema_extra={
               "example": {
                    "first_name": "Juan",
                    "last_name": "Dela Cruz",
                    "email": "juan@example.com",
                    "password": "s3cretpass",
                    "role": "tenant"
               }
          }
     )


class LoginRequest(BaseModel):
     email: str
     password: str


class VerifyOtpRequest(BaseModel):
     email: str
     otp: str = Field(..., min_length=6, max_length=6)


class ResendOtpRequest(BaseModel):
     email: str


class UserResponse(BaseModel):
     id: int
     email: str
     first_name: str
     last_name: str
     role: str
     email_verified: bool
     timezone: str
     landlord_id: Optional[int] = None
     tenant_id: Optional[int] = None

     model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
     token: str
     user: UserResponse
