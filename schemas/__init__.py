# schemas/__init__.py
from .auth import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from .property import PropertyCreate, PropertyResponse, UnitCreate, UnitResponse
from .lease import LeaseGenerateRequest, LeaseResponse
from .pdc import PDCListResponse, PDCResponse, PDCStatusUpdate
from .billing import (
     BillingResponse,
     BillingSummaryResponse,
     NonSubmeteredBillRequest,
     SubmeteredBillRequest,
)
from .payment import CheckoutRequest, CheckoutResponse, PaymentResponse

__all__ = [
     "LoginRequest",
     "LoginResponse",
     "RegisterRequest",
     "UserResponse",
     "PropertyCreate",
     "PropertyResponse",
     "UnitCreate",
     "UnitResponse",
     "LeaseGenerateRequest",
     "LeaseResponse",
     "PDCListResponse",
     "PDCResponse",
     "PDCStatusUpdate",
     "BillingResponse",
     "BillingSummaryResponse",
     "NonSubmeteredBillRequest",
     "SubmeteredBillRequest",
     "CheckoutRequest",
     "CheckoutResponse",
     "PaymentResponse",
]
