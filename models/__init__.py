from .base import Base
from .user import User
from .landlord import Landlord
from .tenant import Tenant
from .property import Property
from .unit import Unit, UnitStatus
from .prospective_tenant import ProspectiveTenant, ApplicationStatus
from .lease import LeaseAgreement, LeaseSignature, LeaseStatus, SignatureStatus
from .deposit import SecurityDeposit, AdvancePayment
from .renewal_request import RenewalRequest
from .lease_ekyp import LeaseEKyp
from .pdc import PostDatedCheck, PDCStatus
from .billing import Billing, BillingAdditionalCharge, MeterReading, BillingStatus
from .payment import Payment, PaymentStatus, PayoutStatus
from .payment_ledger import PaymentLedger
from .payout import LandlordPayoutAccount, LandlordPayoutHistory
from .maintenance import MaintenanceRequest, MaintenancePhoto, MaintenanceStatus
from .announcement import Announcement, AnnouncementPhoto
from .notification import Notification
from .activity_log import ActivityLog

__all__ = [
     "Base",
     "User",
     "Landlord",
     "Tenant",
     "Property",
     "Unit",
     "UnitStatus",
     "ProspectiveTenant",
     "ApplicationStatus",
     "LeaseAgreement",
     "LeaseSignature",
     "LeaseStatus",
     "SignatureStatus",
     "SecurityDeposit",
     "AdvancePayment",
     "RenewalRequest",
     "LeaseEKyp",
     "PostDatedCheck",
     "PDCStatus",
     "Billing",
     "BillingAdditionalCharge",
     "MeterReading",
     "BillingStatus",
     "Payment",
     "PaymentStatus",
     "PayoutStatus",
     "PaymentLedger",
     "LandlordPayoutAccount",
     "LandlordPayoutHistory",
     "MaintenanceRequest",
     "MaintenancePhoto",
     "MaintenanceStatus",
     "Announcement",
     "AnnouncementPhoto",
     "Notification",
     "ActivityLog",
]
