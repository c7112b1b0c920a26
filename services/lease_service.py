# services/lease_service.py
"""
Lease Service - lease generation, e-signature, extension, ending,
renewal and eKYP (digital tenant ID) issuance.

Status flow:
     draft -> pending_signature -> active -> expired / completed
     completed or expired -> active again through extend
"""
import hashlib
import json
import logging
import uuid
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from sqlalchemy.orm import Session

import azure_blob
from models import (
     AdvancePayment,
     LeaseAgreement,
     LeaseEKyp,
     LeaseSignature,
     LeaseStatus,
     RenewalRequest,
     SecurityDeposit,
     SignatureStatus,
     Tenant,
     UnitStatus,
)
from services.exceptions import (
     BadRequestError,
     ConflictError,
     GoneError,
     NotFoundError,
     UnprocessableError,
)
from services.lease_document import render_lease_html
from services.notification_service import notify
from utils.email import send_lease_otp_email
from utils.ids import generate_agreement_id, generate_otp

logger = logging.getLogger(__name__)

OTP_TTL_MINUTES = 10
DEFAULT_TIMEZONE = "Asia/Manila"
AGREEMENT_ID_ATTEMPTS = 5

# Terms carried into a renewal when the old lease has none
RENEWAL_DEFAULTS = {
     "security_deposit_amount": Decimal("0"),
     "advance_payment_amount": Decimal("0"),
     "billing_due_day": 1,
     "grace_period_days": 3,
     "late_penalty_amount": Decimal("1000"),
}

TENANT_LEASE_URL = "/pages/tenant/my-unit"


def _tenant_user_id(lease: LeaseAgreement) -> Optional[int]:
     return lease.tenant.user_id if lease.tenant else None


def _landlord_user_id(lease: LeaseAgreement) -> Optional[int]:
     return lease.unit.property.landlord.user_id


def new_agreement_id(db: Session) -> str:
     """Random agreement id, retried on collision."""
     for _ in range(AGREEMENT_ID_ATTEMPTS):
          candidate = generate_agreement_id()
          exists = db.query(LeaseAgreement.agreement_id).filter(
               LeaseAgreement.agreement_id == candidate
          ).first()
          if not exists:
               return candidate
     raise ConflictError("Could not allocate a unique agreement id")


def local_time(ts: datetime, tz_name: Optional[str]) -> Tuple[str, str]:
     """Format a naive UTC timestamp in the given zone; unknown zones fall back to UTC."""
     tz_name = tz_name or DEFAULT_TIMEZONE
     try:
          tz = ZoneInfo(tz_name)
     except (ZoneInfoNotFoundError, ValueError):
          logger.warning("Unknown timezone %s, using UTC", tz_name)
          tz_name, tz = "UTC", ZoneInfo("UTC")
     local = ts.replace(tzinfo=ZoneInfo("UTC")).astimezone(tz)
     return local.strftime("%B %d, %Y %I:%M %p"), tz_name


# ---------------------------------------------------------------------------
# Lease generation wizard
# ---------------------------------------------------------------------------

def generate_lease(
     db: Session,
     lease: LeaseAgreement,
     terms: dict,
) -> LeaseAgreement:
     """
     Apply the wizard's terms, create deposit/advance records, render and
     upload the agreement, and open it for signature.

     Raises:
          ConflictError: Lease is already signed or closed.
          UnprocessableError: end_date is not after start_date.
     """
     if lease.status not in (LeaseStatus.DRAFT.value, LeaseStatus.PENDING_SIGNATURE.value):
          raise ConflictError(f"Lease cannot be generated while {lease.status}")
     if lease.tenant is None:
          raise BadRequestError("Lease has no tenant assigned")
     if terms["end_date"] <= terms["start_date"]:
          raise UnprocessableError("end_date must be after start_date")

     lease.lease_type = terms.get("lease_type", "residential")
     lease.start_date = terms["start_date"]
     lease.end_date = terms["end_date"]
     lease.rent_amount = terms["rent_amount"]
     lease.security_deposit_amount = terms.get("security_deposit") or Decimal("0")
     lease.advance_payment_amount = terms.get("advance_payment") or Decimal("0")
     lease.billing_due_day = terms.get("billing_due_day", 1)
     lease.grace_period_days = terms.get("grace_period_days", 3)
     lease.late_penalty_amount = terms.get("late_fee_amount") or Decimal("0")

     if lease.security_deposit_amount > 0:
          deposit = lease.security_deposit or SecurityDeposit(lease_id=lease.agreement_id)
          deposit.tenant_id = lease.tenant_id
          deposit.amount = lease.security_deposit_amount
          deposit.status = "unpaid"
          lease.security_deposit = deposit
     if lease.advance_payment_amount > 0:
          advance = lease.advance_payment or AdvancePayment(lease_id=lease.agreement_id)
          advance.tenant_id = lease.tenant_id
          advance.amount = lease.advance_payment_amount
          advance.months_covered = max(1, int(lease.advance_payment_amount // lease.rent_amount))
          advance.status = "unpaid"
          lease.advance_payment = advance

     landlord_user = lease.unit.property.landlord.user
     html = render_lease_html(
          lease,
          landlord_name=landlord_user.full_name,
          tenant_name=lease.tenant.full_name,
          pet_policy=terms.get("pet_policy"),
          maintenance_responsibility=terms.get("maintenance_responsibility"),
          additional_terms=terms.get("additional_terms"),
     )
     lease.agreement_url = azure_blob.upload_bytes(
          html.encode("utf-8"),
          f"leases/{lease.agreement_id}/{uuid.uuid4()}.html",
          content_type="text/html; charset=utf-8",
     )
     lease.status = LeaseStatus.PENDING_SIGNATURE.value

     signer_emails = {
          "landlord": landlord_user.email,
          "tenant": lease.tenant.user.email,
     }
     for role, email in signer_emails.items():
          signature = lease.signature_for(role)
          if signature is None:
               signature = LeaseSignature(agreement_id=lease.agreement_id, role=role)
               lease.signatures.append(signature)
          signature.email = email
          signature.status = SignatureStatus.PENDING.value
          signature.signed_at = None
          signature.otp_code = None

     db.flush()
     logger.info("Lease %s generated, awaiting signatures", lease.agreement_id)
     return lease


# ---------------------------------------------------------------------------
# OTP e-signature
# ---------------------------------------------------------------------------

def send_signature_otp(
     db: Session,
     lease: LeaseAgreement,
     role: str,
     email: str,
     timezone: Optional[str] = None,
) -> dict:
     if role not in ("landlord", "tenant"):
          raise BadRequestError("role must be landlord or tenant")

     otp = generate_otp()
     now = datetime.utcnow()
     expires_at = now + timedelta(minutes=OTP_TTL_MINUTES)

     signature = lease.signature_for(role)
     if signature is None:
          signature = LeaseSignature(agreement_id=lease.agreement_id, role=role)
          lease.signatures.append(signature)
     signature.email = email
     signature.otp_code = otp
     signature.otp_sent_at = now
     signature.otp_expires_at = expires_at
     if signature.status != SignatureStatus.SIGNED.value:
          signature.status = SignatureStatus.PENDING.value

     if role == "landlord" and lease.signature_for("tenant") is None and lease.tenant is not None:
          lease.signatures.append(LeaseSignature(
               agreement_id=lease.agreement_id,
               role="tenant",
               email=lease.tenant.user.email,
               status=SignatureStatus.PENDING.value,
          ))

     db.flush()
     expiry_local, tz_name = local_time(expires_at, timezone)
     send_lease_otp_email(email, otp, lease.agreement_id, expiry_local, tz_name)
     logger.info("Signing OTP sent to %s for lease %s", role, lease.agreement_id)
     return {"expiry_local": expiry_local, "timezone": tz_name}


def verify_signature_otp(db: Session, lease: LeaseAgreement, role: str, otp: str) -> LeaseAgreement:
     """
     Mark one party's signature; once both parties have signed the lease
     becomes active and the unit occupied.
     """
     signature = lease.signature_for(role)
     if signature is None or not signature.otp_code:
          raise NotFoundError("No signing code was requested for this party")
     if signature.otp_code != otp:
          raise BadRequestError("Invalid OTP")
     if signature.otp_expires_at is None or signature.otp_expires_at < datetime.utcnow():
          raise GoneError("OTP has expired")

     signature.status = SignatureStatus.SIGNED.value
     signature.signed_at = datetime.utcnow()
     signature.otp_code = None

     landlord_signed = lease.signature_for("landlord")
     tenant_signed = lease.signature_for("tenant")
     both_signed = all(
          s is not None and s.status == SignatureStatus.SIGNED.value
          for s in (landlord_signed, tenant_signed)
     )
     if both_signed and lease.status == LeaseStatus.PENDING_SIGNATURE.value:
          lease.status = LeaseStatus.ACTIVE.value
          lease.unit.status = UnitStatus.OCCUPIED.value
          notify(
               db,
               _tenant_user_id(lease),
               "Lease Activated",
               f"Your lease for {lease.unit.unit_name} is now active.",
               TENANT_LEASE_URL,
          )
          logger.info("Lease %s fully signed and active", lease.agreement_id)

     db.flush()
     return lease


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

def extend_lease(
     db: Session,
     lease: LeaseAgreement,
     new_end_date: date,
     new_rent_amount: Optional[Decimal] = None,
) -> LeaseAgreement:
     allowed = (LeaseStatus.ACTIVE.value, LeaseStatus.EXPIRED.value, LeaseStatus.COMPLETED.value)
     if lease.status not in allowed:
          raise ConflictError(f"Only active, expired or completed leases can be extended (lease is {lease.status})")
     if lease.end_date is not None and new_end_date <= lease.end_date:
          raise UnprocessableError("New end date must be later than the current end date")
     if new_rent_amount is not None and new_rent_amount <= 0:
          raise UnprocessableError("Rent amount must be greater than zero")

     old_end = lease.end_date
     lease.end_date = new_end_date
     lease.status = LeaseStatus.ACTIVE.value
     if new_rent_amount is not None:
          lease.rent_amount = new_rent_amount
          lease.unit.rent_amount = new_rent_amount
     lease.unit.status = UnitStatus.OCCUPIED.value

     body = f"Your lease for {lease.unit.unit_name} has been extended until {new_end_date:%B %d, %Y}."
     if new_rent_amount is not None:
          body += f" New monthly rent: ₱{float(new_rent_amount):,.2f}."
     notify(db, _tenant_user_id(lease), "Lease Extended", body, TENANT_LEASE_URL)
     db.flush()
     logger.info("Lease %s extended %s -> %s", lease.agreement_id, old_end, new_end_date)
     return lease


def end_lease(db: Session, lease: LeaseAgreement) -> LeaseAgreement:
     if lease.end_date is None:
          raise ConflictError("Lease has no end date")
     if lease.end_date > date.today():
          raise ConflictError("Lease cannot be ended before its end date")
     if lease.status not in (LeaseStatus.ACTIVE.value, LeaseStatus.EXPIRED.value):
          raise ConflictError(f"Only active or expired leases can be ended (lease is {lease.status})")

     lease.status = LeaseStatus.COMPLETED.value
     lease.unit.status = UnitStatus.UNOCCUPIED.value
     notify(
          db,
          _tenant_user_id(lease),
          "Lease Completed",
          f"Your lease for {lease.unit.unit_name} has been completed. Thank you for staying with us.",
          TENANT_LEASE_URL,
     )
     db.flush()
     logger.info("Lease %s completed", lease.agreement_id)
     return lease


def expire_ended_leases(db: Session, today: Optional[date] = None) -> int:
     """Move active leases whose end date has passed to expired."""
     today = today or date.today()
     leases = (
          db.query(LeaseAgreement)
          .filter(
               LeaseAgreement.status == LeaseStatus.ACTIVE.value,
               LeaseAgreement.end_date < today,
          )
          .all()
     )
     for lease in leases:
          lease.status = LeaseStatus.EXPIRED.value
     db.flush()
     if leases:
          logger.info("Expired %d lease(s)", len(leases))
     return len(leases)


# ---------------------------------------------------------------------------
# Renewal
# ---------------------------------------------------------------------------

def create_renewal_request(
     db: Session,
     tenant: Tenant,
     lease: LeaseAgreement,
     requested_start_date: date,
     requested_end_date: date,
     notes: Optional[str] = None,
) -> RenewalRequest:
     if requested_end_date <= requested_start_date:
          raise UnprocessableError("requested_end_date must be after requested_start_date")
     if lease.status not in (LeaseStatus.ACTIVE.value, LeaseStatus.EXPIRED.value):
          raise ConflictError("Only active or expired leases can be renewed")
     open_request = db.query(RenewalRequest).filter(
          RenewalRequest.agreement_id == lease.agreement_id,
          RenewalRequest.status == "pending",
     ).first()
     if open_request:
          raise ConflictError("A renewal request is already pending for this lease")

     request = RenewalRequest(
          agreement_id=lease.agreement_id,
          tenant_id=tenant.tenant_id,
          unit_id=lease.unit_id,
          requested_start_date=requested_start_date,
          requested_end_date=requested_end_date,
          notes=notes,
          status="pending",
     )
     db.add(request)
     notify(
          db,
          _landlord_user_id(lease),
          "Lease Renewal Request",
          f"{tenant.full_name} requested to renew the lease for {lease.unit.unit_name}.",
          "/pages/landlord/property-listing",
     )
     db.flush()
     return request


def decide_renewal(db: Session, request: RenewalRequest, decision: str) -> Tuple[str, Optional[LeaseAgreement]]:
     """
     Apply the landlord's decision. Returns (message, new_lease).
     An already-decided request is left untouched.
     """
     if request.status in ("approved", "declined"):
          return f"Renewal already {request.status}", None

     old_lease = db.query(LeaseAgreement).filter(
          LeaseAgreement.agreement_id == request.agreement_id
     ).first()
     if not old_lease:
          raise NotFoundError("Lease not found")

     request.status = decision
     new_lease = None

     if decision == "approved":
          old_lease.status = LeaseStatus.EXPIRED.value

          def carried(field):
               value = getattr(old_lease, field)
               return RENEWAL_DEFAULTS[field] if value is None else value

          new_lease = LeaseAgreement(
               agreement_id=new_agreement_id(db),
               is_renewal_of=old_lease.agreement_id,
               tenant_id=old_lease.tenant_id,
               unit_id=old_lease.unit_id,
               lease_type=old_lease.lease_type,
               start_date=request.requested_start_date,
               end_date=request.requested_end_date,
               status=LeaseStatus.ACTIVE.value,
               rent_amount=old_lease.rent_amount,
               security_deposit_amount=carried("security_deposit_amount"),
               advance_payment_amount=carried("advance_payment_amount"),
               billing_due_day=carried("billing_due_day"),
               grace_period_days=carried("grace_period_days"),
               late_penalty_amount=carried("late_penalty_amount"),
               is_security_deposit_paid=old_lease.is_security_deposit_paid,
               is_advance_payment_paid=old_lease.is_advance_payment_paid,
          )
          db.add(new_lease)
          old_lease.unit.status = UnitStatus.OCCUPIED.value
          title = "Lease Renewal Approved"
          body = (
               f"Your renewal for {old_lease.unit.unit_name} was approved. "
               f"New term: {request.requested_start_date:%B %d, %Y} to {request.requested_end_date:%B %d, %Y}."
          )
     else:
          title = "Lease Renewal Declined"
          body = f"Your renewal request for {old_lease.unit.unit_name} was declined."

     notify(db, request_tenant_user_id(db, request), title, body, TENANT_LEASE_URL)
     db.flush()
     logger.info("Renewal %s for lease %s %s", request.id, request.agreement_id, decision)
     return f"Renewal {decision}", new_lease


def request_tenant_user_id(db: Session, request: RenewalRequest) -> Optional[int]:
     tenant = db.query(Tenant).filter(Tenant.tenant_id == request.tenant_id).first()
     return tenant.user_id if tenant else None


# ---------------------------------------------------------------------------
# eKYP digital ID
# ---------------------------------------------------------------------------

def activate_ekyp(db: Session, lease: LeaseAgreement) -> LeaseEKyp:
     if lease.tenant_id is None:
          raise BadRequestError("Lease has no tenant assigned", reason="TENANT_NOT_ASSIGNED")
     if lease.status not in (LeaseStatus.ACTIVE.value, LeaseStatus.EXPIRED.value):
          raise BadRequestError("Lease is not active", reason="LEASE_NOT_ACTIVE")

     landlord_id = lease.unit.property.landlord_id
     issued_at = datetime.utcnow().replace(microsecond=0)
     payload = {
          "type": "LEASE_EKYP",
          "agreement_id": lease.agreement_id,
          "tenant_id": lease.tenant_id,
          "unit_id": lease.unit_id,
          "landlord_id": landlord_id,
          "issued_at": issued_at.isoformat() + "Z",
     }
     payload_json = json.dumps(payload, separators=(",", ":"))
     qr_hash = hashlib.sha256(payload_json.encode("utf-8")).hexdigest()

     ekyp = db.query(LeaseEKyp).filter(LeaseEKyp.agreement_id == lease.agreement_id).first()
     if ekyp is None:
          ekyp = LeaseEKyp(ekyp_id=str(uuid.uuid4()), agreement_id=lease.agreement_id)
          db.add(ekyp)
     ekyp.tenant_id = lease.tenant_id
     ekyp.unit_id = lease.unit_id
     ekyp.landlord_id = landlord_id
     ekyp.qr_payload = payload_json
     ekyp.qr_hash = qr_hash
     ekyp.status = "active"
     ekyp.issued_at = issued_at
     ekyp.revoked_at = None
     db.flush()
     logger.info("eKYP %s issued for lease %s", ekyp.ekyp_id, lease.agreement_id)
     return ekyp
