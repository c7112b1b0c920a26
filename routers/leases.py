# routers/leases.py
"""
Lease API routes: the generation wizard, OTP e-signature, extension,
ending, renewal and eKYP activation.

Role-based access:
- Landlord: leases on units of their own properties
- Tenant: their own leases (signing and renewal requests)
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord, require_tenant, verify_token
from models import Landlord, LeaseAgreement, RenewalRequest, Tenant, Unit, User
from schemas.lease import (
     AgreementRequest,
     ExtendLeaseRequest,
     LeaseGenerateRequest,
     LeaseResponse,
     RenewalRequestCreate,
     RenewalStatusUpdate,
     SendOtpRequest,
     SignatureResponse,
     VerifyOtpRequest,
)
from services import lease_service
from services.access import get_lease, get_owned_lease, get_owned_property, get_tenant_lease

router = APIRouter(tags=["leases"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_lease_response(lease: LeaseAgreement, include_pdc_count: bool = False) -> LeaseResponse:
     unit = lease.unit
     return LeaseResponse(
          agreement_id=lease.agreement_id,
          is_renewal_of=lease.is_renewal_of,
          tenant_id=lease.tenant_id,
          unit_id=lease.unit_id,
          lease_type=lease.lease_type,
          start_date=lease.start_date,
          end_date=lease.end_date,
          status=lease.status,
          rent_amount=float(lease.rent_amount) if lease.rent_amount is not None else None,
          security_deposit_amount=float(lease.security_deposit_amount or 0),
          advance_payment_amount=float(lease.advance_payment_amount or 0),
          billing_due_day=lease.billing_due_day,
          grace_period_days=lease.grace_period_days,
          late_penalty_amount=float(lease.late_penalty_amount or 0),
          is_security_deposit_paid=lease.is_security_deposit_paid,
          is_advance_payment_paid=lease.is_advance_payment_paid,
          agreement_url=lease.agreement_url,
          tenant_name=lease.tenant.full_name if lease.tenant else None,
          unit_name=unit.unit_name,
          property_id=unit.property_id,
          property_name=unit.property.property_name,
          signatures=[SignatureResponse.model_validate(s) for s in lease.signatures],
          pdc_count=len(lease.pdcs) if include_pdc_count else None,
     )


def _lease_for_signer(db: Session, token: dict, agreement_id: str, role: str) -> LeaseAgreement:
     """The lease, provided the caller is the party signing as role."""
     lease = get_lease(db, agreement_id)
     user_id = token.get("id")
     if role == "landlord":
          allowed = lease.unit.property.landlord.user_id == user_id
     else:
          allowed = lease.tenant is not None and lease.tenant.user_id == user_id
     if not allowed:
          raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You cannot sign this lease as " + role)
     return lease


# ---------------------------------------------------------------------------
# Landlord views
# ---------------------------------------------------------------------------

@router.get(
     "/api/landlord/activeLease/getByProperty",
     response_model=List[LeaseResponse],
     summary="Leases on one of my properties",
)
def get_by_property(
     property_id: int = Query(..., description="Property ID"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     prop = get_owned_property(db, landlord, property_id)
     leases = (
          db.query(LeaseAgreement)
          .join(Unit, LeaseAgreement.unit_id == Unit.unit_id)
          .filter(Unit.property_id == prop.property_id)
          .order_by(LeaseAgreement.created_at.desc())
          .all()
     )
     return [_build_lease_response(lease) for lease in leases]


@router.get("/api/landlord/activeLease/getByAgreementId", summary="Lease detail")
def get_by_agreement_id(
     agreement_id: str = Query(..., description="Agreement ID"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     lease = get_owned_lease(db, landlord, agreement_id)
     deposit = lease.security_deposit
     advance = lease.advance_payment
     return {
          "lease": _build_lease_response(lease, include_pdc_count=True),
          "security_deposit": {
               "amount": float(deposit.amount),
               "status": deposit.status,
               "received_at": deposit.received_at,
          } if deposit else None,
          "advance_payment": {
               "amount": float(advance.amount),
               "months_covered": advance.months_covered,
               "status": advance.status,
               "received_at": advance.received_at,
          } if advance else None,
     }


# ---------------------------------------------------------------------------
# Generation wizard
# ---------------------------------------------------------------------------

@router.post("/api/leaseAgreement/generate", response_model=LeaseResponse, summary="Generate the lease document")
def generate(
     body: LeaseGenerateRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     """
     Final wizard step. Writes the terms, creates the deposit and advance
     records, renders the agreement and opens it for signature.
     """
     lease = get_owned_lease(db, landlord, body.agreement_id)
     terms = body.model_dump()
     terms["lease_type"] = body.lease_type.value
     lease = lease_service.generate_lease(db, lease, terms)
     return _build_lease_response(lease)


# ---------------------------------------------------------------------------
# OTP e-signature
# ---------------------------------------------------------------------------

@router.post("/api/landlord/activeLease/sendOtp", summary="Send a signing OTP")
def send_otp(
     body: SendOtpRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     lease = _lease_for_signer(db, token, body.agreement_id, body.role.value)
     timezone = body.timezone
     if not timezone:
          user = db.query(User).filter(User.id == token.get("id")).first()
          timezone = user.timezone if user else None
     result = lease_service.send_signature_otp(db, lease, body.role.value, body.email, timezone)
     return {"message": "OTP sent", **result}


@router.post("/api/landlord/activeLease/verifyOtp", summary="Verify a signing OTP")
def verify_otp(
     body: VerifyOtpRequest,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     lease = _lease_for_signer(db, token, body.agreement_id, body.role.value)
     lease = lease_service.verify_signature_otp(db, lease, body.role.value, body.otp)
     return {"message": "Signature recorded", "status": lease.status}


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

@router.post("/api/landlord/activeLease/extend", response_model=LeaseResponse, summary="Extend a lease")
def extend(
     body: ExtendLeaseRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     lease = get_owned_lease(db, landlord, body.agreement_id)
     lease = lease_service.extend_lease(db, lease, body.new_end_date, body.new_rent_amount)
     return _build_lease_response(lease)


@router.post("/api/landlord/activeLease/endLease", response_model=LeaseResponse, summary="End a lease")
def end(
     body: AgreementRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     lease = get_owned_lease(db, landlord, body.agreement_id)
     lease = lease_service.end_lease(db, lease)
     return _build_lease_response(lease)


# ---------------------------------------------------------------------------
# Renewal
# ---------------------------------------------------------------------------

@router.post("/api/tenant/renewal-request", status_code=status.HTTP_201_CREATED, summary="Request a lease renewal")
def request_renewal(
     body: RenewalRequestCreate,
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     lease = get_tenant_lease(db, tenant, body.agreement_id)
     request = lease_service.create_renewal_request(
          db,
          tenant,
          lease,
          body.requested_start_date,
          body.requested_end_date,
          body.notes,
     )
     return {"message": "Renewal request submitted", "id": request.id, "status": request.status}


@router.put("/api/leaseAgreement/updateRenewalStatus", summary="Approve or decline a renewal")
def update_renewal_status(
     body: RenewalStatusUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     request = db.query(RenewalRequest).filter(RenewalRequest.id == body.id).first()
     if not request:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Renewal request not found")
     get_owned_lease(db, landlord, request.agreement_id)

     message, new_lease = lease_service.decide_renewal(db, request, body.status.value)
     return {
          "message": message,
          "status": request.status,
          "new_agreement_id": new_lease.agreement_id if new_lease else None,
     }


# ---------------------------------------------------------------------------
# eKYP digital ID
# ---------------------------------------------------------------------------

@router.post("/api/landlord/activeLease/ekypId/activate", summary="Issue the tenant's eKYP ID")
def activate_ekyp(
     body: AgreementRequest,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     lease = get_owned_lease(db, landlord, body.agreement_id)
     ekyp = lease_service.activate_ekyp(db, lease)
     return {
          "message": "eKYP activated",
          "ekyp_id": ekyp.ekyp_id,
          "qr_payload": ekyp.qr_payload,
          "qr_hash": ekyp.qr_hash,
          "status": ekyp.status,
          "issued_at": ekyp.issued_at,
     }
