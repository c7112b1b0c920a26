# routers/payments.py
"""
Payment API routes.

- Tenants upload proofs of payment, record move-in payments and open a
  Xendit checkout for a bill.
- Landlords approve or reject submitted payments.
- Xendit calls the invoice webhook once a checkout is paid.

Every confirmed payment is appended to the hash-chained payment ledger,
which can be verified per payment or as a whole.
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, File, Form, Header, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord, require_tenant, verify_token
from models import Landlord, LeaseAgreement, Payment, Tenant, Unit
from schemas.payment import CheckoutRequest, CheckoutResponse, InitialPaymentRequest, PaymentResponse
from services import payment_service, xendit_client
from services.access import get_owned_lease, get_owned_property, get_tenant_billing, get_tenant_lease
from services.ledger_service import verify_full_chain, verify_ledger_entry

router = APIRouter(tags=["payments"])


def _build_payment_response(payment: Payment) -> PaymentResponse:
     lease = payment.lease
     entry = payment.ledger_entry
     return PaymentResponse(
          payment_id=payment.payment_id,
          bill_id=payment.bill_id,
          agreement_id=payment.agreement_id,
          payment_type=payment.payment_type,
          amount_paid=float(payment.amount_paid),
          gross_amount=float(payment.gross_amount) if payment.gross_amount is not None else None,
          net_amount=float(payment.net_amount) if payment.net_amount is not None else None,
          gateway_fee=float(payment.gateway_fee) if payment.gateway_fee is not None else None,
          payment_method=payment.payment_method,
          payment_status=payment.payment_status,
          payout_status=payment.payout_status,
          proof_of_payment=payment.proof_of_payment,
          receipt_reference=payment.receipt_reference,
          payment_date=payment.payment_date,
          tenant_name=lease.tenant.full_name if lease and lease.tenant else None,
          unit_name=lease.unit.unit_name if lease else None,
          transaction_hash=entry.transaction_hash if entry else None,
     )


# ---------------------------------------------------------------------------
# Manual payments
# ---------------------------------------------------------------------------

@router.post(
     "/api/payment/upload-proof-of-payment",
     response_model=PaymentResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Submit a proof of payment",
)
def upload_proof_of_payment(
     agreement_id: str = Form(...),
     paymentMethod: str = Form(...),
     amountPaid: str = Form(...),
     paymentType: str = Form(...),
     billingId: Optional[str] = Form(None),
     proof: Optional[UploadFile] = File(None),
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     """
     Record a payment made outside the gateway. It stays pending until the
     landlord approves or rejects it.
     """
     lease = get_tenant_lease(db, tenant, agreement_id)
     payment = payment_service.submit_proof_of_payment(
          db,
          lease,
          payment_method=paymentMethod,
          amount_paid=amountPaid,
          payment_type=paymentType,
          billing_id=billingId or None,
          proof=proof,
          owner_id=tenant.tenant_id,
     )
     return _build_payment_response(payment)


@router.post("/api/landlord/payments/{payment_id}/{action}", response_model=PaymentResponse, summary="Approve or reject a payment")
def review_payment(
     payment_id: int,
     action: str,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     if action not in ("approve", "reject"):
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="action must be approve or reject")
     payment = db.query(Payment).filter(Payment.payment_id == payment_id).first()
     if not payment:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Payment with ID {payment_id} not found")
     get_owned_lease(db, landlord, payment.agreement_id)

     payment = payment_service.review_payment(db, payment, action)
     return _build_payment_response(payment)


@router.get(
     "/api/landlord/payments/getPaymentList",
     response_model=List[PaymentResponse],
     summary="Payments for one of my properties",
)
def get_payment_list(
     property_id: int = Query(...),
     status_filter: Optional[str] = Query(None, alias="status"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     prop = get_owned_property(db, landlord, property_id)
     query = (
          db.query(Payment)
          .join(LeaseAgreement, Payment.agreement_id == LeaseAgreement.agreement_id)
          .join(Unit, LeaseAgreement.unit_id == Unit.unit_id)
          .filter(Unit.property_id == prop.property_id)
     )
     if status_filter and status_filter != "all":
          query = query.filter(Payment.payment_status == status_filter)
     payments = query.order_by(Payment.payment_date.desc(), Payment.payment_id.desc()).all()
     return [_build_payment_response(p) for p in payments]


# ---------------------------------------------------------------------------
# Gateway payments
# ---------------------------------------------------------------------------

@router.post("/api/tenant/initialPayment/recordPayment", summary="Record move-in payments")
def record_initial_payment(
     body: InitialPaymentRequest,
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     lease = get_tenant_lease(db, tenant, body.agreement_id)
     payments, already_processed = payment_service.record_initial_payment(
          db,
          lease,
          [t.value for t in body.payment_types],
          body.ref,
     )
     return {
          "message": "Payment already processed" if already_processed else "Payment recorded",
          "already_processed": already_processed,
          "payments": [_build_payment_response(p) for p in payments],
     }


@router.post("/api/payment/checkout", response_model=CheckoutResponse, summary="Pay a bill through Xendit")
def create_checkout(
     body: CheckoutRequest,
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     billing = get_tenant_billing(db, tenant, body.billing_id)
     return payment_service.create_billing_checkout(db, billing, tenant.user.email)


@router.post("/api/webhook/xendit/invoice", summary="Xendit invoice callback")
def xendit_invoice_webhook(
     payload: dict = Body(...),
     x_callback_token: Optional[str] = Header(None),
     db: Session = Depends(get_session),
):
     """
     Receives Xendit invoice results. Only PAID invoices with an
     external_id of the form billing-{billing_id} are applied.
     """
     if not xendit_client.XENDIT_WEBHOOK_TOKEN or x_callback_token != xendit_client.XENDIT_WEBHOOK_TOKEN:
          raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid callback token")
     return payment_service.reconcile_invoice_webhook(db, payload)


# ---------------------------------------------------------------------------
# Payment ledger verification (blockchain-like)
# ---------------------------------------------------------------------------

@router.get("/api/payments/ledger/verify-chain", summary="Verify full payment ledger chain")
def verify_ledger_chain(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     """
     Recompute hashes for all ledger entries and verify the chain.
     Returns verification result and number of entries checked.
     """
     valid, message, count = verify_full_chain(db)
     return {
          "verified": valid,
          "message": message,
          "entries_checked": count,
     }


@router.get("/api/payments/{payment_id}/ledger/verify", summary="Verify the ledger entry of a payment")
def verify_payment_ledger(
     payment_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     """
     Recompute hash from payment_id + agreement_id + amount + timestamp
     and compare with stored hash. Also verifies previous_hash chain link.
     """
     payment = db.query(Payment).filter(Payment.payment_id == payment_id).first()
     if not payment:
          raise HTTPException(
               status_code=status.HTTP_404_NOT_FOUND,
               detail=f"Payment with ID {payment_id} not found"
          )

     lease = payment.lease
     user_id = token.get("id")
     allowed = (
          token.get("role") == "admin"
          or lease.unit.property.landlord.user_id == user_id
          or (lease.tenant is not None and lease.tenant.user_id == user_id)
     )
     if not allowed:
          raise HTTPException(
               status_code=status.HTTP_403_FORBIDDEN,
               detail="You do not have permission to verify this payment"
          )

     valid, message = verify_ledger_entry(db, payment_id=payment_id)
     return {
          "verified": valid,
          "message": message,
          "payment_id": payment_id,
     }
