# services/payment_service.py
"""
Payment Service - proof-of-payment review, initial move-in payments,
gateway checkout and webhook reconciliation.

Every payment that reaches "confirmed" is appended to the payment ledger.
"""
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

import azure_blob
from models import (
     AdvancePayment,
     Billing,
     BillingStatus,
     LeaseAgreement,
     Payment,
     PaymentStatus,
     SecurityDeposit,
)
from services import xendit_client
from services.exceptions import BadRequestError, ConflictError, NotFoundError
from services.ledger_service import append_payment_record
from services.notification_service import notify
from utils.ids import timestamp_ms

logger = logging.getLogger(__name__)

PROOF_PAYMENT_TYPES = ("billing", "security_deposit", "advance_rent")
EXTERNAL_ID_PREFIX = "billing-"


def _landlord_user_id(lease: LeaseAgreement) -> int:
     return lease.unit.property.landlord.user_id


def _tenant_user_id(lease: LeaseAgreement) -> Optional[int]:
     return lease.tenant.user_id if lease.tenant else None


def confirm_payment(db: Session, payment: Payment):
     """Mark a payment confirmed and record it on the ledger; returns the ledger entry."""
     payment.payment_status = PaymentStatus.CONFIRMED.value
     if payment.payment_date is None:
          payment.payment_date = datetime.utcnow()
     db.flush()
     return append_payment_record(db, payment)


def _settle_move_in(lease: LeaseAgreement, deposit: bool, advance: bool) -> None:
     now = datetime.utcnow()
     if deposit:
          lease.is_security_deposit_paid = True
          if lease.security_deposit is not None:
               lease.security_deposit.status = "paid"
               lease.security_deposit.received_at = now
     if advance:
          lease.is_advance_payment_paid = True
          if lease.advance_payment is not None:
               lease.advance_payment.status = "paid"
               lease.advance_payment.received_at = now


# ---------------------------------------------------------------------------
# Manual (proof-of-payment) flow
# ---------------------------------------------------------------------------

def submit_proof_of_payment(
     db: Session,
     lease: LeaseAgreement,
     payment_method: str,
     amount_paid,
     payment_type: str,
     billing_id: Optional[str] = None,
     proof=None,
     owner_id: Optional[int] = None,
) -> Payment:
     """
     Record a tenant-reported payment awaiting landlord review.

     Raises:
          BadRequestError: Bad payment type or amount, or unknown billing.
     """
     if payment_type not in PROOF_PAYMENT_TYPES:
          raise BadRequestError(f"Invalid paymentType. Allowed values: {', '.join(PROOF_PAYMENT_TYPES)}")
     try:
          amount = Decimal(str(amount_paid))
     except InvalidOperation:
          raise BadRequestError("amountPaid must be a valid number")
     if not amount.is_finite() or amount <= 0:
          raise BadRequestError("amountPaid must be greater than zero")

     billing = None
     if billing_id:
          billing = db.query(Billing).filter(Billing.billing_id == billing_id).first()
          if not billing or billing.lease_id != lease.agreement_id:
               raise BadRequestError("Invalid billingId for this lease")

     proof_url = None
     if proof is not None and getattr(proof, "filename", None):
          proof_url = azure_blob.upload_to_blob(proof, "proof-of-payment", owner_id or lease.tenant_id)

     payment = Payment(
          bill_id=billing.billing_id if billing else None,
          agreement_id=lease.agreement_id,
          payment_type=payment_type,
          amount_paid=amount,
          payment_method=payment_method,
          payment_status=PaymentStatus.PENDING.value,
          proof_of_payment=proof_url,
          receipt_reference=f"PAY-{lease.agreement_id}-{payment_type.upper()}-{timestamp_ms()}",
          payment_date=datetime.utcnow(),
     )
     db.add(payment)
     if billing is not None and billing.status != BillingStatus.PAID.value:
          billing.status = BillingStatus.UNPAID.value

     tenant_name = lease.tenant.full_name if lease.tenant else "A tenant"
     notify(
          db,
          _landlord_user_id(lease),
          "New Payment Submitted",
          f"{tenant_name} submitted a {payment_type.replace('_', ' ')} payment of "
          f"₱{float(amount):,.2f} for {lease.unit.unit_name}. Please review.",
          "/pages/landlord/payments",
     )
     db.flush()
     logger.info("Proof of payment %s recorded for lease %s", payment.receipt_reference, lease.agreement_id)
     return payment


def review_payment(db: Session, payment: Payment, action: str) -> Payment:
     """
     Approve or reject a pending payment.

     Approval confirms it, settles the linked bill or move-in record and
     appends it to the ledger. Rejection fails it and reopens the bill.
     """
     if action not in ("approve", "reject"):
          raise BadRequestError("action must be approve or reject")
     if payment.payment_status != PaymentStatus.PENDING.value:
          raise ConflictError(f"Payment is already {payment.payment_status}")

     lease = payment.lease
     billing = payment.billing

     if action == "approve":
          confirm_payment(db, payment)
          if payment.payment_type == "initial_payment":
               _settle_move_in(lease, deposit=True, advance=True)
          elif payment.payment_type == "security_deposit":
               _settle_move_in(lease, deposit=True, advance=False)
          elif payment.payment_type in ("advance_rent", "advance_payment"):
               _settle_move_in(lease, deposit=False, advance=True)
          if billing is not None:
               billing.mark_as_paid()
          title = "Payment Approved"
          body = f"Your payment of ₱{float(payment.amount_paid):,.2f} has been approved."
     else:
          payment.payment_status = PaymentStatus.FAILED.value
          if billing is not None:
               billing.mark_as_unpaid()
               billing.paid_at = None
          title = "Payment Rejected"
          body = (
               f"Your payment of ₱{float(payment.amount_paid):,.2f} was rejected. "
               "Please contact your landlord or submit a new proof of payment."
          )

     notify(db, _tenant_user_id(lease), title, body, "/pages/tenant/billing")
     db.flush()
     logger.info("Payment %s %s", payment.payment_id, "approved" if action == "approve" else "rejected")
     return payment


# ---------------------------------------------------------------------------
# Initial (move-in) payment through the gateway
# ---------------------------------------------------------------------------

def record_initial_payment(
     db: Session,
     lease: LeaseAgreement,
     payment_types: List[str],
     ref: str,
) -> Tuple[List[Payment], bool]:
     """
     Record the gateway-confirmed security deposit and/or advance payment.

     Returns:
          (payments, already_processed). Calling again with the same ref
          returns the stored payments without creating new ones.
     """
     existing = db.query(Payment).filter(
          Payment.agreement_id == lease.agreement_id,
          Payment.gateway_transaction_ref == ref,
     ).all()
     if existing:
          return existing, True

     sources = {
          "security_deposit": db.query(SecurityDeposit).filter(SecurityDeposit.lease_id == lease.agreement_id).first(),
          "advance_payment": db.query(AdvancePayment).filter(AdvancePayment.lease_id == lease.agreement_id).first(),
     }

     created = []
     for payment_type in dict.fromkeys(payment_types):
          record = sources.get(payment_type)
          if record is None or record.amount is None or record.amount <= 0:
               continue
          payment = Payment(
               agreement_id=lease.agreement_id,
               payment_type=payment_type,
               amount_paid=record.amount,
               gross_amount=record.amount,
               payment_method="MAYA",
               gateway_transaction_ref=ref,
               receipt_reference=f"PAY-{lease.agreement_id}-{payment_type.upper()}-{ref}"[:100],
          )
          db.add(payment)
          confirm_payment(db, payment)
          _settle_move_in(
               lease,
               deposit=payment_type == "security_deposit",
               advance=payment_type == "advance_payment",
          )
          created.append(payment)

     if not created:
          raise BadRequestError("Nothing to pay for the selected payment types")

     total = sum((p.amount_paid for p in created), Decimal("0"))
     tenant_name = lease.tenant.full_name if lease.tenant else "Your tenant"
     notify(
          db,
          _landlord_user_id(lease),
          "Initial Payment Received",
          f"{tenant_name} paid ₱{float(total):,.2f} in move-in fees for {lease.unit.unit_name}.",
          "/pages/landlord/payments",
     )
     db.flush()
     logger.info("Initial payment %s recorded for lease %s (%d item(s))", ref, lease.agreement_id, len(created))
     return created, False


# ---------------------------------------------------------------------------
# Gateway checkout and webhook
# ---------------------------------------------------------------------------

def create_billing_checkout(db: Session, billing: Billing, payer_email: Optional[str]) -> dict:
     if billing.status == BillingStatus.PAID.value:
          raise BadRequestError("Billing already paid")

     external_id = f"{EXTERNAL_ID_PREFIX}{billing.billing_id}"
     invoice = xendit_client.create_invoice(
          external_id=external_id,
          amount=float(billing.total_amount_due),
          payer_email=payer_email,
          description=f"Upkyp billing {billing.billing_id} ({billing.billing_period:%B %Y})",
     )
     logger.info("Checkout invoice %s created for %s", invoice.get("id"), billing.billing_id)
     return {
          "invoice_id": invoice.get("id"),
          "invoice_url": invoice.get("invoice_url"),
          "external_id": external_id,
     }


def _money(value) -> Optional[Decimal]:
     if value is None:
          return None
     try:
          return Decimal(str(value))
     except InvalidOperation:
          return None


def reconcile_invoice_webhook(db: Session, payload: dict) -> dict:
     """
     Apply a PAID invoice callback: settle the bill, store the confirmed
     payment with its fee breakdown and notify the landlord.
     """
     if payload.get("status") != "PAID":
          return {"message": "Ignored non-paid status"}

     external_id = payload.get("external_id")
     payment_id = payload.get("payment_id")
     if not isinstance(external_id, str) or not external_id.startswith(EXTERNAL_ID_PREFIX) or not payment_id:
          raise BadRequestError("Invalid webhook payload")
     payment_id = str(payment_id)

     duplicate = db.query(Payment).filter(Payment.gateway_transaction_ref == payment_id).first()
     if duplicate:
          return {"message": "Already processed", "payment_id": duplicate.payment_id}

     billing_id = external_id[len(EXTERNAL_ID_PREFIX):]
     billing = db.query(Billing).filter(Billing.billing_id == billing_id).first()
     if not billing:
          raise NotFoundError("Billing not found")

     fees = xendit_client.fetch_transaction_fees(payment_id)
     amount = _money(payload.get("paid_amount") or payload.get("amount")) or billing.total_amount_due

     payment = Payment(
          bill_id=billing.billing_id,
          agreement_id=billing.lease_id,
          payment_type="monthly_billing",
          amount_paid=amount,
          gross_amount=_money(fees.get("gross_amount")) or amount,
          net_amount=_money(fees.get("net_amount")),
          gateway_fee=_money(fees.get("gateway_fee")),
          gateway_vat=_money(fees.get("gateway_vat")),
          payment_method=payload.get("payment_channel") or payload.get("payment_method"),
          gateway_transaction_ref=payment_id,
          receipt_reference=f"XND-{payment_id}"[:100],
     )
     db.add(payment)
     entry = confirm_payment(db, payment)
     billing.mark_as_paid()

     lease = billing.lease
     tenant_name = lease.tenant.full_name if lease.tenant else "A tenant"
     notify(
          db,
          _landlord_user_id(lease),
          "Payment Received",
          f"{tenant_name} paid ₱{float(amount):,.2f} for billing {billing.billing_id} ({lease.unit.unit_name}).",
          "/pages/landlord/payments",
     )
     db.flush()
     logger.info("Webhook settled billing %s with payment %s", billing.billing_id, payment.payment_id)
     return {
          "message": "Payment recorded",
          "payment_id": payment.payment_id,
          "billing_id": billing.billing_id,
          "transaction_hash": entry.transaction_hash,
     }
