# services/payout_service.py
"""
Payout Service - landlord payout accounts and admin disbursement of
confirmed tenant payments through Xendit.
"""
import hashlib
import json
import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from models import (
     Landlord,
     LandlordPayoutAccount,
     LandlordPayoutHistory,
     LeaseAgreement,
     Payment,
     PaymentStatus,
     PayoutStatus,
     Property,
     Unit,
)
from services import xendit_client
from services.exceptions import BadRequestError
from services.notification_service import notify

logger = logging.getLogger(__name__)

MINIMUM_PAYOUT = Decimal("50")

# Xendit channel used when the landlord does not pick one
DEFAULT_CHANNELS = {
     "gcash": "PH_GCASH",
     "maya": "PH_PAYMAYA",
}


def get_active_account(db: Session, landlord_id: int) -> Optional[LandlordPayoutAccount]:
     return (
          db.query(LandlordPayoutAccount)
          .filter(
               LandlordPayoutAccount.landlord_id == landlord_id,
               LandlordPayoutAccount.is_active.is_(True),
          )
          .order_by(LandlordPayoutAccount.id.desc())
          .first()
     )


def save_account(
     db: Session,
     landlord: Landlord,
     payout_method: str,
     account_name: Optional[str],
     account_number: Optional[str],
     bank_name: Optional[str] = None,
     channel_code: Optional[str] = None,
) -> LandlordPayoutAccount:
     """
     Store a new active payout account and deactivate the previous ones.

     Raises:
          BadRequestError: Missing account details or bank channel.
     """
     account_name = (account_name or "").strip()
     account_number = (account_number or "").strip()
     if not account_name or not account_number:
          raise BadRequestError("account_name and account_number are required")

     if payout_method == "bank_transfer":
          if not channel_code:
               raise BadRequestError("channel_code is required for bank transfers")
          bank_name = (bank_name or "").strip() or None
     else:
          channel_code = channel_code or DEFAULT_CHANNELS[payout_method]
          bank_name = None

     db.query(LandlordPayoutAccount).filter(
          LandlordPayoutAccount.landlord_id == landlord.landlord_id,
          LandlordPayoutAccount.is_active.is_(True),
     ).update({LandlordPayoutAccount.is_active: False}, synchronize_session=False)

     account = LandlordPayoutAccount(
          landlord_id=landlord.landlord_id,
          payout_method=payout_method,
          channel_code=channel_code,
          account_name=account_name,
          account_number=account_number,
          bank_name=bank_name,
          is_active=True,
     )
     db.add(account)
     db.flush()
     logger.info("Payout account saved for landlord %s (%s)", landlord.landlord_id, payout_method)
     return account


def _payments_with_landlord(db: Session):
     return (
          db.query(Payment, Landlord.landlord_id)
          .join(LeaseAgreement, Payment.agreement_id == LeaseAgreement.agreement_id)
          .join(Unit, LeaseAgreement.unit_id == Unit.unit_id)
          .join(Property, Unit.property_id == Property.property_id)
          .join(Landlord, Property.landlord_id == Landlord.landlord_id)
     )


def list_confirmed_payments(db: Session, payout_status: Optional[str] = None) -> List[dict]:
     query = _payments_with_landlord(db).filter(Payment.payment_status == PaymentStatus.CONFIRMED.value)
     if payout_status:
          query = query.filter(Payment.payout_status == payout_status)
     rows = query.order_by(Payment.payment_date.desc()).all()
     return [
          {
               "payment_id": payment.payment_id,
               "agreement_id": payment.agreement_id,
               "landlord_id": landlord_id,
               "payment_type": payment.payment_type,
               "amount_paid": float(payment.amount_paid),
               "net_amount": float(payment.net_amount) if payment.net_amount is not None else None,
               "payout_status": payment.payout_status,
               "payment_date": payment.payment_date,
          }
          for payment, landlord_id in rows
     ]


def _payout_amount(payment: Payment) -> Decimal:
     return payment.net_amount if payment.net_amount is not None else payment.amount_paid


def payout_reference(landlord_id: int, payment_ids: List[int]) -> str:
     """Stable reference for a landlord's batch; doubles as the Xendit idempotency key."""
     digest = hashlib.sha256(",".join(str(i) for i in sorted(payment_ids)).encode("utf-8")).hexdigest()
     return f"payout-{landlord_id}-{digest[:24]}"


def disburse(db: Session, payment_ids: List[int]) -> List[dict]:
     """
     Send one payout per landlord for the selected payments.

     Only confirmed, not yet disbursed payments whose landlord has an active
     payout account are included. Each landlord's bookkeeping is committed
     as soon as Xendit accepts its payout, so a failure on a later landlord
     leaves the earlier ones marked in_payout.

     Raises:
          BadRequestError: Nothing eligible, or a landlord total below the minimum.
          ExternalServiceError: Xendit rejected a payout.
     """
     if not payment_ids:
          raise BadRequestError("payment_ids is required")

     rows = (
          _payments_with_landlord(db)
          .filter(
               Payment.payment_id.in_(payment_ids),
               Payment.payment_status == PaymentStatus.CONFIRMED.value,
               Payment.payout_status == PayoutStatus.UNPAID.value,
          )
          .all()
     )

     groups: Dict[int, List[Payment]] = defaultdict(list)
     accounts: Dict[int, LandlordPayoutAccount] = {}
     for payment, landlord_id in rows:
          if landlord_id not in accounts:
               account = get_active_account(db, landlord_id)
               if account is None:
                    logger.warning("Landlord %s has no active payout account; skipping", landlord_id)
                    continue
               accounts[landlord_id] = account
          groups[landlord_id].append(payment)

     if not groups:
          raise BadRequestError("No eligible payments to disburse")

     totals = {
          landlord_id: sum((_payout_amount(p) for p in payments), Decimal("0"))
          for landlord_id, payments in groups.items()
     }
     below = [lid for lid, total in totals.items() if total < MINIMUM_PAYOUT]
     if below:
          raise BadRequestError(f"Payout total must be at least ₱{MINIMUM_PAYOUT} (landlords: {below})")

     results = []
     for landlord_id, payments in groups.items():
          account = accounts[landlord_id]
          amount = totals[landlord_id]
          ids = [p.payment_id for p in payments]
          reference_id = payout_reference(landlord_id, ids)

          response = xendit_client.create_payout(
               reference_id=reference_id,
               channel_code=account.channel_code,
               account_number=account.account_number,
               account_holder_name=account.account_name,
               amount=float(amount),
               description=f"Upkyp payout for {len(ids)} payment(s)",
               metadata={"landlord_id": landlord_id, "payment_ids": ids},
          )

          history = LandlordPayoutHistory(
               landlord_id=landlord_id,
               amount=amount,
               included_payments=json.dumps(ids),
               payout_method=account.payout_method,
               channel_code=account.channel_code,
               account_name=account.account_name,
               account_number=account.account_number,
               bank_name=account.bank_name,
               status="ACCEPTED",
               external_id=reference_id,
               xendit_disbursement_id=response.get("id"),
          )
          db.add(history)
          for payment in payments:
               payment.payout_status = PayoutStatus.IN_PAYOUT.value

          notify(
               db,
               account.landlord.user_id,
               "Payout Sent",
               f"A payout of ₱{float(amount):,.2f} is on its way to your {account.payout_method.replace('_', ' ')} account.",
               "/pages/landlord/payouts",
          )
          # money has left; keep the record even if a later landlord fails
          db.commit()
          logger.info("Payout %s of %s sent to landlord %s", reference_id, amount, landlord_id)
          results.append({
               "landlord_id": landlord_id,
               "payout_id": history.payout_id,
               "reference_id": reference_id,
               "amount": float(amount),
               "payment_ids": ids,
               "status": history.status,
          })

     return results
