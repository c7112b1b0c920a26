# services/billing_service.py
"""
Billing Service - Business logic layer for monthly unit billing.

This service handles bill creation for submetered and non-submetered
units, overdue marking, and tenant balances separate from the API layer.
"""
import logging
from calendar import monthrange
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.orm import Session

from models import (
     Billing,
     BillingAdditionalCharge,
     BillingStatus,
     LeaseAgreement,
     LeaseStatus,
     MeterReading,
     Unit,
)
from services.exceptions import BadRequestError, ConflictError, NotFoundError
from utils.ids import generate_billing_id

logger = logging.getLogger(__name__)

BILLING_ID_ATTEMPTS = 5


def month_bounds(day: date) -> Tuple[date, date]:
     """First and last day of the month containing day."""
     return day.replace(day=1), day.replace(day=monthrange(day.year, day.month)[1])


def _to_decimal(raw) -> Optional[Decimal]:
     if raw is None or raw == "":
          return None
     try:
          value = Decimal(str(raw))
     except (InvalidOperation, ValueError):
          return None
     return value if value.is_finite() else None


class BillingService:
     """Service class for billing-related business logic."""

     @staticmethod
     def new_billing_id(db: Session) -> str:
          for _ in range(BILLING_ID_ATTEMPTS):
               candidate = generate_billing_id()
               if not db.query(Billing.billing_id).filter(Billing.billing_id == candidate).first():
                    return candidate
          raise ConflictError("Could not allocate a unique billing id")

     @staticmethod
     def find_month_billing(db: Session, unit_id: int, day: date) -> Optional[Billing]:
          first_day, last_day = month_bounds(day)
          return db.query(Billing).filter(
               Billing.unit_id == unit_id,
               Billing.billing_period >= first_day,
               Billing.billing_period <= last_day,
          ).first()

     @staticmethod
     def replace_charges(
          billing: Billing,
          additional: Iterable = (),
          discounts: Iterable = (),
     ) -> int:
          """
          Replace all charge lines of a billing. Items without a type or
          with a non-numeric amount are skipped.

          Returns:
               Number of lines stored
          """
          billing.charges.clear()
          stored = 0
          for default_category, items in (("additional", additional), ("discount", discounts)):
               for item in items or []:
                    charge_type = (getattr(item, "type", None) or "").strip()
                    amount = _to_decimal(getattr(item, "amount", None))
                    if not charge_type or amount is None:
                         continue
                    category = getattr(item, "category", None) or default_category
                    if category not in ("additional", "discount"):
                         category = default_category
                    billing.charges.append(BillingAdditionalCharge(
                         charge_category=category,
                         charge_type=charge_type[:100],
                         amount=abs(amount),
                    ))
                    stored += 1
          return stored

     @staticmethod
     def save_non_submetered_bill(
          db: Session,
          unit_id: Optional[int],
          agreement_id: Optional[str],
          total,
          additional_charges: Iterable = (),
          discounts: Iterable = (),
          today: Optional[date] = None,
     ) -> Tuple[Billing, bool]:
          """
          Create or update this month's bill for a flat-rate unit.

          Returns:
               (billing, created)

          Raises:
               BadRequestError: Missing fields, non-numeric total, or lease
                    not on this unit.
          """
          if not unit_id or not agreement_id or total is None or total == "":
               raise BadRequestError("Missing required fields: unit_id, agreement_id and total")
          total_amount = _to_decimal(total)
          if total_amount is None or total_amount < 0:
               raise BadRequestError("total must be a valid number")

          lease = db.query(LeaseAgreement).filter(LeaseAgreement.agreement_id == agreement_id).first()
          if not lease:
               raise NotFoundError("Lease not found")
          if lease.unit_id != unit_id:
               raise BadRequestError("Lease does not belong to this unit")

          today = today or date.today()
          billing = BillingService.find_month_billing(db, unit_id, today)
          created = billing is None
          if created:
               billing = Billing(
                    billing_id=BillingService.new_billing_id(db),
                    unit_id=unit_id,
                    billing_period=today,
                    due_date=month_bounds(today)[1],
               )
               db.add(billing)

          billing.lease_id = agreement_id
          billing.total_amount_due = total_amount
          billing.status = BillingStatus.UNPAID.value
          BillingService.replace_charges(billing, additional_charges, discounts)
          db.flush()
          logger.info(
               "%s billing %s for unit %s: %s",
               "Created" if created else "Updated", billing.billing_id, unit_id, total_amount,
          )
          return billing, created

     @staticmethod
     def _upsert_reading(
          db: Session,
          unit_id: int,
          utility_type: str,
          reading_date: date,
          previous_reading: Optional[Decimal],
          current_reading: Optional[Decimal],
     ) -> Optional[MeterReading]:
          if previous_reading is None or current_reading is None:
               return None
          if current_reading < previous_reading:
               raise BadRequestError(f"Current {utility_type} reading cannot be lower than the previous reading")
          first_day, last_day = month_bounds(reading_date)
          reading = db.query(MeterReading).filter(
               MeterReading.unit_id == unit_id,
               MeterReading.utility_type == utility_type,
               MeterReading.reading_date >= first_day,
               MeterReading.reading_date <= last_day,
          ).first()
          if reading is None:
               reading = MeterReading(unit_id=unit_id, utility_type=utility_type)
               db.add(reading)
          reading.reading_date = reading_date
          reading.previous_reading = previous_reading
          reading.current_reading = current_reading
          return reading

     @staticmethod
     def save_submetered_bill(db: Session, data) -> Tuple[Billing, bool]:
          """
          Create or update a submetered unit's bill for the month of
          data.readingDate, together with its meter readings.

          Returns:
               (billing, created)

          Raises:
               NotFoundError: No active or completed lease on the unit.
          """
          lease = (
               db.query(LeaseAgreement)
               .filter(
                    LeaseAgreement.unit_id == data.unit_id,
                    LeaseAgreement.status.in_([LeaseStatus.ACTIVE.value, LeaseStatus.COMPLETED.value]),
               )
               .order_by(LeaseAgreement.start_date.desc())
               .first()
          )
          if not lease:
               raise NotFoundError("No active lease found for this unit")

          billing = BillingService.find_month_billing(db, data.unit_id, data.readingDate)
          created = billing is None
          if created:
               billing = Billing(
                    billing_id=BillingService.new_billing_id(db),
                    unit_id=data.unit_id,
                    billing_period=data.readingDate,
               )
               db.add(billing)

          billing.lease_id = lease.agreement_id
          billing.due_date = data.dueDate or month_bounds(data.readingDate)[1]
          billing.total_water_amount = data.totalWaterAmount
          billing.total_electricity_amount = data.totalElectricityAmount
          billing.total_amount_due = data.total_amount_due
          billing.status = BillingStatus.UNPAID.value

          BillingService._upsert_reading(
               db, data.unit_id, "water", data.readingDate,
               data.waterPrevReading, data.waterCurrentReading,
          )
          BillingService._upsert_reading(
               db, data.unit_id, "electricity", data.readingDate,
               data.electricityPrevReading, data.electricityCurrentReading,
          )
          BillingService.replace_charges(billing, data.additionalCharges)
          db.flush()
          logger.info(
               "%s submetered billing %s for unit %s",
               "Created" if created else "Updated", billing.billing_id, data.unit_id,
          )
          return billing, created

     @staticmethod
     def current_billing_for_lease(
          db: Session,
          lease: LeaseAgreement,
          today: Optional[date] = None,
     ) -> Tuple[Optional[Billing], List[MeterReading]]:
          """This month's bill for the lease and the unit's readings for the month."""
          today = today or date.today()
          first_day, last_day = month_bounds(today)
          billing = db.query(Billing).filter(
               Billing.lease_id == lease.agreement_id,
               Billing.billing_period >= first_day,
               Billing.billing_period <= last_day,
          ).first()
          readings = db.query(MeterReading).filter(
               MeterReading.unit_id == lease.unit_id,
               MeterReading.reading_date >= first_day,
               MeterReading.reading_date <= last_day,
          ).order_by(MeterReading.utility_type).all()
          return billing, readings

     @staticmethod
     def billings_for_unit(db: Session, unit: Unit) -> List[Billing]:
          return (
               db.query(Billing)
               .filter(Billing.unit_id == unit.unit_id)
               .order_by(Billing.billing_period.desc())
               .all()
          )

     @staticmethod
     def mark_overdue_billings(db: Session, today: Optional[date] = None) -> int:
          """
          Mark all unpaid billings past their due date as overdue.

          This should be called by a scheduled job daily.

          Returns:
               Number of billings marked as overdue
          """
          today = today or date.today()

          overdue_billings = db.query(Billing).filter(
               Billing.status == BillingStatus.UNPAID.value,
               Billing.due_date < today
          ).all()

          for billing in overdue_billings:
               billing.mark_as_overdue()
          db.flush()
          if overdue_billings:
               logger.info("Marked %d billing(s) overdue", len(overdue_billings))
          return len(overdue_billings)

     @staticmethod
     def calculate_tenant_balance(db: Session, tenant_id: int) -> dict:
          """
          Calculate the totals a tenant has paid and still owes.

          Returns:
               Dictionary with balance information
          """
          billings = (
               db.query(Billing)
               .join(LeaseAgreement, Billing.lease_id == LeaseAgreement.agreement_id)
               .filter(LeaseAgreement.tenant_id == tenant_id)
               .all()
          )

          paid = [b for b in billings if b.status == BillingStatus.PAID.value]
          unpaid = [b for b in billings if b.status == BillingStatus.UNPAID.value]
          overdue = [b for b in billings if b.status == BillingStatus.OVERDUE.value]

          return {
               "total_paid": float(sum((b.total_amount_due for b in paid), Decimal("0"))),
               "total_unpaid": float(sum((b.total_amount_due for b in unpaid), Decimal("0"))),
               "total_overdue": float(sum((b.total_amount_due for b in overdue), Decimal("0"))),
               "unpaid_count": len(unpaid),
               "overdue_count": len(overdue),
          }
