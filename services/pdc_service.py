# services/pdc_service.py
"""
PDC Service - post-dated check intake, listing and status updates.
"""
import logging
import math
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy.orm import Session

import azure_blob
from models import (
     LeaseAgreement,
     LeaseStatus,
     PDCStatus,
     PostDatedCheck,
     Property,
     Tenant,
     Unit,
)
from services.exceptions import BadRequestError, ForbiddenError, NotFoundError
from services.notification_service import notify

logger = logging.getLogger(__name__)

VALID_STATUSES = [s.value for s in PDCStatus]

# Timestamp column stamped on each terminal transition
STATUS_TIMESTAMP_FIELDS = {
     PDCStatus.CLEARED.value: "cleared_at",
     PDCStatus.BOUNCED.value: "bounced_at",
     PDCStatus.REPLACED.value: "replaced_at",
}


def _parse_amount(raw) -> Decimal:
     try:
          return Decimal(str(raw or "0"))
     except InvalidOperation:
          raise BadRequestError(f"Invalid PDC amount: {raw}")


def _parse_date(raw) -> Optional[date]:
     if not raw:
          return None
     try:
          return date.fromisoformat(str(raw)[:10])
     except ValueError:
          raise BadRequestError(f"Invalid PDC due date: {raw}")


def _fallback_lease_id(db: Session, property_id: int) -> Optional[str]:
     row = (
          db.query(LeaseAgreement.agreement_id)
          .join(Unit, LeaseAgreement.unit_id == Unit.unit_id)
          .filter(
               Unit.property_id == property_id,
               LeaseAgreement.status.in_([LeaseStatus.ACTIVE.value, LeaseStatus.COMPLETED.value]),
          )
          .order_by(LeaseAgreement.created_at)
          .first()
     )
     return row[0] if row else None


def _discard_images(urls: List[str]):
     for url in urls:
          try:
               azure_blob.delete_from_blob(url)
          except Exception as e:
               logger.warning("Could not delete orphaned PDC image %s: %s", url, e)


def upload_pdcs(
     db: Session,
     property_id: int,
     lease_id: Optional[str],
     entries: List[dict],
     owner_id: int,
) -> List[dict]:
     """
     Store a batch of checks for a property. Images are uploaded first;
     checks without a lease fall back to the property's first active or
     completed lease and are skipped when there is none.

     Images of skipped checks, and every image of a batch that fails, are
     deleted from storage again.

     Returns the accepted entries as stored.
     """
     if not entries:
          raise BadRequestError("No PDCs provided in the request")

     if lease_id:
          lease = db.query(LeaseAgreement).filter(LeaseAgreement.agreement_id == lease_id).first()
          if not lease or lease.unit.property_id != property_id:
               raise BadRequestError("Lease does not belong to this property")

     uploaded = []
     try:
          prepared = []
          for entry in entries:
               amount = _parse_amount(entry.get("amount"))
               due_date = _parse_date(entry.get("due_date"))
               image = entry.get("uploaded_image")
               uploaded_url = None
               if image is not None and getattr(image, "filename", None):
                    uploaded_url = azure_blob.upload_to_blob(image, "pdc", owner_id)
                    uploaded.append(uploaded_url)
               prepared.append({
                    "lease_id": lease_id or None,
                    "check_number": entry.get("check_number"),
                    "bank_name": entry.get("bank_name"),
                    "amount": amount,
                    "due_date": due_date,
                    "status": PDCStatus.PENDING.value,
                    "uploaded_image_url": uploaded_url,
                    "notes": entry.get("notes") or "",
               })

          inserted = []
          skipped_images = []
          fallback = None
          for pdc in prepared:
               if not pdc["lease_id"]:
                    if fallback is None:
                         fallback = _fallback_lease_id(db, property_id) or ""
                    pdc["lease_id"] = fallback or None
               if not pdc["lease_id"]:
                    logger.warning("Skipping PDC %s: no lease on property %s", pdc["check_number"], property_id)
                    if pdc["uploaded_image_url"]:
                         skipped_images.append(pdc["uploaded_image_url"])
                    continue
               row = PostDatedCheck(**pdc)
               db.add(row)
               db.flush()
               pdc["pdc_id"] = row.pdc_id
               pdc["amount"] = float(pdc["amount"])
               inserted.append(pdc)
     except Exception:
          _discard_images(uploaded)
          raise

     _discard_images(skipped_images)
     logger.info("Stored %d of %d PDC(s) for property %s", len(inserted), len(prepared), property_id)
     return inserted


def _row_to_dict(pdc: PostDatedCheck, unit: Unit, prop: Property, tenant: Optional[Tenant]) -> dict:
     return {
          "pdc_id": pdc.pdc_id,
          "lease_id": pdc.lease_id,
          "check_number": pdc.check_number,
          "bank_name": pdc.bank_name,
          "amount": float(pdc.amount),
          "due_date": pdc.due_date,
          "status": pdc.status,
          "uploaded_image_url": pdc.uploaded_image_url,
          "notes": pdc.notes,
          "cleared_at": pdc.cleared_at,
          "bounced_at": pdc.bounced_at,
          "replaced_at": pdc.replaced_at,
          "created_at": pdc.created_at,
          "unit_name": unit.unit_name,
          "property_name": prop.property_name,
          "tenant_name": (tenant.full_name if tenant else "") or "Unknown",
     }


def list_pdcs(
     db: Session,
     property_ids: List[int],
     status: Optional[str] = None,
     page: int = 1,
     limit: int = 10,
) -> dict:
     """
     Paginated checks across the given properties, ordered by due date.

     pagination.total counts the filtered rows; totalCount ignores the
     status filter.
     """
     base = (
          db.query(PostDatedCheck, Unit, Property, Tenant)
          .join(LeaseAgreement, PostDatedCheck.lease_id == LeaseAgreement.agreement_id)
          .join(Unit, LeaseAgreement.unit_id == Unit.unit_id)
          .join(Property, Unit.property_id == Property.property_id)
          .outerjoin(Tenant, LeaseAgreement.tenant_id == Tenant.tenant_id)
          .filter(Property.property_id.in_(property_ids or [-1]))
     )
     total_count = base.count()

     filtered = base
     if status and status != "all":
          filtered = filtered.filter(PostDatedCheck.status == status)
     total = filtered.count()

     rows = (
          filtered.order_by(PostDatedCheck.due_date.asc(), PostDatedCheck.pdc_id.asc())
          .offset((page - 1) * limit)
          .limit(limit)
          .all()
     )
     return {
          "data": [_row_to_dict(pdc, unit, prop, tenant) for pdc, unit, prop, tenant in rows],
          "totalCount": total_count,
          "pagination": {
               "total": total,
               "page": page,
               "limit": limit,
               "totalPages": math.ceil(total / limit) if limit else 0,
          },
     }


def list_pdcs_for_lease(db: Session, lease: LeaseAgreement) -> List[dict]:
     unit = lease.unit
     return [
          _row_to_dict(pdc, unit, unit.property, lease.tenant)
          for pdc in sorted(lease.pdcs, key=lambda p: (p.due_date or date.max, p.pdc_id))
     ]


def update_pdc_status(db: Session, pdc_id, status, landlord_id: Optional[int] = None) -> PostDatedCheck:
     """
     Set a check's status and stamp the matching timestamp. Clearing a
     check tells the tenant their rent was received.

     Raises:
          BadRequestError: Missing field or status outside the allowed set.
          NotFoundError: Unknown pdc_id.
          ForbiddenError: The check is on another landlord's property.
     """
     if not pdc_id or not status:
          raise BadRequestError("Missing required fields: pdc_id and status.")
     if status not in VALID_STATUSES:
          raise BadRequestError(f"Invalid status. Allowed values: {', '.join(VALID_STATUSES)}")

     pdc = db.query(PostDatedCheck).filter(PostDatedCheck.pdc_id == pdc_id).first()
     if not pdc:
          raise NotFoundError("PDC not found.")
     if landlord_id is not None and pdc.lease.unit.property.landlord_id != landlord_id:
          raise ForbiddenError("You do not manage this PDC")

     pdc.status = status
     timestamp_field = STATUS_TIMESTAMP_FIELDS.get(status)
     if timestamp_field:
          setattr(pdc, timestamp_field, datetime.utcnow())

     if status == PDCStatus.CLEARED.value:
          lease = pdc.lease
          unit = lease.unit
          notify(
               db,
               lease.tenant.user_id if lease.tenant else None,
               "Payment Received via PDC",
               f"Your post-dated check for ₱{float(pdc.amount):,.2f} has been cleared "
               f"for your rent at {unit.property.property_name} ({unit.unit_name}).",
               "/pages/tenant/billing",
          )

     db.flush()
     logger.info("PDC %s status updated to %s", pdc_id, status)
     return pdc
