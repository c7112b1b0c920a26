# services/application_service.py
"""
Application Service - tenant screening for a unit.

pending -> approved / disapproved by the landlord; an approved applicant
then decides whether to proceed, which drafts the lease.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from models import (
     ApplicationStatus,
     LeaseAgreement,
     LeaseStatus,
     ProspectiveTenant,
     Tenant,
     Unit,
     UnitStatus,
)
from services.exceptions import BadRequestError, ConflictError, NotFoundError
from services.lease_service import new_agreement_id
from services.notification_service import notify

logger = logging.getLogger(__name__)


def apply_for_unit(db: Session, tenant: Tenant, unit_id: int, message: Optional[str] = None) -> ProspectiveTenant:
     unit = db.query(Unit).filter(Unit.unit_id == unit_id).first()
     if not unit:
          raise NotFoundError(f"Unit with ID {unit_id} not found")

     existing = db.query(ProspectiveTenant).filter(
          ProspectiveTenant.unit_id == unit_id,
          ProspectiveTenant.tenant_id == tenant.tenant_id,
          ProspectiveTenant.status.in_([ApplicationStatus.PENDING.value, ApplicationStatus.APPROVED.value]),
     ).first()
     if existing:
          raise ConflictError("You already have an open application for this unit")

     application = ProspectiveTenant(
          unit_id=unit_id,
          tenant_id=tenant.tenant_id,
          status=ApplicationStatus.PENDING.value,
          message=message,
     )
     db.add(application)
     notify(
          db,
          unit.property.landlord.user_id,
          "New Tenant Application",
          f"{tenant.full_name} applied for {unit.property.property_name} ({unit.unit_name}).",
          "/pages/landlord/property-listing",
     )
     db.flush()
     logger.info("Tenant %s applied for unit %s", tenant.tenant_id, unit_id)
     return application


def update_application_status(
     db: Session,
     unit_id: int,
     tenant_id: int,
     status: str,
     message: Optional[str] = None,
) -> ProspectiveTenant:
     """
     Raises:
          BadRequestError: Disapproval without a reason.
          NotFoundError: No application from this tenant for this unit.
     """
     if status == ApplicationStatus.DISAPPROVED.value and not (message or "").strip():
          raise BadRequestError("A reason is required when disapproving an application")

     application = (
          db.query(ProspectiveTenant)
          .filter(ProspectiveTenant.unit_id == unit_id, ProspectiveTenant.tenant_id == tenant_id)
          .order_by(ProspectiveTenant.id.desc())
          .first()
     )
     if not application:
          raise NotFoundError("Application not found")

     application.status = status
     if status == ApplicationStatus.DISAPPROVED.value:
          application.message = message.strip()

     unit = application.unit
     if status == ApplicationStatus.APPROVED.value:
          title = "Application Approved"
          body = f"Your application for {unit.property.property_name} ({unit.unit_name}) was approved."
     else:
          title = "Application Disapproved"
          body = f"Your application for {unit.property.property_name} ({unit.unit_name}) was disapproved: {application.message}"
     notify(db, application.tenant.user_id, title, body, "/pages/tenant/my-applications")
     db.flush()
     logger.info("Application %s set to %s", application.id, status)
     return application


def proceed_with_application(
     db: Session,
     tenant: Tenant,
     application_id: int,
     decision: str,
) -> Optional[LeaseAgreement]:
     """
     Record the approved applicant's answer. "yes" drafts a lease (once) and
     holds the unit; "no" releases it. Returns the draft lease for "yes".
     """
     application = db.query(ProspectiveTenant).filter(
          ProspectiveTenant.id == application_id,
          ProspectiveTenant.tenant_id == tenant.tenant_id,
          ProspectiveTenant.status == ApplicationStatus.APPROVED.value,
     ).first()
     if not application:
          raise NotFoundError("Approved application not found")

     application.proceeded = decision
     unit = application.unit
     lease = None

     if decision == "yes":
          lease = db.query(LeaseAgreement).filter(
               LeaseAgreement.tenant_id == tenant.tenant_id,
               LeaseAgreement.unit_id == unit.unit_id,
               LeaseAgreement.status.in_([LeaseStatus.DRAFT.value, LeaseStatus.PENDING_SIGNATURE.value]),
          ).first()
          if lease is None:
               lease = LeaseAgreement(
                    agreement_id=new_agreement_id(db),
                    tenant_id=tenant.tenant_id,
                    unit_id=unit.unit_id,
                    status=LeaseStatus.DRAFT.value,
                    rent_amount=unit.rent_amount,
               )
               db.add(lease)
          unit.status = UnitStatus.OCCUPIED.value
          body = f"{tenant.full_name} will proceed with renting {unit.unit_name}. You can now set up the lease."
     else:
          unit.status = UnitStatus.UNOCCUPIED.value
          body = f"{tenant.full_name} decided not to proceed with renting {unit.unit_name}."

     notify(db, unit.property.landlord.user_id, "Tenant Decision", body, "/pages/landlord/property-listing")
     db.flush()
     logger.info("Application %s proceed=%s", application.id, decision)
     return lease
