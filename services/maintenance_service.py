# services/maintenance_service.py
import logging
from datetime import date
from typing import List, Optional

from fastapi import Request
from sqlalchemy.orm import Session

import azure_blob
from models import (
     Landlord,
     LeaseAgreement,
     LeaseStatus,
     MaintenancePhoto,
     MaintenanceRequest,
     MaintenanceStatus,
     Property,
     Tenant,
     Unit,
)
from services.activity_log import record_activity
from services.exceptions import BadRequestError, ForbiddenError, NotFoundError
from services.notification_service import notify

logger = logging.getLogger(__name__)

VALID_STATUSES = [s.value for s in MaintenanceStatus]


def _snapshot(request: MaintenanceRequest) -> dict:
     return {
          "status": request.status,
          "schedule_date": request.schedule_date,
          "completion_date": request.completion_date,
     }


def create_request(
     db: Session,
     tenant: Tenant,
     unit_id: int,
     subject: str,
     description: str,
     category: str,
     photos: Optional[List] = None,
) -> MaintenanceRequest:
     """File a repair request; the tenant must hold an active lease on the unit."""
     lease = db.query(LeaseAgreement).filter(
          LeaseAgreement.unit_id == unit_id,
          LeaseAgreement.tenant_id == tenant.tenant_id,
          LeaseAgreement.status == LeaseStatus.ACTIVE.value,
     ).first()
     if not lease:
          raise ForbiddenError("You do not have an active lease on this unit")

     request = MaintenanceRequest(
          tenant_id=tenant.tenant_id,
          unit_id=unit_id,
          subject=subject.strip(),
          description=description.strip(),
          category=category.strip(),
          status=MaintenanceStatus.PENDING.value,
     )
     for photo in photos or []:
          if photo is not None and getattr(photo, "filename", None):
               url = azure_blob.upload_to_blob(photo, "maintenance", tenant.tenant_id)
               request.photos.append(MaintenancePhoto(photo_url=url))
     db.add(request)

     unit = lease.unit
     notify(
          db,
          unit.property.landlord.user_id,
          "New Maintenance Request",
          f"{tenant.full_name} reported '{request.subject}' at {unit.property.property_name} ({unit.unit_name}).",
          "/pages/landlord/maintenance-request",
     )
     db.flush()
     logger.info("Maintenance request %s filed for unit %s", request.request_id, unit_id)
     return request


def list_for_landlord(db: Session, landlord: Landlord, status: Optional[str] = None) -> List[MaintenanceRequest]:
     query = (
          db.query(MaintenanceRequest)
          .join(Unit, MaintenanceRequest.unit_id == Unit.unit_id)
          .join(Property, Unit.property_id == Property.property_id)
          .filter(Property.landlord_id == landlord.landlord_id)
     )
     if status:
          query = query.filter(MaintenanceRequest.status == status)
     return query.order_by(MaintenanceRequest.created_at.desc(), MaintenanceRequest.request_id.desc()).all()


def update_status(
     db: Session,
     landlord: Landlord,
     request_id,
     status,
     schedule_date: Optional[date] = None,
     completion_date: Optional[date] = None,
     http_request: Optional[Request] = None,
) -> MaintenanceRequest:
     """
     Move a request to a new status, tell the tenant, and write one
     activity-log row for each party.
     """
     if not request_id or not status:
          raise BadRequestError("request_id and status are required")
     if status not in VALID_STATUSES:
          raise BadRequestError(f"Invalid status. Allowed values: {', '.join(VALID_STATUSES)}")

     request = db.query(MaintenanceRequest).filter(MaintenanceRequest.request_id == request_id).first()
     if not request:
          raise NotFoundError("Maintenance request not found")
     if request.unit.property.landlord_id != landlord.landlord_id:
          raise ForbiddenError("You do not manage this maintenance request")

     old_value = _snapshot(request)
     request.status = status
     if schedule_date is not None:
          request.schedule_date = schedule_date
     if completion_date is not None:
          request.completion_date = completion_date
     new_value = _snapshot(request)

     body = f"Your maintenance request '{request.subject}' is now {status.replace('-', ' ')}."
     if status == MaintenanceStatus.SCHEDULED.value and request.schedule_date:
          body += f" Scheduled on {request.schedule_date:%B %d, %Y}."
     if status == MaintenanceStatus.COMPLETED.value and request.completion_date:
          body += f" Completed on {request.completion_date:%B %d, %Y}."
     notify(db, request.tenant.user_id, "Maintenance Request Update", body, "/pages/tenant/maintenance")

     common = dict(
          target_table="maintenance_requests",
          target_id=request.request_id,
          old_value=old_value,
          new_value=new_value,
          request=http_request,
          status_code=200,
     )
     record_activity(
          db,
          request.tenant.user_id,
          "Maintenance status changed",
          description=f"Request '{request.subject}' moved to {status} by the landlord",
          **common,
     )
     record_activity(
          db,
          landlord.user_id,
          "Updated maintenance status",
          description=f"Set request '{request.subject}' to {status}",
          **common,
     )
     db.flush()
     logger.info("Maintenance request %s -> %s", request.request_id, status)
     return request
