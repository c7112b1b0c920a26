# routers/applications.py
"""
Tenant screening: tenants apply for a unit, the landlord approves or
disapproves, and an approved tenant decides whether to proceed.
"""
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord, require_tenant
from models import Landlord, ProspectiveTenant, Tenant
from schemas.application import (
     ApplicationCreate,
     ApplicationResponse,
     ApplicationStatusUpdate,
     ProceedRequest,
)
from services.access import get_owned_unit
from services.application_service import (
     apply_for_unit,
     proceed_with_application,
     update_application_status,
)

router = APIRouter(tags=["applications"])


def _build_application_response(application: ProspectiveTenant) -> ApplicationResponse:
     tenant = application.tenant
     return ApplicationResponse(
          id=application.id,
          unit_id=application.unit_id,
          tenant_id=application.tenant_id,
          status=application.status,
          message=application.message,
          proceeded=application.proceeded,
          tenant_name=tenant.full_name if tenant else None,
          tenant_email=tenant.user.email if tenant else None,
          created_at=application.created_at,
     )


@router.post(
     "/api/tenant/applications",
     response_model=ApplicationResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Apply for a unit",
)
def create_application(
     body: ApplicationCreate,
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     application = apply_for_unit(db, tenant, body.unit_id, body.message)
     return _build_application_response(application)


@router.get(
     "/api/landlord/prospective/interestedTenants",
     response_model=List[ApplicationResponse],
     summary="Applications for one of my units",
)
def interested_tenants(
     unit_id: int = Query(..., description="Unit ID"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     unit = get_owned_unit(db, landlord, unit_id)
     applications = (
          db.query(ProspectiveTenant)
          .filter(ProspectiveTenant.unit_id == unit.unit_id)
          .order_by(ProspectiveTenant.created_at.desc(), ProspectiveTenant.id.desc())
          .all()
     )
     return [_build_application_response(a) for a in applications]


@router.put("/api/landlord/prospective/updateApplicationStatus", summary="Approve or disapprove an applicant")
def update_status(
     body: ApplicationStatusUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     get_owned_unit(db, landlord, body.unit_id)
     application = update_application_status(
          db,
          unit_id=body.unit_id,
          tenant_id=body.tenant_id,
          status=body.status.value,
          message=body.message,
     )
     return {
          "message": f"Application {application.status}",
          "application": _build_application_response(application),
     }


@router.post("/api/tenant/applications/{application_id}/proceed", summary="Proceed with an approved application")
def proceed(
     application_id: int,
     body: ProceedRequest,
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     lease = proceed_with_application(db, tenant, application_id, body.decision.value)
     return {
          "message": "Decision recorded",
          "decision": body.decision.value,
          "agreement_id": lease.agreement_id if lease else None,
     }
