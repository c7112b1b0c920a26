# routers/maintenance.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord, require_tenant
from models import Landlord, MaintenanceRequest, Tenant
from schemas.maintenance import MaintenanceResponse, MaintenanceStatusUpdate
from services import maintenance_service

router = APIRouter(prefix="/api/maintenance", tags=["maintenance"])


def _build_maintenance_response(request: MaintenanceRequest) -> MaintenanceResponse:
     unit = request.unit
     return MaintenanceResponse(
          request_id=request.request_id,
          tenant_id=request.tenant_id,
          unit_id=request.unit_id,
          subject=request.subject,
          description=request.description,
          category=request.category,
          status=request.status,
          schedule_date=request.schedule_date,
          completion_date=request.completion_date,
          created_at=request.created_at,
          photo_urls=[p.photo_url for p in request.photos],
          tenant_name=request.tenant.full_name if request.tenant else None,
          unit_name=unit.unit_name,
          property_name=unit.property.property_name,
     )


@router.post(
     "/createMaintenance",
     response_model=MaintenanceResponse,
     status_code=status.HTTP_201_CREATED,
     summary="File a maintenance request",
)
def create_maintenance(
     subject: str = Form(...),
     description: str = Form(...),
     category: str = Form(...),
     unit_id: int = Form(...),
     photos: Optional[List[UploadFile]] = File(None),
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     request = maintenance_service.create_request(
          db,
          tenant,
          unit_id=unit_id,
          subject=subject,
          description=description,
          category=category,
          photos=photos,
     )
     return _build_maintenance_response(request)


@router.get("/getAllMaintenance", response_model=List[MaintenanceResponse], summary="Requests on my properties")
def get_all_maintenance(
     status_filter: Optional[str] = Query(None, alias="status"),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     requests = maintenance_service.list_for_landlord(db, landlord, status_filter)
     return [_build_maintenance_response(r) for r in requests]


@router.put("/updateStatus", response_model=MaintenanceResponse, summary="Change a request's status")
def update_status(
     body: MaintenanceStatusUpdate,
     request: Request,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     maintenance = maintenance_service.update_status(
          db,
          landlord,
          request_id=body.request_id,
          status=body.status,
          schedule_date=body.schedule_date,
          completion_date=body.completion_date,
          http_request=request,
     )
     return _build_maintenance_response(maintenance)
