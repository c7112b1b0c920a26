# routers/pdc.py
"""
Post-dated check routes for landlords.

Uploads arrive as multipart forms with indexed fields:
pdcs[0][check_number], pdcs[0][amount], pdcs[0][uploaded_image], ...
"""
import re
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord
from models import Landlord
from schemas.pdc import PDCListResponse, PDCResponse, PDCStatusUpdate
from services import pdc_service
from services.access import get_owned_lease, get_owned_property, landlord_property_ids

router = APIRouter(prefix="/api/landlord/pdc", tags=["pdc"])

_PDC_FIELD = re.compile(r"^pdcs\[(\d+)\]\[(\w+)\]$")


def _parse_pdc_entries(form) -> List[dict]:
     """Collect pdcs[i][field] form items into a list ordered by index."""
     entries: Dict[int, dict] = {}
     for key, value in form.multi_items():
          match = _PDC_FIELD.match(key)
          if not match:
               continue
          index, field = int(match.group(1)), match.group(2)
          entries.setdefault(index, {})[field] = value
     return [entries[i] for i in sorted(entries)]


@router.post("/upload", status_code=status.HTTP_201_CREATED, summary="Upload post-dated checks")
async def upload_pdcs(
     request: Request,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     form = await request.form()
     raw_property_id = form.get("property_id")
     if not raw_property_id or not str(raw_property_id).isdigit():
          raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="property_id is required")

     prop = get_owned_property(db, landlord, int(raw_property_id))
     lease_id = form.get("lease_id") or None
     inserted = pdc_service.upload_pdcs(
          db,
          property_id=prop.property_id,
          lease_id=lease_id,
          entries=_parse_pdc_entries(form),
          owner_id=landlord.landlord_id,
     )
     return {"success": True, "insertedCount": len(inserted), "pdcs": inserted}


@router.get("/getAll", response_model=PDCListResponse, summary="Checks across all my properties")
def get_all(
     status_filter: Optional[str] = Query("all", alias="status"),
     page: int = Query(1, ge=1),
     limit: int = Query(10, ge=1, le=100),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     return pdc_service.list_pdcs(db, landlord_property_ids(db, landlord), status_filter, page, limit)


@router.get("/getByProperty", response_model=PDCListResponse, summary="Checks for one property")
def get_by_property(
     property_id: int = Query(...),
     status_filter: Optional[str] = Query("all", alias="status"),
     page: int = Query(1, ge=1),
     limit: int = Query(10, ge=1, le=100),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     prop = get_owned_property(db, landlord, property_id)
     return pdc_service.list_pdcs(db, [prop.property_id], status_filter, page, limit)


@router.get("/getByLease", response_model=List[PDCResponse], summary="Checks for one lease")
def get_by_lease(
     lease_id: str = Query(...),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     lease = get_owned_lease(db, landlord, lease_id)
     return pdc_service.list_pdcs_for_lease(db, lease)


@router.put("/updateStatus", summary="Change a check's status")
def update_status(
     body: PDCStatusUpdate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     pdc = pdc_service.update_pdc_status(db, body.pdc_id, body.status, landlord_id=landlord.landlord_id)
     return {"message": "PDC status updated", "pdc_id": pdc.pdc_id, "status": pdc.status}
