# routers/properties.py
import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord
from models import Landlord, Property, Unit, UnitStatus
from schemas.property import PropertyCreate, PropertyResponse, UnitCreate, UnitResponse
from services.access import get_owned_property

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/landlord/properties", tags=["properties"])


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED, summary="Register a property")
def create_property(
     body: PropertyCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     prop = Property(landlord_id=landlord.landlord_id, **body.model_dump())
     db.add(prop)
     db.flush()
     db.refresh(prop)
     logger.info("Property %s created by landlord %s", prop.property_id, landlord.landlord_id)
     return prop


@router.get("", response_model=List[PropertyResponse], summary="List my properties")
def list_properties(
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     return (
          db.query(Property)
          .filter(Property.landlord_id == landlord.landlord_id)
          .order_by(Property.created_at.desc(), Property.property_id.desc())
          .all()
     )


@router.post(
     "/{property_id}/units",
     response_model=UnitResponse,
     status_code=status.HTTP_201_CREATED,
     summary="Add a unit to a property",
)
def create_unit(
     property_id: int,
     body: UnitCreate,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     prop = get_owned_property(db, landlord, property_id)
     unit = Unit(property_id=prop.property_id, status=UnitStatus.UNOCCUPIED.value, **body.model_dump())
     db.add(unit)
     db.flush()
     logger.info("Unit %s added to property %s", unit.unit_id, prop.property_id)
     return unit


@router.get("/{property_id}/units", response_model=List[UnitResponse], summary="List units of a property")
def list_units(
     property_id: int,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     prop = get_owned_property(db, landlord, property_id)
     return db.query(Unit).filter(Unit.property_id == prop.property_id).order_by(Unit.unit_id).all()
