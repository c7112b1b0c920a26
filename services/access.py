# services/access.py
"""
Ownership checks shared by the routers.

A landlord reaches data through Property.landlord_id; a tenant through
LeaseAgreement.tenant_id.
"""
from typing import List

from sqlalchemy.orm import Session

from models import Billing, Landlord, LeaseAgreement, Property, Tenant, Unit
from services.exceptions import ForbiddenError, NotFoundError


def get_owned_property(db: Session, landlord: Landlord, property_id: int) -> Property:
     prop = db.query(Property).filter(Property.property_id == property_id).first()
     if not prop:
          raise NotFoundError(f"Property with ID {property_id} not found")
     if prop.landlord_id != landlord.landlord_id:
          raise ForbiddenError("You do not own this property")
     return prop


def get_owned_unit(db: Session, landlord: Landlord, unit_id: int) -> Unit:
     unit = db.query(Unit).filter(Unit.unit_id == unit_id).first()
     if not unit:
          raise NotFoundError(f"Unit with ID {unit_id} not found")
     if unit.property.landlord_id != landlord.landlord_id:
          raise ForbiddenError("You do not own this unit")
     return unit


def get_lease(db: Session, agreement_id: str) -> LeaseAgreement:
     lease = db.query(LeaseAgreement).filter(LeaseAgreement.agreement_id == agreement_id).first()
     if not lease:
          raise NotFoundError("Lease not found")
     return lease


def landlord_of_lease(lease: LeaseAgreement) -> Landlord:
     return lease.unit.property.landlord


def get_owned_lease(db: Session, landlord: Landlord, agreement_id: str) -> LeaseAgreement:
     lease = get_lease(db, agreement_id)
     if lease.unit.property.landlord_id != landlord.landlord_id:
          raise ForbiddenError("You do not manage this lease")
     return lease


def get_tenant_lease(db: Session, tenant: Tenant, agreement_id: str) -> LeaseAgreement:
     lease = get_lease(db, agreement_id)
     if lease.tenant_id != tenant.tenant_id:
          raise ForbiddenError("This lease does not belong to you")
     return lease


def get_tenant_billing(db: Session, tenant: Tenant, billing_id: str) -> Billing:
     billing = db.query(Billing).filter(Billing.billing_id == billing_id).first()
     if not billing:
          raise NotFoundError("Billing not found")
     if billing.lease.tenant_id != tenant.tenant_id:
          raise ForbiddenError("This billing does not belong to you")
     return billing


def landlord_property_ids(db: Session, landlord: Landlord) -> List[int]:
     rows = db.query(Property.property_id).filter(Property.landlord_id == landlord.landlord_id).all()
     return [row[0] for row in rows]
