# routers/billing.py
"""
Billing API routes.

Landlords save the month's bill for a unit (flat-rate or submetered);
tenants read their current bill and balance summary.
"""
from typing import List

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord, require_tenant
from models import Billing, Landlord, MeterReading, Tenant
from schemas.billing import (
     BillingResponse,
     BillingSummaryResponse,
     ChargeResponse,
     CurrentBillingResponse,
     MeterReadingResponse,
     NonSubmeteredBillRequest,
     SubmeteredBillRequest,
)
from services.access import get_owned_unit, get_tenant_billing, get_tenant_lease
from services.billing_service import BillingService

router = APIRouter(tags=["billing"])


def _build_billing_response(billing: Billing) -> BillingResponse:
     return BillingResponse(
          billing_id=billing.billing_id,
          lease_id=billing.lease_id,
          unit_id=billing.unit_id,
          billing_period=billing.billing_period,
          total_water_amount=float(billing.total_water_amount or 0),
          total_electricity_amount=float(billing.total_electricity_amount or 0),
          total_amount_due=float(billing.total_amount_due),
          due_date=billing.due_date,
          status=billing.status,
          paid_at=billing.paid_at,
          charges=[
               ChargeResponse(
                    charge_category=c.charge_category,
                    charge_type=c.charge_type,
                    amount=float(c.amount),
               )
               for c in billing.charges
          ],
     )


def _build_reading_response(reading: MeterReading) -> MeterReadingResponse:
     return MeterReadingResponse(
          utility_type=reading.utility_type,
          reading_date=reading.reading_date,
          previous_reading=float(reading.previous_reading),
          current_reading=float(reading.current_reading),
          consumption=float(reading.consumption),
     )


# ---------------------------------------------------------------------------
# Landlord endpoints
# ---------------------------------------------------------------------------

@router.post("/api/billing/non_submetered/saveBill", summary="Save this month's flat-rate bill")
def save_non_submetered_bill(
     body: NonSubmeteredBillRequest,
     response: Response,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     """
     One bill per unit per calendar month. An existing bill is updated,
     reset to unpaid, and its charge lines replaced.
     """
     if body.unit_id:
          get_owned_unit(db, landlord, body.unit_id)
     billing, created = BillingService.save_non_submetered_bill(
          db,
          unit_id=body.unit_id,
          agreement_id=body.agreement_id,
          total=body.total,
          additional_charges=body.additional_charges,
          discounts=body.discounts,
     )
     response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
     return {
          "message": "Billing created" if created else "Billing updated",
          "billing": _build_billing_response(billing),
     }


@router.api_route(
     "/api/landlord/billing/submetered/createUnitMonthlyBilling",
     methods=["POST", "PUT"],
     summary="Create or update a submetered unit's monthly bill",
)
def save_submetered_bill(
     body: SubmeteredBillRequest,
     response: Response,
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     get_owned_unit(db, landlord, body.unit_id)
     billing, created = BillingService.save_submetered_bill(db, body)
     response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
     return {
          "message": "Billing created" if created else "Billing updated",
          "billing": _build_billing_response(billing),
     }


@router.get(
     "/api/landlord/billing/getUnitBilling",
     response_model=List[BillingResponse],
     summary="Bills for one of my units",
)
def get_unit_billing(
     unit_id: int = Query(...),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     unit = get_owned_unit(db, landlord, unit_id)
     return [_build_billing_response(b) for b in BillingService.billings_for_unit(db, unit)]


# ---------------------------------------------------------------------------
# Tenant endpoints
# ---------------------------------------------------------------------------

@router.get(
     "/api/tenant/billing/viewCurrentBilling",
     response_model=CurrentBillingResponse,
     summary="This month's bill for my lease",
)
def view_current_billing(
     agreement_id: str = Query(...),
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     lease = get_tenant_lease(db, tenant, agreement_id)
     billing, readings = BillingService.current_billing_for_lease(db, lease)
     return CurrentBillingResponse(
          billing=_build_billing_response(billing) if billing else None,
          meter_readings=[_build_reading_response(r) for r in readings],
     )


@router.get("/api/tenant/billing/summary", response_model=BillingSummaryResponse, summary="My billing totals")
def billing_summary(
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     return BillingService.calculate_tenant_balance(db, tenant.tenant_id)


@router.get("/api/tenant/billing/{billing_id}", response_model=BillingResponse, summary="One of my bills")
def get_billing(
     billing_id: str,
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     return _build_billing_response(get_tenant_billing(db, tenant, billing_id))
