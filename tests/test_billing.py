"""Test monthly billing for flat-rate and submetered units."""
from datetime import date, timedelta
from decimal import Decimal

import pytest

from models import Billing, MeterReading


def _flat_bill(rental, agreement_id, total="12500.00", **overrides):
    body = {
        "unit_id": rental.unit_id,
        "agreement_id": agreement_id,
        "total": total,
        "additional_charges": [{"type": "Parking", "amount": 1000}, {"amount": 50}],
        "discounts": [{"type": "Loyalty", "amount": -500}],
    }
    body.update(overrides)
    return body


def _metered_bill(rental, **overrides):
    today = date.today()
    body = {
        "unit_id": rental.unit_id,
        "readingDate": today.isoformat(),
        "dueDate": (today + timedelta(days=10)).isoformat(),
        "waterPrevReading": "100",
        "waterCurrentReading": "120",
        "electricityPrevReading": "200",
        "electricityCurrentReading": "260",
        "totalWaterAmount": "600.00",
        "totalElectricityAmount": "900.00",
        "total_amount_due": "13500.00",
        "additionalCharges": [{"type": "Garbage fee", "amount": 150}],
    }
    body.update(overrides)
    return body


# ── Flat-rate units ────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_save_flat_bill_creates_then_updates(client, db, landlord, rental, active_lease):
    resp = await client.post(
        "/api/billing/non_submetered/saveBill",
        json=_flat_bill(rental, active_lease),
        headers=landlord.headers,
    )
    assert resp.status_code == 201
    billing = resp.json()["billing"]
    assert billing["billing_id"].startswith("UPKYPBILL")
    assert billing["status"] == "unpaid"
    assert billing["total_amount_due"] == 12500.0
    assert sorted((c["charge_category"], c["charge_type"], c["amount"]) for c in billing["charges"]) == [
        ("additional", "Parking", 1000.0),
        ("discount", "Loyalty", 500.0),
    ]

    resp = await client.post(
        "/api/billing/non_submetered/saveBill",
        json=_flat_bill(rental, active_lease, total="13000", additional_charges=[], discounts=[]),
        headers=landlord.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Billing updated"
    assert resp.json()["billing"]["billing_id"] == billing["billing_id"]
    assert resp.json()["billing"]["charges"] == []
    assert db.query(Billing).count() == 1


@pytest.mark.asyncio
async def test_save_flat_bill_validation(client, landlord, rental, active_lease):
    resp = await client.post(
        "/api/billing/non_submetered/saveBill",
        json={"unit_id": rental.unit_id, "agreement_id": active_lease},
        headers=landlord.headers,
    )
    assert resp.status_code == 400

    resp = await client.post(
        "/api/billing/non_submetered/saveBill",
        json=_flat_bill(rental, active_lease, total="twelve"),
        headers=landlord.headers,
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_save_flat_bill_for_another_landlords_unit(client, other_landlord, rental, active_lease):
    resp = await client.post(
        "/api/billing/non_submetered/saveBill",
        json=_flat_bill(rental, active_lease),
        headers=other_landlord.headers,
    )
    assert resp.status_code == 403


# ── Submetered units ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_submetered_bill_stores_readings(client, db, landlord, tenant, rental, active_lease):
    resp = await client.post(
        "/api/landlord/billing/submetered/createUnitMonthlyBilling",
        json=_metered_bill(rental),
        headers=landlord.headers,
    )
    assert resp.status_code == 201
    billing = resp.json()["billing"]
    assert billing["lease_id"] == active_lease
    assert billing["total_water_amount"] == 600.0
    assert billing["total_electricity_amount"] == 900.0
    assert db.query(MeterReading).count() == 2

    resp = await client.put(
        "/api/landlord/billing/submetered/createUnitMonthlyBilling",
        json=_metered_bill(rental, waterCurrentReading="130", total_amount_due="13800.00"),
        headers=landlord.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["billing"]["total_amount_due"] == 13800.0
    assert db.query(MeterReading).count() == 2

    resp = await client.get(
        "/api/tenant/billing/viewCurrentBilling",
        params={"agreement_id": active_lease},
        headers=tenant.headers,
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["billing"]["billing_id"] == billing["billing_id"]
    assert [(r["utility_type"], r["consumption"]) for r in data["meter_readings"]] == [
        ("electricity", 60.0),
        ("water", 30.0),
    ]


@pytest.mark.asyncio
async def test_submetered_reading_cannot_go_backwards(client, landlord, rental, active_lease):
    resp = await client.post(
        "/api/landlord/billing/submetered/createUnitMonthlyBilling",
        json=_metered_bill(rental, electricityCurrentReading="150"),
        headers=landlord.headers,
    )
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_submetered_bill_needs_active_lease(client, landlord, rental):
    resp = await client.post(
        "/api/landlord/billing/submetered/createUnitMonthlyBilling",
        json=_metered_bill(rental),
        headers=landlord.headers,
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "No active lease found for this unit"


@pytest.mark.asyncio
async def test_unit_billing_history(client, landlord, rental, unpaid_bill):
    resp = await client.get(
        "/api/landlord/billing/getUnitBilling",
        params={"unit_id": rental.unit_id},
        headers=landlord.headers,
    )
    assert resp.status_code == 200
    assert [b["billing_id"] for b in resp.json()] == [unpaid_bill]


# ── Tenant views ───────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_current_billing_without_bill(client, tenant, active_lease):
    resp = await client.get(
        "/api/tenant/billing/viewCurrentBilling",
        params={"agreement_id": active_lease},
        headers=tenant.headers,
    )
    assert resp.json() == {"billing": None, "meter_readings": []}


@pytest.mark.asyncio
async def test_tenant_summary(client, db, tenant, rental, active_lease, unpaid_bill):
    today = date.today()
    for billing_id, months_back, status in (("UPKYPBILL000002", 1, "overdue"), ("UPKYPBILL000003", 2, "paid")):
        period = (today.replace(day=1) - timedelta(days=28 * months_back)).replace(day=1)
        db.add(Billing(
            billing_id=billing_id,
            lease_id=active_lease,
            unit_id=rental.unit_id,
            billing_period=period,
            total_amount_due=Decimal("12000.00"),
            due_date=period + timedelta(days=4),
            status=status,
        ))
    db.commit()

    resp = await client.get("/api/tenant/billing/summary", headers=tenant.headers)
    assert resp.status_code == 200
    assert resp.json() == {
        "total_paid": 12000.0,
        "total_unpaid": 12500.0,
        "total_overdue": 12000.0,
        "unpaid_count": 1,
        "overdue_count": 1,
    }


@pytest.mark.asyncio
async def test_tenant_reads_own_bill_only(client, tenant, other_tenant, unpaid_bill):
    resp = await client.get(f"/api/tenant/billing/{unpaid_bill}", headers=tenant.headers)
    assert resp.status_code == 200
    assert resp.json()["total_amount_due"] == 12500.0

    resp = await client.get(f"/api/tenant/billing/{unpaid_bill}", headers=other_tenant.headers)
    assert resp.status_code == 403

    resp = await client.get("/api/tenant/billing/UPKYPBILL999999", headers=tenant.headers)
    assert resp.status_code == 404
