"""Test manual payments, gateway payments and the payment ledger."""
from decimal import Decimal

import pytest

from conftest import WEBHOOK_TOKEN
from models import (
    Billing,
    LeaseAgreement,
    Notification,
    Payment,
    PaymentLedger,
)
from services.ledger_service import GENESIS_HASH, compute_transaction_hash


async def _submit_proof(client, tenant, agreement_id, **overrides):
    data = {
        "agreement_id": agreement_id,
        "paymentMethod": "GCash",
        "amountPaid": "12500.00",
        "paymentType": "billing",
    }
    data.update(overrides)
    files = {"proof": ("receipt.png", b"\x89PNGfake", "image/png")}
    return await client.post("/api/payment/upload-proof-of-payment", data=data, files=files, headers=tenant.headers)


async def _paid_webhook(client, billing_id, payment_id="xnd-pay-001", token=WEBHOOK_TOKEN, status="PAID"):
    return await client.post(
        "/api/webhook/xendit/invoice",
        json={
            "external_id": f"billing-{billing_id}",
            "status": status,
            "payment_id": payment_id,
            "paid_amount": 12500,
            "payment_channel": "GCASH",
        },
        headers={"x-callback-token": token},
    )


# ── Proof of payment ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_submit_proof_of_payment(client, db, landlord, tenant, active_lease, unpaid_bill, outbox):
    resp = await _submit_proof(client, tenant, active_lease, billingId=unpaid_bill)
    assert resp.status_code == 201
    payment = resp.json()
    assert payment["payment_status"] == "pending"
    assert payment["payout_status"] == "unpaid"
    assert payment["bill_id"] == unpaid_bill
    assert payment["proof_of_payment"] == f"https://blob.test/proof-of-payment/{tenant.profile.tenant_id}/receipt.png"
    assert payment["transaction_hash"] is None

    notification = db.query(Notification).filter(Notification.user_id == landlord.user.id).one()
    assert notification.title == "New Payment Submitted"


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [
    {"paymentType": "tip"},
    {"amountPaid": "abc"},
    {"amountPaid": "0"},
    {"billingId": "UPKYPBILL999999"},
])
async def test_submit_proof_rejects_bad_input(client, tenant, active_lease, overrides):
    resp = await _submit_proof(client, tenant, active_lease, **overrides)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_approve_payment_settles_bill_and_records_ledger(client, db, landlord, tenant, active_lease, unpaid_bill):
    resp = await _submit_proof(client, tenant, active_lease, billingId=unpaid_bill)
    payment_id = resp.json()["payment_id"]

    resp = await client.post(f"/api/landlord/payments/{payment_id}/approve", headers=landlord.headers)
    assert resp.status_code == 200
    assert resp.json()["payment_status"] == "confirmed"

    db.expire_all()
    billing = db.get(Billing, unpaid_bill)
    assert billing.status == "paid"
    assert billing.paid_at is not None
    entry = db.query(PaymentLedger).filter(PaymentLedger.payment_id == payment_id).one()
    assert entry.previous_hash == GENESIS_HASH

    resp = await client.post(f"/api/landlord/payments/{payment_id}/reject", headers=landlord.headers)
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_approve_deposit_marks_lease(client, db, landlord, tenant, active_lease):
    resp = await _submit_proof(client, tenant, active_lease, paymentType="security_deposit", amountPaid="24000")
    await client.post(f"/api/landlord/payments/{resp.json()['payment_id']}/approve", headers=landlord.headers)

    db.expire_all()
    lease = db.get(LeaseAgreement, active_lease)
    assert lease.is_security_deposit_paid is True
    assert lease.security_deposit.status == "paid"
    assert lease.is_advance_payment_paid is False


@pytest.mark.asyncio
async def test_reject_payment(client, db, landlord, tenant, active_lease, unpaid_bill):
    resp = await _submit_proof(client, tenant, active_lease, billingId=unpaid_bill)
    payment_id = resp.json()["payment_id"]

    resp = await client.post(f"/api/landlord/payments/{payment_id}/reject", headers=landlord.headers)
    assert resp.json()["payment_status"] == "failed"

    db.expire_all()
    assert db.get(Billing, unpaid_bill).status == "unpaid"
    assert db.query(PaymentLedger).count() == 0
    titles = [n.title for n in db.query(Notification).filter(Notification.user_id == tenant.user.id)]
    assert titles == ["Payment Rejected"]


@pytest.mark.asyncio
async def test_review_payment_errors(client, landlord, other_landlord, tenant, active_lease):
    resp = await _submit_proof(client, tenant, active_lease)
    payment_id = resp.json()["payment_id"]

    resp = await client.post(f"/api/landlord/payments/{payment_id}/refund", headers=landlord.headers)
    assert resp.status_code == 400
    resp = await client.post(f"/api/landlord/payments/{payment_id}/approve", headers=other_landlord.headers)
    assert resp.status_code == 403
    resp = await client.post("/api/landlord/payments/999/approve", headers=landlord.headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_payment_list_by_status(client, landlord, tenant, rental, active_lease):
    first = (await _submit_proof(client, tenant, active_lease)).json()["payment_id"]
    second = (await _submit_proof(client, tenant, active_lease, amountPaid="500")).json()["payment_id"]
    await client.post(f"/api/landlord/payments/{first}/approve", headers=landlord.headers)

    resp = await client.get(
        "/api/landlord/payments/getPaymentList",
        params={"property_id": rental.property_id},
        headers=landlord.headers,
    )
    assert {p["payment_id"] for p in resp.json()} == {first, second}

    resp = await client.get(
        "/api/landlord/payments/getPaymentList",
        params={"property_id": rental.property_id, "status": "pending"},
        headers=landlord.headers,
    )
    assert [p["payment_id"] for p in resp.json()] == [second]


# ── Initial move-in payment ────────────────────────────────────────────

@pytest.mark.asyncio
async def test_initial_payment_is_idempotent(client, db, tenant, active_lease):
    body = {
        "agreement_id": active_lease,
        "payment_types": ["security_deposit", "advance_payment"],
        "ref": "maya-ref-777",
    }
    resp = await client.post("/api/tenant/initialPayment/recordPayment", json=body, headers=tenant.headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["already_processed"] is False
    assert sorted(p["amount_paid"] for p in data["payments"]) == [12000.0, 24000.0]
    assert all(p["payment_status"] == "confirmed" for p in data["payments"])

    db.expire_all()
    lease = db.get(LeaseAgreement, active_lease)
    assert lease.is_security_deposit_paid and lease.is_advance_payment_paid

    resp = await client.post("/api/tenant/initialPayment/recordPayment", json=body, headers=tenant.headers)
    assert resp.json()["already_processed"] is True
    assert db.query(Payment).count() == 2
    assert db.query(PaymentLedger).count() == 2


# ── Gateway checkout and webhook ───────────────────────────────────────

@pytest.mark.asyncio
async def test_checkout_creates_invoice(client, tenant, unpaid_bill, outbox):
    resp = await client.post("/api/payment/checkout", json={"billing_id": unpaid_bill}, headers=tenant.headers)
    assert resp.status_code == 200
    assert resp.json()["external_id"] == f"billing-{unpaid_bill}"
    assert outbox.invoices == [{
        "external_id": f"billing-{unpaid_bill}",
        "amount": 12500.0,
        "payer_email": "tenant@example.com",
    }]


@pytest.mark.asyncio
async def test_checkout_of_paid_bill(client, db, tenant, unpaid_bill):
    db.get(Billing, unpaid_bill).status = "paid"
    db.commit()
    resp = await client.post("/api/payment/checkout", json={"billing_id": unpaid_bill}, headers=tenant.headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_webhook_requires_callback_token(client, unpaid_bill):
    resp = await _paid_webhook(client, unpaid_bill, token="wrong")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_webhook_ignores_unpaid_status(client, db, unpaid_bill):
    resp = await _paid_webhook(client, unpaid_bill, status="EXPIRED")
    assert resp.json() == {"message": "Ignored non-paid status"}
    assert db.query(Payment).count() == 0


@pytest.mark.asyncio
async def test_webhook_records_payment_once(client, db, landlord, active_lease, unpaid_bill):
    resp = await _paid_webhook(client, unpaid_bill)
    assert resp.status_code == 200
    data = resp.json()
    assert data["message"] == "Payment recorded"
    assert data["billing_id"] == unpaid_bill

    db.expire_all()
    payment = db.get(Payment, data["payment_id"])
    assert payment.payment_status == "confirmed"
    assert payment.payment_method == "GCASH"
    assert payment.gross_amount == Decimal("12500.00")
    assert db.get(Billing, unpaid_bill).status == "paid"

    entry = payment.ledger_entry
    assert entry.transaction_hash == data["transaction_hash"]
    assert entry.transaction_hash == compute_transaction_hash(
        payment.payment_id, active_lease, payment.amount_paid, entry.timestamp,
    )

    resp = await _paid_webhook(client, unpaid_bill)
    assert resp.json() == {"message": "Already processed", "payment_id": data["payment_id"]}
    assert db.query(Payment).count() == 1


@pytest.mark.asyncio
async def test_webhook_for_unknown_billing(client):
    resp = await _paid_webhook(client, "UPKYPBILL999999")
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("external_id", [12345, None, ["billing-UPKYPBILL000001"], "invoice-UPKYPBILL000001"])
async def test_webhook_rejects_malformed_external_id(client, db, unpaid_bill, external_id):
    resp = await client.post(
        "/api/webhook/xendit/invoice",
        json={"external_id": external_id, "status": "PAID", "payment_id": "xnd-pay-002", "paid_amount": 12500},
        headers={"x-callback-token": WEBHOOK_TOKEN},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid webhook payload"
    assert db.query(Payment).count() == 0


# ── Ledger verification ────────────────────────────────────────────────

def test_transaction_hash_is_canonical():
    from datetime import datetime

    ts = datetime(2026, 10, 1, 8, 0, 0)
    assert compute_transaction_hash(1, "UPKYPLEASE100001", Decimal("12500"), ts) == compute_transaction_hash(
        1, "UPKYPLEASE100001", Decimal("12500.00"), ts,
    )
    assert compute_transaction_hash(1, "UPKYPLEASE100001", Decimal("12500"), ts) != compute_transaction_hash(
        2, "UPKYPLEASE100001", Decimal("12500"), ts,
    )


@pytest.mark.asyncio
async def test_verify_chain_and_entry(client, db, admin, landlord, tenant, other_tenant, active_lease, unpaid_bill):
    resp = await client.get("/api/payments/ledger/verify-chain", headers=admin.headers)
    assert resp.json() == {"verified": True, "message": "Chain is empty (no entries)", "entries_checked": 0}

    first = (await _paid_webhook(client, unpaid_bill, payment_id="xnd-1")).json()["payment_id"]
    body = {"agreement_id": active_lease, "payment_types": ["security_deposit"], "ref": "maya-1"}
    await client.post("/api/tenant/initialPayment/recordPayment", json=body, headers=tenant.headers)

    resp = await client.get("/api/payments/ledger/verify-chain", headers=landlord.headers)
    assert resp.json()["verified"] is True
    assert resp.json()["entries_checked"] == 2

    for account in (admin, landlord, tenant):
        resp = await client.get(f"/api/payments/{first}/ledger/verify", headers=account.headers)
        assert resp.json() == {"verified": True, "message": "Verification passed", "payment_id": first}

    resp = await client.get(f"/api/payments/{first}/ledger/verify", headers=other_tenant.headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_tampered_amount_breaks_verification(client, db, admin, unpaid_bill):
    payment_id = (await _paid_webhook(client, unpaid_bill)).json()["payment_id"]

    db.get(Payment, payment_id).amount_paid = Decimal("1.00")
    db.commit()

    resp = await client.get(f"/api/payments/{payment_id}/ledger/verify", headers=admin.headers)
    assert resp.json()["verified"] is False
    assert resp.json()["message"].startswith("Hash mismatch")

    resp = await client.get("/api/payments/ledger/verify-chain", headers=admin.headers)
    assert resp.json()["verified"] is False
    assert resp.json()["entries_checked"] == 0
