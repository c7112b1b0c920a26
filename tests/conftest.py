"""
Test fixtures for the Upkyp backend tests.

Runs the app against an in-memory SQLite database that is rebuilt for
every test, and replaces Azure Blob, Brevo mail and Xendit calls with
recorders so tests never touch external services.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ENCRYPTION_SECRET", "test-encryption-secret")

from datetime import date, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402
from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402
from httpx import AsyncClient, ASGITransport  # noqa: E402

import azure_blob  # noqa: E402
from database import SessionLocal, engine  # noqa: E402
from main import app  # noqa: E402
from models import (  # noqa: E402
    AdvancePayment,
    Base,
    Billing,
    Landlord,
    LeaseAgreement,
    LeaseStatus,
    Property,
    SecurityDeposit,
    Tenant,
    Unit,
    UnitStatus,
    User,
)
from services import auth_service, lease_service, xendit_client  # noqa: E402

PASSWORD = "password123"
PASSWORD_HASH = auth_service.hash_password(PASSWORD)
WEBHOOK_TOKEN = "test-callback-token"


# ── Database ───────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(_schema):
    """Session for seeding and for checking what the API stored."""
    session = SessionLocal()
    yield session
    session.close()


# ── External services ──────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    """Records every upload, mail and gateway call made during a test."""
    sent = SimpleNamespace(uploads=[], deleted=[], otps=[], lease_otps=[], invoices=[], payouts=[])

    def fake_upload_to_blob(file, folder, owner_id):
        url = f"https://blob.test/{folder}/{owner_id}/{file.filename}"
        sent.uploads.append(url)
        return url

    def fake_upload_bytes(data, blob_name, content_type="application/octet-stream"):
        url = f"https://blob.test/{blob_name}"
        sent.uploads.append(url)
        return url

    def fake_delete_from_blob(blob_url):
        sent.deleted.append(blob_url)

    def fake_send_otp_email(to_email, otp):
        sent.otps.append((to_email, otp))

    def fake_send_lease_otp_email(to_email, otp, agreement_id, expiry_local, timezone):
        sent.lease_otps.append({
            "email": to_email,
            "otp": otp,
            "agreement_id": agreement_id,
            "expiry_local": expiry_local,
            "timezone": timezone,
        })

    def fake_create_invoice(external_id, amount, payer_email, description):
        sent.invoices.append({"external_id": external_id, "amount": amount, "payer_email": payer_email})
        return {"id": f"inv-{external_id}", "invoice_url": f"https://checkout.xendit.test/{external_id}"}

    def fake_create_payout(**kwargs):
        sent.payouts.append(kwargs)
        return {"id": f"disb-{len(sent.payouts)}", "status": "ACCEPTED"}

    monkeypatch.setattr(azure_blob, "upload_to_blob", fake_upload_to_blob)
    monkeypatch.setattr(azure_blob, "upload_bytes", fake_upload_bytes)
    monkeypatch.setattr(azure_blob, "delete_from_blob", fake_delete_from_blob)
    monkeypatch.setattr(auth_service, "send_otp_email", fake_send_otp_email)
    monkeypatch.setattr(lease_service, "send_lease_otp_email", fake_send_lease_otp_email)
    monkeypatch.setattr(xendit_client, "create_invoice", fake_create_invoice)
    monkeypatch.setattr(xendit_client, "fetch_transaction_fees", lambda payment_id: {})
    monkeypatch.setattr(xendit_client, "create_payout", fake_create_payout)
    monkeypatch.setattr(xendit_client, "XENDIT_WEBHOOK_TOKEN", WEBHOOK_TOKEN)
    return sent


# ── Users ──────────────────────────────────────────────────────────────

def _create_account(db, role, email, first_name, last_name):
    user = User(
        email=email,
        password=PASSWORD_HASH,
        first_name=first_name,
        last_name=last_name,
        role=role,
        email_verified=True,
        is_active=True,
        timezone="Asia/Manila",
    )
    db.add(user)
    db.flush()
    profile = None
    if role == "landlord":
        profile = Landlord(user_id=user.id)
    elif role == "tenant":
        profile = Tenant(user_id=user.id, contact_number="09170000000")
    if profile is not None:
        db.add(profile)
    db.commit()
    token = auth_service.create_access_token(user)
    return SimpleNamespace(
        user=user,
        profile=profile,
        headers={"Authorization": f"Bearer {token}"},
    )


@pytest.fixture
def landlord(db):
    return _create_account(db, "landlord", "landlord@example.com", "Maria", "Santos")


@pytest.fixture
def other_landlord(db):
    return _create_account(db, "landlord", "other.landlord@example.com", "Jose", "Rizal")


@pytest.fixture
def tenant(db):
    return _create_account(db, "tenant", "tenant@example.com", "Juan", "Dela Cruz")


@pytest.fixture
def other_tenant(db):
    return _create_account(db, "tenant", "other.tenant@example.com", "Ana", "Reyes")


@pytest.fixture
def admin(db):
    return _create_account(db, "admin", "admin@upkyp.com", "System", "Admin")


# ── Rentals ────────────────────────────────────────────────────────────

@pytest.fixture
def rental(db, landlord):
    """A property with one unoccupied unit owned by the landlord."""
    prop = Property(
        landlord_id=landlord.profile.landlord_id,
        property_name="Sampaguita Residences",
        property_type="apartment",
        city="Makati",
        province="Metro Manila",
    )
    db.add(prop)
    db.flush()
    unit = Unit(
        property_id=prop.property_id,
        unit_name="Unit 2A",
        rent_amount=Decimal("12000.00"),
        status=UnitStatus.UNOCCUPIED.value,
    )
    db.add(unit)
    db.commit()
    return SimpleNamespace(property_id=prop.property_id, unit_id=unit.unit_id)


def _create_lease(db, rental, tenant, agreement_id, status, start, end):
    lease = LeaseAgreement(
        agreement_id=agreement_id,
        tenant_id=tenant.profile.tenant_id,
        unit_id=rental.unit_id,
        status=status,
        start_date=start,
        end_date=end,
        rent_amount=Decimal("12000.00"),
        security_deposit_amount=Decimal("24000.00"),
        advance_payment_amount=Decimal("12000.00"),
        billing_due_day=5,
        grace_period_days=3,
        late_penalty_amount=Decimal("500.00"),
    )
    db.add(lease)
    db.flush()
    db.add(SecurityDeposit(
        lease_id=agreement_id,
        tenant_id=tenant.profile.tenant_id,
        amount=Decimal("24000.00"),
        status="unpaid",
    ))
    db.add(AdvancePayment(
        lease_id=agreement_id,
        tenant_id=tenant.profile.tenant_id,
        amount=Decimal("12000.00"),
        months_covered=1,
        status="unpaid",
    ))
    if status == LeaseStatus.ACTIVE.value:
        db.get(Unit, rental.unit_id).status = UnitStatus.OCCUPIED.value
    db.commit()
    return agreement_id


@pytest.fixture
def active_lease(db, rental, tenant):
    """Agreement id of an active year-long lease that started a month ago."""
    today = date.today()
    return _create_lease(
        db, rental, tenant, "UPKYPLEASE100001", LeaseStatus.ACTIVE.value,
        today - timedelta(days=30), today + timedelta(days=335),
    )


@pytest.fixture
def draft_lease(db, rental, tenant):
    """Agreement id of a draft lease waiting for the generation wizard."""
    lease = LeaseAgreement(
        agreement_id="UPKYPLEASE200002",
        tenant_id=tenant.profile.tenant_id,
        unit_id=rental.unit_id,
        status=LeaseStatus.DRAFT.value,
        rent_amount=Decimal("12000.00"),
    )
    db.add(lease)
    db.commit()
    return lease.agreement_id


@pytest.fixture
def ended_lease(db, rental, tenant):
    """Agreement id of an active lease whose end date has passed."""
    today = date.today()
    return _create_lease(
        db, rental, tenant, "UPKYPLEASE300003", LeaseStatus.ACTIVE.value,
        today - timedelta(days=400), today - timedelta(days=35),
    )


@pytest.fixture
def unpaid_bill(db, rental, active_lease):
    """Billing id of this month's unpaid bill on the active lease."""
    today = date.today()
    billing = Billing(
        billing_id="UPKYPBILL000001",
        lease_id=active_lease,
        unit_id=rental.unit_id,
        billing_period=today.replace(day=1),
        total_amount_due=Decimal("12500.00"),
        due_date=today + timedelta(days=5),
        status="unpaid",
    )
    db.add(billing)
    db.commit()
    return billing.billing_id


# ── Client ─────────────────────────────────────────────────────────────

@pytest.fixture
async def client(_schema):
    """Async test client for the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
