"""Test registration, OTP verification and login."""
from datetime import datetime, timedelta

import pytest

from models import Landlord, Tenant, User

REGISTRATION = {
    "first_name": "Juan",
    "last_name": "Dela Cruz",
    "email": "Juan@Example.com",
    "password": "s3cretpass",
    "role": "tenant",
}


async def _register(client, **overrides):
    body = {**REGISTRATION, **overrides}
    return await client.post("/api/auth/register", json=body)


@pytest.mark.asyncio
async def test_register_creates_inactive_user_and_mails_otp(client, db, outbox):
    resp = await _register(client)
    assert resp.status_code == 201
    user_id = resp.json()["user_id"]

    user = db.get(User, user_id)
    assert user.email == "juan@example.com"
    assert user.email_verified is False
    assert user.password != REGISTRATION["password"]
    assert db.query(Tenant).filter(Tenant.user_id == user_id).count() == 1

    assert len(outbox.otps) == 1
    email, otp = outbox.otps[0]
    assert email == "juan@example.com"
    assert len(otp) == 6 and otp.isdigit()


@pytest.mark.asyncio
async def test_register_landlord_creates_landlord_profile(client, db):
    resp = await _register(client, email="owner@example.com", role="landlord")
    assert resp.status_code == 201
    assert db.query(Landlord).filter(Landlord.user_id == resp.json()["user_id"]).count() == 1


@pytest.mark.asyncio
async def test_register_rejects_duplicate_email(client):
    await _register(client)
    resp = await _register(client, email="juan@example.com")
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Email is already registered"


@pytest.mark.asyncio
async def test_register_validates_payload(client):
    resp = await _register(client, password="short", role="admin")
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_login_requires_verified_email(client):
    await _register(client)
    resp = await client.post("/api/auth/login", json={"email": "juan@example.com", "password": "s3cretpass"})
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Email is not verified"


@pytest.mark.asyncio
async def test_verify_otp_then_login(client, outbox):
    await _register(client)
    _, otp = outbox.otps[-1]

    resp = await client.post("/api/auth/verify-otp", json={"email": "juan@example.com", "otp": otp})
    assert resp.status_code == 200
    user = resp.json()["user"]
    assert user["email_verified"] is True
    assert user["tenant_id"] is not None

    resp = await client.post("/api/auth/login", json={"email": "JUAN@example.com", "password": "s3cretpass"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["role"] == "tenant"

    resp = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"})
    assert resp.status_code == 200
    assert resp.json()["email"] == "juan@example.com"


@pytest.mark.asyncio
async def test_verify_otp_rejects_wrong_code(client, outbox):
    await _register(client)
    _, otp = outbox.otps[-1]
    wrong = "000000" if otp != "000000" else "111111"
    resp = await client.post("/api/auth/verify-otp", json={"email": "juan@example.com", "otp": wrong})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid OTP"


@pytest.mark.asyncio
async def test_verify_otp_rejects_expired_code(client, db, outbox):
    resp = await _register(client)
    _, otp = outbox.otps[-1]
    user = db.get(User, resp.json()["user_id"])
    user.otp_expires_at = datetime.utcnow() - timedelta(minutes=1)
    db.commit()

    resp = await client.post("/api/auth/verify-otp", json={"email": "juan@example.com", "otp": otp})
    assert resp.status_code == 410


@pytest.mark.asyncio
async def test_resend_otp_issues_a_new_code(client, outbox):
    await _register(client)
    resp = await client.post("/api/auth/resend-otp", json={"email": "juan@example.com"})
    assert resp.status_code == 200
    assert len(outbox.otps) == 2

    _, latest = outbox.otps[-1]
    resp = await client.post("/api/auth/verify-otp", json={"email": "juan@example.com", "otp": latest})
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_resend_otp_for_verified_user(client, tenant):
    resp = await client.post("/api/auth/resend-otp", json={"email": tenant.user.email})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_login_with_wrong_password(client, tenant):
    resp = await client.post("/api/auth/login", json={"email": tenant.user.email, "password": "wrong-password"})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Invalid credentials"
