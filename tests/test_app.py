"""Test root, health, routing fallbacks and token handling."""
import pytest


@pytest.mark.asyncio
async def test_root(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    data = resp.json()
    assert data["app"] == "Upkyp API"
    assert data["status"] == "ok"


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_unknown_route_returns_route_not_found(client):
    resp = await client.get("/api/does-not-exist")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Route not found"}


@pytest.mark.asyncio
async def test_handler_404_keeps_its_detail(client, landlord):
    """A 404 raised by a handler is not confused with an unmatched route."""
    resp = await client.get("/api/landlord/properties/999/units", headers=landlord.headers)
    assert resp.status_code == 404
    assert "999" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_missing_token_is_unauthorized(client):
    resp = await client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.json()["detail"] == "Missing token"


@pytest.mark.asyncio
async def test_invalid_token_is_forbidden(client):
    resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Invalid token"


@pytest.mark.asyncio
async def test_role_guard_rejects_other_roles(client, tenant):
    resp = await client.get("/api/landlord/properties", headers=tenant.headers)
    assert resp.status_code == 403
    assert resp.json()["detail"] == "Landlord access only"


@pytest.mark.asyncio
async def test_unhandled_error_returns_internal_server_error(client, landlord, monkeypatch):
    from services import payout_service

    def explode(db, landlord_id):
        raise RuntimeError("boom")

    monkeypatch.setattr(payout_service, "get_active_account", explode)
    resp = await client.get("/api/landlord/payout/getAccount", headers=landlord.headers)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
