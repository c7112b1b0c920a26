"""Test property and unit registration."""
import pytest


@pytest.mark.asyncio
async def test_create_and_list_properties(client, landlord, other_landlord):
    resp = await client.post(
        "/api/landlord/properties",
        json={"property_name": "Ilang-Ilang Homes", "city": "Quezon City"},
        headers=landlord.headers,
    )
    assert resp.status_code == 201
    created = resp.json()
    assert created["landlord_id"] == landlord.profile.landlord_id

    await client.post(
        "/api/landlord/properties",
        json={"property_name": "Someone Else's Place"},
        headers=other_landlord.headers,
    )

    resp = await client.get("/api/landlord/properties", headers=landlord.headers)
    assert resp.status_code == 200
    names = [p["property_name"] for p in resp.json()]
    assert names == ["Ilang-Ilang Homes"]


@pytest.mark.asyncio
async def test_add_unit_starts_unoccupied(client, landlord, rental):
    resp = await client.post(
        f"/api/landlord/properties/{rental.property_id}/units",
        json={"unit_name": "Unit 3B", "rent_amount": "15000.00"},
        headers=landlord.headers,
    )
    assert resp.status_code == 201
    unit = resp.json()
    assert unit["status"] == "unoccupied"
    assert unit["rent_amount"] == 15000.0

    resp = await client.get(f"/api/landlord/properties/{rental.property_id}/units", headers=landlord.headers)
    assert [u["unit_name"] for u in resp.json()] == ["Unit 2A", "Unit 3B"]


@pytest.mark.asyncio
async def test_units_of_another_landlords_property(client, other_landlord, rental):
    resp = await client.get(f"/api/landlord/properties/{rental.property_id}/units", headers=other_landlord.headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_unit_rent_must_be_positive(client, landlord, rental):
    resp = await client.post(
        f"/api/landlord/properties/{rental.property_id}/units",
        json={"unit_name": "Unit 4C", "rent_amount": 0},
        headers=landlord.headers,
    )
    assert resp.status_code == 422
