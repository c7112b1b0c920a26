"""Test post-dated check upload, listing and status changes."""
from datetime import date, timedelta

import pytest

from models import Notification, PostDatedCheck


def _pdc_form(property_id, lease_id=None, count=2):
    data = {"property_id": str(property_id)}
    if lease_id:
        data["lease_id"] = lease_id
    for i in range(count):
        due = date.today() + timedelta(days=30 * (i + 1))
        data[f"pdcs[{i}][check_number]"] = f"00012{i}"
        data[f"pdcs[{i}][bank_name]"] = "BDO"
        data[f"pdcs[{i}][amount]"] = "12000.00"
        data[f"pdcs[{i}][due_date]"] = due.isoformat()
        data[f"pdcs[{i}][notes]"] = f"Rent month {i + 1}"
    return data


async def _upload(client, landlord, data, files=None):
    return await client.post("/api/landlord/pdc/upload", data=data, files=files, headers=landlord.headers)


@pytest.mark.asyncio
async def test_upload_stores_checks_and_images(client, db, landlord, rental, active_lease, outbox):
    files = [("pdcs[0][uploaded_image]", ("check-0.jpg", b"\xff\xd8fake", "image/jpeg"))]
    resp = await _upload(client, landlord, _pdc_form(rental.property_id, active_lease), files)
    assert resp.status_code == 201
    data = resp.json()
    assert data["success"] is True
    assert data["insertedCount"] == 2
    assert data["pdcs"][0]["uploaded_image_url"] == f"https://blob.test/pdc/{landlord.profile.landlord_id}/check-0.jpg"
    assert data["pdcs"][1]["uploaded_image_url"] is None

    checks = db.query(PostDatedCheck).order_by(PostDatedCheck.pdc_id).all()
    assert [c.status for c in checks] == ["pending", "pending"]
    assert all(c.lease_id == active_lease for c in checks)


@pytest.mark.asyncio
async def test_upload_falls_back_to_active_lease(client, db, landlord, rental, active_lease):
    resp = await _upload(client, landlord, _pdc_form(rental.property_id, count=1))
    assert resp.status_code == 201
    assert resp.json()["pdcs"][0]["lease_id"] == active_lease


@pytest.mark.asyncio
async def test_upload_without_any_lease_inserts_nothing(client, landlord, rental):
    resp = await _upload(client, landlord, _pdc_form(rental.property_id, count=1))
    assert resp.status_code == 201
    assert resp.json()["insertedCount"] == 0


@pytest.mark.asyncio
async def test_skipped_check_image_is_deleted(client, landlord, rental, outbox):
    files = [("pdcs[0][uploaded_image]", ("check-0.jpg", b"\xff\xd8fake", "image/jpeg"))]
    resp = await _upload(client, landlord, _pdc_form(rental.property_id, count=1), files)
    assert resp.status_code == 201
    assert resp.json()["insertedCount"] == 0
    assert outbox.deleted == outbox.uploads == [f"https://blob.test/pdc/{landlord.profile.landlord_id}/check-0.jpg"]


@pytest.mark.asyncio
async def test_failed_batch_removes_uploaded_images(client, db, landlord, rental, active_lease, outbox):
    data = _pdc_form(rental.property_id, active_lease)
    data["pdcs[1][amount]"] = "twelve thousand"
    files = [("pdcs[0][uploaded_image]", ("check-0.jpg", b"\xff\xd8fake", "image/jpeg"))]
    resp = await _upload(client, landlord, data, files)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid PDC amount: twelve thousand"
    assert len(outbox.uploads) == 1
    assert outbox.deleted == outbox.uploads
    assert db.query(PostDatedCheck).count() == 0


@pytest.mark.asyncio
async def test_upload_requires_property_id(client, landlord):
    resp = await _upload(client, landlord, {"pdcs[0][amount]": "100"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "property_id is required"


@pytest.mark.asyncio
async def test_upload_without_checks(client, landlord, rental):
    resp = await _upload(client, landlord, {"property_id": str(rental.property_id)})
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_upload_to_another_landlords_property(client, other_landlord, rental, active_lease):
    resp = await _upload(client, other_landlord, _pdc_form(rental.property_id, active_lease))
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_list_filters_and_paginates(client, landlord, rental, active_lease):
    await _upload(client, landlord, _pdc_form(rental.property_id, active_lease, count=3))
    resp = await client.get("/api/landlord/pdc/getAll", params={"page": 1, "limit": 2}, headers=landlord.headers)
    assert resp.status_code == 200
    data = resp.json()
    assert len(data["data"]) == 2
    assert data["totalCount"] == 3
    assert data["pagination"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}
    assert data["data"][0]["tenant_name"] == "Juan Dela Cruz"
    assert data["data"][0]["due_date"] < data["data"][1]["due_date"]

    first_id = data["data"][0]["pdc_id"]
    await client.put(
        "/api/landlord/pdc/updateStatus",
        json={"pdc_id": first_id, "status": "bounced"},
        headers=landlord.headers,
    )
    resp = await client.get(
        "/api/landlord/pdc/getByProperty",
        params={"property_id": rental.property_id, "status": "bounced"},
        headers=landlord.headers,
    )
    data = resp.json()
    assert [p["pdc_id"] for p in data["data"]] == [first_id]
    assert data["totalCount"] == 3
    assert data["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_list_by_lease(client, landlord, rental, active_lease):
    await _upload(client, landlord, _pdc_form(rental.property_id, active_lease))
    resp = await client.get("/api/landlord/pdc/getByLease", params={"lease_id": active_lease}, headers=landlord.headers)
    assert resp.status_code == 200
    assert [p["check_number"] for p in resp.json()] == ["000120", "000121"]


@pytest.mark.asyncio
async def test_clearing_a_check_notifies_tenant(client, db, landlord, tenant, rental, active_lease):
    resp = await _upload(client, landlord, _pdc_form(rental.property_id, active_lease, count=1))
    pdc_id = resp.json()["pdcs"][0]["pdc_id"]

    resp = await client.put(
        "/api/landlord/pdc/updateStatus",
        json={"pdc_id": pdc_id, "status": "cleared"},
        headers=landlord.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "cleared"

    db.expire_all()
    assert db.get(PostDatedCheck, pdc_id).cleared_at is not None
    notification = db.query(Notification).filter(Notification.user_id == tenant.user.id).one()
    assert notification.title == "Payment Received via PDC"
    assert "₱12,000.00" in notification.body


@pytest.mark.asyncio
@pytest.mark.parametrize("body, status_code", [
    ({"pdc_id": 1}, 400),
    ({"pdc_id": 1, "status": "lost"}, 400),
    ({"pdc_id": 999, "status": "cleared"}, 404),
])
async def test_update_status_rejects_bad_requests(client, landlord, body, status_code):
    resp = await client.put("/api/landlord/pdc/updateStatus", json=body, headers=landlord.headers)
    assert resp.status_code == status_code


@pytest.mark.asyncio
async def test_update_status_of_another_landlords_check(client, landlord, other_landlord, rental, active_lease):
    resp = await _upload(client, landlord, _pdc_form(rental.property_id, active_lease, count=1))
    pdc_id = resp.json()["pdcs"][0]["pdc_id"]
    resp = await client.put(
        "/api/landlord/pdc/updateStatus",
        json={"pdc_id": pdc_id, "status": "cleared"},
        headers=other_landlord.headers,
    )
    assert resp.status_code == 403
