"""Test the notification bell endpoints."""
import pytest

from models import Notification
from services.notification_service import notify, notify_many


@pytest.fixture
def inbox(db, tenant, landlord):
    """Two notifications for the tenant and one for the landlord."""
    first = notify(db, tenant.user.id, "Lease Activated", "Your lease is now active.", "/pages/tenant/my-unit")
    second = notify(db, tenant.user.id, "Payment Approved", "Your payment was approved.")
    foreign = notify(db, landlord.user.id, "New Payment Submitted", "Please review.")
    db.commit()
    return [first.id, second.id, foreign.id]


def test_notify_skips_missing_user(db, tenant):
    assert notify(db, None, "Title", "Body") is None
    assert notify_many(db, [tenant.user.id, tenant.user.id, None], "Title", "Body") == 1


@pytest.mark.asyncio
async def test_list_own_notifications(client, tenant, inbox):
    resp = await client.get("/api/notification/getNotifications", headers=tenant.headers)
    assert resp.status_code == 200
    assert {n["id"] for n in resp.json()} == set(inbox[:2])
    assert all(n["is_read"] is False for n in resp.json())


@pytest.mark.asyncio
async def test_mark_single_read(client, db, tenant, inbox):
    resp = await client.patch(f"/api/notification/markSingleRead/{inbox[0]}", headers=tenant.headers)
    assert resp.status_code == 200

    db.expire_all()
    assert db.get(Notification, inbox[0]).is_read is True
    assert db.get(Notification, inbox[1]).is_read is False


@pytest.mark.asyncio
async def test_mark_all_as_read(client, db, tenant, inbox):
    resp = await client.patch("/api/notification/markAllAsRead", headers=tenant.headers)
    assert resp.json()["updated"] == 2

    resp = await client.patch("/api/notification/markAllAsRead", headers=tenant.headers)
    assert resp.json()["updated"] == 0

    db.expire_all()
    assert db.get(Notification, inbox[2]).is_read is False


@pytest.mark.asyncio
async def test_delete_notification(client, db, tenant, inbox):
    resp = await client.delete(f"/api/notification/delete/{inbox[1]}", headers=tenant.headers)
    assert resp.status_code == 200
    db.expire_all()
    assert db.get(Notification, inbox[1]) is None


@pytest.mark.asyncio
async def test_cannot_touch_someone_elses_notification(client, tenant, inbox):
    resp = await client.patch(f"/api/notification/markSingleRead/{inbox[2]}", headers=tenant.headers)
    assert resp.status_code == 404
    resp = await client.delete(f"/api/notification/delete/{inbox[2]}", headers=tenant.headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Notification not found"
