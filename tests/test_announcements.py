"""Test landlord announcements and the tenant feed."""
import pytest

from models import Announcement, AnnouncementPhoto, Notification, Property
from services.announcement_service import plain_text_preview, sanitize_description
from utils.crypto import decrypt_data

HTML_BODY = "<p>Water <b>interruption</b> on Saturday &amp; Sunday</p>"


async def _post(client, landlord, property_ids, photos=0, **overrides):
    data = {
        "property_ids[]": [str(pid) for pid in property_ids],
        "subject": "Water interruption",
        "description": HTML_BODY,
    }
    data.update(overrides)
    files = [("photos", (f"notice-{i}.png", b"\x89PNGfake", "image/png")) for i in range(photos)]
    return await client.post(
        "/api/landlord/announcement/createAnnouncement",
        data=data,
        files=files or None,
        headers=landlord.headers,
    )


def test_plain_text_preview():
    assert plain_text_preview(HTML_BODY) == "Water interruption on Saturday & Sunday"
    assert plain_text_preview("a" * 305) == "a" * 300 + "..."
    assert plain_text_preview("<br/>", limit=10) == ""


@pytest.mark.asyncio
async def test_post_to_several_properties(client, db, landlord, tenant, rental, active_lease, outbox):
    second = Property(landlord_id=landlord.profile.landlord_id, property_name="Camia Townhomes")
    db.add(second)
    db.commit()

    resp = await _post(client, landlord, [rental.property_id, second.property_id], photos=1)
    assert resp.status_code == 201
    data = resp.json()
    assert data["message"] == "Announcement posted to 2 properties"
    assert {a["property_name"] for a in data["announcements"]} == {"Sampaguita Residences", "Camia Townhomes"}
    assert all(len(a["photo_urls"]) == 1 for a in data["announcements"])
    assert len(outbox.uploads) == 1

    notifications = db.query(Notification).filter(Notification.user_id == tenant.user.id).all()
    assert [(n.title, n.body) for n in notifications] == [
        ("New Announcement: Water interruption", "Water interruption on Saturday & Sunday"),
    ]


@pytest.mark.asyncio
async def test_post_rejects_foreign_property(client, db, landlord, other_landlord, rental):
    foreign = Property(landlord_id=other_landlord.profile.landlord_id, property_name="Elsewhere")
    db.add(foreign)
    db.commit()

    resp = await _post(client, landlord, [rental.property_id, foreign.property_id])
    assert resp.status_code == 400
    assert resp.json()["detail"] == f"Invalid property IDs: {foreign.property_id}"
    assert db.query(Announcement).count() == 0


@pytest.mark.asyncio
async def test_post_requires_subject(client, landlord, rental):
    resp = await _post(client, landlord, [rental.property_id], subject="  ")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_announcement(client, landlord, other_landlord, rental):
    resp = await _post(client, landlord, [rental.property_id])
    announcement_id = resp.json()["announcements"][0]["announcement_id"]

    resp = await client.put(
        "/api/landlord/announcement/updateAnnouncement",
        data={"announcement_id": str(announcement_id), "subject": "Water interruption (moved)"},
        headers=landlord.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["subject"] == "Water interruption (moved)"
    assert resp.json()["description"] == HTML_BODY

    resp = await client.put(
        "/api/landlord/announcement/updateAnnouncement",
        data={"announcement_id": str(announcement_id), "subject": "Hijacked"},
        headers=other_landlord.headers,
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_tenant_feed_only_shows_leased_properties(client, db, landlord, tenant, other_tenant, rental, active_lease):
    other = Property(landlord_id=landlord.profile.landlord_id, property_name="Camia Townhomes")
    db.add(other)
    db.commit()
    await _post(client, landlord, [rental.property_id])
    await _post(client, landlord, [other.property_id], subject="Parking repainting")

    resp = await client.get("/api/tenant/announcement/allAnnouncements", headers=tenant.headers)
    assert resp.status_code == 200
    assert [a["subject"] for a in resp.json()] == ["Water interruption"]

    resp = await client.get("/api/tenant/announcement/allAnnouncements", headers=other_tenant.headers)
    assert resp.json() == []


def test_sanitize_description_keeps_editor_markup():
    html = '<h1>Notice</h1><p><u>Read</u> this</p><img src="https://cdn.test/a.png" alt="map" width="120" onload="x()">'
    cleaned = sanitize_description(html)
    assert "<h1>Notice</h1>" in cleaned
    assert "<u>Read</u>" in cleaned
    assert 'src="https://cdn.test/a.png"' in cleaned
    assert 'width="120"' in cleaned
    assert "onload" not in cleaned


@pytest.mark.asyncio
async def test_post_strips_scripts_from_description(client, db, landlord, tenant, rental, active_lease):
    body = '<p>Hi</p><script>alert(document.cookie)</script><img src="x" onerror="alert(1)">'
    resp = await _post(client, landlord, [rental.property_id], description=body)
    assert resp.status_code == 201
    stored = db.query(Announcement).one().description
    assert "<p>Hi</p>" in stored
    assert "<script" not in stored
    assert "document.cookie" not in stored
    assert "onerror" not in stored

    resp = await client.get("/api/tenant/announcement/allAnnouncements", headers=tenant.headers)
    assert resp.json()[0]["description"] == stored

    notification = db.query(Notification).filter(Notification.user_id == tenant.user.id).one()
    assert notification.body == "Hi"


@pytest.mark.asyncio
async def test_update_sanitizes_description(client, db, landlord, rental):
    resp = await _post(client, landlord, [rental.property_id])
    announcement_id = resp.json()["announcements"][0]["announcement_id"]

    resp = await client.put(
        "/api/landlord/announcement/updateAnnouncement",
        data={"announcement_id": str(announcement_id), "description": "<p>Moved</p><script>steal()</script>"},
        headers=landlord.headers,
    )
    assert resp.status_code == 200
    assert resp.json()["description"] == "<p>Moved</p>"


@pytest.mark.asyncio
async def test_script_only_description_is_rejected(client, landlord, rental):
    resp = await _post(client, landlord, [rental.property_id], description="<script>alert(1)</script>")
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_photo_urls_are_encrypted_at_rest(client, db, landlord, rental, outbox):
    resp = await _post(client, landlord, [rental.property_id], photos=1)
    assert resp.status_code == 201
    url = outbox.uploads[0]
    assert resp.json()["announcements"][0]["photo_urls"] == [url]

    stored = db.query(AnnouncementPhoto).one().photo_url
    assert stored != url
    assert "blob.test" not in stored
    assert decrypt_data(stored) == url
