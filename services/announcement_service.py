# services/announcement_service.py
import logging
import re
from html import unescape
from typing import List, Optional

import nh3
from sqlalchemy.orm import Session

import azure_blob
from models import (
     Announcement,
     AnnouncementPhoto,
     Landlord,
     LeaseAgreement,
     LeaseStatus,
     Property,
     Tenant,
     Unit,
)
from services.exceptions import BadRequestError, ForbiddenError, NotFoundError
from services.notification_service import notify_many
from utils.crypto import encrypt_data

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 300
_TAG_RE = re.compile(r"<[^>]+>")

# Rich-text editor output: default safe tags plus images and headings
ALLOWED_TAGS = nh3.ALLOWED_TAGS | {"img", "h1", "h2", "u"}
ALLOWED_ATTRIBUTES = {
     **nh3.ALLOWED_ATTRIBUTES,
     "img": {"src", "alt", "width", "height"},
}


def sanitize_description(html: str) -> str:
     return nh3.clean(html, tags=ALLOWED_TAGS, attributes=ALLOWED_ATTRIBUTES).strip()


def plain_text_preview(html: str, limit: int = PREVIEW_LENGTH) -> str:
     """Strip markup from rich-text input and cut it to limit characters."""
     text = unescape(_TAG_RE.sub(" ", html or ""))
     text = re.sub(r"\s+", " ", text).strip()
     if len(text) > limit:
          return text[:limit] + "..."
     return text


def _active_tenant_user_ids(db: Session, property_id: int) -> List[int]:
     rows = (
          db.query(Tenant.user_id)
          .join(LeaseAgreement, LeaseAgreement.tenant_id == Tenant.tenant_id)
          .join(Unit, LeaseAgreement.unit_id == Unit.unit_id)
          .filter(Unit.property_id == property_id, LeaseAgreement.status == LeaseStatus.ACTIVE.value)
          .distinct()
          .all()
     )
     return [row[0] for row in rows]


def _upload_photos(photos: Optional[List], landlord: Landlord) -> List[str]:
     urls = []
     for photo in photos or []:
          if photo is not None and getattr(photo, "filename", None):
               urls.append(azure_blob.upload_to_blob(photo, "announcements", landlord.landlord_id))
     return urls


def create_announcements(
     db: Session,
     landlord: Landlord,
     property_ids: List[int],
     subject: str,
     description: str,
     photos: Optional[List] = None,
) -> List[Announcement]:
     """
     Post one announcement per property and notify tenants with an active
     lease there.

     Raises:
          BadRequestError: Missing fields or property ids the landlord does not own.
     """
     subject = (subject or "").strip()
     description = sanitize_description(description or "")
     if not property_ids or not subject or not description:
          raise BadRequestError("property_ids, subject and description are required")

     property_ids = list(dict.fromkeys(property_ids))
     owned = {
          row[0]
          for row in db.query(Property.property_id).filter(
               Property.property_id.in_(property_ids),
               Property.landlord_id == landlord.landlord_id,
          ).all()
     }
     invalid = [pid for pid in property_ids if pid not in owned]
     if invalid:
          raise BadRequestError(f"Invalid property IDs: {', '.join(str(pid) for pid in invalid)}")

     photo_urls = _upload_photos(photos, landlord)
     preview = plain_text_preview(description)

     announcements = []
     for property_id in property_ids:
          announcement = Announcement(
               property_id=property_id,
               landlord_id=landlord.landlord_id,
               subject=subject,
               description=description,
          )
          for url in photo_urls:
               announcement.photos.append(AnnouncementPhoto(photo_url=encrypt_data(url)))
          db.add(announcement)
          notified = notify_many(
               db,
               _active_tenant_user_ids(db, property_id),
               f"New Announcement: {subject}",
               preview,
               "/pages/tenant/announcement",
          )
          announcements.append(announcement)
          logger.info("Announcement posted to property %s (%d tenant(s) notified)", property_id, notified)

     db.flush()
     return announcements


def update_announcement(
     db: Session,
     landlord: Landlord,
     announcement_id: int,
     subject: Optional[str] = None,
     description: Optional[str] = None,
     photos: Optional[List] = None,
) -> Announcement:
     announcement = db.query(Announcement).filter(Announcement.announcement_id == announcement_id).first()
     if not announcement:
          raise NotFoundError("Announcement not found")
     if announcement.landlord_id != landlord.landlord_id:
          raise ForbiddenError("You do not own this announcement")

     if subject is not None and subject.strip():
          announcement.subject = subject.strip()
     if description is not None and description.strip():
          cleaned = sanitize_description(description)
          if cleaned:
               announcement.description = cleaned
     for url in _upload_photos(photos, landlord):
          announcement.photos.append(AnnouncementPhoto(photo_url=encrypt_data(url)))
     db.flush()
     logger.info("Announcement %s updated", announcement_id)
     return announcement


def list_for_tenant(db: Session, tenant: Tenant) -> List[Announcement]:
     property_ids = (
          db.query(Unit.property_id)
          .join(LeaseAgreement, LeaseAgreement.unit_id == Unit.unit_id)
          .filter(
               LeaseAgreement.tenant_id == tenant.tenant_id,
               LeaseAgreement.status == LeaseStatus.ACTIVE.value,
          )
          .distinct()
     )
     return (
          db.query(Announcement)
          .filter(Announcement.property_id.in_(property_ids))
          .order_by(Announcement.created_at.desc(), Announcement.announcement_id.desc())
          .all()
     )
