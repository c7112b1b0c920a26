# routers/announcements.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import require_landlord, require_tenant
from models import Announcement, Landlord, Tenant
from schemas.announcement import AnnouncementResponse
from services import announcement_service
from utils.crypto import decrypt_data

router = APIRouter(tags=["announcements"])


def _build_announcement_response(announcement: Announcement) -> AnnouncementResponse:
     return AnnouncementResponse(
          announcement_id=announcement.announcement_id,
          property_id=announcement.property_id,
          property_name=announcement.property.property_name if announcement.property else None,
          subject=announcement.subject,
          description=announcement.description,
          photo_urls=[decrypt_data(p.photo_url) for p in announcement.photos],
          created_at=announcement.created_at,
     )


@router.post(
     "/api/landlord/announcement/createAnnouncement",
     status_code=status.HTTP_201_CREATED,
     summary="Post an announcement to one or more properties",
)
def create_announcement(
     property_ids: List[int] = Form(default=[], alias="property_ids[]"),
     subject: str = Form(""),
     description: str = Form(""),
     photos: Optional[List[UploadFile]] = File(None),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     announcements = announcement_service.create_announcements(
          db,
          landlord,
          property_ids=property_ids,
          subject=subject,
          description=description,
          photos=photos,
     )
     return {
          "message": f"Announcement posted to {len(announcements)} propert{'y' if len(announcements) == 1 else 'ies'}",
          "announcements": [_build_announcement_response(a) for a in announcements],
     }


@router.put(
     "/api/landlord/announcement/updateAnnouncement",
     response_model=AnnouncementResponse,
     summary="Edit an announcement",
)
def update_announcement(
     announcement_id: int = Form(...),
     subject: Optional[str] = Form(None),
     description: Optional[str] = Form(None),
     photos: Optional[List[UploadFile]] = File(None),
     db: Session = Depends(get_session),
     landlord: Landlord = Depends(require_landlord),
):
     announcement = announcement_service.update_announcement(
          db,
          landlord,
          announcement_id,
          subject=subject,
          description=description,
          photos=photos,
     )
     return _build_announcement_response(announcement)


@router.get(
     "/api/tenant/announcement/allAnnouncements",
     response_model=List[AnnouncementResponse],
     summary="Announcements for properties I rent in",
)
def all_announcements(
     db: Session = Depends(get_session),
     tenant: Tenant = Depends(require_tenant),
):
     return [_build_announcement_response(a) for a in announcement_service.list_for_tenant(db, tenant)]
