# routers/notifications.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from database import get_session
from dependencies import verify_token
from models import Notification
from schemas.notification import NotificationResponse

router = APIRouter(prefix="/api/notification", tags=["notifications"])


def _get_own_notification(db: Session, token: dict, notification_id: int) -> Notification:
     notification = db.query(Notification).filter(
          Notification.id == notification_id,
          Notification.user_id == token.get("id"),
     ).first()
     if not notification:
          raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found")
     return notification


@router.get("/getNotifications", response_model=List[NotificationResponse], summary="My notifications")
def get_notifications(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     return (
          db.query(Notification)
          .filter(Notification.user_id == token.get("id"))
          .order_by(Notification.created_at.desc(), Notification.id.desc())
          .all()
     )


@router.patch("/markSingleRead/{notification_id}", summary="Mark one notification read")
def mark_single_read(
     notification_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     notification = _get_own_notification(db, token, notification_id)
     notification.is_read = True
     return {"message": "Notification marked as read", "id": notification.id}


@router.patch("/markAllAsRead", summary="Mark all my notifications read")
def mark_all_as_read(
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     updated = (
          db.query(Notification)
          .filter(Notification.user_id == token.get("id"), Notification.is_read.is_(False))
          .update({Notification.is_read: True}, synchronize_session=False)
     )
     return {"message": "All notifications marked as read", "updated": updated}


@router.delete("/delete/{notification_id}", summary="Delete a notification")
def delete_notification(
     notification_id: int,
     db: Session = Depends(get_session),
     token: dict = Depends(verify_token),
):
     notification = _get_own_notification(db, token, notification_id)
     db.delete(notification)
     return {"message": "Notification deleted", "id": notification_id}
